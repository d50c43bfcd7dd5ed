"""Fake transport objects and canned provider bodies for tests."""

from __future__ import annotations

import json


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, body=None, status_code=200, text=None):
        self._body = body
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


def chat_body(content):
    return {
        "id": "chatcmpl-1",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


def retrieval_body(citations, answer):
    return {
        "id": "chatcmpl-2",
        "choices": [
            {
                "index": 0,
                "messages": [
                    {"role": "tool", "content": citations},
                    {"role": "assistant", "content": answer},
                ],
            }
        ],
    }
