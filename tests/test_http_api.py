"""Tests for the FastAPI adapter."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from promptgate.api.http_api import (
    build_prompt_request,
    create_app,
    describe_backends,
    parse_temperature,
)
from promptgate.core.routing_types import PromptRequest
from promptgate.llm.provider_config import ProviderCredentials
from tests.helpers import FakeResponse, chat_body, retrieval_body

POST = "promptgate.llm.client.requests.post"


# ---------------------------------------------------------------------------
# Form parsing
# ---------------------------------------------------------------------------

class TestFormParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 0), ("", 0), ("  ", 0), ("0.5", 0.5), ("1", 1.0), ("warm", 0), ("nan", 0), ("inf", 0)],
    )
    def test_parse_temperature(self, raw, expected):
        assert parse_temperature(raw) == expected

    def test_missing_fields_use_defaults(self):
        assert build_prompt_request({}) == PromptRequest("", "", 0, False)

    def test_use_byod_alias_enables_retrieval(self):
        assert build_prompt_request({"useBYOD": "true"}).use_retrieval

    def test_only_literal_true_enables_retrieval(self):
        assert not build_prompt_request({"useRetrieval": "True"}).use_retrieval
        assert not build_prompt_request({"useRetrieval": "1"}).use_retrieval
        assert build_prompt_request({"useRetrieval": "true"}).use_retrieval


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@pytest.fixture
def standard_client(standard_credentials):
    return TestClient(create_app(standard_credentials))


class TestCompletionsEndpoint:
    @patch(POST)
    def test_returns_plain_text(self, mock_post, standard_client):
        mock_post.return_value = FakeResponse(chat_body(" hi "))

        response = standard_client.post(
            "/api/completions",
            data={"systemPrompt": "You are terse.", "userPrompt": "Say hi.", "temperature": "0"},
        )

        assert response.status_code == 200
        assert response.text == "hi"
        assert response.headers["content-type"].startswith("text/plain")
        sent = mock_post.call_args.kwargs["json"]
        assert sent["messages"][1] == {"role": "user", "content": "Say hi."}

    @patch(POST)
    def test_legacy_route_is_served(self, mock_post, standard_client):
        mock_post.return_value = FakeResponse(chat_body("ok"))

        response = standard_client.post("/api/httpTriggerOpenAI", data={"userPrompt": "x"})

        assert response.status_code == 200
        assert response.text == "ok"

    @patch(POST)
    def test_byod_flag_routes_to_retrieval(self, mock_post, retrieval_credentials):
        mock_post.return_value = FakeResponse(retrieval_body("[doc1]", "grounded"))
        client = TestClient(create_app(retrieval_credentials))

        response = client.post("/api/completions", data={"userPrompt": "q", "useBYOD": "true"})

        assert response.text == "grounded"
        assert "/extensions/" in mock_post.call_args.args[0]

    def test_configuration_error_returns_500_with_message(self):
        client = TestClient(create_app(ProviderCredentials()))

        response = client.post("/api/completions", data={"userPrompt": "x"})

        assert response.status_code == 500
        assert response.text == "Missing OPENAI_API_KEY in environment variables."

    def test_unexpected_error_returns_500(self, standard_client):
        with patch(
            "promptgate.api.http_api.select_and_complete",
            side_effect=RuntimeError("boom"),
        ):
            response = standard_client.post("/api/completions", data={"userPrompt": "x"})

        assert response.status_code == 500
        assert response.text == "boom"

    def test_get_is_not_allowed(self, standard_client):
        assert standard_client.get("/api/completions").status_code == 405


class TestBackendsEndpoint:
    def test_standard_only(self, standard_client):
        assert standard_client.get("/api/backends").json() == {
            "eligible": ["standard"],
            "default": "standard",
            "retrieval": "standard",
        }

    def test_full_credentials(self, retrieval_credentials):
        assert describe_backends(retrieval_credentials) == {
            "eligible": ["managed", "managed_retrieval"],
            "default": "managed",
            "retrieval": "managed_retrieval",
        }

    def test_no_credentials(self):
        report = describe_backends(ProviderCredentials())
        assert report["eligible"] == []
        assert report["default"] == "standard"

    def test_secrets_are_not_exposed(self, retrieval_credentials):
        client = TestClient(create_app(retrieval_credentials))
        body = client.get("/api/backends").text
        assert "azure-key" not in body
        assert "search-key" not in body


def test_health(standard_client):
    assert standard_client.get("/health").json() == {"status": "ok"}


def test_create_app_loads_credentials_from_env():
    with patch(
        "promptgate.api.http_api.ProviderCredentials.from_env",
        return_value=ProviderCredentials(api_key="from-env"),
    ) as from_env:
        app = create_app()

    from_env.assert_called_once_with()
    assert app.state.credentials.api_key == "from-env"
