"""Tests for the command-line adapter."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from promptgate.api import cli
from promptgate.llm.provider_config import ProviderCredentials
from tests.helpers import FakeResponse, chat_body

POST = "promptgate.llm.client.requests.post"


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("promptgate.api.cli.setup_logging"):
        yield


@patch(POST)
def test_one_shot_prints_completion(mock_post, standard_credentials, capsys):
    mock_post.return_value = FakeResponse(chat_body(" Hi. "))

    status = cli.main(
        ["--system", "You are terse.", "--user", "Say hi.", "--temperature", "0.3"],
        credentials=standard_credentials,
    )

    assert status == 0
    assert capsys.readouterr().out == "Hi.\n"
    assert mock_post.call_args.kwargs["json"]["temperature"] == 0.3


def test_one_shot_error_goes_to_stderr(capsys):
    status = cli.main(["--user", "x"], credentials=ProviderCredentials())

    assert status == 1
    assert "Missing OPENAI_API_KEY" in capsys.readouterr().err


@pytest.mark.parametrize(
    "flags, expected",
    [([], "managed"), (["--use-retrieval"], "managed_retrieval")],
)
def test_show_backend(flags, expected, retrieval_credentials, capsys):
    status = cli.main(["--show-backend", *flags], credentials=retrieval_credentials)

    assert status == 0
    assert capsys.readouterr().out.strip() == expected


@patch(POST)
def test_interactive_loop(mock_post, standard_credentials, capsys):
    mock_post.return_value = FakeResponse(chat_body("pong"))
    inputs = iter(["", "ping", "exit"])

    with patch("builtins.input", lambda _prompt: next(inputs)):
        status = cli.main(["--system", "s"], credentials=standard_credentials)

    assert status == 0
    assert mock_post.call_count == 1
    assert "pong" in capsys.readouterr().out


def test_interactive_loop_stops_on_eof(standard_credentials):
    def raise_eof(_prompt):
        raise EOFError

    with patch("builtins.input", raise_eof):
        assert cli.main([], credentials=standard_credentials) == 0
