"""Shared credential and request fixtures."""

from __future__ import annotations

import pytest

from promptgate.core.routing_types import PromptRequest
from promptgate.llm.provider_config import ProviderCredentials


@pytest.fixture
def standard_credentials():
    return ProviderCredentials(api_key="sk-standard")


@pytest.fixture
def managed_credentials():
    return ProviderCredentials(
        api_key="azure-key",
        endpoint="https://example.openai.azure.com",
        model="gpt35",
        api_version="2023-08-01-preview",
    )


@pytest.fixture
def retrieval_credentials(managed_credentials):
    return ProviderCredentials(
        api_key=managed_credentials.api_key,
        endpoint=managed_credentials.endpoint,
        model=managed_credentials.model,
        api_version=managed_credentials.api_version,
        search_endpoint="https://example.search.windows.net",
        search_key="search-key",
        search_index="docs",
    )


@pytest.fixture
def prompt_request():
    return PromptRequest(
        system_prompt="You are terse.",
        user_prompt="Say hi.",
        temperature=0,
        use_retrieval=False,
    )
