"""Provider/runtime configuration for the completion layer.

Architectural role:
    Centralizes credential lookup and fixed request constants for
    `promptgate.llm.client` and `promptgate.core.selector`.

Model call flow integration:
    - `ProviderCredentials.from_env()` is called once by each entrypoint and the
      resulting value is passed down the call chain.
    - `client.send_*_request` consumes the URL templates and request constants.

Determinism:
    Deterministic for a fixed process environment and `.env` file. Values are
    read when `from_env` is called, never ad hoc at call sites.

Failure behavior:
    Missing values are represented as empty strings. Completeness is checked by
    the client that needs them, which raises `ConfigurationError`.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Fixed request constants shared by all three backends.
MAX_TOKENS = 1024
STANDARD_MODEL = "gpt-3.5-turbo"
STANDARD_CHAT_URL = "https://api.openai.com/v1/chat/completions"
RETRIEVAL_SOURCE_TYPE = "AzureCognitiveSearch"

MANAGED_URL_TEMPLATE = (
    "{endpoint}/openai/deployments/{model}/chat/completions"
    "?api-version={version}"
)

MANAGED_RETRIEVAL_URL_TEMPLATE = (
    "{endpoint}/openai/deployments/{model}/extensions/chat/completions"
    "?api-version={version}"
)

# Environment variable names, keyed by `ProviderCredentials` field.
ENV_VARS = {
    "api_key": "OPENAI_API_KEY",
    "endpoint": "OPENAI_ENDPOINT",
    "model": "OPENAI_MODEL",
    "api_version": "OPENAI_API_VERSION",
    "search_endpoint": "AZURE_COGNITIVE_SEARCH_ENDPOINT",
    "search_key": "AZURE_COGNITIVE_SEARCH_KEY",
    "search_index": "AZURE_COGNITIVE_SEARCH_INDEX",
}

STANDARD_FIELDS = ("api_key",)
MANAGED_FIELDS = ("api_key", "endpoint", "model")
RETRIEVAL_FIELDS = ("search_endpoint", "search_key", "search_index")


def _parse_timeout(raw):
    """Parse `REQUEST_TIMEOUT` seconds; blank or non-positive means no timeout."""
    if not raw or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class ProviderCredentials:
    """Immutable snapshot of upstream credentials.

    Attributes:
        api_key: Key for either the standard or the managed provider.
        endpoint: Managed provider base URL (for example
            `https://NAME.openai.azure.com`).
        model: Managed provider deployment name.
        api_version: Managed provider `api-version` query value.
        search_endpoint: Retrieval search-service endpoint.
        search_key: Retrieval search-service admin/query key.
        search_index: Retrieval index name.
        request_timeout: Outbound timeout in seconds, `None` for the transport
            default.
    """

    api_key: str = ""
    endpoint: str = ""
    model: str = ""
    api_version: str = ""
    search_endpoint: str = ""
    search_key: str = ""
    search_index: str = ""
    request_timeout: float | None = None

    @classmethod
    def from_env(cls, environ=None, dotenv=True):
        """Build credentials from the process environment.

        Args:
            environ: Mapping to read instead of `os.environ` (tests).
            dotenv: Whether to load a `.env` file first. Ignored when
                `environ` is supplied.

        Returns:
            A frozen `ProviderCredentials` value. Surrounding whitespace is
            stripped; unset variables become empty strings.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        values = {
            field: (environ.get(name) or "").strip()
            for field, name in ENV_VARS.items()
        }
        return cls(
            request_timeout=_parse_timeout(environ.get("REQUEST_TIMEOUT")),
            **values,
        )

    def missing(self, fields):
        """Return environment variable names for the empty members of `fields`."""
        return [ENV_VARS[field] for field in fields if not getattr(self, field)]

    def has_all(self, fields) -> bool:
        return not self.missing(fields)
