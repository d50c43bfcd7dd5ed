"""Backend selection and the end-to-end completion call.

Control-flow model:
    1. Reduce `ProviderCredentials` to `CredentialPresence`.
    2. Pick one `Backend` with `select_backend` (pure, fixed priority order).
    3. Dispatch to the matching client in `promptgate.llm.client`.
    4. Normalize the body and, for the non-retrieval backends, extract any
       embedded JSON object.

Routing behavior:
    - Managed credentials + `use_retrieval` + retrieval credentials
      -> `MANAGED_RETRIEVAL`.
    - Managed credentials -> `MANAGED`. A retrieval request lands here when the
      retrieval credentials are incomplete; the downgrade is logged.
    - Otherwise -> `STANDARD`.

Error handling strategy:
    `ConfigurationError` and `UpstreamError` from the clients propagate to the
    caller unchanged.
"""

import logging

from promptgate.core.routing_types import Backend, CredentialPresence
from promptgate.llm.client import (
    send_managed_request,
    send_managed_retrieval_request,
    send_standard_request,
)
from promptgate.llm.json_extractor import maybe_extract_json
from promptgate.llm.normalizer import normalize_body
from promptgate.llm.provider_config import MANAGED_FIELDS, RETRIEVAL_FIELDS

logger = logging.getLogger(__name__)

CLIENTS = {
    Backend.STANDARD: send_standard_request,
    Backend.MANAGED: send_managed_request,
    Backend.MANAGED_RETRIEVAL: send_managed_retrieval_request,
}


def credential_presence(credentials) -> CredentialPresence:
    """Summarize which credential sets are complete."""
    return CredentialPresence(
        managed=credentials.has_all(MANAGED_FIELDS),
        retrieval=credentials.has_all(RETRIEVAL_FIELDS),
    )


def select_backend(presence: CredentialPresence, use_retrieval: bool) -> Backend:
    """Choose exactly one backend; first matching rule wins."""
    if presence.managed and use_retrieval and presence.retrieval:
        return Backend.MANAGED_RETRIEVAL

    if presence.managed:
        return Backend.MANAGED

    return Backend.STANDARD


def select_and_complete(request, credentials) -> str:
    """Run one completion request against the selected backend.

    Args:
        request: `PromptRequest` built by an API adapter.
        credentials: `ProviderCredentials` loaded once at startup.

    Returns:
        Normalized completion text. For the standard and managed backends any
        embedded JSON object is extracted; retrieval answers are returned as-is.

    Raises:
        ConfigurationError: The selected backend lacks a required credential.
        UpstreamError: The single upstream call failed.
    """
    presence = credential_presence(credentials)
    backend = select_backend(presence, request.use_retrieval)

    if request.use_retrieval and backend is not Backend.MANAGED_RETRIEVAL:
        missing = credentials.missing(MANAGED_FIELDS + RETRIEVAL_FIELDS)
        logger.warning(
            "Retrieval requested but credentials are incomplete (%s); using %s backend",
            ", ".join(missing),
            backend.value,
        )

    logger.info(
        "Routing completion to %s backend (temperature=%s)",
        backend.value,
        request.temperature,
    )

    body = CLIENTS[backend](request, credentials)
    content = normalize_body(backend, body)
    logger.debug("%s output: %s", backend.value, content)

    if backend.extracts_json:
        content = maybe_extract_json(content)
        logger.debug("After JSON extraction: %s", content)

    return content
