"""Provider-specific transport clients for completion requests.

Architectural role:
    Builds the request for one backend, sends it, and returns the decoded JSON
    body unmodified. Text extraction is left to `promptgate.llm.normalizer`.

Model invocation flow:
    `selector.select_and_complete` -> `send_*_request(request, credentials)` ->
    `_post_json` -> decoded body.

Backends:
    - Standard: generic chat-completions endpoint, bearer auth, fixed model.
    - Managed: deployment-scoped endpoint with `api-key` header.
    - Managed with retrieval: `extensions/` endpoint, `api-key` header plus the
      `chatgpt_url`/`chatgpt_key` callback headers and a `dataSources` array.

Retry behavior:
    No retry loop is implemented. Each call is attempted exactly once with the
    configured timeout (`None` means the transport default).

Failure handling model:
    - Incomplete credentials raise `ConfigurationError` before any I/O.
    - Connection errors, non-2xx statuses and non-JSON bodies raise
      `UpstreamError`; a non-2xx body with an `error` object raises
      `ProviderReportedError` instead.
    - The retrieval client returns error bodies as-is so the normalizer can
      surface the provider message as result text.
"""

import logging

import requests

from promptgate.llm.errors import (
    ConfigurationError,
    ProviderReportedError,
    UpstreamError,
)
from promptgate.llm.provider_config import (
    MANAGED_FIELDS,
    MANAGED_RETRIEVAL_URL_TEMPLATE,
    MANAGED_URL_TEMPLATE,
    MAX_TOKENS,
    RETRIEVAL_FIELDS,
    RETRIEVAL_SOURCE_TYPE,
    STANDARD_CHAT_URL,
    STANDARD_FIELDS,
    STANDARD_MODEL,
)

logger = logging.getLogger(__name__)


def build_messages(request):
    """Return the ordered `system`, `user` message pair for `request`."""
    return [
        {"role": "system", "content": request.system_prompt},
        {"role": "user", "content": request.user_prompt},
    ]


def build_payload(request) -> dict:
    """Return the body fields shared by every backend."""
    return {
        "max_tokens": MAX_TOKENS,
        "temperature": request.temperature,
        "messages": build_messages(request),
    }


def _require(credentials, fields):
    missing = credentials.missing(fields)
    if missing:
        raise ConfigurationError(missing)


def _managed_url(template, credentials):
    return template.format(
        endpoint=credentials.endpoint.rstrip("/"),
        model=credentials.model,
        version=credentials.api_version,
    )


def _post_json(url, headers, payload, timeout, return_error_body=False) -> dict:
    """POST `payload` once and return the decoded JSON object.

    Args:
        url: Fully composed provider URL.
        headers: Request headers including authentication.
        payload: JSON-serializable request body.
        timeout: Seconds, or `None` for the transport default.
        return_error_body: Return non-2xx bodies that carry an `error` object
            instead of raising.

    Returns:
        Decoded response body.
    """
    logger.debug("POST %s", url)
    try:
        response = requests.post(url, headers=headers, json=payload, timeout=timeout)
    except requests.exceptions.RequestException as err:
        raise UpstreamError(f"Error fetching data from {url}: {err}") from err

    try:
        body = response.json()
    except ValueError:
        body = None

    if not response.ok:
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            if return_error_body:
                return body
            raise ProviderReportedError(
                error.get("message") or f"Upstream request failed with status {response.status_code}",
                status_code=response.status_code,
                code=error.get("code"),
            )
        raise UpstreamError(
            f"Upstream request failed with status {response.status_code}",
            status_code=response.status_code,
        )

    if not isinstance(body, dict):
        raise UpstreamError(
            f"Upstream returned a non-JSON body from {url}",
            status_code=response.status_code,
        )

    logger.debug("Upstream response: %s", body)
    return body


def send_standard_request(request, credentials) -> dict:
    """Call the standard provider's chat-completions endpoint.

    Raises:
        ConfigurationError: `OPENAI_API_KEY` is missing.
        UpstreamError: Transport or provider failure.
    """
    _require(credentials, STANDARD_FIELDS)

    payload = {"model": STANDARD_MODEL, **build_payload(request)}
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {credentials.api_key}",
    }

    return _post_json(
        STANDARD_CHAT_URL,
        headers,
        payload,
        credentials.request_timeout,
    )


def send_managed_request(request, credentials) -> dict:
    """Call the managed provider's deployment chat-completions endpoint."""
    _require(credentials, MANAGED_FIELDS)

    url = _managed_url(MANAGED_URL_TEMPLATE, credentials)
    headers = {
        "Content-Type": "application/json",
        "api-key": credentials.api_key,
    }

    return _post_json(url, headers, build_payload(request), credentials.request_timeout)


def send_managed_retrieval_request(request, credentials) -> dict:
    """Call the managed provider's retrieval (`extensions/`) endpoint.

    The body carries one `dataSources` entry naming the search index. The
    `chatgpt_url` header points at the non-extensions completion URL the
    service calls back into.

    Returns:
        Decoded body, including provider error bodies on non-2xx statuses.
    """
    _require(credentials, MANAGED_FIELDS + RETRIEVAL_FIELDS)

    url = _managed_url(MANAGED_RETRIEVAL_URL_TEMPLATE, credentials)
    payload = build_payload(request)
    payload["dataSources"] = [
        {
            "type": RETRIEVAL_SOURCE_TYPE,
            "parameters": {
                "endpoint": credentials.search_endpoint,
                "key": credentials.search_key,
                "indexName": credentials.search_index,
            },
        }
    ]
    headers = {
        "Content-Type": "application/json",
        "api-key": credentials.api_key,
        "chatgpt_url": url.replace("extensions/", ""),
        "chatgpt_key": credentials.api_key,
    }

    return _post_json(
        url,
        headers,
        payload,
        credentials.request_timeout,
        return_error_body=True,
    )
