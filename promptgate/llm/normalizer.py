"""Response normalization: provider JSON -> one plain-text result.

Architectural role:
    Sits between `promptgate.llm.client` (raw decoded bodies) and the selector.
    Each backend's body is first parsed into its typed shape from
    `response_types`, then reduced to a single string by `normalize`.

Shapes handled:
    - Standard / managed: `choices[0].message.content`, trimmed.
    - Managed with retrieval: `choices[0].messages[1].content`, trimmed. The
      citation message at index 0 is logged and dropped.
    - Any body with a top-level `error` object on the retrieval path: the
      error message is returned as the result text.

Failure handling model:
    Never raises for a well-formed but empty body; absent or null fields
    yield `""`.
    A body that does not fit the expected shape at all (for example `choices`
    is not a list) raises `UpstreamError`.
"""

import logging

from pydantic import ValidationError

from promptgate.core.routing_types import Backend
from promptgate.llm.errors import UpstreamError
from promptgate.llm.response_types import (
    ChatCompletionResponse,
    CompletionResponse,
    ProviderErrorResponse,
    RetrievalCompletionResponse,
)

logger = logging.getLogger(__name__)

CITATION_INDEX = 0
ANSWER_INDEX = 1


def _nth(items, index):
    if not items or len(items) <= index:
        return None
    return items[index]


def parse_response(backend: Backend, body: dict) -> CompletionResponse:
    """Validate a decoded body into the response type of `backend`.

    Raises:
        UpstreamError: The body does not fit the expected shape.
    """
    if backend is Backend.MANAGED_RETRIEVAL and isinstance(body.get("error"), dict):
        model = ProviderErrorResponse
    elif backend is Backend.MANAGED_RETRIEVAL:
        model = RetrievalCompletionResponse
    else:
        model = ChatCompletionResponse

    try:
        return model.model_validate(body)
    except ValidationError as err:
        raise UpstreamError(
            f"Unexpected {backend.value} response shape: {err.error_count()} invalid field(s)"
        ) from err


def normalize(response: CompletionResponse) -> str:
    """Reduce a typed provider response to its answer text.

    Args:
        response: Result of `parse_response`.

    Returns:
        Trimmed answer text, the provider error message, or `""` when the
        expected field is absent.
    """
    if isinstance(response, ProviderErrorResponse):
        logger.error("Provider reported error: %s", response.error.message)
        return response.error.message or ""

    if isinstance(response, RetrievalCompletionResponse):
        choice = _nth(response.choices, 0)
        if choice is None:
            return ""

        citation = _nth(choice.messages, CITATION_INDEX)
        if citation is not None and citation.content:
            logger.debug("Retrieval citations: %s", citation.content.strip())

        answer = _nth(choice.messages, ANSWER_INDEX)
        if answer is None or answer.content is None:
            return ""
        return answer.content.strip()

    choice = _nth(response.choices, 0)
    if choice is None or choice.message is None or choice.message.content is None:
        return ""
    return choice.message.content.strip()


def normalize_body(backend: Backend, body: dict) -> str:
    return normalize(parse_response(backend, body))
