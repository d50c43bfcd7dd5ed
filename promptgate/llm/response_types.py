"""Typed views of the three provider response shapes.

Each backend answers with its own JSON layout. These pydantic models accept
the decoded body leniently: unknown fields are ignored and only the fields the
normalizer reads are declared, each nullable with a default, so a well-formed
but empty body validates.
"""

from pydantic import BaseModel, ConfigDict


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ChatMessage(_Lenient):
    content: str | None = None


class ChatChoice(_Lenient):
    message: ChatMessage | None = None


class ChatCompletionResponse(_Lenient):
    """Standard and managed chat completion: `choices[].message.content`."""

    choices: list[ChatChoice | None] | None = None


class RetrievalChoice(_Lenient):
    messages: list[ChatMessage | None] | None = None


class RetrievalCompletionResponse(_Lenient):
    """Retrieval completion: `choices[].messages[]`.

    `messages[0]` is the tool message carrying citations; `messages[1]` is the
    assistant answer.
    """

    choices: list[RetrievalChoice | None] | None = None


class ProviderError(_Lenient):
    message: str | None = None


class ProviderErrorResponse(_Lenient):
    """Body carrying a top-level `error` object."""

    error: ProviderError


CompletionResponse = (
    ChatCompletionResponse | RetrievalCompletionResponse | ProviderErrorResponse
)
