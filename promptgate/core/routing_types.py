"""Routing data contracts for `promptgate.core.selector`.

Architectural role:
    Defines the request value built by the API adapters, the credential
    presence flags derived from configuration, and the backend variant chosen
    from them.

Control-flow interaction:
    `selector.select_backend` maps (`CredentialPresence`, `use_retrieval`) to
    exactly one `Backend` in fixed priority order. `selector.select_and_complete`
    dispatches on that value.

Determinism:
    All types are immutable and state-free.
"""

from dataclasses import dataclass
from enum import Enum


class Backend(Enum):
    """Upstream completion backend."""

    STANDARD = "standard"
    MANAGED = "managed"
    MANAGED_RETRIEVAL = "managed_retrieval"

    @property
    def extracts_json(self) -> bool:
        """Whether normalized text goes through `json_extractor`."""
        return self is not Backend.MANAGED_RETRIEVAL


@dataclass(frozen=True)
class PromptRequest:
    """One completion request as received from a caller.

    Attributes:
        system_prompt: Content of the `system` message.
        user_prompt: Content of the `user` message.
        temperature: Sampling temperature forwarded unchanged.
        use_retrieval: Caller asks for retrieval-augmented completion.
    """

    system_prompt: str = ""
    user_prompt: str = ""
    temperature: float = 0
    use_retrieval: bool = False


@dataclass(frozen=True)
class CredentialPresence:
    """Which credential sets are fully configured.

    Attributes:
        managed: API key, endpoint and model are all present.
        retrieval: Search endpoint, key and index are all present.
    """

    managed: bool = False
    retrieval: bool = False
