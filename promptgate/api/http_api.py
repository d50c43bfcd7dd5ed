"""
HTTP API adapter for PromptGate.

Architectural role:
- Accept form-encoded completion requests.
- Build an immutable `PromptRequest` from form fields.
- Delegate backend selection and the upstream call to
  `promptgate.core.selector.select_and_complete`.
- Return the completion as plain text.

Endpoint responsibilities:
- `POST /api/completions` (alias `POST /api/httpTriggerOpenAI`): run one
  completion.
- `GET /api/backends`: report which backends the loaded credentials allow.
- `GET /health`: liveness probe.

API request lifecycle (`POST /api/completions`):
1. Parse form fields `systemPrompt`, `userPrompt`, `temperature`,
   `useRetrieval` / `useBYOD`.
2. Build `PromptRequest` (missing fields -> `""` / `0` / `False`).
3. Run `select_and_complete` in the threadpool (one blocking upstream call).
4. Return `text/plain` completion, or HTTP 500 with the error message.

Input validation behavior:
- No prompt content validation.
- Unparseable or non-finite `temperature` falls back to `0`.
- Only the literal string `"true"` enables retrieval.

Error handling strategy:
- Every exception raised by the core is logged and mapped to HTTP 500 with
  the exception message as body.

Side effects:
- Credentials are read once in `create_app` and stored on `app.state`.
"""

import logging
import math

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from promptgate.core.routing_types import Backend, PromptRequest
from promptgate.core.selector import credential_presence, select_backend, select_and_complete
from promptgate.llm.provider_config import STANDARD_FIELDS, ProviderCredentials

logger = logging.getLogger(__name__)

RETRIEVAL_FLAGS = ("useRetrieval", "useBYOD")


# ============================================================
# Form Parsing
# ============================================================

def parse_temperature(raw) -> float:
    """Parse a form temperature; anything unusable becomes 0."""
    if raw is None or not str(raw).strip():
        return 0
    try:
        value = float(raw)
    except ValueError:
        return 0
    return value if math.isfinite(value) else 0


def parse_flag(form, names=RETRIEVAL_FLAGS) -> bool:
    """Return True when any of `names` carries the literal string `"true"`."""
    return any(form.get(name) == "true" for name in names)


def build_prompt_request(form) -> PromptRequest:
    """Build a `PromptRequest` from a form mapping."""
    return PromptRequest(
        system_prompt=str(form.get("systemPrompt") or ""),
        user_prompt=str(form.get("userPrompt") or ""),
        temperature=parse_temperature(form.get("temperature")),
        use_retrieval=parse_flag(form),
    )


# ============================================================
# Backend Report
# ============================================================

def describe_backends(credentials) -> dict:
    """Summarize backend eligibility without exposing credential values."""
    presence = credential_presence(credentials)
    eligible = []
    if credentials.has_all(STANDARD_FIELDS) and not presence.managed:
        eligible.append(Backend.STANDARD.value)
    if presence.managed:
        eligible.append(Backend.MANAGED.value)
        if presence.retrieval:
            eligible.append(Backend.MANAGED_RETRIEVAL.value)

    return {
        "eligible": eligible,
        "default": select_backend(presence, use_retrieval=False).value,
        "retrieval": select_backend(presence, use_retrieval=True).value,
    }


# ============================================================
# Application Factory
# ============================================================

def create_app(credentials: ProviderCredentials | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        credentials: Preloaded credentials. Read from the environment (and
            `.env`) when omitted.
    """
    app = FastAPI(title="PromptGate")
    if credentials is None:
        credentials = ProviderCredentials.from_env()
    app.state.credentials = credentials

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/backends")
    def backends():
        return describe_backends(app.state.credentials)

    @app.post("/api/completions", response_class=PlainTextResponse)
    @app.post("/api/httpTriggerOpenAI", response_class=PlainTextResponse)
    async def completions(request: Request):
        """
        Run one completion for a form-encoded request.

        Returns:
        - 200 `text/plain` with the completion text.
        - 500 `text/plain` with the error message on any failure.
        """
        form = await request.form()
        prompt_request = build_prompt_request(form)

        logger.info(
            "Completion request (system=%d chars, user=%d chars, temperature=%s, retrieval=%s)",
            len(prompt_request.system_prompt),
            len(prompt_request.user_prompt),
            prompt_request.temperature,
            prompt_request.use_retrieval,
        )
        logger.debug(
            "Prompts: system=%r user=%r",
            prompt_request.system_prompt,
            prompt_request.user_prompt,
        )

        try:
            result = await run_in_threadpool(
                select_and_complete, prompt_request, app.state.credentials
            )
        except Exception as err:
            logger.exception("Completion failed: %s", err)
            return PlainTextResponse(str(err), status_code=500)

        return PlainTextResponse(result)

    return app
