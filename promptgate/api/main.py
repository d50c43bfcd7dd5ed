"""
Server entrypoint for PromptGate.

Architectural role:
- Load credentials once (this also reads `.env`).
- Configure logging once for the process.
- Serve the FastAPI app with uvicorn on `HOST`/`PORT` (default `0.0.0.0:8000`).

Importing this module has no side effects; `build_app` does the work.

Usage:
    promptgate-server
    uvicorn --factory promptgate.api.main:build_app
"""

import logging
import os

import uvicorn
from fastapi import FastAPI

from promptgate.api.http_api import create_app
from promptgate.llm.provider_config import ProviderCredentials
from promptgate.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    credentials = ProviderCredentials.from_env()
    setup_logging("promptgate")
    return create_app(credentials)


def main():
    app = build_app()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting PromptGate on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
