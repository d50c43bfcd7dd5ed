"""
Command-line adapter for PromptGate.

Architectural role:
- Provides a terminal interface over the same core used by the HTTP adapter.
- Builds `PromptRequest` values from arguments or stdin.
- Delegates to `promptgate.core.selector.select_and_complete`.

Modes:
- One-shot: `--user` given -> print one completion and exit.
- Interactive: no `--user` -> read prompts from stdin until `exit`/`quit`,
  EOF or Ctrl-C. The system prompt and flags stay fixed for the session.

Error handling strategy:
- One-shot failures print the message to stderr and exit with status 1.
- Interactive failures print the message and continue with the next prompt.
"""

import argparse
import sys

from promptgate.core.routing_types import PromptRequest
from promptgate.core.selector import credential_presence, select_backend, select_and_complete
from promptgate.llm.errors import PromptGateError
from promptgate.llm.provider_config import ProviderCredentials
from promptgate.logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptgate-cli",
        description="Send a system/user prompt pair to the configured completion backend.",
    )
    parser.add_argument("--system", default="", help="system prompt")
    parser.add_argument("--user", default=None, help="user prompt (omit for interactive mode)")
    parser.add_argument("--temperature", type=float, default=0.0)
    parser.add_argument(
        "--use-retrieval",
        action="store_true",
        help="ground the answer in the configured search index",
    )
    parser.add_argument(
        "--show-backend",
        action="store_true",
        help="print the backend that would be used and exit",
    )
    return parser


def run_once(request, credentials) -> int:
    try:
        print(select_and_complete(request, credentials))
    except PromptGateError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


def interactive(args, credentials) -> int:
    """Run the prompt loop. Returns the process exit status."""
    print("PromptGate started. (Type 'exit' to quit)\n")
    print("-" * 60)

    while True:
        try:
            user_prompt = input("Prompt: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not user_prompt:
            continue

        if user_prompt.lower() in ("exit", "quit"):
            break

        request = PromptRequest(
            system_prompt=args.system,
            user_prompt=user_prompt,
            temperature=args.temperature,
            use_retrieval=args.use_retrieval,
        )
        print("\nResponse:\n")
        run_once(request, credentials)
        print("\n" + "-" * 60 + "\n")

    return 0


def main(argv=None, credentials=None) -> int:
    args = build_parser().parse_args(argv)
    if credentials is None:
        credentials = ProviderCredentials.from_env()
    setup_logging("promptgate", stream=sys.stderr)

    if args.show_backend:
        backend = select_backend(credential_presence(credentials), args.use_retrieval)
        print(backend.value)
        return 0

    if args.user is None:
        return interactive(args, credentials)

    request = PromptRequest(
        system_prompt=args.system,
        user_prompt=args.user,
        temperature=args.temperature,
        use_retrieval=args.use_retrieval,
    )
    return run_once(request, credentials)


if __name__ == "__main__":
    sys.exit(main())
