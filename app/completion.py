"""Standalone generative completion entry point.

Usage:
    GEMINI_API_KEY=... python -m app.completion "Write a haiku about lamps" [--model MODEL]

Prints the generated text to stdout. Provider failures are reported (logged, exit code 1)
instead of crashing the process with a traceback.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Protocol

from app.core.llm.deps import get_gemini_client
from app.core.logging import setup_logging
from app.domain.exceptions import CompletionProviderError

logger = logging.getLogger("app.completion")


class CompletionClient(Protocol):
    async def generate_text(self, *, contents: str, model: str | None = None) -> str: ...


@dataclass(frozen=True)
class CompletionSucceeded:
    text: str


@dataclass(frozen=True)
class CompletionFailed:
    error: str
    error_type: str


CompletionOutcome = CompletionSucceeded | CompletionFailed


async def complete(
    prompt: str, *, client: CompletionClient | None, model: str | None = None
) -> CompletionOutcome:
    """Send one prompt to the provider and wrap the result.

    Never raises for provider-side problems; they come back as `CompletionFailed`.
    """

    if not prompt or not prompt.strip():
        return CompletionFailed(error="Prompt must not be empty", error_type="invalid_prompt")
    if client is None:
        return CompletionFailed(
            error="Completion provider is not configured (set GEMINI_API_KEY)",
            error_type="unavailable",
        )

    try:
        text = await client.generate_text(contents=prompt, model=model)
    except CompletionProviderError as exc:
        return CompletionFailed(error=str(exc), error_type=type(exc).__name__)

    return CompletionSucceeded(text=text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m app.completion",
        description="Send a prompt to the configured Gemini model and print the reply.",
    )
    parser.add_argument("prompt", nargs="?", default="hello", help="Prompt text (default: hello).")
    parser.add_argument("--model", default=None, help="Override GEMINI_MODEL for this call.")
    return parser


def main(argv: list[str] | None = None, *, client: CompletionClient | None = None) -> int:
    """Entry point. Returns the process exit code."""

    setup_logging()
    args = _build_parser().parse_args(argv)
    if client is None:
        client = get_gemini_client()

    outcome = asyncio.run(complete(args.prompt, client=client, model=args.model))
    if isinstance(outcome, CompletionFailed):
        logger.error(
            "Completion failed: %s",
            outcome.error,
            extra={"error_type": outcome.error_type},
        )
        return 1

    print(outcome.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
