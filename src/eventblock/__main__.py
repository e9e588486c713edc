"""Entry point for ``python -m eventblock``.

Takes the text to parse as its single positional argument and prints the
canonical ``event-N`` block (or ``No events found``) to stdout.  Uses stdlib
:mod:`argparse` for argument parsing.

Exit codes:
    0 -- Events extracted or none found.
    1 -- An error occurred (configuration, generator unreachable or
         returned an error).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys

from eventblock.config import ConfigError, load_settings
from eventblock.log import setup_logging
from eventblock.pipeline import PARSE_ERROR_PREFIX, EventParser


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="eventblock",
        description=(
            "Extract calendar events from free-form text and print them "
            "as normalized event blocks."
        ),
    )
    parser.add_argument(
        "text",
        type=str,
        help='Text describing the event(s), e.g. "lunch with Max friday at noon".',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the eventblock CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        setup_logging(settings.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not args.text.strip():
        print("Error: Please provide an input text to parse.", file=sys.stderr)
        return 1

    parser = EventParser(settings=settings)
    try:
        output = parser.parse_event(args.text)
    finally:
        parser.close()

    if output.startswith(PARSE_ERROR_PREFIX):
        print(output, file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
