"""CLI entry point: parse args, load config, dispatch command handlers."""

from __future__ import annotations

import logging
import sys

from specparity.cli_parser import build_parser
from specparity.commands.registry import get_command_handlers
from specparity.config import load_config
from specparity.utils import colorize

logger = logging.getLogger(__name__)


def create_parser():
    """Return the top-level argparse parser."""
    return build_parser()


def _resolve_handler(command: str):
    return get_command_handlers()[command]


def main(argv: list[str] | None = None) -> None:
    # Ensure Unicode output works on Windows terminals (cp1252 etc.)
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8", errors="replace")
            except (AttributeError, OSError):
                logger.debug(
                    "Skipping stream reconfigure for %s (not supported)",
                    getattr(stream, "name", "<stream>"),
                )

    parser = create_parser()
    args = parser.parse_args(argv)
    args.config = load_config()

    try:
        _resolve_handler(args.command)(args)
    except (KeyError, ValueError) as exc:
        message = exc.args[0] if exc.args else str(exc)
        print(colorize(f"  {message}", "red"), file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
