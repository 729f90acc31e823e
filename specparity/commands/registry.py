"""Command handler registry for CLI dispatch."""

from __future__ import annotations

from collections.abc import Callable


def get_command_handlers() -> dict[str, Callable]:
    from specparity.commands.config_cmd import cmd_config
    from specparity.commands.scan_cmd import cmd_scan

    return {
        "scan": cmd_scan,
        "config": cmd_config,
    }
