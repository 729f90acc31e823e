"""Parser construction helpers for the CLI entrypoint."""

from __future__ import annotations

import argparse

from specparity.enums import Cop

USAGE_EXAMPLES = """\
examples:
  specparity scan                      audit the whole project
  specparity scan --path app/services  audit one directory
  specparity scan --json               machine-readable findings
  specparity config set ignore_memoization false
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="specparity",
        description="specparity: RSpec parity checks for Rails codebases",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Path component or prefix to exclude (repeatable: --exclude foo --exclude bar)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    _add_scan_parser(sub)
    _add_config_parser(sub)
    return parser


def _add_scan_parser(sub) -> None:
    parser = sub.add_parser("scan", help="Run the spec parity cops and report offenses")
    parser.add_argument(
        "--path", type=str, default=".", help="File or directory to scan (default: project root)"
    )
    parser.add_argument("--json", action="store_true", help="Output findings as JSON")
    parser.add_argument(
        "--only",
        action="append",
        default=None,
        choices=[c.value for c in Cop],
        metavar="COP",
        help="Run only this cop (repeatable)",
    )


def _add_config_parser(sub) -> None:
    parser = sub.add_parser("config", help="Show/set/unset project configuration")
    config_sub = parser.add_subparsers(dest="config_action")
    config_sub.add_parser("show", help="Show all config values")

    set_parser = config_sub.add_parser("set", help="Set a config value")
    set_parser.add_argument("config_key", type=str, help="Config key name")
    set_parser.add_argument("config_value", type=str, help="Value to set")

    unset_parser = config_sub.add_parser("unset", help="Reset a config key to default")
    unset_parser.add_argument("config_key", type=str, help="Config key name")
