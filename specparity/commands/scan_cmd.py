"""scan command: run the cops and print a report."""

from __future__ import annotations

import sys
from dataclasses import replace

from specparity.config import AuditConfig
from specparity.enums import Cop
from specparity.output import render_json, render_text
from specparity.scan import scan_paths
from specparity.utils import log


def _effective_config(args) -> AuditConfig:
    config = AuditConfig.from_config(args.config)
    only = getattr(args, "only", None)
    if not only:
        return config
    disabled = frozenset(c.value for c in Cop if c.value not in only)
    return replace(config, disabled_cops=config.disabled_cops | disabled)


def _exclusions(args) -> list[str]:
    cli = list(getattr(args, "exclude", None) or [])
    persisted = args.config.get("exclude", [])
    return cli + [e for e in persisted if e not in cli]


def cmd_scan(args) -> None:
    log(f"  Scanning {args.path} for spec parity offenses")
    result = scan_paths(args.path, _effective_config(args), _exclusions(args))
    if getattr(args, "json", False):
        print(render_json(result))
    else:
        print(render_text(result))
    if result.findings:
        sys.exit(1)
