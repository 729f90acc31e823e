"""Report rendering for scan results (RuboCop-style text or JSON)."""

from __future__ import annotations

import json

from specparity.enums import Severity
from specparity.findings import pluralize
from specparity.scan import ScanResult
from specparity.utils import colorize

_SEVERITY_COLORS = {
    Severity.CONVENTION.value: "yellow",
    Severity.WARNING.value: "red",
    Severity.ERROR.value: "red",
}


def format_finding(finding: dict) -> str:
    """``file:line:col: C: Cop/Name: message`` with a 1-based column."""
    severity = Severity(finding["severity"])
    location = f"{finding['file']}:{finding['line']}:{finding['column'] + 1}"
    code = colorize(severity.code, _SEVERITY_COLORS.get(severity.value, "yellow"))
    return f"{colorize(location, 'cyan')}: {code}: {finding['detector']}: {finding['summary']}"


def summary_line(result: ScanResult) -> str:
    files = result.files_inspected
    count = len(result.findings)
    text = (
        f"{files} {pluralize('file', files)} inspected, "
        f"{count or 'no'} {pluralize('offense', count)} detected"
    )
    return colorize(text, "red" if count else "green")


def render_text(result: ScanResult) -> str:
    lines = [format_finding(f) for f in result.findings]
    if lines:
        lines.append("")
    lines.append(summary_line(result))
    return "\n".join(lines)


def render_json(result: ScanResult) -> str:
    payload = {
        "files_inspected": result.files_inspected,
        "files_skipped": result.files_skipped,
        "count": len(result.findings),
        "findings": result.findings,
    }
    return json.dumps(payload, indent=2)
