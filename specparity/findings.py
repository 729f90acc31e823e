"""Diagnostics, offense messages and the normalized finding dict."""

from __future__ import annotations

import os
from dataclasses import dataclass

from specparity.enums import Cop, Severity
from specparity.utils import normalize_separators, rel

SUFFICIENT_CONTEXTS_MSG = (
    "Method `{method_name}` has {branches} {branch_word} but only {contexts} "
    "{context_word} in spec. Add {missing} more {missing_word} to cover all branches."
)
MISSING_SPEC_MSG = (
    "Missing spec for public method `{method_name}`. "
    "Expected describe '#{method_name}' or describe '.{method_name}' in {spec_path}"
)
LET_BANG_MSG = (
    "Do not use `let!`. Use `let` with explicit reference or `before` block instead."
)

_PLURALS = {"branch": "branches", "context": "contexts"}


def pluralize(word: str, count: int) -> str:
    if count == 1:
        return word
    return _PLURALS.get(word, f"{word}s")


def sufficient_contexts_message(method_name: str, branches: int, contexts: int) -> str:
    missing = branches - contexts
    return SUFFICIENT_CONTEXTS_MSG.format(
        method_name=method_name,
        branches=branches,
        branch_word=pluralize("branch", branches),
        contexts=contexts,
        context_word=pluralize("context", contexts),
        missing=missing,
        missing_word=pluralize("context", missing),
    )


@dataclass(frozen=True)
class Diagnostic:
    """Insufficient-contexts verdict for one method."""

    method_name: str
    branches: int
    contexts: int
    missing: int
    severity: Severity = Severity.CONVENTION
    file: str = ""
    line: int = 0
    column: int = 0

    @property
    def message(self) -> str:
        return sufficient_contexts_message(self.method_name, self.branches, self.contexts)

    def to_finding(self) -> dict:
        return make_finding(
            Cop.SUFFICIENT_CONTEXTS,
            self.file,
            self.method_name,
            line=self.line,
            column=self.column,
            severity=self.severity,
            summary=self.message,
            detail={
                "branches": self.branches,
                "contexts": self.contexts,
                "missing": self.missing,
            },
        )


def make_finding(
    cop: Cop | str,
    file: str,
    name: str,
    *,
    line: int,
    column: int,
    summary: str,
    severity: Severity = Severity.CONVENTION,
    detail: dict | None = None,
) -> dict:
    """Create a normalized finding dict with a stable ID."""
    rfile = rel(file) if os.path.isabs(file) else normalize_separators(file)
    fid = f"{cop}::{rfile}::{name}::{line}" if name else f"{cop}::{rfile}::{line}"
    return {
        "id": fid,
        "detector": str(cop),
        "file": rfile,
        "line": line,
        "column": column,
        "name": name,
        "severity": str(severity),
        "summary": summary,
        "detail": detail or {},
    }
