"""Spec parity: methods need at least as many spec contexts as they have branches.

Each method moves through one of five terminal states:

- ``skipped``: outside the covered app directories, an excluded name, or
  fewer than two branches
- ``no_spec_file``: the conventional spec file does not exist (no finding)
- ``unspecced``: the spec file never mentions the method; the existence check
  reports that, so no finding is emitted here
- ``insufficient_contexts``: 0 < contexts < branches, one finding
- ``covered``: contexts >= branches

Visibility does not matter here: private branching methods still need
scenarios once they reach the counting stage.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from specparity.config import AuditConfig
from specparity.enums import CoverageState
from specparity.findings import Diagnostic
from specparity.paths import in_covered_directory, spec_path_for
from specparity.ruby.branches import count_branches
from specparity.ruby.methods import MethodSite
from specparity.specs.index import SpecIndex
from specparity.specs.matcher import count_contexts

MIN_BRANCHES = 2


@dataclass(frozen=True)
class AuditResult:
    site: MethodSite
    state: CoverageState
    reason: str = ""
    branches: int | None = None
    contexts: int | None = None
    diagnostic: Diagnostic | None = None


def audit_method(
    site: MethodSite,
    source_path: str,
    config: AuditConfig,
    specs: SpecIndex,
) -> AuditResult:
    if not in_covered_directory(source_path, config.covered_directories):
        return AuditResult(site, CoverageState.SKIPPED, "outside covered directories")
    if config.is_excluded_method(site.name):
        return AuditResult(site, CoverageState.SKIPPED, "excluded method")

    spec_path = spec_path_for(source_path)
    if spec_path is None or not specs.exists(spec_path):
        return AuditResult(site, CoverageState.NO_SPEC_FILE)

    branches = count_branches(site.node, ignore_memoization=config.ignore_memoization)
    if branches < MIN_BRANCHES:
        return AuditResult(site, CoverageState.SKIPPED, "simple", branches=branches)

    forest = specs.forest(spec_path)
    if forest is None:
        return AuditResult(site, CoverageState.NO_SPEC_FILE, "unreadable", branches=branches)

    contexts = count_contexts(forest, site.name)
    if contexts == 0:
        return AuditResult(site, CoverageState.UNSPECCED, branches=branches, contexts=0)
    if contexts >= branches:
        return AuditResult(
            site, CoverageState.COVERED, branches=branches, contexts=contexts
        )

    diagnostic = Diagnostic(
        method_name=site.name,
        branches=branches,
        contexts=contexts,
        missing=branches - contexts,
        file=source_path,
        line=site.line,
        column=site.column,
    )
    return AuditResult(
        site,
        CoverageState.INSUFFICIENT_CONTEXTS,
        branches=branches,
        contexts=contexts,
        diagnostic=diagnostic,
    )


def audit_file(
    source_path: str,
    sites: Sequence[MethodSite],
    config: AuditConfig,
    specs: SpecIndex,
) -> list[AuditResult]:
    return [audit_method(site, source_path, config, specs) for site in sites]


def detect_insufficient_contexts(
    source_path: str,
    sites: Sequence[MethodSite],
    config: AuditConfig,
    specs: SpecIndex,
) -> list[dict]:
    return [
        result.diagnostic.to_finding()
        for result in audit_file(source_path, sites, config, specs)
        if result.diagnostic is not None
    ]
