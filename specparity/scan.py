"""Scan orchestration: discover Ruby files, run the enabled cops, collect findings."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from specparity.config import AuditConfig
from specparity.detectors.no_let_bang import detect_let_bang
from specparity.detectors.public_method_has_spec import detect_missing_specs
from specparity.detectors.sufficient_contexts import detect_insufficient_contexts
from specparity.enums import Cop
from specparity.file_discovery import find_ruby_files
from specparity.paths import in_covered_directory, is_spec_file
from specparity.ruby.methods import extract_methods_from_source
from specparity.ruby.treesitter import PARSE_INIT_ERRORS, is_available
from specparity.specs.index import SpecIndex
from specparity.utils import colorize, read_file_text, resolve_path

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    findings: list[dict] = field(default_factory=list)
    files_inspected: int = 0
    files_skipped: list[str] = field(default_factory=list)


def scan_file(path: str, config: AuditConfig, specs: SpecIndex) -> list[dict]:
    """Findings for one project-relative (or absolute) Ruby file."""
    text = read_file_text(resolve_path(path))
    if text is None:
        logger.debug("Skipping unreadable file: %s", path)
        return []

    if is_spec_file(path):
        if not config.cop_enabled(Cop.NO_LET_BANG):
            return []
        return detect_let_bang(path, text)

    if not in_covered_directory(path, config.covered_directories):
        return []

    sites = extract_methods_from_source(text)
    findings: list[dict] = []
    if config.cop_enabled(Cop.SUFFICIENT_CONTEXTS):
        findings.extend(detect_insufficient_contexts(path, sites, config, specs))
    if config.cop_enabled(Cop.PUBLIC_METHOD_HAS_SPEC):
        findings.extend(detect_missing_specs(path, sites, config, specs))
    return findings


def scan_paths(
    path: str | Path,
    config: AuditConfig,
    exclusions: list[str] | None = None,
) -> ScanResult:
    """Run every enabled cop over the Ruby files under *path*."""
    result = ScanResult()
    specs = SpecIndex(config.spec_structure)
    parser_ready = is_available()
    if not parser_ready:
        print(
            colorize(
                "  Ruby grammar unavailable (pip install tree-sitter-language-pack); "
                "only spec files are checked.",
                "yellow",
            ),
            file=sys.stderr,
        )

    for filepath in find_ruby_files(path, exclusions):
        if not parser_ready and not is_spec_file(filepath):
            result.files_skipped.append(filepath)
            continue
        try:
            findings = scan_file(filepath, config, specs)
        except PARSE_INIT_ERRORS as exc:
            logger.debug("Parse failed for %s: %s", filepath, exc)
            result.files_skipped.append(filepath)
            continue
        result.files_inspected += 1
        result.findings.extend(findings)

    result.findings.sort(key=lambda f: (f["file"], f["line"], f["column"], f["detector"]))
    return result
