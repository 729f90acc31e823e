"""Flag ``let!`` in spec files; eager setup hides what each example needs."""

from __future__ import annotations

import logging
import re

from specparity.enums import Cop
from specparity.findings import LET_BANG_MSG, make_finding
from specparity.ruby.treesitter import (
    PARSE_INIT_ERRORS,
    field,
    iter_descendants,
    method_name_of,
    parse_ruby,
)

logger = logging.getLogger(__name__)

LET_BANG = "let!"
_LET_BANG_LINE_RE = re.compile(r"^(?P<indent>\s*)let!(?=[\s({])")


def _scan_lines(text: str) -> list[tuple[int, int]]:
    hits: list[tuple[int, int]] = []
    for lineno, line in enumerate(text.splitlines(), 1):
        m = _LET_BANG_LINE_RE.match(line)
        if m:
            hits.append((lineno, len(m.group("indent"))))
    return hits


def find_let_bang_calls(text: str) -> list[tuple[int, int]]:
    """(line, column) of every receiver-less ``let!`` call."""
    try:
        tree = parse_ruby(text)
    except PARSE_INIT_ERRORS as exc:
        logger.debug("tree-sitter unavailable, scanning let! by line: %s", exc)
        return _scan_lines(text)
    return [
        (node.start_point[0] + 1, node.start_point[1])
        for node in iter_descendants(tree.root_node)
        if node.type == "call"
        and field(node, "receiver") is None
        and method_name_of(node) == LET_BANG
    ]


def detect_let_bang(spec_path: str, text: str) -> list[dict]:
    return [
        make_finding(
            Cop.NO_LET_BANG,
            spec_path,
            LET_BANG,
            line=line,
            column=column,
            summary=LET_BANG_MSG,
        )
        for line, column in find_let_bang_calls(text)
    ]
