"""Spec block forest built from a real Ruby parse tree.

Produces the same :class:`SpecBlock` forest as the indentation scanner, but
from ``describe``/``context``/``it``/``example``/``specify`` call nodes, so
strings, heredocs and comments cannot fake structure.
"""

from __future__ import annotations

import logging
from typing import Any

from specparity.enums import BlockKind
from specparity.ruby.treesitter import (
    PARSE_INIT_ERRORS,
    field,
    method_name_of,
    node_text,
    parse_ruby,
)
from specparity.specs.blocks import SpecBlock, keyword_kind

logger = logging.getLogger(__name__)

SPEC_RECEIVERS = frozenset({"RSpec"})


def _spec_call_kind(node: Any) -> BlockKind | None:
    if node.type != "call":
        return None
    receiver = field(node, "receiver")
    if receiver is not None and node_text(receiver) not in SPEC_RECEIVERS:
        return None
    return keyword_kind(method_name_of(node))


def _header(call: Any) -> str:
    raw = call.text or b""
    block = field(call, "block")
    if block is not None:
        raw = raw[: block.start_byte - call.start_byte]
    return raw.decode("utf-8", errors="replace").strip()


def _collect(node: Any, into: list[SpecBlock], lines: list[str]) -> None:
    for child in node.named_children:
        kind = _spec_call_kind(child)
        if kind is None:
            _collect(child, into, lines)
            continue
        row = child.start_point[0]
        line = lines[row] if row < len(lines) else ""
        block = SpecBlock(
            header=_header(child),
            indent=len(line) - len(line.lstrip()),
            line=row + 1,
            kind=kind,
        )
        into.append(block)
        body = field(child, "block")
        if kind is BlockKind.GROUP and body is not None:
            _collect(body, block.children, lines)


def syntax_spec_blocks(text: str) -> list[SpecBlock] | None:
    """Forest from the parse tree, or None when the text cannot be parsed cleanly."""
    try:
        tree = parse_ruby(text)
    except PARSE_INIT_ERRORS as exc:
        logger.debug("tree-sitter unavailable for spec parsing: %s", exc)
        return None
    if tree.root_node.has_error:
        logger.debug("Spec source has syntax errors; parse tree not used")
        return None
    roots: list[SpecBlock] = []
    _collect(tree.root_node, roots, text.splitlines())
    return roots
