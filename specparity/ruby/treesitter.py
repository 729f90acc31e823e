"""Tree-sitter access for Ruby sources.

Wraps ``tree-sitter-language-pack`` so the rest of the package never touches
parser initialisation. Callers check :func:`is_available` (or catch
``PARSE_INIT_ERRORS``) and degrade when the grammar cannot be loaded.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger(__name__)

RUBY_GRAMMAR = "ruby"

# Errors raised while importing or initialising a grammar.
PARSE_INIT_ERRORS = (ImportError, LookupError, OSError, RuntimeError, ValueError)

# Node types whose named children are a plain statement sequence.
_CONTAINER_TYPES = frozenset(
    {
        "program",
        "body_statement",
        "block_body",
        "then",
        "else",
        "begin",
        "parenthesized_statements",
    }
)

# Fields that hold a definition's header rather than its body.
_HEADER_FIELDS = ("name", "superclass", "parameters", "value", "object")


@functools.lru_cache(maxsize=1)
def get_ruby_parser():
    """Return the shared Ruby parser (raises one of PARSE_INIT_ERRORS if unavailable)."""
    import tree_sitter_language_pack as pack

    try:
        return pack.get_parser(RUBY_GRAMMAR)
    except _pack_errors(pack) as exc:
        raise RuntimeError(f"cannot load the {RUBY_GRAMMAR} grammar: {exc}") from exc


def _pack_errors(pack) -> tuple[type[BaseException], ...]:
    """Library-specific exception classes (grammar downloads, missing binaries)."""
    found = (getattr(pack, name, None) for name in ("Error", "DownloadError"))
    return tuple(err for err in found if isinstance(err, type) and issubclass(err, BaseException))


def is_available() -> bool:
    try:
        get_ruby_parser()
    except PARSE_INIT_ERRORS as exc:
        logger.debug("tree-sitter ruby init failed: %s", exc)
        return False
    return True


def parse_ruby(source: str | bytes):
    """Parse Ruby source into a tree-sitter Tree."""
    data = source.encode("utf-8") if isinstance(source, str) else source
    return get_ruby_parser().parse(data)


def node_text(node: Any) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def field(node: Any, name: str) -> Any:
    return None if node is None else node.child_by_field_name(name)


def unwrap_parens(node: Any) -> Any:
    """Strip ``(expr)`` wrappers that hold a single statement."""
    while node is not None and node.type == "parenthesized_statements":
        inner = [c for c in node.named_children if c.type != "comment"]
        if len(inner) != 1:
            return node
        node = inner[0]
    return node


def body_statements(node: Any) -> list[Any]:
    """Direct statements of a class, module, method, block or clause node.

    Handles both grammar layouts: bodies wrapped in a ``body_statement`` field
    and statements attached directly to the definition node.
    """
    if node is None:
        return []
    body = node.child_by_field_name("body")
    if body is not None:
        if body.type not in _CONTAINER_TYPES:
            return [body]
        node = body
    header_ids = set()
    if node.type not in _CONTAINER_TYPES:
        for name in _HEADER_FIELDS:
            child = node.child_by_field_name(name)
            if child is not None:
                header_ids.add(child.id)
    return [
        child
        for child in node.named_children
        if child.id not in header_ids
        and child.type not in ("comment", "method_parameters", "superclass")
    ]


def iter_descendants(node: Any) -> Iterator[Any]:
    """Pre-order walk over the named descendants of *node* (excluding itself)."""
    stack = list(reversed(node.named_children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.named_children))


def iter_ancestors(node: Any) -> Iterator[Any]:
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def method_name_of(call: Any) -> str:
    """Method name of a ``call`` node (``""`` for anything else)."""
    if call is None or call.type != "call":
        return ""
    return node_text(call.child_by_field_name("method"))


def call_arguments(call: Any) -> list[Any]:
    args = field(call, "arguments")
    if args is None:
        return []
    return [c for c in args.named_children if c.type != "comment"]
