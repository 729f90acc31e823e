"""Method definition extraction from parsed Ruby sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from specparity.enums import MethodKind, Visibility
from specparity.ruby.treesitter import (
    iter_ancestors,
    iter_descendants,
    node_text,
    parse_ruby,
)
from specparity.ruby.visibility import visibility_of

METHOD_NODES = frozenset({"method", "singleton_method"})


@dataclass(frozen=True)
class MethodSite:
    """One ``def`` under analysis, with its location and resolved scope."""

    name: str
    kind: MethodKind
    line: int
    column: int
    end_line: int
    end_column: int
    visibility: Visibility
    node: Any = field(default=None, compare=False, repr=False)

    @property
    def qualified_name(self) -> str:
        prefix = "." if self.kind is MethodKind.CLASS else "#"
        return f"{prefix}{self.name}"

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC


def inside_singleton_class(node: Any) -> bool:
    """True when *node* sits in a ``class << self`` block."""
    for ancestor in iter_ancestors(node):
        if ancestor.type != "singleton_class":
            continue
        value = ancestor.child_by_field_name("value")
        if value is not None and value.type == "self":
            return True
    return False


def method_kind(node: Any) -> MethodKind:
    if node.type == "singleton_method" or inside_singleton_class(node):
        return MethodKind.CLASS
    return MethodKind.INSTANCE


def method_site(node: Any) -> MethodSite:
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    return MethodSite(
        name=node_text(node.child_by_field_name("name")),
        kind=method_kind(node),
        line=start_row + 1,
        column=start_col,
        end_line=end_row + 1,
        end_column=end_col,
        visibility=visibility_of(node),
        node=node,
    )


def extract_method_sites(root: Any) -> list[MethodSite]:
    """All method definitions under *root*, in source order."""
    return [method_site(n) for n in iter_descendants(root) if n.type in METHOD_NODES]


def extract_methods_from_source(source: str) -> list[MethodSite]:
    return extract_method_sites(parse_ruby(source).root_node)
