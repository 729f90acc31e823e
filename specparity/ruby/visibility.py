"""Method visibility by replaying modifier statements in declaration order."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from specparity.enums import Visibility
from specparity.ruby.treesitter import (
    body_statements,
    call_arguments,
    field,
    iter_ancestors,
    method_name_of,
    node_text,
)

VISIBILITY_MODIFIERS = {
    "public": Visibility.PUBLIC,
    "private": Visibility.PRIVATE,
    "protected": Visibility.PROTECTED,
}

TYPE_NODES = frozenset({"class", "module"})


def _contains(outer: Any, inner: Any) -> bool:
    return outer.start_byte <= inner.start_byte and inner.end_byte <= outer.end_byte


def bare_modifier(statement: Any) -> Visibility | None:
    """Visibility set by an argument-less ``private``/``protected``/``public`` statement."""
    if statement.type == "identifier":
        return VISIBILITY_MODIFIERS.get(node_text(statement))
    if statement.type != "call" or field(statement, "receiver") is not None:
        return None
    if call_arguments(statement) or field(statement, "block") is not None:
        return None
    return VISIBILITY_MODIFIERS.get(method_name_of(statement))


def _wrapping_modifier(statement: Any, target: Any) -> Visibility | None:
    # private def foo ... end
    if statement.type != "call" or field(statement, "receiver") is not None:
        return None
    modifier = VISIBILITY_MODIFIERS.get(method_name_of(statement))
    if modifier is None:
        return None
    if any(arg.id == target.id for arg in call_arguments(statement)):
        return modifier
    return None


def method_visibility(statements: Sequence[Any], target: Any) -> Visibility:
    """Fold the enclosing body's statements up to *target* into a visibility.

    Starts at public; each bare modifier replaces the running state, and the
    scan stops at the statement that is (or contains) the target, so later
    modifiers never affect it.
    """
    visibility = Visibility.PUBLIC
    for statement in statements:
        if _contains(statement, target):
            return _wrapping_modifier(statement, target) or visibility
        visibility = bare_modifier(statement) or visibility
    return visibility


def enclosing_type(node: Any) -> Any:
    """Nearest class/module ancestor, skipping ``class << self`` scopes."""
    for ancestor in iter_ancestors(node):
        if ancestor.type in TYPE_NODES:
            return ancestor
    return None


def visibility_of(method_node: Any) -> Visibility:
    # Bare modifiers never apply to ``def self.foo``.
    if method_node.type == "singleton_method":
        return Visibility.PUBLIC
    owner = enclosing_type(method_node)
    if owner is None:
        return Visibility.PUBLIC
    return method_visibility(body_statements(owner), method_node)
