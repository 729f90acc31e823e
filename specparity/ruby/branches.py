"""Branch counting for Ruby method bodies.

The count is a coverage-adequacy proxy, not cyclomatic complexity: each node
of a method's subtree is classified into a small set of kinds and each kind
maps to a fixed contribution.

- ``if``/``unless``/modifiers/ternary: 2, plus 1 per linked ``elsif``
- ``case``/``when`` (and ``case``/``in``): one per clause, plus 1 for ``else``
- ``&&``, ``||``, ``and``, ``or``: 1 each
- ``&`` / ``|`` as operator or method call: 1
- ``||=`` / ``&&=``: 2

Linked ``elsif`` clauses are collected in a first pass and skipped in the
counting pass so a chain is counted once, by its head. Memoization idioms
(``@x ||= ...``, ``return @x if defined?(@x)``, ``@x = ... if @x.nil?``,
``@x || default``) contribute nothing unless ``ignore_memoization`` is off;
only the idiom node itself is skipped, its subtree is still walked.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any

from specparity.ruby.treesitter import (
    body_statements,
    call_arguments,
    field,
    iter_descendants,
    method_name_of,
    node_text,
    unwrap_parens,
)


class NodeKind(enum.Enum):
    CONDITIONAL = "conditional"
    MULTIWAY = "multiway"
    SHORT_CIRCUIT = "short_circuit"
    COMPOUND_ASSIGN = "compound_assign"
    CALL = "call"
    OTHER = "other"


CONDITIONAL_NODES = frozenset(
    {"if", "unless", "if_modifier", "unless_modifier", "conditional"}
)
MULTIWAY_NODES = frozenset({"case", "case_match"})
CLAUSE_NODES = frozenset({"when", "in_clause"})
SHORT_CIRCUIT_OPERATORS = frozenset({"&&", "||", "and", "or"})
BITWISE_OPERATORS = frozenset({"&", "|"})
COMPOUND_OPERATORS = frozenset({"||=", "&&="})


def _operator(node: Any) -> str:
    return node_text(field(node, "operator"))


def classify(node: Any) -> NodeKind:
    kind = node.type
    if kind in CONDITIONAL_NODES:
        return NodeKind.CONDITIONAL
    if kind in MULTIWAY_NODES:
        return NodeKind.MULTIWAY
    if kind == "binary":
        op = _operator(node)
        if op in SHORT_CIRCUIT_OPERATORS:
            return NodeKind.SHORT_CIRCUIT
        if op in BITWISE_OPERATORS:
            return NodeKind.CALL
        return NodeKind.OTHER
    if kind == "operator_assignment" and _operator(node) in COMPOUND_OPERATORS:
        return NodeKind.COMPOUND_ASSIGN
    if kind == "call":
        return NodeKind.CALL
    return NodeKind.OTHER


# ── elsif chains ──────────────────────────────────────────


def continuation_of(node: Any) -> Any:
    """The conditional that continues *node*'s chain, if any.

    ``if``/``elsif`` continue through an ``elsif`` alternative; a ternary
    continues through a ternary in its else arm (``a ? b : c ? d : e``).
    """
    alternative = field(node, "alternative")
    if alternative is None:
        return None
    if node.type in ("if", "elsif") and alternative.type == "elsif":
        return alternative
    if node.type == "conditional" and alternative.type == "conditional":
        return alternative
    return None


def collect_continuations(root: Any) -> set[int]:
    """Ids of every conditional that is a linked continuation of another."""
    linked: set[int] = set()
    for node in iter_descendants(root):
        nxt = continuation_of(node)
        if nxt is not None:
            linked.add(nxt.id)
    return linked


# ── contributions per kind ────────────────────────────────


def _conditional_branches(node: Any) -> int:
    branches = 2
    current = continuation_of(node)
    while current is not None:
        branches += 1
        current = continuation_of(current)
    return branches


def _multiway_branches(node: Any) -> int:
    clauses = sum(1 for child in node.named_children if child.type in CLAUSE_NODES)
    has_else = any(child.type == "else" for child in node.named_children)
    return clauses + (1 if has_else else 0)


def _call_branches(node: Any) -> int:
    if node.type == "binary":
        return 1 if _operator(node) in BITWISE_OPERATORS else 0
    return 1 if method_name_of(node) in BITWISE_OPERATORS else 0


_CONTRIBUTIONS: dict[NodeKind, Callable[[Any], int]] = {
    NodeKind.CONDITIONAL: _conditional_branches,
    NodeKind.MULTIWAY: _multiway_branches,
    NodeKind.SHORT_CIRCUIT: lambda _node: 1,
    NodeKind.COMPOUND_ASSIGN: lambda _node: 2,
    NodeKind.CALL: _call_branches,
    NodeKind.OTHER: lambda _node: 0,
}


def branch_contribution(node: Any) -> int:
    return _CONTRIBUTIONS[classify(node)](node)


# ── memoization idioms ────────────────────────────────────


def _ivar_name(node: Any) -> str | None:
    node = unwrap_parens(node)
    if node is not None and node.type == "instance_variable":
        return node_text(node)
    return None


def _defined_ivar(node: Any) -> str | None:
    """``defined?(@x)`` → ``"@x"``."""
    node = unwrap_parens(node)
    if node is None or node.type != "unary" or _operator(node) != "defined?":
        return None
    return _ivar_name(field(node, "operand"))


def _guarded_statement(node: Any) -> Any:
    """The single statement a conditional guards, or None."""
    if node.type in ("if_modifier", "unless_modifier"):
        return field(node, "body")
    if node.type in ("if", "unless") and field(node, "alternative") is None:
        statements = body_statements(field(node, "consequence"))
        if len(statements) == 1:
            return statements[0]
    return None


def _unset_test_target(condition: Any, *, negated: bool) -> str | None:
    """Field tested for being unset: ``@x.nil?``, ``!@x``, ``unless @x`` and friends."""
    condition = unwrap_parens(condition)
    if condition is None:
        return None
    if negated:
        return _ivar_name(condition) or _defined_ivar(condition)
    if condition.type == "call" and method_name_of(condition) == "nil?":
        if not call_arguments(condition):
            return _ivar_name(field(condition, "receiver"))
        return None
    if condition.type == "unary" and _operator(condition) in ("!", "not"):
        return _unset_test_target(field(condition, "operand"), negated=True)
    return None


def is_ivar_or_assign(node: Any) -> bool:
    """``@x ||= value``."""
    return (
        node.type == "operator_assignment"
        and _operator(node) == "||="
        and _ivar_name(field(node, "left")) is not None
    )


def is_defined_guard(node: Any) -> bool:
    """``return @x if defined?(@x)``."""
    if node.type not in ("if", "if_modifier"):
        return False
    checked = _defined_ivar(field(node, "condition"))
    if checked is None:
        return False
    guarded = _guarded_statement(node)
    if guarded is None or guarded.type != "return":
        return False
    returned = [_ivar_name(arg) for arg in _return_values(guarded)]
    return all(name in (None, checked) for name in returned)


def _return_values(node: Any) -> list[Any]:
    values: list[Any] = []
    for child in node.named_children:
        if child.type == "argument_list":
            values.extend(c for c in child.named_children if c.type != "comment")
        elif child.type != "comment":
            values.append(child)
    return values


def is_unset_guard_assign(node: Any) -> bool:
    """``@x = value if @x.nil?`` / ``unless @x`` / ``if !@x``."""
    if node.type not in ("if", "if_modifier", "unless", "unless_modifier"):
        return False
    negated = node.type.startswith("unless")
    target = _unset_test_target(field(node, "condition"), negated=negated)
    if target is None:
        return False
    guarded = _guarded_statement(node)
    if guarded is None or guarded.type != "assignment":
        return False
    return _ivar_name(field(guarded, "left")) == target


def is_ivar_or_default(node: Any) -> bool:
    """``@x || default``."""
    return (
        node.type == "binary"
        and _operator(node) in ("||", "or")
        and _ivar_name(field(node, "left")) is not None
    )


def is_memoization(node: Any) -> bool:
    return (
        is_ivar_or_assign(node)
        or is_defined_guard(node)
        or is_unset_guard_assign(node)
        or is_ivar_or_default(node)
    )


# ── entry point ───────────────────────────────────────────


def count_branches(method_node: Any, *, ignore_memoization: bool = True) -> int:
    """Branch count of a method definition node's subtree."""
    continuations = collect_continuations(method_node)
    branches = 0
    for node in iter_descendants(method_node):
        if node.id in continuations:
            continue
        if ignore_memoization and is_memoization(node):
            continue
        branches += branch_contribution(node)
    return branches
