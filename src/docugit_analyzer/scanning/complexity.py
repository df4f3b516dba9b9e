"""Cyclomatic complexity over tree-sitter subtrees.

Flat additive count: 1 for the base path, plus 1 for every decision node
in the subtree. No control-flow graph is built.

Counted node kinds:
    if_statement, ternary_expression, for_statement, for_in_statement
    (covers for-in, for-of and for-await), while_statement, do_statement,
    switch_case (``default:`` is a separate switch_default node), catch_clause,
    and binary_expression whose operator is ``&&`` or ``||``.

Nested functions are NOT isolated: a function's count includes the
branches of every function defined inside it, so an inner branch is
counted once for the inner function and again for each enclosing one.
"""

from __future__ import annotations

from typing import Any

BRANCH_NODE_TYPES = frozenset(
    {
        "if_statement",
        "ternary_expression",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "switch_case",
        "catch_clause",
    }
)

LOGICAL_OPERATORS = frozenset({"&&", "||"})


def _is_decision_point(node: Any) -> bool:
    if node.type in BRANCH_NODE_TYPES:
        return True
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        return operator is not None and operator.type in LOGICAL_OPERATORS
    return False


def cyclomatic_complexity(node: Any) -> int:
    """Complexity of the subtree rooted at ``node`` (the root itself is not counted).

    Uses an explicit stack so deeply nested expressions cannot exhaust the
    interpreter's recursion limit.
    """
    complexity = 1
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if _is_decision_point(current):
            complexity += 1
        stack.extend(current.children)
    return complexity
