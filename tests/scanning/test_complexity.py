"""Tests for cyclomatic complexity counting."""

import pytest

from docugit_analyzer.scanning.complexity import BRANCH_NODE_TYPES, cyclomatic_complexity
from docugit_analyzer.scanning.treesitter_parser import TreeSitterParser


def _only_function(parse, code, path="src/sample.js"):
    parsed = parse(code, path)
    assert len(parsed.functions) == 1
    return parsed.functions[0]


class TestBaseline:
    def test_straight_line_function_is_one(self, parse):
        """No branches: complexity 1."""
        fn = _only_function(parse, "function add(a, b) { return a + b }")
        assert fn.complexity == 1

    def test_empty_function_is_one(self, parse):
        fn = _only_function(parse, "const noop = () => {}")
        assert fn.complexity == 1

    def test_counted_kinds_are_inspectable(self):
        """The counted node kinds are a public table."""
        assert "if_statement" in BRANCH_NODE_TYPES
        assert "switch_default" not in BRANCH_NODE_TYPES


class TestEachConstruct:
    """Each decision construct adds exactly one."""

    @pytest.mark.parametrize(
        "body",
        [
            "if (a) { b() }",
            "return a ? 1 : 2",
            "for (let i = 0; i < a; i++) {}",
            "for (const k in a) {}",
            "for (const v of a) {}",
            "while (a) { a-- }",
            "do { a-- } while (a)",
            "try { a() } catch (e) {}",
            "return a && b",
            "return a || b",
            "switch (a) { case 1: break }",
        ],
    )
    def test_single_construct_adds_one(self, parse, body):
        fn = _only_function(parse, f"function f(a, b) {{ {body} }}")
        assert fn.complexity == 2

    def test_default_case_not_counted(self, parse):
        """Only non-default switch cases count."""
        code = "function f(a) { switch (a) { case 1: return 1; case 2: return 2; default: return 0 } }"
        assert _only_function(parse, code).complexity == 3

    def test_nullish_coalescing_not_counted(self, parse):
        fn = _only_function(parse, "function f(a) { return a ?? 0 }")
        assert fn.complexity == 1

    def test_else_if_chain(self, parse):
        """else-if is a nested if statement: one per branch condition."""
        code = "function f(a) { if (a > 2) { return 3 } else if (a > 1) { return 2 } else { return 1 } }"
        assert _only_function(parse, code).complexity == 3

    def test_combined_constructs(self, parse):
        """Flat additive count over the whole body."""
        code = """
function busy(a, b) {
  if (a && b) {
    for (const x of a) {
      while (x) { x-- }
    }
  }
  try {
    return b ? a : null
  } catch (err) {
    return a || b
  }
}
"""
        # if, &&, for-of, while, ternary, catch, || = 7
        assert _only_function(parse, code).complexity == 8


class TestNestedFunctions:
    """Inner function branches count toward the enclosing function too."""

    def test_inner_branches_counted_twice(self, parse):
        code = """
function outer(items) {
  const check = (x) => {
    if (x) { return 1 }
    return 0
  }
  return items.map(check)
}
"""
        parsed = parse(code, "src/nested.js")
        outer, inner = parsed.functions
        assert (outer.name, inner.name) == ("outer", "check")
        assert inner.complexity == 2
        assert outer.complexity == 2

    def test_total_complexity_sums_functions(self, parse):
        code = "function a(x) { if (x) {} }\nfunction b(y) { return y || 1 }\n"
        parsed = parse(code, "src/two.js")
        assert parsed.total_complexity == 4


class TestDirectCall:
    def test_counts_over_raw_subtree(self):
        """cyclomatic_complexity works on any node, e.g. the whole program."""
        tree = TreeSitterParser().parse("if (a) {}\nwhile (b) {}\n", "src/top.js")
        assert cyclomatic_complexity(tree.root_node) == 3
