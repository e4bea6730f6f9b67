"""
Tests for recipe tree nodes.
"""

import pytest

from plotrecipes import (
    AstVisitor, AttrSet, Block, Call, Identifier, Literal, SeriesBlock,
    SourceLocation, SourceSpan, Symbol, TupleLiteral, format_ast, print_ast,
)
from plotrecipes.ast import PrintVisitor
from plotrecipes.build import attr, block, call, define, if_, lit, param, series, signature, sym


# --- Node Basics ---

class TestNodes:
    """Test node identity and traversal."""

    def test_kind_is_class_name(self):
        """Test that kind reports the node class."""
        assert Identifier("x").kind == "Identifier"
        assert AttrSet(Identifier("x"), Literal(1)).kind == "AttrSet"

    def test_span_not_compared(self):
        """Test that source spans do not affect equality."""
        span = SourceSpan(SourceLocation(1, 1), SourceLocation(1, 5))
        assert Identifier("x", span=span) == Identifier("x")

    def test_span_str(self):
        """Test span formatting."""
        span = SourceSpan(SourceLocation(2, 3), SourceLocation(2, 9))
        assert str(span) == "2:3-2:9"

    def test_children_in_field_order(self):
        """Test that children flattens list fields in order."""
        ident_node = Identifier("y")
        node = call("f", 1, ident_node)
        kids = list(node.children())
        assert kids[0] == Identifier("f")
        assert kids[1] == Literal(1)
        assert kids[2] is ident_node

    def test_children_skip_plain_values(self):
        """Test that non-node fields are not children."""
        assert list(Literal(5).children()) == []
        assert list(Symbol("auto").children()) == []


# --- Visitors ---

class CountingVisitor(AstVisitor):
    def __init__(self):
        self.seen = []

    def visit_Identifier(self, node):
        self.seen.append(node.name)


class TestVisitor:
    """Test visitor dispatch."""

    def test_accept_dispatches_by_class(self):
        """Test that accept calls visit_<Class>."""
        visitor = CountingVisitor()
        Identifier("x").accept(visitor)
        assert visitor.seen == ["x"]

    def test_accept_falls_back_to_generic(self):
        """Test that unknown nodes reach generic_visit."""
        with pytest.raises(NotImplementedError):
            Literal(1).accept(CountingVisitor())


# --- Printing ---

class TestFormat:
    """Test tree rendering."""

    def test_format_nested(self):
        """Test that nested nodes are rendered with indentation."""
        text = format_ast(block(attr("linecolor", sym("red"))))
        lines = text.splitlines()
        assert lines[0] == "Block"
        assert any(line.strip() == "AttrSet" for line in lines)
        assert "name: 'red'" in text

    def test_format_definition(self):
        """Test rendering a whole definition."""
        definition = define(
            signature("f", param("t", "T")),
            series(attr("fillcolor", sym("green")), call("rand", 10)),
        )
        text = format_ast(definition)
        assert text.startswith("RecipeDefinition")
        assert "SeriesBlock" in text
        assert "TypeRef" in text

    def test_print_ast(self, capsys):
        """Test that print_ast writes the rendering to stdout."""
        print_ast(Identifier("x"))
        out = capsys.readouterr().out
        assert out.startswith("Identifier")
        assert "name: 'x'" in out

    def test_print_visitor_through_accept(self):
        """Test that the printer is reached through node dispatch."""
        lines = Symbol("auto").accept(PrintVisitor())
        assert lines == ["Symbol", "  name: 'auto'"]


# --- Builders ---

class TestBuilders:
    """Test the tree construction helpers."""

    def test_plain_values_become_literals(self):
        """Test that raw values are wrapped."""
        assert call("rand", 10) == Call(Identifier("rand"), [Literal(10)])

    def test_flagged_attribute(self):
        """Test that flags build a tuple led by the statement."""
        node = attr("zrotation", 6, "quiet")
        assert node == TupleLiteral([AttrSet(Identifier("zrotation"), Literal(6)), Symbol("quiet")])

    def test_series_wraps_block(self):
        """Test series block construction."""
        node = series(lit(1))
        assert isinstance(node, SeriesBlock)
        assert node.body == Block([Literal(1)])

    def test_if_without_else(self):
        """Test that else is optional."""
        node = if_(True, [lit(1)])
        assert node.else_branch is None

