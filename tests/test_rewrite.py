"""Tests for rebuilding immutable trees."""

import pytest

from svast.formats.json import encode
from svast.grammar import (
    DecimalNumber,
    EscapedIdentifier,
    HierarchicalIdentifier,
    ModuleDeclarationAnsi,
    ModuleIdentifier,
    SimpleIdentifier,
    SourceText,
    UnaryExpression,
)
from svast.nodes import Node
from svast.rewrite import Rewriter, rename_identifier, replace_node, transform


class DropEndLabels(Rewriter):
    def rewrite(self, node: Node) -> Node | None:
        match node:
            case ModuleDeclarationAnsi(end_label=ModuleIdentifier()):
                return node.replace(end_label=None)
        return None


class TestTransform:
    """Test bottom-up rebuilding."""

    def test_identity_returns_same_tree(self, source_text: SourceText) -> None:
        assert transform(source_text, lambda node: None) is source_text

    def test_unchanged_subtrees_are_shared(self, source_text: SourceText) -> None:
        result = DropEndLabels()(source_text)
        counter, legacy = source_text.descriptions
        new_counter, new_legacy = result.descriptions

        assert new_counter.end_label is None
        assert new_counter.header is counter.header
        assert new_counter.items is counter.items
        assert new_legacy is legacy

    def test_input_is_untouched(self, source_text: SourceText) -> None:
        before = encode(source_text)
        DropEndLabels()(source_text)
        assert encode(source_text) == before

    def test_children_rewritten_before_parent(self, counter) -> None:
        seen: list[str] = []

        def record(node: Node) -> None:
            seen.append(node.tag)

        transform(counter, record)
        assert seen[-1] == "ModuleDeclarationAnsi"
        assert seen.index("ModuleAnsiHeader") > seen.index("ModuleKeyword")


class TestReplaceNode:
    """Test splicing a replacement in by identity."""

    def test_replace(self, counter) -> None:
        value = counter.header.parameters.declarations[0].assignments[0].value
        result = replace_node(counter, value, DecimalNumber("16"))

        new_value = result.header.parameters.declarations[0].assignments[0].value
        assert new_value == DecimalNumber("16")
        assert result.header.ports is counter.header.ports
        assert result.items is counter.items

    def test_equal_but_distinct_node_is_left_alone(self, counter) -> None:
        """Test that only the identical node is replaced, not equal ones."""
        clk = counter.header.ports.declarations[0].identifier
        result = replace_node(counter, clk.identifier, SimpleIdentifier("clock"))
        assert result.header.ports.declarations[0].identifier.identifier.text == "clock"
        expression = result.items[1].assignments[0].expression
        assert expression.path[0].text == "clk"

    def test_foreign_node(self, counter) -> None:
        with pytest.raises(ValueError, match="not part of the tree"):
            replace_node(counter, SimpleIdentifier("clk"), SimpleIdentifier("clock"))


class TestRenameIdentifier:
    """Test renaming identifiers throughout a tree."""

    def test_rename_every_occurrence(self, counter) -> None:
        result = rename_identifier(counter, "WIDTH", "SIZE")
        texts = [n.text for n in result.walk() if isinstance(n, SimpleIdentifier)]
        assert "WIDTH" not in texts
        assert texts.count("SIZE") == 3

    def test_only_identifiers_change(self, counter) -> None:
        before = encode(counter)
        after = encode(rename_identifier(counter, "WIDTH", "SIZE"))
        assert after == before.replace('"WIDTH"', '"SIZE"')

    def test_missing_name_is_a_no_op(self, counter) -> None:
        assert rename_identifier(counter, "nope", "other") is counter

    def test_escaped_name(self, counter) -> None:
        result = rename_identifier(counter, "clk", r"\clk!")
        assert encode(result).count(r'"\\clk!"') == 2

    @pytest.mark.parametrize("name", ["module", "9lives", "", "a b"])
    def test_invalid_name(self, counter, name: str) -> None:
        with pytest.raises(ValueError, match="not a valid identifier"):
            rename_identifier(counter, "clk", name)

    def test_simple_name_matches_escaped_spelling(self) -> None:
        tree = HierarchicalIdentifier(path=(EscapedIdentifier(r"\foo"), SimpleIdentifier("foo")))
        result = rename_identifier(tree, "foo", "bar")
        assert result.path == (SimpleIdentifier("bar"), SimpleIdentifier("bar"))

    def test_escaped_name_matches_simple_spelling(self) -> None:
        tree = HierarchicalIdentifier(path=(SimpleIdentifier("foo"), SimpleIdentifier("baz")))
        result = rename_identifier(tree, r"\foo", "bar")
        assert result.path == (SimpleIdentifier("bar"), SimpleIdentifier("baz"))


class TestDeepTrees:
    """Test rebuilding trees nested beyond the recursion limit."""

    @staticmethod
    def chain(leaf: SimpleIdentifier, depth: int = 5000) -> UnaryExpression:
        expr = HierarchicalIdentifier(path=(leaf,))
        for _ in range(depth):
            expr = UnaryExpression(operator="-", operand=expr)
        return expr

    def test_identity_transform(self) -> None:
        tree = self.chain(SimpleIdentifier("x"))
        assert transform(tree, lambda node: None) is tree

    def test_rename_at_the_bottom(self) -> None:
        tree = self.chain(SimpleIdentifier("x"))
        assert rename_identifier(tree, "x", "y") == self.chain(SimpleIdentifier("y"))

    def test_replace_at_the_bottom(self) -> None:
        leaf = SimpleIdentifier("x")
        tree = self.chain(leaf)
        assert replace_node(tree, leaf, SimpleIdentifier("y")) == self.chain(SimpleIdentifier("y"))
