"""Tests for svast.nodes module."""

import pytest

from svast.grammar import (
    DecimalNumber,
    EscapedIdentifier,
    IntegerAtomType,
    IntegerType,
    ListOfPorts,
    ModuleDeclarationAnsi,
    ModuleIdentifier,
    PortList,
    Signing,
    SimpleIdentifier,
)
from svast.nodes import Node, Token


class TestNodeBasics:
    """Test basic Node functionality."""

    def test_node_is_frozen(self, signed_int: IntegerType) -> None:
        """Test that Node instances are immutable."""
        with pytest.raises((AttributeError, TypeError)):
            signed_int.signing = None  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        """Test that separately built trees with the same shape are equal."""
        a = IntegerType(kind=IntegerAtomType(keyword="int"))
        b = IntegerType(kind=IntegerAtomType(keyword="int"))
        assert a == b
        assert a is not b
        assert hash(a) == hash(b)

    def test_defaults_for_optional_and_repeated_fields(self) -> None:
        """Test that optional fields default to None and repetitions to ()."""
        node = IntegerType(kind=IntegerAtomType(keyword="byte"))
        assert node.signing is None
        assert node.packed_dimensions == ()

    def test_replace_returns_new_node(self, signed_int: IntegerType) -> None:
        """Test that replace() leaves the original untouched."""
        unsigned = signed_int.replace(signing=Signing(keyword="unsigned"))
        assert unsigned.signing == Signing(keyword="unsigned")
        assert signed_int.signing == Signing(keyword="signed")
        assert unsigned.kind is signed_int.kind


class TestNodeTags:
    """Test Node tag generation and registration."""

    def test_tag_is_production_name(self) -> None:
        """Test that tags are the Annex A production names."""
        assert IntegerType.tag == "IntegerType"
        assert ModuleDeclarationAnsi.tag == "ModuleDeclarationAnsi"

    def test_grammar_nodes_registered(self) -> None:
        """Test that grammar classes are in the registry."""
        assert Node.registry["ListOfPorts"] is ListOfPorts
        assert Node.registry["SimpleIdentifier"] is SimpleIdentifier

    def test_port_list_alias(self) -> None:
        """Test that PortList names the list_of_ports production."""
        assert PortList is ListOfPorts
        assert "PortList" not in Node.registry

    def test_abstract_bases_not_registered(self) -> None:
        """Test that abstract bases never become document tags."""
        assert "Token" not in Node.registry
        assert "_DirectionalDeclaration" not in Node.registry

    def test_tag_collision_raises_error(self) -> None:
        """Test that reusing a production tag is rejected."""
        with pytest.raises(ValueError, match="Tag 'IntegerType' already registered"):

            class Impostor(Node, tag="IntegerType"):
                value: str


class TestTraversal:
    """Test children() and walk()."""

    def test_children_in_field_order(self, signed_int: IntegerType) -> None:
        """Test that children follow field declaration order."""
        assert signed_int.children() == (signed_int.kind, signed_int.signing)

    def test_children_skip_absent_optionals(self) -> None:
        """Test that None fields contribute no children."""
        node = IntegerType(kind=IntegerAtomType(keyword="int"))
        assert node.children() == (IntegerAtomType(keyword="int"),)

    def test_tokens_have_no_children(self) -> None:
        """Test that terminals are leaves."""
        assert SimpleIdentifier("clk").children() == ()

    def test_walk_is_preorder(self, legacy) -> None:
        """Test that walk() yields parents before children, left to right."""
        tags = [node.tag for node in legacy.walk()]
        assert tags[:4] == [
            "ModuleDeclarationNonansi",
            "ModuleNonansiHeader",
            "ModuleKeyword",
            "ModuleIdentifier",
        ]
        identifiers = [n.text for n in legacy.walk() if isinstance(n, SimpleIdentifier)]
        assert identifiers == ["legacy", "a", "b"]

    def test_walk_visits_every_node_once(self, counter) -> None:
        """Test that walk() reaches the whole tree."""
        nodes = list(counter.walk())
        assert nodes[0] is counter
        assert len({id(n) for n in nodes}) == len(nodes)
        assert sum(isinstance(n, ModuleIdentifier) for n in nodes) == 2


class TestTokens:
    """Test lexical validation of terminals."""

    @pytest.mark.parametrize("text", ["clk", "_tmp", "data$1", "a1"])
    def test_valid_simple_identifiers(self, text: str) -> None:
        """Test spellings accepted as simple identifiers."""
        assert SimpleIdentifier.is_valid_text(text)

    @pytest.mark.parametrize("text", ["1abc", "", "a-b", "$display", "module", "wire"])
    def test_invalid_simple_identifiers(self, text: str) -> None:
        """Test that bad spellings and reserved keywords are rejected."""
        assert not SimpleIdentifier.is_valid_text(text)

    def test_escaped_identifier(self) -> None:
        """Test escaped identifiers, which may spell keywords."""
        assert EscapedIdentifier.is_valid_text(r"\module")
        assert EscapedIdentifier.is_valid_text(r"\bus[0]")
        assert not EscapedIdentifier.is_valid_text("module")
        assert not EscapedIdentifier.is_valid_text("\\a b")

    def test_construction_does_not_validate(self) -> None:
        """Test that constructors are total; validation happens in decode."""
        token = DecimalNumber("not a number")
        assert token.text == "not a number"
        assert not token.is_valid_text(token.text)

    def test_token_str(self) -> None:
        """Test that str() of a token is its spelling."""
        assert str(SimpleIdentifier("clk")) == "clk"
        assert isinstance(SimpleIdentifier("clk"), Token)
