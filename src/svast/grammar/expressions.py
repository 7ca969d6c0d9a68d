"""A.8 Expressions.

Annex A splits most expression productions into constant and non-constant
forms with the same shape. Both share the node classes here; whether an
expression is constant is a semantic question answered by evaluation.
"""

from __future__ import annotations

from typing import Literal

from svast.grammar.identifiers import HierarchicalIdentifier, PsParameterIdentifier
from svast.grammar.numbers import (
    BinaryNumber,
    DecimalNumber,
    HexNumber,
    OctalNumber,
    RealNumber,
    UnbasedUnsizedLiteral,
)
from svast.nodes import Node

# A.8.6 Operators
type UnaryOperator = Literal["+", "-", "!", "~", "&", "~&", "|", "~|", "^", "~^", "^~"]
type BinaryOperator = Literal[
    "+", "-", "*", "/", "%", "**",
    "==", "!=", "===", "!==", "==?", "!=?",
    "&&", "||", "->", "<->",
    "<", "<=", ">", ">=",
    "&", "|", "^", "^~", "~^",
    ">>", "<<", ">>>", "<<<",
]  # fmt: skip


class UnaryExpression(Node):
    """expression ::= unary_operator primary"""

    operator: UnaryOperator
    operand: Expression


class BinaryExpression(Node):
    """expression ::= expression binary_operator expression"""

    left: Expression
    operator: BinaryOperator
    right: Expression


class ConditionalExpression(Node):
    """conditional_expression ::= cond_predicate ? expression : expression"""

    predicate: Expression
    if_true: Expression
    if_false: Expression


class Concatenation(Node):
    """concatenation ::= { expression { , expression } }"""

    expressions: tuple[Expression, ...]

    def grammar_error(self) -> str | None:
        if not self.expressions:
            return "concatenation needs at least one expression"
        return None


class ConstantRange(Node):
    """constant_range ::= constant_expression : constant_expression"""

    msb: Expression
    lsb: Expression


type Primary = (
    DecimalNumber
    | BinaryNumber
    | OctalNumber
    | HexNumber
    | RealNumber
    | UnbasedUnsizedLiteral
    | PsParameterIdentifier
    | HierarchicalIdentifier
    | Concatenation
)

type Expression = Primary | UnaryExpression | BinaryExpression | ConditionalExpression
