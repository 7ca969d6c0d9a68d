"""Constant expression evaluation over concrete expression trees.

Evaluation is total: anything that cannot be resolved statically yields an
`Indeterminate` carrying the reason instead of raising. Results are
`Constant` ints that remember the width and signedness of their
self-determined type (1800-2017 11.6, 11.8).

The width of the context an expression ends up in is not known here, so a
result is only definite when every context would agree on it. Overflow of
the self-determined width, a negative value in an unsigned expression, and
operators whose result depends on the context width (bitwise negation,
xnor) are indeterminate rather than guessed.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from math import prod
from typing import Any, Self

from svast.grammar.data_types import (
    ImplicitDataType,
    IntegerAtomType,
    IntegerType,
    IntegerVectorType,
    PackedDimension,
)
from svast.grammar.declarations import LocalParameterDeclaration, ParameterDeclaration
from svast.grammar.expressions import (
    BinaryExpression,
    Concatenation,
    ConditionalExpression,
    ConstantRange,
    Expression,
    UnaryExpression,
)
from svast.grammar.identifiers import HierarchicalIdentifier, PsParameterIdentifier
from svast.grammar.numbers import (
    BinaryNumber,
    DecimalNumber,
    HexNumber,
    OctalNumber,
    RealNumber,
    UnbasedUnsizedLiteral,
)
from svast.grammar.source_text import ModuleDeclarationAnsi, ModuleDeclarationNonansi
from svast.nodes import Nested, Node, run_nested

# Widest integral value represented; anything wider is Indeterminate.
MAX_WIDTH = 1 << 24

# 6.11 Integer data types: keyword -> (4-state, signed by default, bits)
INTEGER_ATOMS: dict[str, tuple[bool, bool, int]] = {
    "byte": (False, True, 8),
    "shortint": (False, True, 16),
    "int": (False, True, 32),
    "longint": (False, True, 64),
    "integer": (True, True, 32),
    "time": (True, False, 64),
}

# keyword -> (4-state, signed by default); one bit per packed element
INTEGER_VECTORS: dict[str, tuple[bool, bool]] = {
    "bit": (False, False),
    "logic": (True, False),
    "reg": (True, False),
}

_INT_WIDTH = 32


@dataclass(frozen=True)
class Indeterminate:
    """A value that cannot be determined without elaboration."""

    reason: str


class Constant(int):
    """An integer together with the width and signedness of its type.

    Compares and hashes as the plain int it holds.
    """

    width: int
    signed: bool

    def __new__(cls, value: int, width: int, signed: bool) -> Self:
        constant = super().__new__(cls, value)
        constant.width = width
        constant.signed = signed
        return constant

    def __repr__(self) -> str:
        return f"Constant({int(self)}, width={self.width}, signed={self.signed})"


type Value = int | Indeterminate
type Parameters = Mapping[str, Value]

_BASED = re.compile(r"(?P<size>[0-9_]*)'(?P<signed>[sS]?)(?P<base>[dDbBoOhH])(?P<digits>.+)")
_RADIX = {"d": 10, "b": 2, "o": 8, "h": 16}


def _signed_bits(value: int) -> int:
    """Bits a signed type needs to hold value."""
    return (value if value >= 0 else ~value).bit_length() + 1


def _fit(value: int, width: int, signed: bool) -> Constant | Indeterminate:
    """Type value as `width` bits, or Indeterminate if it does not fit."""
    if signed:
        if _signed_bits(value) > width:
            return Indeterminate(f"result {value} overflows {width} signed bits")
    elif value < 0:
        return Indeterminate(f"negative result {value} of an unsigned expression")
    elif value.bit_length() > width:
        return Indeterminate(f"result {value} overflows {width} bits")
    return Constant(value, width, signed)


def _bit(value: bool) -> Constant:
    return Constant(int(value), 1, False)


def number_value(
    number: DecimalNumber | BinaryNumber | OctalNumber | HexNumber,
) -> Constant | Indeterminate:
    """Value of an integral number literal.

    Sized literals are truncated to their size; signed ones (`'s`) are
    reinterpreted as two's complement. Unsized literals are 32 bits.
    """
    text = number.text
    match = _BASED.fullmatch(text)
    if match is None:
        digits = text.replace("_", "").lstrip("0") or "0"
        if len(digits) > 10 or int(digits) >> (_INT_WIDTH - 1):
            return Indeterminate(f"unsized literal '{text}' exceeds {_INT_WIDTH} bits")
        return Constant(int(digits), _INT_WIDTH, True)

    digits = match["digits"].replace("_", "")
    if any(d in "xXzZ?" for d in digits):
        return Indeterminate(f"'{text}' contains x or z digits")

    size = match["size"].replace("_", "")
    if len(size) > len(str(MAX_WIDTH)) or (size and int(size) > MAX_WIDTH):
        return Indeterminate(f"'{text}' is wider than {MAX_WIDTH} bits")
    bits = int(size) if size else _INT_WIDTH

    try:
        value = int(digits, _RADIX[match["base"].lower()])
    except ValueError:
        return Indeterminate(f"'{text}' has too many digits")
    if not size and value >> _INT_WIDTH:
        return Indeterminate(f"unsized literal '{text}' exceeds {_INT_WIDTH} bits")
    value &= (1 << bits) - 1
    signed = bool(match["signed"])
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return Constant(value, bits, signed)


def _lookup(name: str, parameters: Parameters | None) -> Constant | Indeterminate:
    """A parameter's value; plain ints are taken as values of type `int`."""
    if parameters is None or name not in parameters:
        return Indeterminate(f"parameter '{name}' is not resolved")
    value = parameters[name]
    if isinstance(value, Constant | Indeterminate):
        return value
    width = max(_INT_WIDTH, _signed_bits(value))
    if width > MAX_WIDTH:
        return Indeterminate(f"parameter '{name}' is wider than {MAX_WIDTH} bits")
    return Constant(value, width, True)


def _int_division(left: int, right: int) -> int | Indeterminate:
    if right == 0:
        return Indeterminate("division by zero")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _int_modulo(left: int, right: int) -> int | Indeterminate:
    if right == 0:
        return Indeterminate("modulo by zero")
    remainder = abs(left) % abs(right)
    return -remainder if left < 0 else remainder


# Operands extended to the wider of the two; signed only if both are
_ARITHMETIC: dict[str, Callable[[int, int], int | Indeterminate]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _int_division,
    "%": _int_modulo,
    "&": lambda a, b: a & b,
    "|": lambda a, b: a | b,
    "^": lambda a, b: a ^ b,
}

_COMPARISONS: dict[str, Callable[[int, int], bool]] = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "===": lambda a, b: a == b,
    "!==": lambda a, b: a != b,
    "==?": lambda a, b: a == b,
    "!=?": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}

_LOGICAL: dict[str, Callable[[bool, bool], bool]] = {
    "&&": lambda a, b: a and b,
    "||": lambda a, b: a or b,
    "->": lambda a, b: not a or b,
    "<->": lambda a, b: a == b,
}

# Left operand value that decides the result on its own -> that result
_SHORT_CIRCUIT: dict[str, tuple[bool, bool]] = {
    "&&": (False, False),
    "||": (True, True),
    "->": (False, True),
}

# Reductions see the operand's bit pattern: (pattern, all-ones) -> result
_REDUCTIONS: dict[str, Callable[[int, int], bool]] = {
    "&": lambda bits, ones: bits == ones,
    "~&": lambda bits, ones: bits != ones,
    "|": lambda bits, ones: bits != 0,
    "~|": lambda bits, ones: bits == 0,
    "^": lambda bits, ones: bits.bit_count() % 2 == 1,
    "~^": lambda bits, ones: bits.bit_count() % 2 == 0,
    "^~": lambda bits, ones: bits.bit_count() % 2 == 0,
}


def _unary(operator: str, operand: Constant) -> Constant | Indeterminate:
    if operator == "+":
        return operand
    if operator == "-":
        return _fit(-operand, operand.width, operand.signed)
    if operator == "!":
        return _bit(not operand)
    if operator in _REDUCTIONS:
        ones = (1 << operand.width) - 1
        return _bit(_REDUCTIONS[operator](operand & ones, ones))
    return Indeterminate(f"unary '{operator}' depends on the context width")


def _power(base: Constant, exponent: Constant) -> Constant | Indeterminate:
    # The exponent is self-determined; the result has the base's type.
    if exponent < 0:
        return Indeterminate("negative exponent")
    magnitude = abs(base)
    if magnitude > 1 and (magnitude.bit_length() - 1) * exponent >= base.width:
        return Indeterminate(f"result overflows {base.width} bits")
    return _fit(int(base) ** int(exponent), base.width, base.signed)


def _shift(operator: str, left: Constant, right: Constant) -> Constant | Indeterminate:
    # The shift amount is self-determined and unsigned.
    if right < 0:
        return Indeterminate("negative shift amount")
    if operator in ("<<", "<<<"):
        if left == 0:
            return left
        if right >= left.width:
            return Indeterminate(f"result overflows {left.width} bits")
        return _fit(int(left) << int(right), left.width, left.signed)
    if operator == ">>" and left < 0:
        return Indeterminate("logical shift of a negative value depends on width")
    if right >= left.width:
        return Constant(-1 if left < 0 else 0, left.width, left.signed)
    return Constant(int(left) >> int(right), left.width, left.signed)


def _binary(operator: str, left: Constant, right: Constant) -> Constant | Indeterminate:
    if operator in _LOGICAL:
        return _bit(_LOGICAL[operator](bool(left), bool(right)))
    if operator == "**":
        return _power(left, right)
    if operator in (">>", "<<", ">>>", "<<<"):
        return _shift(operator, left, right)

    signed = left.signed and right.signed
    if not signed and (left < 0 or right < 0):
        return Indeterminate(
            f"signed operand of unsigned '{operator}' depends on the context width",
        )
    if operator in _COMPARISONS:
        return _bit(_COMPARISONS[operator](left, right))
    if operator not in _ARITHMETIC:
        return Indeterminate(f"binary '{operator}' depends on the context width")
    value = _ARITHMETIC[operator](int(left), int(right))
    if isinstance(value, Indeterminate):
        return value
    return _fit(value, max(left.width, right.width), signed)


def _conditional(
    condition: Constant,
    if_true: Constant | Indeterminate,
    if_false: Constant | Indeterminate,
) -> Constant | Indeterminate:
    chosen, other = (if_true, if_false) if condition else (if_false, if_true)
    if isinstance(chosen, Indeterminate):
        return chosen
    if isinstance(other, Indeterminate):
        # The other branch decides the signedness of the result.
        if chosen < 0:
            return other
        return chosen
    return _fit(chosen, max(chosen.width, other.width), chosen.signed and other.signed)


def _evaluate(expr: Node, parameters: Parameters | None) -> Nested[Constant | Indeterminate]:
    match expr:
        case DecimalNumber() | BinaryNumber() | OctalNumber() | HexNumber():
            return number_value(expr)
        case UnbasedUnsizedLiteral(text="'0"):
            return Constant(0, 1, False)
        case UnbasedUnsizedLiteral(text=text):
            return Indeterminate(f"'{text}' depends on context width")
        case RealNumber(text=text):
            return Indeterminate(f"real literal '{text}' is not integral")
        case PsParameterIdentifier():
            return _lookup(str(expr), parameters)
        case HierarchicalIdentifier():
            return Indeterminate(f"'{expr}' is not a constant")
        case Concatenation():
            return Indeterminate("concatenation widths are not tracked")
        case UnaryExpression(operator=operator, operand=operand):
            value = yield operand
            if isinstance(value, Indeterminate):
                return value
            return _unary(operator, value)
        case BinaryExpression(left=left, operator=operator, right=right):
            lhs = yield left
            if isinstance(lhs, Indeterminate):
                return lhs
            if operator in _SHORT_CIRCUIT and bool(lhs) == _SHORT_CIRCUIT[operator][0]:
                return _bit(_SHORT_CIRCUIT[operator][1])
            rhs = yield right
            if isinstance(rhs, Indeterminate):
                return rhs
            return _binary(operator, lhs, rhs)
        case ConditionalExpression(predicate=predicate, if_true=if_true, if_false=if_false):
            condition = yield predicate
            if isinstance(condition, Indeterminate):
                return condition
            return _conditional(condition, (yield if_true), (yield if_false))
    msg = f"Not an expression: {type(expr).__name__}"
    raise TypeError(msg)


def evaluate_constant(
    expr: Expression,
    parameters: Parameters | None = None,
) -> Constant | Indeterminate:
    """Evaluate a constant expression.

    Args:
        expr: Expression tree to evaluate
        parameters: Known parameter values by name (`P` or `pkg::P`).
            Plain ints are taken as values of type `int`; a `Constant`
            keeps its own width and signedness.

    Returns:
        The value, or Indeterminate with the reason it is unknown

    Raises:
        TypeError: If expr is not an expression

    """
    return run_nested(_evaluate(expr, parameters), lambda e: _evaluate(e, parameters))


def evaluate_range(
    constant_range: ConstantRange,
    parameters: Parameters | None = None,
) -> tuple[int, int] | Indeterminate:
    """Evaluate `[msb:lsb]` to a pair of ints."""
    msb = evaluate_constant(constant_range.msb, parameters)
    if isinstance(msb, Indeterminate):
        return msb
    lsb = evaluate_constant(constant_range.lsb, parameters)
    if isinstance(lsb, Indeterminate):
        return lsb
    return int(msb), int(lsb)


def packed_width(
    dimensions: Iterable[PackedDimension],
    parameters: Parameters | None = None,
) -> int | Indeterminate:
    """Number of bits spanned by packed dimensions, one bit when there are none."""
    sizes: list[int] = []
    for dimension in dimensions:
        if dimension.range is None:
            return Indeterminate("unsized dimension")
        bounds = evaluate_range(dimension.range, parameters)
        if isinstance(bounds, Indeterminate):
            return bounds
        msb, lsb = bounds
        sizes.append(abs(msb - lsb) + 1)
    return checked_width(prod(sizes))


def checked_width(width: int) -> int | Indeterminate:
    if width > MAX_WIDTH:
        return Indeterminate(f"width {width} exceeds {MAX_WIDTH} bits")
    return width


def _parameter_type(
    data_type: Node,
    parameters: Parameters,
) -> tuple[int | None, bool | None] | Indeterminate:
    """Width and signedness a parameter's declared type imposes on its value.

    None leaves that property to the value, as for an untyped parameter
    (6.20.2).
    """
    signing = getattr(data_type, "signing", None)
    match data_type:
        case IntegerType(kind=IntegerAtomType(keyword=keyword)):
            _, signed, width = INTEGER_ATOMS[keyword]
        case IntegerType(kind=IntegerVectorType(keyword=keyword)):
            signed = INTEGER_VECTORS[keyword][1]
            width = packed_width(data_type.packed_dimensions, parameters)
        case ImplicitDataType(packed_dimensions=()):
            return None, None if signing is None else signing.keyword == "signed"
        case ImplicitDataType():
            signed = False
            width = packed_width(data_type.packed_dimensions, parameters)
        case _:
            return Indeterminate(f"parameter type '{data_type.tag}' is not integral")
    if isinstance(width, Indeterminate):
        return width
    if signing is not None:
        signed = signing.keyword == "signed"
    return width, signed


def _convert(value: Constant, width: int | None, signed: bool | None) -> Constant:
    """Assign value to a parameter of the given type (truncate or extend)."""
    width = value.width if width is None else width
    signed = value.signed if signed is None else signed
    bits = value & ((1 << width) - 1)
    if signed and bits >> (width - 1):
        bits -= 1 << width
    return Constant(bits, width, signed)


def parameter_values(
    declarations: Iterable[ParameterDeclaration | LocalParameterDeclaration],
    overrides: Mapping[str, int] | None = None,
) -> dict[str, Value]:
    """Resolve parameters in declaration order.

    Each value may refer to parameters declared before it, and is converted
    to the parameter's declared type. `overrides` replaces the default of a
    `parameter` (never a `localparam`), the way an instantiation's parameter
    value assignment would.
    """
    values: dict[str, Value] = {}
    for declaration in declarations:
        overridable = isinstance(declaration, ParameterDeclaration)
        declared = _parameter_type(declaration.data_type, values)
        for assignment in declaration.assignments:
            name = assignment.identifier.identifier.name
            value: Value
            if assignment.unpacked_dimensions:
                value = Indeterminate(f"parameter '{name}' is an unpacked array")
            elif overridable and overrides is not None and name in overrides:
                value = _lookup(name, overrides)
            elif assignment.value is None:
                value = Indeterminate(f"parameter '{name}' has no value")
            else:
                value = evaluate_constant(assignment.value, values)
            if isinstance(value, Indeterminate):
                values[name] = value
            elif isinstance(declared, Indeterminate):
                values[name] = declared
            else:
                values[name] = _convert(value, *declared)
    return values


def module_parameters(
    module: ModuleDeclarationAnsi | ModuleDeclarationNonansi,
    overrides: Mapping[str, int] | None = None,
) -> dict[str, Value]:
    """Resolve the parameters a module declares, header first, then body."""
    declarations: list[Any] = []
    if module.header.parameters is not None:
        declarations.extend(module.header.parameters.declarations)
    declarations.extend(
        item
        for item in module.items
        if isinstance(item, ParameterDeclaration | LocalParameterDeclaration)
    )
    return parameter_values(declarations, overrides)
