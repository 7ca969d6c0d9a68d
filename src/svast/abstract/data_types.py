"""Abstract views of SystemVerilog data types (1800-2017 clause 6).

Each view keeps the concrete node it was derived from in `origin`. Views are
plain frozen dataclasses, not nodes: they are never serialized and never
become part of a concrete tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import prod

from svast.abstract.evaluate import (
    INTEGER_ATOMS,
    INTEGER_VECTORS,
    Indeterminate,
    Value,
    checked_width,
)
from svast.grammar.data_types import (
    DataTypeKeyword,
    EnumNameDeclaration,
    EnumType,
    IntegerAtomType,
    IntegerType,
    NonIntegerType,
)
from svast.grammar.declarations import TypeDeclaration

# 6.12 Real, shortreal, and realtime data types
REAL_WIDTHS: dict[str, int] = {"real": 64, "realtime": 64, "shortreal": 32}

type Dimension = tuple[int, int] | Indeterminate


@dataclass(frozen=True)
class IntegralType:
    """Integral type: a 2-state or 4-state integer, signed or unsigned.

    `dimensions` holds each packed dimension as `(msb, lsb)`, outermost
    first; atom types have none. `unpacked` holds the unpacked dimensions
    and `identifier` the type name when the view comes from a typedef.
    Neither affects the width or the value range, which describe one
    element.
    """

    origin: IntegerType = field(repr=False)
    keyword: str
    fourstate: bool
    signed: bool
    dimensions: tuple[Dimension, ...] = ()
    unpacked: tuple[Dimension, ...] = ()
    identifier: str | None = None

    @property
    def is_atom(self) -> bool:
        return self.keyword in INTEGER_ATOMS

    def width(self) -> Value:
        """Total number of bits, or Indeterminate if a dimension is unknown.

        Widths beyond `MAX_WIDTH` bits are Indeterminate too.
        """
        if self.is_atom:
            return INTEGER_ATOMS[self.keyword][2]
        sizes: list[int] = []
        for dimension in self.dimensions:
            if isinstance(dimension, Indeterminate):
                return dimension
            msb, lsb = dimension
            sizes.append(abs(msb - lsb) + 1)
        return checked_width(prod(sizes))

    def minimum_value(self) -> Value:
        """Smallest representable value."""
        width = self.width()
        if isinstance(width, Indeterminate):
            return width
        return -(1 << (width - 1)) if self.signed else 0

    def maximum_value(self) -> Value:
        """Largest representable value."""
        width = self.width()
        if isinstance(width, Indeterminate):
            return width
        return (1 << (width - 1)) - 1 if self.signed else (1 << width) - 1


@dataclass(frozen=True)
class RealType:
    origin: NonIntegerType = field(repr=False)
    keyword: str

    def width(self) -> int:
        return REAL_WIDTHS[self.keyword]


@dataclass(frozen=True)
class StringType:
    """6.16 String data type."""

    origin: DataTypeKeyword = field(repr=False)


@dataclass(frozen=True)
class ChandleType:
    """6.14 Chandle data type."""

    origin: DataTypeKeyword = field(repr=False)


@dataclass(frozen=True)
class EventType:
    """6.17 Event data type."""

    origin: DataTypeKeyword = field(repr=False)


@dataclass(frozen=True)
class VoidType:
    """6.13 Void data type."""

    origin: DataTypeKeyword = field(repr=False)


@dataclass(frozen=True)
class EnumMember:
    origin: EnumNameDeclaration = field(repr=False)
    identifier: str
    value: Value


@dataclass(frozen=True)
class EnumeratedType:
    """6.19 Enumerations.

    `base` is None when the enum declares no base type, in which case the
    base is `int`; it is Indeterminate when the base is a named type.
    `identifier` is the type name when the enum is declared by a typedef.
    """

    origin: EnumType = field(repr=False)
    base: IntegralType | Indeterminate | None
    members: tuple[EnumMember, ...]
    identifier: str | None = None

    def base_type(self) -> IntegralType | Indeterminate:
        """The effective base type, `int` when none is declared.

        The implicit `int` is not written in the source, so the origin of
        the returned view is a fresh `IntegerType` node that belongs to no
        tree. `concrete_of` gives that node, and `AbstractView.of` rejects
        it.
        """
        if self.base is None:
            return IntegralType(
                origin=IntegerType(kind=IntegerAtomType(keyword="int")),
                keyword="int",
                fourstate=False,
                signed=True,
            )
        return self.base

    def member(self, identifier: str) -> EnumMember | None:
        for candidate in self.members:
            if candidate.identifier == identifier:
                return candidate
        return None


@dataclass(frozen=True)
class TypedefType:
    """6.18 User-defined types.

    `unpacked` holds the dimensions declared after the type name, as in
    `typedef logic [7:0] mem_t [4];`.
    """

    origin: TypeDeclaration = field(repr=False)
    identifier: str
    base_type: AbstractType | Indeterminate
    unpacked: tuple[Dimension, ...] = ()


type AbstractType = (
    IntegralType
    | RealType
    | StringType
    | ChandleType
    | EventType
    | VoidType
    | EnumeratedType
    | TypedefType
)

