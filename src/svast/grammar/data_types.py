"""A.2.2.1 Net and variable types, A.2.5 Declaration ranges."""

from __future__ import annotations

from typing import Literal

from svast.grammar.expressions import ConstantRange, Expression
from svast.grammar.identifiers import EnumIdentifier, PackageIdentifier, TypeIdentifier
from svast.nodes import Node


class IntegerAtomType(Node):
    keyword: Literal["byte", "shortint", "int", "longint", "integer", "time"]


class IntegerVectorType(Node):
    keyword: Literal["bit", "logic", "reg"]


class NonIntegerType(Node):
    keyword: Literal["shortreal", "real", "realtime"]


class Signing(Node):
    keyword: Literal["signed", "unsigned"]


class NetType(Node):
    keyword: Literal[
        "supply0", "supply1", "tri", "triand", "trior", "trireg",
        "tri0", "tri1", "uwire", "wire", "wand", "wor",
    ]  # fmt: skip


class PackedDimension(Node):
    """packed_dimension ::= [ constant_range ] | unsized_dimension

    A missing range is the unsized dimension `[]`.
    """

    range: ConstantRange | None = None


class UnpackedDimension(Node):
    """unpacked_dimension ::= [ constant_range ] | [ constant_expression ]"""

    size: ConstantRange | Expression


class IntegerType(Node):
    """data_type ::= integer_vector_type [ signing ] { packed_dimension }
    | integer_atom_type [ signing ]
    """

    kind: IntegerAtomType | IntegerVectorType
    signing: Signing | None = None
    packed_dimensions: tuple[PackedDimension, ...] = ()

    def grammar_error(self) -> str | None:
        if isinstance(self.kind, IntegerAtomType) and self.packed_dimensions:
            return (
                f"integer atom type '{self.kind.keyword}' cannot have packed "
                "dimensions"
            )
        return None


class DataTypeKeyword(Node):
    """data_type ::= string | chandle | event, data_type_or_void ::= void"""

    keyword: Literal["string", "chandle", "event", "void"]


class DataTypeNamed(Node):
    """data_type ::= [ package_scope ] type_identifier { packed_dimension }"""

    package: PackageIdentifier | None
    identifier: TypeIdentifier
    packed_dimensions: tuple[PackedDimension, ...] = ()


class EnumNameDeclaration(Node):
    """enum_name_declaration ::= enum_identifier [ = constant_expression ]

    The `name[N]` range form is not represented.
    """

    identifier: EnumIdentifier
    value: Expression | None = None


class EnumType(Node):
    """data_type ::= enum [ enum_base_type ] { enum_name_declaration
    { , enum_name_declaration } } { packed_dimension }
    """

    base: IntegerType | DataTypeNamed | None
    members: tuple[EnumNameDeclaration, ...]
    packed_dimensions: tuple[PackedDimension, ...] = ()

    def grammar_error(self) -> str | None:
        if not self.members:
            return "enum needs at least one member"
        return None


class ImplicitDataType(Node):
    """implicit_data_type ::= [ signing ] { packed_dimension }"""

    signing: Signing | None = None
    packed_dimensions: tuple[PackedDimension, ...] = ()


type DataType = IntegerType | NonIntegerType | DataTypeKeyword | DataTypeNamed | EnumType
type DataTypeOrImplicit = DataType | ImplicitDataType
