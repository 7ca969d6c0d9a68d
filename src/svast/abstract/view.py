"""Deriving abstract views from concrete nodes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from typing import TYPE_CHECKING

from svast.abstract.data_types import (
    AbstractType,
    ChandleType,
    Dimension,
    EnumeratedType,
    EnumMember,
    EventType,
    IntegralType,
    RealType,
    StringType,
    TypedefType,
    VoidType,
)
from svast.abstract.evaluate import (
    INTEGER_ATOMS,
    INTEGER_VECTORS,
    Indeterminate,
    Parameters,
    Value,
    evaluate_constant,
    evaluate_range,
)
from svast.grammar.data_types import (
    DataTypeKeyword,
    EnumType,
    IntegerType,
    NonIntegerType,
    UnpackedDimension,
)
from svast.grammar.declarations import TypeDeclaration
from svast.grammar.expressions import ConstantRange

if TYPE_CHECKING:
    from svast.nodes import Node

_COVERED = (IntegerType, NonIntegerType, DataTypeKeyword, EnumType, TypeDeclaration)

_KEYWORD_TYPES = {
    "string": StringType,
    "chandle": ChandleType,
    "event": EventType,
    "void": VoidType,
}


def covers(node: Node) -> bool:
    """Return True if `abstract_of` has a view for this node."""
    return isinstance(node, _COVERED)


def abstract_of(node: Node, parameters: Parameters | None = None) -> AbstractType:
    """Derive the abstract view of a concrete node.

    Args:
        node: A node for which `covers(node)` is True
        parameters: Known parameter values used to size packed dimensions
            and enum values; anything missing is Indeterminate

    Raises:
        TypeError: If the node has no abstract view

    """
    match node:
        case IntegerType():
            return _integral(node, parameters)
        case NonIntegerType(keyword=keyword):
            return RealType(origin=node, keyword=keyword)
        case DataTypeKeyword(keyword=keyword):
            return _KEYWORD_TYPES[keyword](origin=node)
        case EnumType():
            return _enumerated(node, parameters)
        case TypeDeclaration(data_type=data_type, identifier=identifier):
            name = identifier.identifier.name
            unpacked = tuple(
                _unpacked(dimension, parameters)
                for dimension in node.unpacked_dimensions
            )
            base_type: AbstractType | Indeterminate
            if not covers(data_type):
                base_type = Indeterminate(f"'{data_type.tag}' is not resolved")
            else:
                base_type = abstract_of(data_type, parameters)
                if isinstance(base_type, IntegralType):
                    base_type = replace(base_type, identifier=name, unpacked=unpacked)
                elif isinstance(base_type, EnumeratedType):
                    base_type = replace(base_type, identifier=name)
            return TypedefType(
                origin=node,
                identifier=name,
                base_type=base_type,
                unpacked=unpacked,
            )
    msg = f"No abstract view for '{node.tag}'"
    raise TypeError(msg)


def concrete_of(view: AbstractType) -> Node:
    """The concrete node a view was derived from."""
    return view.origin


def _integral(node: IntegerType, parameters: Parameters | None) -> IntegralType:
    keyword = node.kind.keyword
    if keyword in INTEGER_ATOMS:
        fourstate, signed, _ = INTEGER_ATOMS[keyword]
    else:
        fourstate, signed = INTEGER_VECTORS[keyword]
    if node.signing is not None:
        signed = node.signing.keyword == "signed"

    dimensions: list[Dimension] = []
    for dimension in node.packed_dimensions:
        if dimension.range is None:
            dimensions.append(Indeterminate("unsized dimension"))
        else:
            dimensions.append(evaluate_range(dimension.range, parameters))

    return IntegralType(
        origin=node,
        keyword=keyword,
        fourstate=fourstate,
        signed=signed,
        dimensions=tuple(dimensions),
    )


def _unpacked(dimension: UnpackedDimension, parameters: Parameters | None) -> Dimension:
    """`[msb:lsb]` as written; `[N]` is shorthand for `[0:N-1]` (7.4.2)."""
    if isinstance(dimension.size, ConstantRange):
        return evaluate_range(dimension.size, parameters)
    size = evaluate_constant(dimension.size, parameters)
    if isinstance(size, Indeterminate):
        return size
    if size <= 0:
        return Indeterminate(f"unpacked dimension size {size} is not positive")
    return 0, size - 1


def _enumerated(node: EnumType, parameters: Parameters | None) -> EnumeratedType:
    base: IntegralType | Indeterminate | None
    match node.base:
        case None:
            base = None
        case IntegerType():
            base = _integral(node.base, parameters)
        case _:
            base = Indeterminate(
                f"enum base type '{node.base.identifier.identifier.name}' "
                "is not resolved",
            )

    members: list[EnumMember] = []
    previous: Value | None = None
    for declaration in node.members:
        name = declaration.identifier.identifier.name
        value: Value
        if declaration.value is not None:
            value = evaluate_constant(declaration.value, parameters)
        elif previous is None:
            value = 0
        elif isinstance(previous, Indeterminate):
            value = Indeterminate(f"enum member '{name}' follows {previous.reason}")
        else:
            value = previous + 1
        members.append(EnumMember(origin=declaration, identifier=name, value=value))
        previous = value

    return EnumeratedType(origin=node, base=base, members=tuple(members))


class AbstractView:
    """Abstract views of the nodes of one concrete tree, cached by identity.

    A view belongs to exactly one tree. Trees are immutable, so entries never
    go stale; a pass that replaces the tree gets a new AbstractView.
    """

    def __init__(self, root: Node, parameters: Parameters | None = None) -> None:
        self.root = root
        self.parameters = parameters
        self._members: set[int] | None = None
        self._cache: dict[int, AbstractType] = {}

    def _contains(self, node: Node) -> bool:
        if self._members is None:
            self._members = {id(member) for member in self.root.walk()}
        return id(node) in self._members

    def of(self, node: Node) -> AbstractType:
        """Abstract view of a node belonging to this tree.

        Raises:
            ValueError: If the node is not part of this tree
            TypeError: If the node has no abstract view

        """
        key = id(node)
        if (cached := self._cache.get(key)) is not None:
            return cached
        if not self._contains(node):
            msg = f"'{node.tag}' node is not part of this tree"
            raise ValueError(msg)
        view = abstract_of(node, self.parameters)
        self._cache[key] = view
        return view

    def __iter__(self) -> Iterator[AbstractType]:
        """Views of every covered node, in pre-order."""
        for node in self.root.walk():
            if covers(node):
                yield self.of(node)
