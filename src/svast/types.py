"""Runtime type representation for grammar field schemas."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeDef:
    """Base for type definitions."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[TypeDef]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register typedef subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := TypeDef.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        TypeDef.registry[cls.tag] = cls


class StrType(TypeDef, tag="str"):
    """Token text."""


class NoneType(TypeDef, tag="none"):
    """Absent optional element, encoded as null."""


class LiteralType(TypeDef, tag="literal"):
    """Keyword choice: Literal["input", "output"] -> LiteralType(values=(...))."""

    values: tuple[str, ...]


class NodeType(TypeDef, tag="node"):
    """A child node of one specific production, referenced by tag."""

    node_tag: str


class SequenceType(TypeDef, tag="sequence"):
    """Grammar repetition: tuple[Port, ...] -> SequenceType(element=NodeType(...)).

    Ordered and possibly empty. Always encoded as an array.
    """

    element: TypeDef


class UnionType(TypeDef, tag="union"):
    """Alternatives: Port | None -> UnionType(options=(NodeType(...), NoneType()))."""

    options: tuple[TypeDef, ...]

    @property
    def optional(self) -> bool:
        """Return True if null is one of the alternatives."""
        return any(isinstance(option, NoneType) for option in self.options)

    def node_tags(self) -> frozenset[str]:
        """Tags of every node alternative."""
        return frozenset(
            option.node_tag for option in self.options if isinstance(option, NodeType)
        )


_TYPE_FORMATTERS: dict[type[TypeDef], Callable[[Any], str]] = {
    StrType: lambda _: "str",
    NoneType: lambda _: "None",
    LiteralType: lambda t: f"Literal{list(t.values)}",
    NodeType: lambda t: t.node_tag,
    SequenceType: lambda t: f"tuple[{type_name(t.element)}, ...]",
    UnionType: lambda t: " | ".join(type_name(o) for o in t.options),
}


def type_name(typedef: TypeDef) -> str:
    """Get a human-readable name for a TypeDef."""
    if formatter := _TYPE_FORMATTERS.get(type(typedef)):
        return formatter(typedef)
    return typedef.tag
