"""Schema extraction and type reflection utilities."""

from __future__ import annotations

import types
from dataclasses import dataclass, fields
from functools import cache
from typing import (
    Any,
    Literal,
    TypeAliasType,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from svast.nodes import Node
from svast.types import (
    LiteralType,
    NodeType,
    NoneType,
    SequenceType,
    StrType,
    TypeDef,
    UnionType,
)


@dataclass(frozen=True)
class FieldSchema:
    """Schema for a node field."""

    name: str
    type: TypeDef


@dataclass(frozen=True)
class NodeSchema:
    """Complete schema for a node class."""

    tag: str
    fields: tuple[FieldSchema, ...]

    def field(self, name: str) -> FieldSchema | None:
        """Look up a field schema by name."""
        for field_schema in self.fields:
            if field_schema.name == name:
                return field_schema
        return None


def extract_type(py_type: Any) -> TypeDef:
    """Convert a field annotation to a TypeDef."""
    # PEP 695 aliases: `type Identifier = SimpleIdentifier | EscapedIdentifier`
    if isinstance(py_type, TypeAliasType):
        return extract_type(py_type.__value__)

    origin = get_origin(py_type)
    args = get_args(py_type)

    if py_type is str:
        return StrType()
    if py_type is type(None):
        return NoneType()

    if origin is tuple:
        if len(args) != 2 or args[1] is not Ellipsis:
            msg = f"Repetition must be annotated tuple[X, ...], got {py_type}"
            raise ValueError(msg)
        return SequenceType(element=extract_type(args[0]))

    if origin is Literal:
        if not args:
            msg = "Literal type must have values"
            raise ValueError(msg)
        for val in args:
            if not isinstance(val, str):
                msg = f"Keyword literals must be str, got {type(val)}"
                raise TypeError(msg)
        return LiteralType(values=args)

    if isinstance(py_type, type) and issubclass(py_type, Node):
        if "tag" not in py_type.__dict__:
            msg = f"{py_type.__name__} is an abstract node base"
            raise ValueError(msg)
        return NodeType(node_tag=py_type.tag)

    if isinstance(py_type, types.UnionType) or origin is Union:
        return _flatten_union(tuple(extract_type(a) for a in args))

    msg = f"Cannot extract type from: {py_type}"
    raise ValueError(msg)


def _flatten_union(options: tuple[TypeDef, ...]) -> UnionType:
    """Merge nested alias unions into one flat list of alternatives."""
    flat: list[TypeDef] = []
    for option in options:
        members = option.options if isinstance(option, UnionType) else (option,)
        flat.extend(member for member in members if member not in flat)
    return UnionType(options=tuple(flat))


@cache
def node_schema(cls: type[Node]) -> NodeSchema:
    """Get schema for a node class."""
    hints = get_type_hints(cls)

    node_fields = (
        FieldSchema(name=f.name, type=extract_type(hints[f.name]))
        for f in fields(cls)
        if not f.name.startswith("_")
    )

    return NodeSchema(tag=cls.tag, fields=tuple(node_fields))


def all_schemas() -> dict[str, NodeSchema]:
    """Get all registered node schemas."""
    return {tag: node_schema(cls) for tag, cls in Node.registry.items()}


def schema_to_builtins(schema: NodeSchema) -> dict[str, Any]:
    """Serialize a NodeSchema to a JSON-compatible dictionary."""
    return {
        "tag": schema.tag,
        "fields": [
            {"name": f.name, "type": _typedef_to_builtins(f.type)}
            for f in schema.fields
        ],
    }


def _typedef_to_builtins(typedef: TypeDef) -> dict[str, Any]:
    result: dict[str, Any] = {"tag": type(typedef).tag}
    for f in fields(typedef):
        value = getattr(typedef, f.name)
        if isinstance(value, TypeDef):
            result[f.name] = _typedef_to_builtins(value)
        elif isinstance(value, tuple):
            result[f.name] = [
                _typedef_to_builtins(v) if isinstance(v, TypeDef) else v
                for v in value
            ]
        else:
            result[f.name] = value
    return result
