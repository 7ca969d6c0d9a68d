"""Conversion between concrete trees and JSON-compatible builtins.

Node format: {"tag": "<production>", "<field>": <value>, ...}, with every
field present in declaration order. Optional children that are absent are
None, repetitions are lists (empty ones included), and keywords and token
text are strings.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from svast.errors import DecodeError, DecodeErrorKind
from svast.nodes import Nested, Node, Token, run_nested
from svast.schema import node_schema
from svast.types import (
    LiteralType,
    NodeType,
    NoneType,
    SequenceType,
    StrType,
    TypeDef,
    UnionType,
    type_name,
)

_TAG_KEY = "tag"
_MAX_TAGS_IN_ERROR = 10  # Maximum number of tags to show in error messages


def to_builtins(node: Node) -> dict[str, Any]:
    """Convert a concrete tree to JSON-compatible Python builtins.

    Raises:
        TypeError: If a field holds a value no grammar field can hold

    """
    return run_nested(_encode_node(node), _encode_node)


def _encode_node(node: Node) -> Nested[dict[str, Any]]:
    result: dict[str, Any] = {_TAG_KEY: type(node).tag}
    for f in fields(node):
        if f.name.startswith("_"):
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            result[f.name] = yield value
        elif isinstance(value, tuple | list):
            items = []
            for item in value:
                if isinstance(item, Node):
                    items.append((yield item))
                else:
                    items.append(_encode_leaf(item))
            result[f.name] = items
        else:
            result[f.name] = _encode_leaf(value)
    return result


def _encode_leaf(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    msg = f"Cannot encode value of type {type(value).__name__}: {value!r}"
    raise TypeError(msg)


def from_builtins(data: Any) -> Node:
    """Rebuild a concrete tree from JSON-compatible builtins.

    The whole tree is validated against the grammar schema; nothing is
    returned unless every node is well-formed.

    Raises:
        DecodeError: If the data does not describe a grammar-valid tree

    """
    return run_nested(_decode_node(data, None, None), _spawn_decode)


# Location in the input as a linked list of keys, innermost last. Rendered
# to a JSON pointer only when an error is reported.
type _Path = tuple[_Path, str | int] | None


def _pointer(path: _Path) -> str:
    """Render a path as a JSON pointer (RFC 6901); the root is ""."""
    tokens: list[str] = []
    while path is not None:
        path, key = path
        tokens.append(str(key).replace("~", "~0").replace("/", "~1"))
    return "".join(f"/{token}" for token in reversed(tokens))


def _spawn_decode(request: tuple[Any, _Path, frozenset[str]]) -> Nested[Node]:
    return _decode_node(*request)


def _decode_node(
    data: Any,
    path: _Path,
    allowed: frozenset[str] | None,
) -> Nested[Node]:
    if not isinstance(data, dict):
        msg = f"Expected a node object, got {type(data).__name__}"
        raise DecodeError(DecodeErrorKind.EXPECTED_OBJECT, _pointer(path), msg)

    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise DecodeError(DecodeErrorKind.MISSING_TAG, _pointer(path), msg)

    tag = data[_TAG_KEY]
    node_cls = Node.registry.get(tag) if isinstance(tag, str) else None
    if node_cls is None:
        available = sorted(Node.registry)[:_MAX_TAGS_IN_ERROR]
        suffix = "..." if len(Node.registry) > _MAX_TAGS_IN_ERROR else ""
        msg = f"Unknown tag {tag!r}. Available node tags: {available}{suffix}"
        raise DecodeError(
            DecodeErrorKind.UNKNOWN_TAG,
            _pointer((path, _TAG_KEY)),
            msg,
        )

    if allowed is not None and tag not in allowed:
        msg = f"'{tag}' is not allowed here, expected one of {sorted(allowed)}"
        raise DecodeError(DecodeErrorKind.UNEXPECTED_VARIANT, _pointer(path), msg)

    schema = node_schema(node_cls)
    known = {f.name for f in schema.fields}
    unknown = sorted(key for key in data if key != _TAG_KEY and key not in known)
    if unknown:
        msg = f"Unknown field '{unknown[0]}' for '{tag}'"
        raise DecodeError(
            DecodeErrorKind.UNKNOWN_FIELD,
            _pointer((path, unknown[0])),
            msg,
        )

    field_values = {}
    for field_schema in schema.fields:
        field_path = (path, field_schema.name)
        if field_schema.name not in data:
            msg = f"Missing required field '{field_schema.name}' for '{tag}'"
            raise DecodeError(DecodeErrorKind.MISSING_FIELD, _pointer(field_path), msg)
        field_values[field_schema.name] = yield from _decode_value(
            data[field_schema.name],
            field_schema.type,
            field_path,
        )

    node = node_cls(**field_values)

    if isinstance(node, Token) and not node.is_valid_text(node.text):
        msg = f"{node.text!r} is not a valid {tag}"
        raise DecodeError(
            DecodeErrorKind.INVALID_LITERAL,
            _pointer((path, "text")),
            msg,
        )

    if problem := node.grammar_error():
        raise DecodeError(DecodeErrorKind.GRAMMAR, _pointer(path), problem)

    return node


def _decode_value(value: Any, typedef: TypeDef, path: _Path) -> Nested[Any]:
    """Decode one field value, checking it against its schema type.

    Child nodes are requested from `run_nested` rather than decoded by
    recursion.
    """
    if value is None:
        if isinstance(typedef, NoneType) or (
            isinstance(typedef, UnionType) and typedef.optional
        ):
            return None
        msg = f"Expected {type_name(typedef)}, got null"
        raise DecodeError(DecodeErrorKind.UNEXPECTED_NULL, _pointer(path), msg)

    if isinstance(typedef, SequenceType):
        if not isinstance(value, list):
            msg = (
                f"Expected a list of {type_name(typedef.element)}, "
                f"got {type(value).__name__}"
            )
            raise DecodeError(DecodeErrorKind.EXPECTED_SEQUENCE, _pointer(path), msg)
        items = []
        for index, item in enumerate(value):
            items.append((yield from _decode_value(item, typedef.element, (path, index))))
        return tuple(items)

    if isinstance(typedef, NodeType):
        return (yield (value, path, frozenset({typedef.node_tag})))

    if isinstance(typedef, UnionType):
        options = [o for o in typedef.options if not isinstance(o, NoneType)]
        if len(options) == 1:
            return (yield from _decode_value(value, options[0], path))
        return (yield (value, path, typedef.node_tags()))

    if isinstance(typedef, LiteralType):
        if not isinstance(value, str) or value not in typedef.values:
            msg = f"Expected one of {list(typedef.values)}, got {value!r}"
            raise DecodeError(DecodeErrorKind.INVALID_LITERAL, _pointer(path), msg)
        return value

    if isinstance(typedef, StrType):
        if not isinstance(value, str):
            msg = f"Expected text, got {type(value).__name__}"
            raise DecodeError(DecodeErrorKind.INVALID_LITERAL, _pointer(path), msg)
        return value

    msg = f"No decoder for {type_name(typedef)}"
    raise TypeError(msg)
