"""JSON document format.

The canonical document is what `json.dumps(to_builtins(tree), indent=2)`
prints: ASCII escaping and no trailing newline. Key order is the tag followed
by the node's fields in declaration order, so encoding is byte-stable.

Objects and arrays are written and read with an explicit stack, so document
depth is bounded by memory rather than by the recursion limit. Strings and
scalars go through the standard `json` module.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from json.decoder import scanstring
from typing import TYPE_CHECKING, Any

from svast.codecs import from_builtins, to_builtins
from svast.errors import DecodeError, DecodeErrorKind

if TYPE_CHECKING:
    from svast.nodes import Node

logger = logging.getLogger(__name__)

type SerializedDocument = str

CANONICAL_INDENT = 2

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_SCALAR = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?|true|false|null")


def to_json(tree: Node, *, indent: int | None = CANONICAL_INDENT) -> SerializedDocument:
    """Serialize a concrete tree to a JSON document.

    Args:
        tree: Root of the tree to serialize
        indent: JSON indentation level. Only the default produces the
            canonical document; None gives compact output.

    Returns:
        JSON string representation

    """
    return _dump(to_builtins(tree), indent)


def from_json(document: SerializedDocument) -> Node:
    """Deserialize a JSON document to a concrete tree.

    Args:
        document: JSON text whose root is a node object

    Returns:
        The decoded tree

    Raises:
        DecodeError: If the text is not JSON or does not describe a
            grammar-valid tree

    """
    try:
        data = _load(document)
    except json.JSONDecodeError as exc:
        msg = f"Not a JSON document: {exc}"
        raise DecodeError(DecodeErrorKind.MALFORMED_DOCUMENT, "", msg) from exc

    try:
        return from_builtins(data)
    except DecodeError as exc:
        logger.debug("Rejected document (%s) at %r", exc.kind.value, exc.location)
        raise


def encode(tree: Node) -> SerializedDocument:
    """Encode a tree as its canonical document."""
    return to_json(tree)


def decode(document: SerializedDocument) -> Node:
    """Decode a document produced by `encode` or by an external pass."""
    return from_json(document)


def _dump(data: Any, indent: int | None) -> str:
    """Format builtins exactly as `json.dumps(data, indent=indent)` would."""
    item_separator = "," if indent is not None else ", "
    chunks: list[str] = []
    # (remaining entries, closing bracket, depth, first entry still pending)
    stack: list[tuple[Iterator[tuple[str | None, Any]], str, int, list[bool]]] = []

    def newline(depth: int) -> str:
        return "" if indent is None else "\n" + " " * (indent * depth)

    def start(value: Any, depth: int) -> None:
        if isinstance(value, dict) and value:
            chunks.append("{")
            stack.append((iter(value.items()), "}", depth + 1, [True]))
        elif isinstance(value, list) and value:
            chunks.append("[")
            stack.append((((None, item) for item in value), "]", depth + 1, [True]))
        else:
            chunks.append(json.dumps(value))

    start(data, 0)
    while stack:
        entries, closer, depth, first = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            chunks.append(newline(depth - 1) + closer)
            continue
        if not first[0]:
            chunks.append(item_separator)
        first[0] = False
        chunks.append(newline(depth))
        key, value = entry
        if key is not None:
            chunks.append(json.dumps(key) + ": ")
        start(value, depth)
    return "".join(chunks)


def _load(document: str) -> Any:
    """Parse JSON text like `json.loads`, without recursing per nesting level.

    Raises:
        json.JSONDecodeError: If the text is not JSON

    """
    # Open containers, each with the key its next value belongs to
    stack: list[tuple[dict[str, Any] | list[Any], str | None]] = []

    def skip(pos: int) -> int:
        return _WHITESPACE.match(document, pos).end()

    def key_at(pos: int) -> tuple[str, int]:
        if document.startswith('"', pos):
            key, pos = scanstring(document, pos + 1)
            pos = skip(pos)
            if document.startswith(":", pos):
                return key, skip(pos + 1)
            msg = "Expecting ':' delimiter"
        else:
            msg = "Expecting property name enclosed in double quotes"
        raise json.JSONDecodeError(msg, document, pos)

    pos = skip(0)
    while True:
        value: Any
        if document.startswith("{", pos):
            pos = skip(pos + 1)
            if not document.startswith("}", pos):
                key, pos = key_at(pos)
                stack.append(({}, key))
                continue
            value, pos = {}, pos + 1
        elif document.startswith("[", pos):
            pos = skip(pos + 1)
            if not document.startswith("]", pos):
                stack.append(([], None))
                continue
            value, pos = [], pos + 1
        elif document.startswith('"', pos):
            value, pos = scanstring(document, pos + 1)
        elif match := _SCALAR.match(document, pos):
            try:
                value = json.loads(match.group())
            except ValueError as exc:
                msg = f"Number out of range: {exc}"
                raise json.JSONDecodeError(msg, document, pos) from exc
            pos = match.end()
        else:
            raise json.JSONDecodeError("Expecting value", document, pos)

        # Attach the finished value, closing every container it completes.
        while True:
            if not stack:
                pos = skip(pos)
                if pos != len(document):
                    raise json.JSONDecodeError("Extra data", document, pos)
                return value
            container, key = stack[-1]
            if isinstance(container, dict):
                container[key] = value
            else:
                container.append(value)
            pos = skip(pos)
            if document.startswith(",", pos):
                pos = skip(pos + 1)
                if isinstance(container, dict):
                    key, pos = key_at(pos)
                    stack[-1] = (container, key)
                break
            closer = "}" if isinstance(container, dict) else "]"
            if not document.startswith(closer, pos):
                raise json.JSONDecodeError("Expecting ',' delimiter", document, pos)
            pos += 1
            stack.pop()
            value = container
