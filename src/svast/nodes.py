"""Core concrete node infrastructure with automatic registration."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Generator, Iterator
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Self, dataclass_transform

type Nested[T] = Generator[Any, Any, T]


def run_nested[T](start: Nested[T], spawn: Callable[[Any], Nested[Any]]) -> T:
    """Drive a recursive computation written as generators, on an explicit stack.

    Each generator yields a request for a nested result and receives that
    result back from the yield. `spawn` turns a request into the generator
    computing it. Nesting depth is limited by memory, not by the
    interpreter's recursion limit, so trees of any depth can be processed.
    """
    stack: list[Nested[Any]] = [start]
    result: Any = None
    while True:
        try:
            request = stack[-1].send(result)
        except StopIteration as stop:
            stack.pop()
            if not stack:
                return stop.value
            result = stop.value
        else:
            stack.append(spawn(request))
            result = None


@dataclass(frozen=True, eq=False)
@dataclass_transform(frozen_default=True)
class Node:
    """Base for concrete syntax nodes, one subclass per grammar production.

    Equality and hashing are structural, and computed without recursion so
    that arbitrarily deep trees can be compared.
    """

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Node]]] = {}

    def __init_subclass__(
        cls,
        tag: str | None = None,
        *,
        abstract: bool = False,
        **kwargs: Any,
    ) -> None:
        """Register node subclass, deriving the tag from the class name.

        Abstract bases such as `Token` become dataclasses but are not
        registered, so they never appear in a document.
        """
        super().__init_subclass__(**kwargs)
        dataclass(frozen=True, eq=False)(cls)
        if abstract:
            return
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := Node.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Node.registry[cls.tag] = cls

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        pending: list[tuple[Any, Any]] = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if not isinstance(a, Node):
                if a != b:
                    return False
                continue
            if type(a) is not type(b):
                return False
            for f in fields(a):
                x, y = getattr(a, f.name), getattr(b, f.name)
                if isinstance(x, Node):
                    pending.append((x, y))
                elif isinstance(x, tuple):
                    if not isinstance(y, tuple) or len(x) != len(y):
                        return False
                    pending.extend(zip(x, y, strict=True))
                elif x != y:
                    return False
        return True

    def __hash__(self) -> int:
        return hash(tuple(_leaves(node) for node in self.walk()))

    def children(self) -> tuple[Node, ...]:
        """Direct child nodes, in source order."""
        result: list[Node] = []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                result.append(value)
            elif isinstance(value, tuple):
                result.extend(item for item in value if isinstance(item, Node))
        return tuple(result)

    def walk(self) -> Iterator[Node]:
        """Iterate over the subtree depth-first, pre-order, self first."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def replace(self, **changes: Any) -> Self:
        """Return a copy of this node with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def grammar_error(self) -> str | None:
        """Describe a constraint this node violates, or None if well-formed.

        Covers what field annotations cannot express, such as a minimum
        repetition count or a combination of fields the production forbids.
        """
        return None


def _leaves(node: Node) -> tuple[Any, ...]:
    # Child nodes are hashed by walk(); record only their arity and the
    # non-node values.
    shape: list[Any] = [type(node).tag]
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, tuple):
            shape.append(len(value))
        elif not isinstance(value, Node):
            shape.append(value)
    return tuple(shape)


class Token(Node, abstract=True):
    """Grammar terminal carrying its source text."""

    pattern: ClassVar[re.Pattern[str]]

    text: str

    @classmethod
    def is_valid_text(cls, text: str) -> bool:
        """Return True if text is a lexically valid spelling of this terminal."""
        return cls.pattern.fullmatch(text) is not None

    def __str__(self) -> str:
        return self.text
