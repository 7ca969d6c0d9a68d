"""Editing immutable trees by rebuilding from the edit point to the root."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import fields
from typing import Any

from svast.grammar.identifiers import EscapedIdentifier, SimpleIdentifier, identifier
from svast.nodes import Nested, Node, run_nested


class Rewriter(ABC):
    """Base class for bottom-up tree rewrites.

    Subclass and implement `rewrite` with pattern matching on node types.
    Children are rewritten before their parent, and `rewrite` sees the parent
    with its new children already in place. Subtrees where nothing changed
    are shared with the input tree, not copied.

    Example:
        class DropEndLabels(Rewriter):
            def rewrite(self, node):
                match node:
                    case ModuleDeclarationAnsi(end_label=ModuleIdentifier()):
                        return node.replace(end_label=None)
                return None

        new_tree = DropEndLabels()(tree)

    """

    def __call__(self, tree: Node) -> Node:
        return self.visit(tree)

    def visit(self, node: Node) -> Node:
        """Rewrite the subtree rooted at node, children first."""
        return run_nested(self._rebuild(node), self._rebuild)

    def _rebuild(self, node: Node) -> Nested[Node]:
        changes: dict[str, Any] = {}
        for f in fields(node):
            value = getattr(node, f.name)
            if isinstance(value, Node):
                new_value = yield value
                if new_value is not value:
                    changes[f.name] = new_value
            elif isinstance(value, tuple):
                new_items = []
                for item in value:
                    new_items.append((yield item) if isinstance(item, Node) else item)
                if any(a is not b for a, b in zip(new_items, value, strict=True)):
                    changes[f.name] = tuple(new_items)

        rebuilt = node.replace(**changes) if changes else node
        replacement = self.rewrite(rebuilt)
        return rebuilt if replacement is None else replacement

    @abstractmethod
    def rewrite(self, node: Node) -> Node | None:
        """Return a replacement for node, or None to keep it."""
        ...


class _FunctionRewriter(Rewriter):
    def __init__(self, fn: Callable[[Node], Node | None]) -> None:
        self.fn = fn

    def rewrite(self, node: Node) -> Node | None:
        return self.fn(node)


def transform(tree: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Rewrite a tree bottom-up with a function (see `Rewriter`)."""
    return _FunctionRewriter(fn)(tree)


def replace_node(tree: Node, target: Node, replacement: Node) -> Node:
    """Splice replacement in place of target, found by identity.

    Every ancestor of target is rebuilt; all other subtrees are shared.

    Raises:
        ValueError: If target is not part of tree

    """
    found = False

    def swap(node: Node) -> Node | None:
        nonlocal found
        if node is target:
            found = True
            return replacement
        return None

    result = transform(tree, swap)
    if not found:
        msg = f"'{target.tag}' node is not part of the tree"
        raise ValueError(msg)
    return result


def rename_identifier(tree: Node, old: str, new: str) -> Node:
    """Rename every identifier naming `old` to `new`.

    Escaped and simple spellings of the same name match each other, so
    renaming `foo` also renames `\\foo`.

    Raises:
        ValueError: If `new` is not a valid identifier

    """
    replacement = identifier(new)
    if not replacement.is_valid_text(new):
        msg = f"{new!r} is not a valid identifier"
        raise ValueError(msg)

    name = identifier(old).name

    def rename(node: Node) -> Node | None:
        if isinstance(node, SimpleIdentifier | EscapedIdentifier) and node.name == name:
            return replacement
        return None

    return transform(tree, rename)
