"""Pass protocol: tree-to-tree transformations and pipelines.

A pass takes an immutable tree and returns a new one, or raises
`PassFailure`. Internal passes work on trees directly; external passes work
on serialized documents and are wrapped with encode/decode so that a
pipeline only ever sees trees that passed decode validation.

Example usage:
    pipeline = Pipeline([
        InternalPass("rename", lambda tree: rename_identifier(tree, "a", "b")),
        SubprocessPass("jq", ["jq", "."]),
    ])
    result = pipeline.run(tree)
    if not result:
        print(result.failure)
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from svast.errors import DecodeError, PassFailure
from svast.formats.json import SerializedDocument, decode, encode
from svast.nodes import Node
from svast.rewrite import rename_identifier

logger = logging.getLogger(__name__)


class Pass(ABC):
    """A named transformation from one tree snapshot to another."""

    name: str

    @abstractmethod
    def apply(self, tree: Node) -> Node:
        """Transform a tree.

        Raises:
            PassFailure: If the pass declines to produce a tree

        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class InternalPass(Pass):
    """In-process pass: a function from tree to tree."""

    def __init__(self, name: str, transform: Callable[[Node], Node]) -> None:
        self.name = name
        self.transform = transform

    def apply(self, tree: Node) -> Node:
        result = self.transform(tree)
        if not isinstance(result, Node):
            msg = f"pass returned {type(result).__name__}, expected a tree"
            raise PassFailure(msg)
        return result


class ExternalPass(Pass):
    """Pass that transforms the serialized document.

    The transform can be anything that maps a document to a document: a
    subprocess, an RPC call, or another in-process implementation. The
    returned document is decoded and validated before the pipeline resumes.
    """

    def __init__(
        self,
        name: str,
        transform: Callable[[SerializedDocument], SerializedDocument],
    ) -> None:
        self.name = name
        self.transform = transform

    def apply(self, tree: Node) -> Node:
        result = self.transform(encode(tree))
        if not isinstance(result, str):
            msg = f"pass returned {type(result).__name__}, expected a document"
            raise PassFailure(msg)
        try:
            return decode(result)
        except DecodeError as exc:
            msg = f"returned an invalid document: {exc}"
            raise PassFailure(msg) from exc


class SubprocessPass(ExternalPass):
    """External pass that pipes the document through a command.

    The command reads the document on stdin and writes the new document on
    stdout. A non-zero exit status or an expired timeout is a failure.
    """

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        *,
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(name, self._run)
        self.command = list(command)
        self.timeout = timeout
        self.env = dict(env) if env is not None else None

    def _run(self, document: SerializedDocument) -> SerializedDocument:
        logger.debug("Running %s: %s", self.name, self.command)
        try:
            result = subprocess.run(
                self.command,
                input=document,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self.env,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            msg = f"{self.command[0]} timed out after {self.timeout}s"
            raise PassFailure(msg) from exc
        except OSError as exc:
            msg = f"cannot run {self.command[0]}: {exc}"
            raise PassFailure(msg) from exc

        if result.returncode != 0:
            stderr = result.stderr.strip()
            msg = f"{self.command[0]} exited with status {result.returncode}"
            if stderr:
                msg = f"{msg}: {stderr}"
            raise PassFailure(msg)
        return result.stdout


def rename(old: str, new: str) -> InternalPass:
    """Internal pass renaming every identifier spelled `old` to `new`."""

    def transform(tree: Node) -> Node:
        try:
            return rename_identifier(tree, old, new)
        except ValueError as exc:
            raise PassFailure(str(exc)) from exc

    return InternalPass(f"rename {old} -> {new}", transform)


@dataclass(frozen=True)
class PipelineFailure:
    """Which pass failed, and why."""

    index: int
    name: str
    message: str

    def __str__(self) -> str:
        return f"pass {self.index} ({self.name}) failed: {self.message}"


@dataclass(frozen=True)
class PipelineResult:
    """Result of running a pipeline.

    `snapshots` starts with the input tree and holds the output of every
    pass that succeeded, in order.
    """

    snapshots: tuple[Node, ...]
    failure: PipelineFailure | None = None

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def output(self) -> Node:
        """The last tree produced: the final output, or the last good snapshot."""
        return self.snapshots[-1]

    def __bool__(self) -> bool:
        return self.success

    def __str__(self) -> str:
        if self.failure is None:
            return f"PipelineResult: {len(self.snapshots) - 1} pass(es) succeeded"
        return f"PipelineResult: {self.failure}"


class Pipeline:
    """Ordered sequence of passes, stopping at the first failure.

    There is no rollback or retry: on failure the result keeps every snapshot
    produced so far, and the caller decides whether to resume from the last
    one or give up.
    """

    def __init__(self, passes: Sequence[Pass]) -> None:
        self.passes = tuple(passes)

    def run(self, tree: Node) -> PipelineResult:
        snapshots = [tree]
        for index, pass_ in enumerate(self.passes):
            logger.debug("Applying pass %d (%s)", index, pass_.name)
            try:
                tree = pass_.apply(tree)
            except PassFailure as exc:
                logger.warning("Pass %d (%s) failed: %s", index, pass_.name, exc)
                failure = PipelineFailure(index, pass_.name, exc.message)
                return PipelineResult(tuple(snapshots), failure)
            snapshots.append(tree)
        return PipelineResult(tuple(snapshots))
