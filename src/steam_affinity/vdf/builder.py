"""
Tree builder for text VDF.

Consumes lines in order and keeps an explicit stack of the objects that
are currently open. A key line creates its object immediately, but the
object only becomes the insertion target once its opening brace is seen.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from steam_affinity.vdf.errors import DuplicateKeyError, MalformedDocumentError
from steam_affinity.vdf.lines import (
    CloseBrace,
    LeafPair,
    ObjectKey,
    OpenBrace,
    classify,
)
from steam_affinity.vdf.models import Leaf, VdfObject


@dataclass
class _Frame:
    depth: int
    node: VdfObject
    line_number: int


class TreeBuilder:
    """
    Incremental VDF tree builder.

    Usage:
        builder = TreeBuilder()
        for line in lines:
            builder.feed(line)
        tree = builder.finish()
    """

    def __init__(self) -> None:
        self.root = VdfObject()
        self._stack: list[_Frame] = []
        self._pending: Optional[VdfObject] = None
        self._line_number = 0

    @property
    def depth(self) -> int:
        """Number of currently open objects."""
        return len(self._stack)

    @property
    def current(self) -> VdfObject:
        """Object that new entries are inserted into."""
        if self._stack:
            return self._stack[-1].node
        return self.root

    def _insert(self, key: str, node) -> None:
        try:
            self.current.insert(key, node)
        except DuplicateKeyError as e:
            raise DuplicateKeyError(e.key, self._line_number) from None

    def feed(self, line: str) -> None:
        """Process one line of text."""
        self._line_number += 1
        kind = classify(line)

        if isinstance(kind, LeafPair):
            self._insert(kind.key, Leaf(kind.value))
            self._pending = None
        elif isinstance(kind, ObjectKey):
            child = VdfObject()
            self._insert(kind.key, child)
            self._pending = child
        elif isinstance(kind, OpenBrace):
            if self._pending is None:
                raise MalformedDocumentError(
                    "opening brace without a preceding key", self._line_number
                )
            self._stack.append(_Frame(self.depth, self._pending, self._line_number))
            self._pending = None
        elif isinstance(kind, CloseBrace):
            if not self._stack:
                raise MalformedDocumentError("unbalanced closing brace", self._line_number)
            self._stack.pop()
            self._pending = None

    def finish(self) -> VdfObject:
        """
        Return the root object.

        Raises:
            MalformedDocumentError: If an object is still open.
        """
        if self._stack:
            frame = self._stack[-1]
            raise MalformedDocumentError(
                f"object opened on line {frame.line_number} is never closed",
                self._line_number,
            )
        return self.root


def parse(lines: Iterable[str]) -> VdfObject:
    """
    Build a tree from a sequence of text lines.

    Raises:
        MalformedDocumentError: On unbalanced or unkeyed braces.
        DuplicateKeyError: When a key repeats within one object.
    """
    builder = TreeBuilder()
    for line in lines:
        builder.feed(line)
    return builder.finish()


def loads(text: str) -> VdfObject:
    """Parse VDF text. A leading byte-order mark is ignored."""
    if text.startswith("\ufeff"):
        text = text[1:]
    # Only "\n" ends a line; other Unicode breaks can appear inside values
    return parse(text.split("\n"))
