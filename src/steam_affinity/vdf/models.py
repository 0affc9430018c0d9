"""
VDF tree data models.

A tree is made of two node kinds: Leaf holds a single string value,
VdfObject holds an ordered mapping of unique keys to child nodes.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from steam_affinity.vdf.errors import DuplicateKeyError


@dataclass
class Leaf:
    """Terminal node. The value is stored un-escaped, without quotes."""

    value: str


@dataclass
class VdfObject:
    """
    Node holding uniquely-keyed children in insertion order.

    Equality compares keys, order and values, so two trees are equal only
    if they would serialize to the same text.
    """

    entries: dict[str, "Node"] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VdfObject):
            return NotImplemented
        return list(self.entries.items()) == list(other.entries.items())

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def get(self, key: str) -> Optional["Node"]:
        return self.entries.get(key)

    def insert(self, key: str, node: "Node") -> "Node":
        """
        Append a new entry.

        Raises:
            DuplicateKeyError: If the key is already present.
        """
        if key in self.entries:
            raise DuplicateKeyError(key)
        self.entries[key] = node
        return node


Node = Union[Leaf, VdfObject]
