"""Read and assign values in a VDF tree by key path."""

from typing import Optional, Sequence

from steam_affinity.vdf.errors import DuplicateKeyError, PathNotFoundError
from steam_affinity.vdf.models import Leaf, Node, VdfObject


def get_node(tree: VdfObject, path: Sequence[str]) -> Optional[Node]:
    """
    Descend one key at a time.

    Returns None as soon as a key is missing or a leaf is reached before
    the end of the path. Never creates nodes.
    """
    node: Node = tree
    for key in path:
        if not isinstance(node, VdfObject):
            return None
        child = node.get(key)
        if child is None:
            return None
        node = child
    return node


def get_leaf(tree: VdfObject, path: Sequence[str]) -> Optional[str]:
    """Return the leaf value at path, or None if absent or not a leaf."""
    node = get_node(tree, path)
    if isinstance(node, Leaf):
        return node.value
    return None


def set_leaf(tree: VdfObject, path: Sequence[str], value: str) -> Optional[str]:
    """
    Assign a leaf value.

    Intermediate objects are never created. An existing leaf is
    overwritten in place, a missing one is appended to its parent.

    Returns:
        The previous value, or None if the leaf was added.

    Raises:
        PathNotFoundError: If the path is empty or an intermediate segment
            is missing or is a leaf. The tree is left unchanged.
        DuplicateKeyError: If the final key already holds an object.
    """
    if not path:
        raise PathNotFoundError(path)

    *parents, last = path
    parent = get_node(tree, parents)
    if not isinstance(parent, VdfObject):
        raise PathNotFoundError(path, _first_missing(tree, parents))

    existing = parent.get(last)
    if isinstance(existing, VdfObject):
        raise DuplicateKeyError(last)
    if isinstance(existing, Leaf):
        previous = existing.value
        existing.value = value
        return previous

    parent.insert(last, Leaf(value))
    return None


def _first_missing(tree: VdfObject, parents: Sequence[str]) -> Optional[str]:
    node: Node = tree
    for key in parents:
        child = node.get(key) if isinstance(node, VdfObject) else None
        if not isinstance(child, VdfObject):
            return key
        node = child
    return None
