"""Text VDF (Valve KeyValues) parser and serializer."""

from steam_affinity.vdf.accessor import get_leaf, get_node, set_leaf
from steam_affinity.vdf.builder import TreeBuilder, loads, parse
from steam_affinity.vdf.errors import (
    DuplicateKeyError,
    MalformedDocumentError,
    PathNotFoundError,
    VdfError,
)
from steam_affinity.vdf.io import ENCODING, dump, load, write_text_atomic
from steam_affinity.vdf.models import Leaf, Node, VdfObject
from steam_affinity.vdf.serializer import dump_lines, dumps

__all__ = [
    "DuplicateKeyError",
    "ENCODING",
    "Leaf",
    "MalformedDocumentError",
    "Node",
    "PathNotFoundError",
    "TreeBuilder",
    "VdfError",
    "VdfObject",
    "dump",
    "dump_lines",
    "dumps",
    "get_leaf",
    "get_node",
    "load",
    "loads",
    "parse",
    "set_leaf",
    "write_text_atomic",
]
