"""
Unit tests for path-based reads and writes.
"""

import copy

import pytest

from steam_affinity.vdf import (
    DuplicateKeyError,
    Leaf,
    PathNotFoundError,
    VdfObject,
    dumps,
    get_leaf,
    get_node,
    loads,
    set_leaf,
)

LAUNCH_PATH = ["UserLocalConfigStore", "Software", "Valve", "Steam", "apps", "730", "LaunchOptions"]


@pytest.fixture
def tree(localconfig_text):
    return loads(localconfig_text)


class TestGet:
    """Tests for get_node and get_leaf."""

    def test_get_leaf(self, tree):
        """An existing leaf value is returned."""
        assert get_leaf(tree, LAUNCH_PATH) == "-novid"

    def test_get_missing_key(self, tree):
        """A missing key gives None."""
        assert get_leaf(tree, LAUNCH_PATH[:-2] + ["999", "LaunchOptions"]) is None

    def test_get_through_leaf(self, tree):
        """Descending past a leaf gives None."""
        assert get_node(tree, LAUNCH_PATH + ["deeper"]) is None

    def test_get_leaf_on_object(self, tree):
        """get_leaf only returns leaves."""
        assert get_leaf(tree, LAUNCH_PATH[:-1]) is None
        assert isinstance(get_node(tree, LAUNCH_PATH[:-1]), VdfObject)

    def test_empty_path_is_root(self, tree):
        """The empty path addresses the root."""
        assert get_node(tree, []) is tree

    def test_get_never_creates(self, tree):
        """Reading a missing path leaves the tree unchanged."""
        before = copy.deepcopy(tree)
        get_node(tree, ["nope", "nothing"])
        assert tree == before


class TestSetLeaf:
    """Tests for set_leaf."""

    def test_overwrite_existing(self, tree):
        """An existing leaf is overwritten and its old value returned."""
        assert set_leaf(tree, LAUNCH_PATH, "-high") == "-novid"
        assert get_leaf(tree, LAUNCH_PATH) == "-high"

    def test_overwrite_keeps_position(self, tree):
        """Overwriting does not move the key."""
        set_leaf(tree, LAUNCH_PATH, "-high")
        app = get_node(tree, LAUNCH_PATH[:-1])
        assert list(app.keys()) == ["LastPlayed", "LaunchOptions"]

    def test_add_missing_leaf_at_end(self, tree):
        """A missing final key is appended to its object."""
        path = LAUNCH_PATH[:-2] + ["570", "LaunchOptions"]
        assert set_leaf(tree, path, "-console") is None
        app = get_node(tree, path[:-1])
        assert list(app.keys()) == ["LastPlayed", "LaunchOptions"]
        assert get_leaf(tree, path) == "-console"

    def test_missing_intermediate(self, tree):
        """Intermediate objects are never created."""
        before = copy.deepcopy(tree)
        path = LAUNCH_PATH[:-2] + ["999", "LaunchOptions"]
        with pytest.raises(PathNotFoundError) as exc_info:
            set_leaf(tree, path, "-x")
        assert exc_info.value.missing == "999"
        assert tree == before

    def test_leaf_intermediate(self, tree):
        """A leaf in the middle of the path is not descended into."""
        before = copy.deepcopy(tree)
        with pytest.raises(PathNotFoundError):
            set_leaf(tree, LAUNCH_PATH + ["deeper"], "-x")
        assert tree == before

    def test_object_at_final_key(self, tree):
        """An object cannot be replaced by a leaf."""
        with pytest.raises(DuplicateKeyError):
            set_leaf(tree, LAUNCH_PATH[:-1], "-x")

    def test_empty_path(self, tree):
        """The root cannot be assigned."""
        with pytest.raises(PathNotFoundError):
            set_leaf(tree, [], "-x")

    def test_mutation_isolation(self, localconfig_text):
        """Only the addressed leaf changes in the serialized output."""
        tree = loads(localconfig_text)
        set_leaf(tree, LAUNCH_PATH, "-high")
        before = localconfig_text.splitlines()
        after = dumps(tree).splitlines()
        changed = [(a, b) for a, b in zip(before, after) if a != b]
        assert len(before) == len(after)
        assert changed == [
            ('\t\t\t\t\t\t"LaunchOptions"\t\t"-novid"', '\t\t\t\t\t\t"LaunchOptions"\t\t"-high"'),
        ]

    def test_set_on_root(self):
        """A single-key path writes into the root object."""
        tree = VdfObject()
        set_leaf(tree, ["a"], "1")
        assert tree == VdfObject({"a": Leaf("1")})
