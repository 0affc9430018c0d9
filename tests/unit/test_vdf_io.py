"""
Unit tests for VDF file reading and writing.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from steam_affinity.vdf import Leaf, VdfObject, dump, load, write_text_atomic


class TestWrite:
    """Tests for the UTF-8 / no-BOM / atomic write contract."""

    def test_no_bom_and_utf8(self, tmp_path: Path):
        """Output is plain UTF-8 without a byte-order mark."""
        target = tmp_path / "out.vdf"
        dump(VdfObject({"name": Leaf("Café ☕")}), target)
        data = target.read_bytes()
        assert not data.startswith(b"\xef\xbb\xbf")
        assert not data.startswith((b"\xff\xfe", b"\xfe\xff"))
        assert data.decode("utf-8") == '"name"\t\t"Café ☕"'

    def test_lf_newlines(self, tmp_path: Path):
        """Line breaks are written as LF on every platform."""
        target = tmp_path / "out.vdf"
        dump(VdfObject({"a": VdfObject({"b": Leaf("c")})}), target)
        assert b"\r" not in target.read_bytes()

    def test_replaces_existing_file(self, tmp_path: Path):
        """The target is replaced and no temp file is left behind."""
        target = tmp_path / "out.vdf"
        target.write_text("old", encoding="utf-8")
        write_text_atomic(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert list(tmp_path.iterdir()) == [target]

    def test_failed_write_keeps_original(self, tmp_path: Path):
        """If the replace step fails, the original file is untouched."""
        target = tmp_path / "out.vdf"
        target.write_text("original", encoding="utf-8")
        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                write_text_atomic(target, "new")
        assert target.read_text(encoding="utf-8") == "original"
        assert list(tmp_path.iterdir()) == [target]


class TestLoad:
    """Tests for reading files."""

    def test_load_round_trip(self, tmp_path: Path, localconfig_text):
        """A loaded and dumped file is byte-identical."""
        source = tmp_path / "localconfig.vdf"
        source.write_text(localconfig_text, encoding="utf-8")
        dump(load(source), source)
        assert source.read_text(encoding="utf-8") == localconfig_text

    def test_load_drops_bom(self, tmp_path: Path):
        """A file saved with a BOM loads, and is written back without it."""
        source = tmp_path / "bom.vdf"
        source.write_bytes(b'\xef\xbb\xbf"a"\t\t"b"')
        tree = load(source)
        assert tree == VdfObject({"a": Leaf("b")})
        dump(tree, source)
        assert source.read_bytes() == b'"a"\t\t"b"'
