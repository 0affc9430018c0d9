"""Reading and writing VDF files."""

from pathlib import Path
from typing import Union

from steam_affinity.vdf.builder import loads
from steam_affinity.vdf.models import VdfObject
from steam_affinity.vdf.serializer import dumps

# Steam rejects files with a BOM or in UTF-16, so never use "utf-8-sig"
# or the platform default for writing.
ENCODING = "utf-8"


def load(path: Union[str, Path]) -> VdfObject:
    """Read and parse a VDF file."""
    text = Path(path).read_text(encoding=ENCODING)
    return loads(text)


def write_text_atomic(path: Union[str, Path], text: str) -> None:
    """
    Write text as UTF-8 without BOM, replacing the target in one step.

    The content goes to a sibling temp file first, so a failure midway
    leaves the original file intact.
    """
    path = Path(path)
    temp_path = path.with_name(path.name + ".tmp")
    try:
        with open(temp_path, "w", encoding=ENCODING, newline="\n") as f:
            f.write(text)
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def dump(tree: VdfObject, path: Union[str, Path]) -> None:
    """Serialize a tree and write it atomically."""
    write_text_atomic(path, dumps(tree))
