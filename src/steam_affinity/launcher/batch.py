"""
Launcher batch file generation.

The launcher receives Steam's %command% (the game executable and its
arguments) and restarts it with `start /affinity`, so it works for any
game without knowing the executable name.
"""

from pathlib import Path

from steam_affinity import __version__
from steam_affinity.launcher.affinity import format_mask

LAUNCHER_NAME = "steam_affinity_launcher.bat"

PRIORITIES = ["low", "belownormal", "normal", "abovenormal", "high", "realtime"]


def render_launcher(mask: int, priority: str = "normal") -> str:
    """Batch file text with CRLF line endings."""
    if mask <= 0:
        raise ValueError("Affinity mask must select at least one CPU")
    priority = priority.lower()
    if priority not in PRIORITIES:
        raise ValueError(f"Unknown priority '{priority}' (choose from {', '.join(PRIORITIES)})")

    lines = [
        "@echo off",
        f"rem Generated by steam-affinity {__version__}",
        f'start "" /{priority} /affinity {format_mask(mask)} %*',
    ]
    return "\r\n".join(lines) + "\r\n"


def write_launcher(
    directory: Path,
    mask: int,
    priority: str = "normal",
    name: str = LAUNCHER_NAME,
) -> Path:
    """Write the launcher into a directory and return its path."""
    text = render_launcher(mask, priority)
    path = Path(directory) / name
    # cmd.exe reads batch files in the OEM code page; keep them ASCII
    with open(path, "w", encoding="ascii", newline="") as f:
        f.write(text)
    return path
