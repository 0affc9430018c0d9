"""
Steam Launch Options Manager.

Modifies Steam's localconfig.vdf to set launch options for games.
"""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from steam_affinity import vdf

STEAM_SECTION = ["UserLocalConfigStore", "Software", "Valve", "Steam"]
# Newer clients write "apps", older ones "Apps"
APPS_KEYS = ["apps", "Apps"]
LAUNCH_OPTIONS_KEY = "LaunchOptions"
BACKUP_TIMESTAMP = "%Y%m%d-%H%M%S"


class LaunchOptionsError(Exception):
    """Base class for launch option errors."""


class LocalConfigNotFoundError(LaunchOptionsError, FileNotFoundError):
    """localconfig.vdf does not exist."""


class AppNotConfiguredError(LaunchOptionsError):
    """The game has no entry in localconfig.vdf yet."""

    def __init__(self, app_id: int):
        self.app_id = app_id
        super().__init__(
            f"App {app_id} has no entry in localconfig.vdf; "
            "launch the game once from Steam first"
        )


class BackupNotFoundError(LaunchOptionsError, FileNotFoundError):
    """No backup of localconfig.vdf exists."""


def launch_options_path(tree: vdf.VdfObject, app_id: int) -> list[str]:
    """
    Key path of an app's LaunchOptions leaf.

    Raises:
        AppNotConfiguredError: If no apps section holds the app.
    """
    for apps_key in APPS_KEYS:
        app_path = STEAM_SECTION + [apps_key, str(app_id)]
        if isinstance(vdf.get_node(tree, app_path), vdf.VdfObject):
            return app_path + [LAUNCH_OPTIONS_KEY]
    raise AppNotConfiguredError(app_id)


def _load(config_path: Path) -> vdf.VdfObject:
    if not config_path.is_file():
        raise LocalConfigNotFoundError(f"Steam localconfig.vdf not found: {config_path}")
    return vdf.load(config_path)


def get_launch_options(config_path: Path, app_id: int) -> Optional[str]:
    """Get current launch options for a game (None if never set)."""
    tree = _load(config_path)
    return vdf.get_leaf(tree, launch_options_path(tree, app_id))


def create_backup(config_path: Path) -> Path:
    """Copy localconfig.vdf to a timestamped .bak file next to it."""
    stamp = datetime.now().strftime(BACKUP_TIMESTAMP)
    backup_path = config_path.with_name(f"{config_path.name}.{stamp}.bak")
    counter = 1
    while backup_path.exists():
        backup_path = config_path.with_name(f"{config_path.name}.{stamp}-{counter}.bak")
        counter += 1
    shutil.copy2(config_path, backup_path)
    return backup_path


def list_backups(config_path: Path) -> list[Path]:
    """Backups of localconfig.vdf, newest first."""
    backups = config_path.parent.glob(f"{config_path.name}.*.bak")
    return sorted(backups, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)


def set_launch_options(
    config_path: Path,
    app_id: int,
    options: str,
    backup: bool = True,
) -> Optional[Path]:
    """
    Set launch options for a Steam game.

    The file is fully parsed and the new value checked before anything is
    written, so a malformed config or unknown app leaves it untouched.

    Args:
        config_path: Path to localconfig.vdf
        app_id: Steam App ID
        options: Launch options string
        backup: Create backup before modifying

    Returns:
        Path of the backup, or None if no backup was made
    """
    tree = _load(config_path)
    vdf.set_leaf(tree, launch_options_path(tree, app_id), options)
    text = vdf.dumps(tree)

    backup_path = create_backup(config_path) if backup else None
    vdf.write_text_atomic(config_path, text)
    return backup_path


def clear_launch_options(config_path: Path, app_id: int, backup: bool = True) -> Optional[Path]:
    """Remove launch options for a game."""
    return set_launch_options(config_path, app_id, "", backup=backup)


def get_original_launch_options(config_path: Path, app_id: int) -> Optional[str]:
    """
    Get launch options from the newest backup file.

    Raises:
        BackupNotFoundError: If there is no backup.
    """
    backups = list_backups(config_path)
    if not backups:
        raise BackupNotFoundError(f"No backup of {config_path.name} found")

    tree = vdf.load(backups[0])
    try:
        path = launch_options_path(tree, app_id)
    except AppNotConfiguredError:
        return None
    return vdf.get_leaf(tree, path)


def restore_launch_options(config_path: Path, app_id: int) -> Optional[str]:
    """
    Restore original launch options from backup.

    Returns:
        The restored value ("" when the backup had none)
    """
    original = get_original_launch_options(config_path, app_id)
    if original is None:
        original = ""
    set_launch_options(config_path, app_id, original, backup=False)
    return original


def launcher_launch_options(launcher_path: Path) -> str:
    """Launch options that run the game through a launcher script."""
    return f'"{launcher_path}" %command%'
