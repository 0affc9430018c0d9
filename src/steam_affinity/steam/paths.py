"""
Steam installation discovery.

Finds the Steam root, the per-user localconfig.vdf and the install
directory of a game. Library and manifest files are read with the
package's own VDF parser.
"""

import sys
from pathlib import Path
from typing import Optional

from steam_affinity import vdf

REGISTRY_KEY = r"Software\Valve\Steam"
REGISTRY_VALUE = "SteamPath"

WINDOWS_STEAM_PATHS = [
    Path("C:/Program Files (x86)/Steam"),
    Path("C:/Program Files/Steam"),
]


def default_steam_paths() -> list[Path]:
    """Conventional Steam locations for the running platform."""
    if sys.platform == "win32":
        return list(WINDOWS_STEAM_PATHS)
    return [
        Path.home() / ".local" / "share" / "Steam",
        Path.home() / ".steam" / "steam",
        Path.home() / ".steam" / "root",
        Path.home() / ".var" / "app" / "com.valvesoftware.Steam" / ".local" / "share" / "Steam",
    ]


def registry_steam_path() -> Optional[Path]:
    """Read the Steam path from the Windows registry, if there is one."""
    if sys.platform != "win32":
        return None

    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, REGISTRY_KEY) as key:
            value, _ = winreg.QueryValueEx(key, REGISTRY_VALUE)
    except OSError:
        return None
    return Path(value) if value else None


def find_steam_root(explicit: Optional[Path] = None) -> Optional[Path]:
    """
    Locate the Steam installation.

    An explicit path is the only candidate when given. Otherwise the
    Windows registry and then the default paths are tried. Only
    directories that contain a userdata folder are accepted.
    """
    if explicit is not None:
        candidates = [Path(explicit)]
    else:
        candidates = []
        registry = registry_steam_path()
        if registry is not None:
            candidates.append(registry)
        candidates.extend(default_steam_paths())

    for candidate in candidates:
        if (candidate / "userdata").is_dir():
            return candidate
    return None


def localconfig_path(steam_root: Path, user_id: str) -> Path:
    """Path of a user's localconfig.vdf (may not exist)."""
    return steam_root / "userdata" / str(user_id) / "config" / "localconfig.vdf"


def list_steam_users(steam_root: Path) -> list[str]:
    """Account ids under userdata that have a localconfig.vdf."""
    userdata = steam_root / "userdata"
    if not userdata.is_dir():
        return []

    users = [
        user_dir.name
        for user_dir in userdata.iterdir()
        if user_dir.is_dir()
        and user_dir.name.isdigit()
        and localconfig_path(steam_root, user_dir.name).is_file()
    ]
    return sorted(users, key=int)


def find_localconfig(
    steam_root: Optional[Path] = None,
    user_id: Optional[str] = None,
) -> Optional[Path]:
    """
    Find Steam's localconfig.vdf file.

    With a user id, only that user's file is considered; otherwise the
    first user found wins.
    """
    root = find_steam_root(steam_root)
    if root is None:
        return None

    if user_id is not None:
        config = localconfig_path(root, user_id)
        return config if config.is_file() else None

    users = list_steam_users(root)
    if users:
        return localconfig_path(root, users[0])
    return None


def library_folders(steam_root: Path) -> list[Path]:
    """
    All Steam library roots, starting with the Steam root itself.

    Handles both the current libraryfolders.vdf layout (numbered objects
    with a "path" leaf) and the old one (numbered leaves holding the path).
    """
    folders = [steam_root]
    config = steam_root / "steamapps" / "libraryfolders.vdf"
    if not config.is_file():
        return folders

    tree = vdf.load(config)
    section = tree.get("libraryfolders") or tree.get("LibraryFolders")
    if not isinstance(section, vdf.VdfObject):
        return folders

    for key, entry in section.items():
        if not key.isdigit():
            continue
        if isinstance(entry, vdf.VdfObject):
            value = vdf.get_leaf(entry, ["path"])
        else:
            value = entry.value
        if value:
            path = Path(value)
            if path not in folders:
                folders.append(path)

    return folders


def find_game_install_dir(steam_root: Path, app_id: int) -> Optional[Path]:
    """Install directory of a game, from its appmanifest in any library."""
    for library in library_folders(steam_root):
        manifest = library / "steamapps" / f"appmanifest_{app_id}.acf"
        if not manifest.is_file():
            continue

        install_dir = vdf.get_leaf(vdf.load(manifest), ["AppState", "installdir"])
        if not install_dir:
            continue

        game_dir = library / "steamapps" / "common" / install_dir
        if game_dir.is_dir():
            return game_dir

    return None
