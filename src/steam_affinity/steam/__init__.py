"""Steam installation discovery and launch option editing."""

from steam_affinity.steam.launch_options import (
    AppNotConfiguredError,
    BackupNotFoundError,
    LaunchOptionsError,
    LocalConfigNotFoundError,
)

__all__ = [
    "AppNotConfiguredError",
    "BackupNotFoundError",
    "LaunchOptionsError",
    "LocalConfigNotFoundError",
]
