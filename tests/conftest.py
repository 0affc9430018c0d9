"""
Pytest configuration and fixtures for Steam Affinity tests.
"""

import pytest
from pathlib import Path

APP_ID = 730

LOCALCONFIG = """"UserLocalConfigStore"
{
	"Software"
	{
		"Valve"
		{
			"Steam"
			{
				"apps"
				{
					"730"
					{
						"LastPlayed"		"1700000000"
						"LaunchOptions"		"-novid"
					}
					"570"
					{
						"LastPlayed"		"1690000000"
					}
				}
				"LastUsedSteamID"		"12345"
			}
		}
	}
	"friends"
	{
		"PersonaName"		"player \\"one\\""
	}
}"""


@pytest.fixture
def localconfig_text() -> str:
    """A minimal localconfig.vdf in Steam's own layout."""
    return LOCALCONFIG


@pytest.fixture
def steam_root(tmp_path: Path) -> Path:
    """A fake Steam installation with one user and one installed game."""
    root = tmp_path / "Steam"
    config_dir = root / "userdata" / "12345" / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "localconfig.vdf").write_text(LOCALCONFIG, encoding="utf-8")

    steamapps = root / "steamapps"
    (steamapps / "common" / "Counter-Strike Global Offensive").mkdir(parents=True)
    (steamapps / f"appmanifest_{APP_ID}.acf").write_text(
        '"AppState"\n{\n\t"appid"\t\t"730"\n'
        '\t"installdir"\t\t"Counter-Strike Global Offensive"\n}\n',
        encoding="utf-8",
    )
    return root


@pytest.fixture
def localconfig(steam_root: Path) -> Path:
    """Path to the fake user's localconfig.vdf."""
    return steam_root / "userdata" / "12345" / "config" / "localconfig.vdf"
