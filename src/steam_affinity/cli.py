"""
CLI interface for Steam Affinity.

Commands:
    steam-affinity users    - List Steam users with a localconfig.vdf
    steam-affinity show     - Show a game's launch options
    steam-affinity set      - Set a game's launch options
    steam-affinity clear    - Clear a game's launch options
    steam-affinity restore  - Restore launch options from the newest backup
    steam-affinity cpus     - Show CPUs and the affinity mask for a CPU list
    steam-affinity apply    - Write an affinity launcher and point Steam at it
"""

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from typing import Optional
from pathlib import Path

from steam_affinity import __version__, vdf
from steam_affinity.launcher import affinity
from steam_affinity.launcher.batch import PRIORITIES
from steam_affinity.steam import launch_options, paths
from steam_affinity.steam.launch_options import LaunchOptionsError

app = typer.Typer(
    name="steam-affinity",
    help="Steam Affinity - Run Steam games pinned to chosen CPUs",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()

# Errors that abort a command without touching localconfig.vdf
EDIT_ERRORS = (vdf.VdfError, LaunchOptionsError, OSError)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Steam Affinity[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write the console output to this file",
        envvar="STEAM_AFFINITY_LOG_FILE",
    ),
) -> None:
    """
    Steam Affinity - Run Steam games pinned to chosen CPUs.

    Generates a launcher batch file that starts the game with a CPU
    affinity mask and sets the game's Steam launch options to use it.
    """
    # Output is only recorded when it will be saved
    console.record = log_file is not None
    if log_file is not None:
        ctx.call_on_close(lambda: console.save_text(str(log_file)))


def _steam_path_option():
    return typer.Option(
        None,
        "--steam-path",
        "-s",
        help="Path to Steam installation (auto-detected if not specified)",
        envvar="STEAM_AFFINITY_STEAM_PATH",
    )


def _user_option():
    return typer.Option(
        None,
        "--user",
        "-u",
        help="Steam account id under userdata (asked if several exist)",
        envvar="STEAM_AFFINITY_USER",
    )


def _cpus_option():
    return typer.Option(
        None,
        "--cpus",
        "-c",
        help="CPUs to run on, e.g. 2-7 or 0,2,4 (asked if not specified)",
        envvar="STEAM_AFFINITY_CPUS",
    )


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _resolve_steam_root(steam_path: Optional[Path]) -> Path:
    root = paths.find_steam_root(steam_path)
    if root is None:
        _fail("Steam installation not found. Use --steam-path.")
    return root


def _select_user(steam_root: Path, user: Optional[str]) -> str:
    """Pick the Steam user whose localconfig.vdf is edited."""
    users = paths.list_steam_users(steam_root)
    if user is not None:
        if user not in users:
            _fail(f"No localconfig.vdf for Steam user {user} in {steam_root}")
        return user
    if not users:
        _fail(f"No Steam users with a localconfig.vdf in {steam_root}")
    if len(users) == 1:
        return users[0]

    console.print("\n[bold]Multiple Steam users found:[/bold]")
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Num", style="cyan", width=4)
    table.add_column("User", style="white")
    for i, user_id in enumerate(users, 1):
        table.add_row(f"[{i}]", user_id)
    console.print(table)

    choice = typer.prompt("Choice", default="1").strip()
    try:
        return users[int(choice) - 1]
    except (ValueError, IndexError):
        _fail(f"Invalid choice: {choice}")


def _resolve_localconfig(steam_path: Optional[Path], user: Optional[str]) -> tuple[Path, Path]:
    """Return (steam root, localconfig.vdf path)."""
    steam_root = _resolve_steam_root(steam_path)
    user_id = _select_user(steam_root, user)
    return steam_root, paths.localconfig_path(steam_root, user_id)


def _resolve_app(app_ref: str) -> int:
    """Turn an App ID or a game name into an App ID."""
    if app_ref.isdigit():
        return int(app_ref)

    from steam_affinity.steam.app_id_finder import get_multiple_matches

    console.print(f"[dim]Searching Steam Store for '{app_ref}'...[/dim]")
    matches = [m for m in get_multiple_matches(app_ref) if m["appid"]]
    if not matches:
        _fail(f"No Steam game found for '{app_ref}'. Pass the App ID instead.")

    if matches[0]["similarity"] >= 0.95 or len(matches) == 1:
        match = matches[0]
    else:
        console.print(f"\n[bold]Multiple matches for '{app_ref}':[/bold]")
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Num", style="cyan", width=4)
        table.add_column("Name", style="white")
        table.add_column("ID", style="dim")
        table.add_column("Match", style="green")
        for i, m in enumerate(matches, 1):
            table.add_row(f"[{i}]", m["name"], str(m["appid"]), f"{m['similarity'] * 100:.0f}%")
        console.print(table)

        choice = typer.prompt("Choice", default="1").strip()
        try:
            match = matches[int(choice) - 1]
        except (ValueError, IndexError):
            _fail(f"Invalid choice: {choice}")

    console.print(f"[green]Using {match['name']} (App ID {match['appid']})[/green]")
    return int(match["appid"])


def _choose_cpus(cpus: Optional[str], count: int) -> list[int]:
    if cpus is None:
        default = affinity.format_cpu_list(affinity.default_cpus(count))
        cpus = typer.prompt(f"CPUs to use (0-{count - 1})", default=default)
    try:
        return affinity.parse_cpu_list(cpus, count)
    except ValueError as e:
        _fail(f"Invalid CPU list '{cpus}': {e}")


@app.command()
def users(
    steam_path: Optional[Path] = _steam_path_option(),
) -> None:
    """
    List Steam users.

    Shows every account under userdata that has a localconfig.vdf.
    """
    steam_root = _resolve_steam_root(steam_path)
    user_ids = paths.list_steam_users(steam_root)
    if not user_ids:
        console.print(f"[yellow]No Steam users with a localconfig.vdf in {steam_root}[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Steam users ({steam_root})")
    table.add_column("User", style="cyan")
    table.add_column("localconfig.vdf", style="dim")
    for user_id in user_ids:
        table.add_row(user_id, str(paths.localconfig_path(steam_root, user_id)))
    console.print(table)


@app.command()
def show(
    app_ref: str = typer.Argument(..., metavar="APP", help="Steam App ID or game name"),
    steam_path: Optional[Path] = _steam_path_option(),
    user: Optional[str] = _user_option(),
) -> None:
    """Show a game's current launch options."""
    app_id = _resolve_app(app_ref)
    _, config = _resolve_localconfig(steam_path, user)

    try:
        options = launch_options.get_launch_options(config, app_id)
    except EDIT_ERRORS as e:
        _fail(f"Error reading {config}: {e}")

    if options:
        console.print(f"[bold]Launch options ({app_id}):[/bold] {options}")
    else:
        console.print(f"[yellow]No launch options set for {app_id}[/yellow]")


@app.command("set")
def set_options(
    app_ref: str = typer.Argument(..., metavar="APP", help="Steam App ID or game name"),
    options: str = typer.Argument(..., help="Launch options string"),
    steam_path: Optional[Path] = _steam_path_option(),
    user: Optional[str] = _user_option(),
    backup: bool = typer.Option(
        True,
        "--backup/--no-backup",
        help="Back up localconfig.vdf before modifying it",
    ),
) -> None:
    """Set a game's launch options."""
    app_id = _resolve_app(app_ref)
    _, config = _resolve_localconfig(steam_path, user)

    try:
        backup_path = launch_options.set_launch_options(config, app_id, options, backup=backup)
    except EDIT_ERRORS as e:
        _fail(f"Error updating {config}: {e}")

    console.print(f"[green]✓ Launch options for {app_id} set to:[/green] {options}")
    if backup_path:
        console.print(f"[dim]Backup: {backup_path}[/dim]")


@app.command()
def clear(
    app_ref: str = typer.Argument(..., metavar="APP", help="Steam App ID or game name"),
    steam_path: Optional[Path] = _steam_path_option(),
    user: Optional[str] = _user_option(),
) -> None:
    """Clear a game's launch options."""
    app_id = _resolve_app(app_ref)
    _, config = _resolve_localconfig(steam_path, user)

    try:
        backup_path = launch_options.clear_launch_options(config, app_id)
    except EDIT_ERRORS as e:
        _fail(f"Error updating {config}: {e}")

    console.print(f"[green]✓ Launch options for {app_id} cleared[/green]")
    console.print(f"[dim]Backup: {backup_path}[/dim]")


@app.command()
def restore(
    app_ref: str = typer.Argument(..., metavar="APP", help="Steam App ID or game name"),
    steam_path: Optional[Path] = _steam_path_option(),
    user: Optional[str] = _user_option(),
) -> None:
    """
    Restore launch options from the newest backup.

    Only the game's launch options are restored; everything else in
    localconfig.vdf keeps its current value.
    """
    app_id = _resolve_app(app_ref)
    _, config = _resolve_localconfig(steam_path, user)

    try:
        restored = launch_options.restore_launch_options(config, app_id)
    except EDIT_ERRORS as e:
        _fail(f"Error restoring {config}: {e}")

    if restored:
        console.print(f"[green]✓ Restored launch options for {app_id}:[/green] {restored}")
    else:
        console.print(f"[green]✓ Restored launch options for {app_id} (empty)[/green]")


@app.command()
def cpus(
    cpu_list: Optional[str] = _cpus_option(),
) -> None:
    """
    Show logical CPUs and the affinity mask for a CPU list.

    Without --cpus, shows the default selection (all but CPU 0).
    """
    count = affinity.cpu_count()
    if cpu_list is None:
        selected = affinity.default_cpus(count)
    else:
        try:
            selected = affinity.parse_cpu_list(cpu_list, count)
        except ValueError as e:
            _fail(f"Invalid CPU list '{cpu_list}': {e}")

    mask = affinity.affinity_mask(selected)
    console.print(f"[bold]Logical CPUs:[/bold] {count}")
    console.print(f"[bold]Selected:[/bold] {affinity.format_cpu_list(selected)}")
    console.print(f"[bold]Mask:[/bold] {affinity.format_mask(mask)} ({affinity.describe_mask(mask, count)})")


@app.command()
def apply(
    app_ref: str = typer.Argument(..., metavar="APP", help="Steam App ID or game name"),
    steam_path: Optional[Path] = _steam_path_option(),
    user: Optional[str] = _user_option(),
    cpu_list: Optional[str] = _cpus_option(),
    priority: str = typer.Option(
        "normal",
        "--priority",
        "-p",
        help=f"Process priority ({', '.join(PRIORITIES)})",
        envvar="STEAM_AFFINITY_PRIORITY",
    ),
    launcher_dir: Optional[Path] = typer.Option(
        None,
        "--launcher-dir",
        "-d",
        help="Where to write the launcher (default: the game's install directory)",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Don't ask for confirmation",
    ),
) -> None:
    """
    Pin a game to chosen CPUs.

    Writes a launcher batch file and sets the game's launch options to
    run through it. localconfig.vdf is backed up first; Steam should be
    closed while it is edited.
    """
    if priority.lower() not in PRIORITIES:
        _fail(f"Unknown priority '{priority}' (choose from {', '.join(PRIORITIES)})")

    app_id = _resolve_app(app_ref)
    steam_root, config = _resolve_localconfig(steam_path, user)

    # Fail on a bad config before anything is written
    try:
        current = launch_options.get_launch_options(config, app_id)
    except EDIT_ERRORS as e:
        _fail(f"Error reading {config}: {e}")

    if launcher_dir is None:
        try:
            launcher_dir = paths.find_game_install_dir(steam_root, app_id)
        except EDIT_ERRORS as e:
            _fail(f"Error reading Steam library files: {e}")
        if launcher_dir is None:
            _fail(f"Install directory of {app_id} not found. Use --launcher-dir.")

    count = affinity.cpu_count()
    selected = _choose_cpus(cpu_list, count)
    mask = affinity.affinity_mask(selected)

    summary = Panel(
        f"""[bold]App ID:[/bold] {app_id}
[bold]Config:[/bold] {config}
[bold]Current options:[/bold] {current or '-'}
[bold]CPUs:[/bold] {affinity.format_cpu_list(selected)} of {count}
[bold]Mask:[/bold] {affinity.format_mask(mask)}
[bold]Priority:[/bold] {priority.lower()}
[bold]Launcher dir:[/bold] {launcher_dir}""",
        title="Affinity launcher",
        border_style="blue",
    )
    console.print(summary)

    if not yes and not typer.confirm("Apply these changes?", default=True):
        console.print("[yellow]Aborted.[/yellow]")
        raise typer.Exit(0)

    from steam_affinity.launcher.batch import LAUNCHER_NAME, write_launcher

    launcher_existed = (Path(launcher_dir) / LAUNCHER_NAME).exists()
    try:
        launcher = write_launcher(launcher_dir, mask, priority)
    except EDIT_ERRORS as e:
        _fail(f"Error writing launcher: {e}")

    options = launch_options.launcher_launch_options(launcher)
    try:
        backup_path = launch_options.set_launch_options(config, app_id, options)
    except EDIT_ERRORS as e:
        if launcher_existed:
            _fail(f"Error setting launch options: {e} (launcher left at {launcher})")
        launcher.unlink(missing_ok=True)
        _fail(f"Error setting launch options: {e}")

    console.print(f"[green]✓ Launcher written:[/green] {launcher}")
    console.print(f"[green]✓ Launch options set:[/green] {options}")
    console.print(f"[dim]Backup: {backup_path}[/dim]")
    console.print("[yellow]→ Restart Steam for the change to take effect.[/yellow]")
