"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from demos_manager.core.events import AppEvent, EventChannel
from demos_manager.core.folders import FolderRegistry, RejectReason, primary_drive_root
from demos_manager.core.scanner import scan_folders
from demos_manager.core.startup import StartupOrchestrator
from demos_manager.core.update_checker import UpdateChecker, build_update_url
from demos_manager.models.config import CURRENT_RELEASE
from demos_manager.storage.cache import DemoCache
from demos_manager.storage.config_manager import ConfigManager

from .formatters import (
    format_update_result,
    print_folders_table,
    print_settings,
    print_startup_report,
)
from .prompts import ConsolePrompter

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("demos_manager")

app = typer.Typer(
    name="demos-manager",
    help=(
        "Keeps your local demo library in step with the installed release and"
        " manages the folders scanned for demos."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)
folders_app = typer.Typer(help="Manage the folders scanned for demos.")
cache_app = typer.Typer(help="Inspect, back up or clear the demo cache.")
app.add_typer(folders_app, name="folders")
app.add_typer(cache_app, name="cache")


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "demos-manager"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_settings() -> ConfigManager:
    settings = ConfigManager(CONFIG_FILE)
    settings.load()
    return settings


def _log_event(event: AppEvent) -> None:
    log.debug(f"Event: {event.value}")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_settings: bool = typer.Option(
        False, "--show-settings", help="Display the current settings."
    ),
):
    """Demos Manager CLI"""
    if version:
        console.print(f"[bold]{CURRENT_RELEASE.credits}[/bold]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("demos_manager").setLevel(log_level)

    if show_settings:
        print_settings(CONFIG_FILE, _load_settings().snapshot())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def start(
    no_update_check: bool = typer.Option(
        False, "--no-update-check", help="Skip the check for a newer release."
    ),
):
    """Run the launch sequence: cache invalidation, version bump and update check."""

    async def _start():
        settings = _load_settings()
        events = EventChannel()
        events.subscribe(_log_event)
        registry = FolderRegistry(settings, events)
        registry.seed_defaults()

        orchestrator = StartupOrchestrator(
            settings,
            registry,
            DemoCache(CONFIG_DIR),
            ConsolePrompter(console),
            events,
            open_url=typer.launch,
        )
        try:
            return await orchestrator.run(check_for_updates=not no_update_check)
        finally:
            orchestrator.on_window_closed()

    report = asyncio.run(_start())
    print_startup_report(report)


@app.command(name="check-update")
def check_update(
    url: str | None = typer.Option(
        None, "--url", help="Update endpoint to query instead of the release website."
    ),
    timeout: float = typer.Option(10.0, "--timeout", help="Request timeout in seconds."),
):
    """Check whether a newer release is available."""
    endpoint = url or build_update_url(CURRENT_RELEASE.website)
    result = asyncio.run(
        UpdateChecker(timeout_seconds=timeout).check_for_update(
            CURRENT_RELEASE.app_version, endpoint
        )
    )
    console.print(format_update_result(result))


@app.command()
def scan():
    """Import demos found in the watched folders into the cache."""
    settings = _load_settings()
    registry = FolderRegistry(settings)
    cache = DemoCache(CONFIG_DIR)

    if not registry.current_folders():
        console.print("[yellow]⚠️  No watched folders to scan.[/yellow]")
        raise typer.Exit(code=1)

    added = 0
    for record in scan_folders(registry.current_folders()):
        if cache.get(record.id) is None and cache.put(record):
            added += 1
    console.print(f"[green]✓ {added} new demos imported ({cache.count()} cached).[/green]")


@folders_app.command("list")
def folders_list():
    """List the watched folders."""
    print_folders_table(FolderRegistry(_load_settings()).current_folders())


@folders_app.command("add")
def folders_add(
    path: Path | None = typer.Argument(  # noqa: B008
        None, help="Folder to watch. Prompts for one when omitted."
    ),
):
    """Add a folder to scan for demos."""

    async def _add():
        registry = FolderRegistry(_load_settings())
        target = path
        if target is None:
            target = await ConsolePrompter(console).choose_folder(primary_drive_root())
            if target is None:
                return None
        return await registry.add(target)

    result = asyncio.run(_add())
    if result is None:
        console.print("[yellow]Operation cancelled.[/yellow]")
    elif result.added:
        console.print(f"[green]✓ Watching '{result.path}'.[/green]")
    elif result.reason is RejectReason.DUPLICATE:
        console.print(f"[yellow]'{result.path}' is already watched.[/yellow]")
    else:
        console.print(f"[red]✗ '{path}' is not an accessible folder.[/red]")
        raise typer.Exit(code=1)


@folders_app.command("remove")
def folders_remove(
    path: str = typer.Argument(..., help="Watched folder to remove."),
):
    """Stop watching a folder."""
    result = asyncio.run(FolderRegistry(_load_settings()).remove(path))
    if result.removed:
        console.print(f"[green]✓ No longer watching '{result.path}'.[/green]")
    else:
        console.print(f"[yellow]'{path}' is not a watched folder.[/yellow]")


@cache_app.command("status")
def cache_status():
    """Show how many demos are cached."""
    cache = DemoCache(CONFIG_DIR)
    console.print(f"[bold]Cached demos:[/] [green]{cache.count()}[/green]")
    console.print(f"[dim]{cache.cache_dir}[/dim]")


@cache_app.command("export")
def cache_export(
    path: Path = typer.Argument(..., help="Backup file to write."),  # noqa: B008
):
    """Save comments and statuses of cached demos to a backup file."""
    count = DemoCache(CONFIG_DIR).export_custom_data(path)
    console.print(f"[green]✓ Custom data of {count} demos saved to '{path}'.[/green]")


@cache_app.command("import")
def cache_import(
    path: Path = typer.Argument(..., help="Backup file to read."),  # noqa: B008
):
    """Re-apply a backup file to the cached demos."""
    count = DemoCache(CONFIG_DIR).import_custom_data(path)
    console.print(f"[green]✓ Custom data restored for {count} demos.[/green]")


@cache_app.command("clear")
def cache_clear(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Bypass the confirmation prompt.",
    ),
):
    """Remove every cached demo. Custom data is lost unless exported first."""
    if not force and not typer.confirm(
        "Are you sure you want to clear the demo cache? "
        "Comments and statuses that were not exported will be lost."
    ):
        console.print("[yellow]Operation cancelled.[/yellow]")
        raise typer.Abort()

    cache = DemoCache(CONFIG_DIR)
    count = cache.count()
    cache.clear()
    console.print(f"[green]✓ Cache cleared ({count} demos removed).[/green]")
