"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from demos_manager.core.backup import BackupStatus
from demos_manager.core.startup import StartupReport
from demos_manager.core.update_checker import UpdateCheckResult, UpdateStatus
from demos_manager.models.config import AppSettings


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check that the settings file is readable and writable.",
            "• Delete the settings file to start again from defaults.",
        ],
        "CacheClearError": [
            "• Another program may be holding a cached file open.",
            "• Close it and start the application again; the clear is retried.",
        ],
        "CacheExportError": [
            "• Pick a location you are allowed to write to.",
            "• Make sure the backup file is a JSON export from this application.",
        ],
        "InvalidVersionError": [
            "• Versions look like 'major.minor' with up to four numeric parts.",
        ],
        "StartupError": [
            "• The startup sequence can only run once per process.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_folders_table(folders: tuple[str, ...] | list[str]):
    """Displays the watched folders in insertion order."""
    console = Console()
    if not folders:
        console.print(
            "[yellow]No watched folders.[/yellow] "
            "Add one with [cyan]demos-manager folders add <PATH>[/cyan]."
        )
        return

    table = Table(title="Watched Folders")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Folder", style="cyan")
    table.add_column("Status")
    for i, folder in enumerate(folders, 1):
        status = "[green]✓ ok[/green]" if Path(folder).is_dir() else "[red]✗ missing[/red]"
        table.add_row(str(i), folder, status)
    console.print(table)


def print_settings(config_path: Path, settings: AppSettings):
    """Displays the persisted settings."""
    console = Console()
    content = ""
    for key, value in settings.model_dump().items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Settings ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def format_update_result(result: UpdateCheckResult) -> str:
    if result.status is UpdateStatus.UPDATE_AVAILABLE:
        return f"[bold green]Version {result.latest_version} is available.[/bold green]"
    if result.status is UpdateStatus.UP_TO_DATE:
        return "[green]✓ You are running the latest version.[/green]"
    return f"[yellow]⚠️  Could not check for updates ({result.error}).[/yellow]"


def print_startup_report(report: StartupReport):
    """Displays a summary of the launch sequence."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column()

    table.add_row("Watched folders:", str(len(report.folders)))
    table.add_row("Cache:", "[yellow]cleared[/yellow]" if report.backup.cleared else "kept")

    backup_labels = {
        BackupStatus.NOT_NEEDED: "[dim]not needed[/dim]",
        BackupStatus.DECLINED: "declined",
        BackupStatus.CANCELLED: "cancelled",
        BackupStatus.EXPORTED: f"[green]saved to {report.backup.backup_path}[/green]",
        BackupStatus.FAILED: "[red]export failed[/red]",
    }
    table.add_row("Backup:", backup_labels[report.backup.status])
    if report.update is not None:
        table.add_row("Updates:", format_update_result(report.update))

    console.print(
        Panel(table, title="[bold green]✓ Startup Complete[/bold green]", border_style="green")
    )
