"""
Console implementation of the prompt interface using Rich.
"""

import asyncio
import sys
from pathlib import Path

from pathvalidate import sanitize_filepath
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from demos_manager.core.prompts import DialogStyle, FileFilter, UserChoice

CANCEL_TOKEN = "-"


class ConsolePrompter:
    """
    Asks questions on the terminal. Blocking Rich prompts run in a worker
    thread so the event loop stays free.

    When stdin is not a terminal every question is answered Negative and
    every path selection is cancelled.
    """

    def __init__(self, console: Console | None = None, interactive: bool | None = None):
        self.console = console or Console()
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    async def confirm(self, message: str, style: DialogStyle) -> UserChoice:
        if style is DialogStyle.AFFIRMATIVE:
            self.console.print(Panel(message, border_style="cyan"))
            return UserChoice.AFFIRMATIVE

        if not self.interactive:
            self.console.print(f"[dim]{message} (no terminal, answering no)[/dim]")
            return UserChoice.NEGATIVE

        try:
            answer = await asyncio.to_thread(
                Confirm.ask, message, console=self.console, default=False
            )
        except (EOFError, KeyboardInterrupt):
            return UserChoice.CANCEL
        return UserChoice.AFFIRMATIVE if answer else UserChoice.NEGATIVE

    async def show_error(self, message: str) -> None:
        self.console.print(Panel(message, title="[bold red]Error[/bold red]", border_style="red"))

    async def choose_save_file(
        self, default_name: str, file_filter: FileFilter
    ) -> Path | None:
        answer = await self._ask(
            f"Save as ({file_filter.description}, '-' to cancel)",
            str(Path.cwd() / default_name),
        )
        if not answer:
            return None

        path = Path(sanitize_filepath(answer, platform="auto")).expanduser()
        if file_filter.suffix and path.suffix.lower() != file_filter.suffix:
            path = path.with_name(path.name + file_filter.suffix)
        return path

    async def choose_folder(self, start_path: Path) -> Path | None:
        answer = await self._ask("Folder to add ('-' to cancel)", str(start_path))
        return Path(answer).expanduser() if answer else None

    async def _ask(self, message: str, default: str) -> str | None:
        if not self.interactive:
            return None
        try:
            answer = await asyncio.to_thread(
                Prompt.ask, message, console=self.console, default=default
            )
        except (EOFError, KeyboardInterrupt):
            return None
        answer = answer.strip()
        return None if answer in ("", CANCEL_TOKEN) else answer
