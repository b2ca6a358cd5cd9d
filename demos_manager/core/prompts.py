"""
The user-prompt interface the core talks to. Presentation lives in the
implementations (see `demos_manager.cli.prompts`).
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class DialogStyle(Enum):
    AFFIRMATIVE = "affirmative"
    AFFIRMATIVE_AND_NEGATIVE = "affirmative_and_negative"


class UserChoice(Enum):
    AFFIRMATIVE = "affirmative"
    NEGATIVE = "negative"
    CANCEL = "cancel"


@dataclass(frozen=True)
class FileFilter:
    """A save-dialog filter such as `JSON file (*.json)|*.json`."""

    description: str
    pattern: str

    @classmethod
    def parse(cls, value: str) -> "FileFilter":
        description, _, pattern = value.partition("|")
        return cls(description=description.strip(), pattern=(pattern or "*").strip())

    @property
    def suffix(self) -> str:
        """The extension implied by the pattern, e.g. '.json', or '' for '*'."""
        suffix = Path(self.pattern).suffix
        return "" if suffix in ("", ".*") else suffix

    def __str__(self) -> str:
        return f"{self.description}|{self.pattern}"


JSON_FILTER = FileFilter.parse("JSON file (*.json)|*.json")


class Prompter(Protocol):
    async def confirm(self, message: str, style: DialogStyle) -> UserChoice: ...

    async def show_error(self, message: str) -> None: ...

    async def choose_save_file(
        self, default_name: str, file_filter: FileFilter
    ) -> Path | None: ...

    async def choose_folder(self, start_path: Path) -> Path | None: ...
