"""Shared fakes and fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from demos_manager.core.events import AppEvent, EventChannel
from demos_manager.core.prompts import DialogStyle, FileFilter, UserChoice
from demos_manager.storage.config_manager import ConfigManager


@dataclass
class FakePrompter:
    """Answers questions from a script and records everything it was asked."""

    answers: list[UserChoice] = field(default_factory=list)
    save_path: Path | None = None
    folder: Path | None = None
    confirms: list[tuple[str, DialogStyle]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    save_requests: list[tuple[str, FileFilter]] = field(default_factory=list)

    async def confirm(self, message: str, style: DialogStyle) -> UserChoice:
        self.confirms.append((message, style))
        if style is DialogStyle.AFFIRMATIVE:
            return UserChoice.AFFIRMATIVE
        return self.answers.pop(0) if self.answers else UserChoice.NEGATIVE

    async def show_error(self, message: str) -> None:
        self.errors.append(message)

    async def choose_save_file(self, default_name: str, file_filter: FileFilter) -> Path | None:
        self.save_requests.append((default_name, file_filter))
        return self.save_path

    async def choose_folder(self, start_path: Path) -> Path | None:
        return self.folder


@dataclass
class FakeCache:
    has_data: bool = True
    export_error: Exception | None = None
    clear_error: Exception | None = None
    exported: list[Path] = field(default_factory=list)
    clear_calls: int = 0

    def exists(self) -> bool:
        return self.has_data

    def export_custom_data(self, path: Path) -> int:
        if self.export_error:
            raise self.export_error
        self.exported.append(path)
        path.write_text('{"version": 1, "demos": []}', encoding="utf-8")
        return 0

    def clear(self) -> None:
        if self.clear_error:
            raise self.clear_error
        self.clear_calls += 1
        self.has_data = False


@dataclass
class RecordingSubscriber:
    events: list[AppEvent] = field(default_factory=list)

    def __call__(self, event: AppEvent) -> None:
        self.events.append(event)


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def settings(tmp_path: Path) -> ConfigManager:
    manager = ConfigManager(tmp_path / "config" / "config.ini")
    manager.load()
    return manager


@pytest.fixture
def events() -> tuple[EventChannel, RecordingSubscriber]:
    channel = EventChannel()
    subscriber = RecordingSubscriber()
    channel.subscribe(subscriber)
    return channel, subscriber
