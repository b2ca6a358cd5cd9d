"""
The ordered registry of folders scanned for demos.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from demos_manager.exceptions import ConfigurationError
from demos_manager.storage.config_manager import FOLDERS, ConfigManager

from .events import AppEvent, EventChannel

log = logging.getLogger(__name__)

DEFAULT_FOLDER_NAMES = ("csgo", "replays")


class AddStatus(Enum):
    ADDED = "added"
    REJECTED = "rejected"


class RejectReason(Enum):
    DUPLICATE = "duplicate"
    INVALID = "invalid"


class RemoveStatus(Enum):
    REMOVED = "removed"
    NO_OP = "no_op"


@dataclass(frozen=True)
class FolderAddResult:
    status: AddStatus
    path: str
    reason: RejectReason | None = None

    @property
    def added(self) -> bool:
        return self.status is AddStatus.ADDED


@dataclass(frozen=True)
class FolderRemoveResult:
    status: RemoveStatus
    path: str

    @property
    def removed(self) -> bool:
        return self.status is RemoveStatus.REMOVED


def primary_drive_root() -> Path:
    """`C:\\` on a typical Windows install, `/` elsewhere."""
    return Path(Path.home().anchor or os.sep)


def normalize_folder(path: str | Path) -> str:
    """The absolute, resolved form of `path`, as stored in settings."""
    return str(Path(path).expanduser().resolve())


def folder_key(path: str) -> str:
    """Identity used to compare folders. Case is ignored on every platform."""
    return os.path.normcase(path).casefold()


def is_accessible_dir(path: str | Path) -> bool:
    candidate = Path(path).expanduser()
    return candidate.is_dir() and os.access(candidate, os.R_OK | os.X_OK)


def discover_default_folders(root: Path | None = None) -> list[str]:
    """Returns the default folder names that exist under the drive root."""
    root = root or primary_drive_root()
    found = []
    for name in DEFAULT_FOLDER_NAMES:
        candidate = root / name
        if is_accessible_dir(candidate):
            found.append(normalize_folder(candidate))
    return found


class FolderRegistry:
    """
    Keeps the ordered, duplicate-free list of watched folders.

    Every mutation is written through the settings store before the next one
    is accepted. Selection state is the caller's concern: check that a folder
    is selected before calling `remove`.
    """

    def __init__(self, settings: ConfigManager, events: EventChannel | None = None):
        self.settings = settings
        self.events = events
        self._folders: list[str] = []
        self._lock = asyncio.Lock()
        self.reload()

    def reload(self) -> None:
        """Rebuilds the folder list from settings, keeping the first of any case variants."""
        folders: dict[str, str] = {}
        for folder in self.settings.get_list(FOLDERS):
            key = folder_key(folder)
            if key in folders:
                log.debug(f"Ignoring duplicate watched folder '{folder}'.")
                continue
            folders[key] = folder
        self._folders = list(folders.values())

    def seed_defaults(self, root: Path | None = None) -> list[str]:
        """
        On first run (no folder list persisted yet) registers the default
        folders found under the drive root.
        """
        if self.settings.has_key(FOLDERS):
            return []
        defaults = discover_default_folders(root)
        self._folders = defaults
        self._persist()
        if defaults:
            log.info(f"Registered default folders: {', '.join(defaults)}")
        return defaults

    def current_folders(self) -> tuple[str, ...]:
        return tuple(self._folders)

    def __len__(self) -> int:
        return len(self._folders)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)) or not str(path):
            return False
        try:
            return self._index_of(normalize_folder(path)) is not None
        except (OSError, ValueError):
            return False

    def _index_of(self, normalized: str) -> int | None:
        key = folder_key(normalized)
        for index, folder in enumerate(self._folders):
            if folder_key(folder) == key:
                return index
        return None

    async def add(self, path: str | Path) -> FolderAddResult:
        """
        Raises:
            ConfigurationError: If the updated list could not be saved. The
            registry is left unchanged.
        """
        async with self._lock:
            if not str(path).strip():
                return FolderAddResult(AddStatus.REJECTED, "", RejectReason.INVALID)

            try:
                normalized = normalize_folder(path)
            except (OSError, ValueError):
                return FolderAddResult(AddStatus.REJECTED, str(path), RejectReason.INVALID)
            if self._index_of(normalized) is not None:
                log.debug(f"Folder '{normalized}' is already watched.")
                return FolderAddResult(AddStatus.REJECTED, normalized, RejectReason.DUPLICATE)
            if not is_accessible_dir(normalized):
                log.warning(f"[yellow]'{path}' is not an accessible folder.[/yellow]")
                return FolderAddResult(AddStatus.REJECTED, normalized, RejectReason.INVALID)

            self._folders.append(normalized)
            try:
                await asyncio.to_thread(self._persist)
            except ConfigurationError:
                self._folders.remove(normalized)
                self.settings.set_list(FOLDERS, self._folders)
                raise

        log.info(f"Added watched folder '{normalized}'.")
        self._publish_change()
        return FolderAddResult(AddStatus.ADDED, normalized)

    async def remove(self, path: str | Path) -> FolderRemoveResult:
        """
        Raises:
            ConfigurationError: If the updated list could not be saved. The
            registry is left unchanged.
        """
        async with self._lock:
            if not str(path).strip():
                return FolderRemoveResult(RemoveStatus.NO_OP, "")

            try:
                normalized = normalize_folder(path)
            except (OSError, ValueError):
                return FolderRemoveResult(RemoveStatus.NO_OP, str(path))
            index = self._index_of(normalized)
            if index is None:
                return FolderRemoveResult(RemoveStatus.NO_OP, normalized)

            removed = self._folders.pop(index)
            try:
                await asyncio.to_thread(self._persist)
            except ConfigurationError:
                self._folders.insert(index, removed)
                self.settings.set_list(FOLDERS, self._folders)
                raise

        log.info(f"Removed watched folder '{removed}'.")
        self._publish_change()
        return FolderRemoveResult(RemoveStatus.REMOVED, removed)

    def _persist(self) -> None:
        self.settings.set_list(FOLDERS, self._folders)
        self.settings.flush()

    def _publish_change(self) -> None:
        if self.events:
            self.events.publish(AppEvent.FOLDERS_CHANGED)
