"""
Runs the backup-before-clear workflow when the demo cache must be invalidated.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from demos_manager.exceptions import CacheClearError, CacheExportError

from .prompts import JSON_FILTER, DialogStyle, Prompter, UserChoice
from .version_gate import GateDecision

log = logging.getLogger(__name__)

BACKUP_QUESTION = (
    "This update requires clearing custom data from the cache (your suspects "
    "list will not be removed). Do you want to save your custom data?"
)
BACKUP_DONE_MESSAGE = (
    "The backup file has been created, you will have to re-import your custom "
    "data from settings."
)
BACKUP_FAILED_MESSAGE = "An error occurred while exporting custom data."
DEFAULT_BACKUP_NAME = "backup.json"


class CacheStore(Protocol):
    def exists(self) -> bool: ...

    def export_custom_data(self, path: Path) -> int: ...

    def clear(self) -> None: ...


class BackupStatus(Enum):
    NOT_NEEDED = "not_needed"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    EXPORTED = "exported"
    FAILED = "failed"


@dataclass(frozen=True)
class BackupOutcome:
    cleared: bool
    status: BackupStatus
    backup_path: Path | None = None


class CacheBackupCoordinator:
    """
    Offers the user a backup of their custom data, then clears the cache.

    The clear happens whether or not the export succeeded; only a failed
    clear is reported back to the caller as an error.
    """

    def __init__(self, prompter: Prompter):
        self.prompter = prompter

    async def run(self, decision: GateDecision, cache: CacheStore) -> BackupOutcome:
        """
        Raises:
            CacheClearError: If the cache could not be cleared.
        """
        if decision is not GateDecision.NEEDS_CLEAR:
            return BackupOutcome(cleared=False, status=BackupStatus.NOT_NEEDED)

        if not await asyncio.to_thread(cache.exists):
            log.debug("Cache invalidation requested but the cache is empty.")
            return BackupOutcome(cleared=False, status=BackupStatus.NOT_NEEDED)

        status, backup_path = await self._offer_backup(cache)

        if status is BackupStatus.FAILED:
            log.warning(
                "[yellow]Clearing the cache although the custom data export "
                "failed; unsaved custom data will be lost.[/yellow]"
            )

        try:
            await asyncio.to_thread(cache.clear)
        except CacheClearError:
            raise
        except OSError as e:
            raise CacheClearError(f"Failed to clear demo cache: {e}") from e

        log.info(f"Demo cache cleared (backup: {status.value}).")
        return BackupOutcome(cleared=True, status=status, backup_path=backup_path)

    async def _offer_backup(self, cache: CacheStore) -> tuple[BackupStatus, Path | None]:
        choice = await self.prompter.confirm(
            BACKUP_QUESTION, DialogStyle.AFFIRMATIVE_AND_NEGATIVE
        )
        if choice is not UserChoice.AFFIRMATIVE:
            return BackupStatus.DECLINED, None

        backup_path = await self.prompter.choose_save_file(DEFAULT_BACKUP_NAME, JSON_FILTER)
        if backup_path is None:
            log.debug("Backup path selection cancelled, skipping export.")
            return BackupStatus.CANCELLED, None

        try:
            await asyncio.to_thread(cache.export_custom_data, backup_path)
        except (CacheExportError, OSError):
            log.error("Custom data export failed.", exc_info=True)
            await self.prompter.show_error(BACKUP_FAILED_MESSAGE)
            return BackupStatus.FAILED, backup_path

        await self.prompter.confirm(BACKUP_DONE_MESSAGE, DialogStyle.AFFIRMATIVE)
        return BackupStatus.EXPORTED, backup_path
