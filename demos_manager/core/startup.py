"""
The launch sequence: folder check, version-gated cache invalidation, version
bump and update check, strictly one after the other.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from demos_manager.exceptions import CacheClearError, StartupError
from demos_manager.models.config import CURRENT_RELEASE, ReleaseInfo
from demos_manager.storage.config_manager import (
    APPLICATION_VERSION,
    ENABLE_CHECK_UPDATE,
    LAST_FOLDER,
    ConfigManager,
)

from . import version_gate
from .backup import BackupOutcome, CacheBackupCoordinator, CacheStore
from .events import AppEvent, EventChannel
from .folders import FolderRegistry
from .prompts import DialogStyle, Prompter, UserChoice
from .update_checker import UpdateChecker, UpdateCheckResult, build_update_url
from .version_gate import GateDecision

log = logging.getLogger(__name__)

NO_FOLDERS_WARNING = (
    'It seems that CSGO is not installed on your main hard drive. The defaults "csgo" '
    'and "replays" can not be found. Please add folders from the settings.'
)
CLEAR_FAILED_MESSAGE = (
    "The demo cache could not be cleared. Close any program using it and restart."
)
UPDATE_QUESTION = "A new version is available. Do you want to download it?"


@dataclass(frozen=True)
class StartupReport:
    folders: tuple[str, ...]
    decision: GateDecision
    backup: BackupOutcome
    update: UpdateCheckResult | None


class StartupOrchestrator:
    """
    Runs the launch sequence once per instance.

    Collaborators are passed in explicitly: the settings store, the folder
    registry, the demo cache, the prompter, and the event channel used to
    announce that startup is complete.
    """

    def __init__(
        self,
        settings: ConfigManager,
        registry: FolderRegistry,
        cache: CacheStore,
        prompter: Prompter,
        events: EventChannel,
        release: ReleaseInfo = CURRENT_RELEASE,
        update_checker: UpdateChecker | None = None,
        open_url: Callable[[str], object] | None = None,
    ):
        self.settings = settings
        self.registry = registry
        self.cache = cache
        self.prompter = prompter
        self.events = events
        self.release = release
        self.update_checker = update_checker or UpdateChecker()
        self.open_url = open_url
        self._started = False

    async def run(self, check_for_updates: bool = True) -> StartupReport:
        """
        Raises:
            StartupError: If the sequence already ran on this instance.
            CacheClearError: If a required cache clear failed. The user has
            been told and the stored version is left untouched.
        """
        if self._started:
            raise StartupError("The startup sequence has already run.")
        self._started = True

        folders = self.registry.current_folders()
        if not folders:
            await self.prompter.confirm(NO_FOLDERS_WARNING, DialogStyle.AFFIRMATIVE)

        decision = version_gate.evaluate(
            self.settings.get_string(APPLICATION_VERSION),
            self.release.app_version,
            self.release.require_clear_cache,
        )
        log.debug(f"Version gate decision: {decision.value}")

        try:
            backup = await CacheBackupCoordinator(self.prompter).run(decision, self.cache)
        except CacheClearError as e:
            log.error(f"[red]{e}[/red]")
            await self.prompter.show_error(CLEAR_FAILED_MESSAGE)
            raise

        self.settings.set_string(APPLICATION_VERSION, self.release.version)
        self.settings.flush()

        update = None
        if check_for_updates and self.settings.get_bool(ENABLE_CHECK_UPDATE, True):
            update = await self._check_for_update()

        self.events.publish(AppEvent.STARTUP_COMPLETED)
        return StartupReport(folders=folders, decision=decision, backup=backup, update=update)

    async def _check_for_update(self) -> UpdateCheckResult:
        result = await self.update_checker.check_for_update(
            self.release.app_version, build_update_url(self.release.website)
        )
        if not result.update_available:
            return result

        choice = await self.prompter.confirm(
            UPDATE_QUESTION, DialogStyle.AFFIRMATIVE_AND_NEGATIVE
        )
        if choice is UserChoice.AFFIRMATIVE and self.open_url:
            self.open_url(self.release.website)
        return result

    def on_window_closed(self) -> None:
        """Forgets the last browsed folder when no folder is watched anymore."""
        if not self.registry.current_folders():
            self.settings.set_string(LAST_FOLDER, "")
            self.settings.flush()

    def on_settings_closed(self) -> None:
        """Picks up folder changes made elsewhere and asks views to refresh."""
        self.registry.reload()
        self.events.publish(AppEvent.REFRESH_DEMOS)
