"""
Manages loading, migration and saving of the INI settings file.
"""

import configparser
import logging
from pathlib import Path

from pydantic import ValidationError

from demos_manager.exceptions import ConfigurationError
from demos_manager.models.config import AppSettings

log = logging.getLogger(__name__)

APPLICATION_VERSION = "application_version"
LAST_FOLDER = "last_folder"
ENABLE_CHECK_UPDATE = "enable_check_update"
FOLDERS = "folders"

_DEFAULTS = {
    APPLICATION_VERSION: "",
    LAST_FOLDER: "",
    ENABLE_CHECK_UPDATE: "true",
}


class ConfigManager:
    """
    Handles all operations related to the application's INI settings file.

    Values are held in memory; `flush()` writes them to disk. Components
    receive the same instance by reference instead of reaching for a global.
    """

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)
        self._loaded = False

    def load(self) -> AppSettings:
        """
        Reads the INI file (if any), adds missing default keys and validates it.

        Returns:
            A validated AppSettings snapshot.

        Raises:
            ConfigurationError: If the file cannot be parsed or fails validation.
        """
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(f"Error parsing settings file: {e}") from e
        self._loaded = True

        if self._migrate_if_needed():
            log.debug("Settings file was updated with new default values.")

        return self.snapshot()

    def snapshot(self) -> AppSettings:
        """Validates the in-memory values into an AppSettings model."""
        self._ensure_loaded()
        try:
            return AppSettings(
                application_version=self.get_string(APPLICATION_VERSION),
                last_folder=self.get_string(LAST_FOLDER),
                enable_check_update=self.get_bool(ENABLE_CHECK_UPDATE, True),
                folders=self.get_list(FOLDERS),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Settings validation failed:\n{e}") from e

    def has_key(self, key: str) -> bool:
        self._ensure_loaded()
        return key in self._parser["DEFAULT"]

    def get_string(self, key: str, default: str = "") -> str:
        self._ensure_loaded()
        return self._parser["DEFAULT"].get(key, default)

    def set_string(self, key: str, value: str) -> None:
        self._ensure_loaded()
        self._parser["DEFAULT"][key] = value

    def get_bool(self, key: str, default: bool = False) -> bool:
        self._ensure_loaded()
        try:
            return self._parser["DEFAULT"].getboolean(key, default)
        except ValueError as e:
            raise ConfigurationError(f"Setting '{key}' is not a boolean: {e}") from e

    def set_bool(self, key: str, value: bool) -> None:
        self.set_string(key, "true" if value else "false")

    def get_list(self, key: str) -> list[str]:
        """Reads a multi-line value, one entry per line."""
        return [line.strip() for line in self.get_string(key).splitlines() if line.strip()]

    def set_list(self, key: str, values: list[str]) -> None:
        self.set_string(key, "\n".join(values))

    def flush(self) -> None:
        """
        Writes the in-memory settings to disk.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        self._ensure_loaded()
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                self._parser.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save settings file: {e}") from e

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing settings file."""
        section = self._parser["DEFAULT"]
        needs_saving = False

        for key, default_value in _DEFAULTS.items():
            if key not in section:
                section[key] = default_value
                needs_saving = True
                log.debug(
                    f"Migrating settings: added missing key '{key}' with "
                    f"value '{default_value}'."
                )

        if needs_saving:
            try:
                self.flush()
            except ConfigurationError as e:
                log.error(f"Could not save migrated settings file: {e}")
                return False

        return needs_saving
