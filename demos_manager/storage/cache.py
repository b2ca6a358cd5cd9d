"""
A simple, file-based JSON cache of imported demo records.
Custom user data (comments, statuses) can be exported to a backup file and
re-imported after the cache has been cleared.
"""

import hashlib
import json
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from demos_manager.exceptions import CacheClearError, CacheExportError
from demos_manager.models.demo import DemoRecord

log = logging.getLogger(__name__)

BACKUP_FORMAT_VERSION = 1


class DemoCache:
    """
    Manages a directory of JSON files, one per cached demo record.
    """

    def __init__(self, cache_dir_path: Path):
        """
        Initializes the cache.

        Args:
            cache_dir_path: The directory under which the `demos` cache folder lives.
        """
        self.cache_dir = cache_dir_path / "demos"
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _get_cache_path(self, demo_id: str) -> Path:
        """Generates a safe filename for a given demo id."""
        hashed_key = hashlib.md5(demo_id.encode("utf-8")).hexdigest()  # noqa: S324
        return self.cache_dir / f"{hashed_key}.json"

    def exists(self) -> bool:
        """Returns True if the cache holds at least one demo record."""
        return next(self.cache_dir.glob("*.json"), None) is not None

    def count(self) -> int:
        return sum(1 for _ in self.cache_dir.glob("*.json"))

    def get(self, demo_id: str) -> DemoRecord | None:
        """Retrieves a demo record. Returns None if it is missing or unreadable."""
        cache_path = self._get_cache_path(demo_id)
        if not cache_path.is_file():
            return None
        return self._read_record(cache_path)

    def put(self, record: DemoRecord) -> bool:
        """Saves a demo record, replacing any previous version."""
        cache_path = self._get_cache_path(record.id)
        try:
            cache_path.write_text(record.model_dump_json(), encoding="utf-8")
            return True
        except OSError as e:
            log.warning(f"Cache write failed for demo '{record.id}': {e}")
            return False

    def records(self) -> Iterator[DemoRecord]:
        """Yields every readable record in the cache."""
        for cache_file in sorted(self.cache_dir.glob("*.json")):
            record = self._read_record(cache_file)
            if record is not None:
                yield record

    def _read_record(self, cache_path: Path) -> DemoRecord | None:
        try:
            return DemoRecord.model_validate_json(cache_path.read_text(encoding="utf-8"))
        except (ValidationError, OSError) as e:
            log.debug(f"Cache read failed for '{cache_path.name}': {e}")
            return None

    def export_custom_data(self, path: Path) -> int:
        """
        Writes the custom data of every customized record to a backup file.

        Returns:
            The number of records written.

        Raises:
            CacheExportError: If the backup file cannot be written.
        """
        entries = [r.custom_data() for r in self.records() if r.has_custom_data]
        payload = {"version": BACKUP_FORMAT_VERSION, "demos": entries}
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise CacheExportError(f"Failed to write backup file '{path}': {e}") from e
        log.info(f"Exported custom data of {len(entries)} demos to '{path}'.")
        return len(entries)

    def import_custom_data(self, path: Path) -> int:
        """
        Re-applies a backup file to the demos currently in the cache.

        Entries for demos that are no longer cached are ignored.

        Returns:
            The number of records updated.

        Raises:
            CacheExportError: If the backup file cannot be read or is malformed.
        """
        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
            entries = payload["demos"]
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            raise CacheExportError(f"Failed to read backup file '{path}': {e}") from e
        if not isinstance(entries, list):
            raise CacheExportError(f"Backup file '{path}' has no list of demos.")

        updated = 0
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            record = self.get(str(entry.get("id", "")))
            if record is None:
                continue
            try:
                patched = record.model_copy(
                    update={
                        "comment": entry.get("comment", record.comment),
                        "status": entry.get("status", record.status),
                    }
                )
                patched = DemoRecord.model_validate(patched.model_dump())
            except ValidationError as e:
                log.warning(f"Skipping invalid backup entry for demo '{record.id}': {e}")
                continue
            if self.put(patched):
                updated += 1
        log.info(f"Imported custom data for {updated} demos from '{path}'.")
        return updated

    def clear(self) -> None:
        """
        Removes all records from the cache.

        Raises:
            CacheClearError: If any record could not be removed.
        """
        log.info("Clearing all cached demos...")
        try:
            for cache_file in self.cache_dir.glob("*.json"):
                cache_file.unlink()
        except OSError as e:
            raise CacheClearError(f"Failed to clear demo cache: {e}") from e
