"""
Finds demo files inside the watched folders.
"""

import hashlib
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from demos_manager.models.demo import DemoRecord

log = logging.getLogger(__name__)

DEMO_EXTENSION = ".dem"


def demo_id_for(path: Path) -> str:
    """A stable id derived from the demo's file name and size."""
    size = path.stat().st_size
    return hashlib.sha1(f"{path.name.lower()}:{size}".encode()).hexdigest()  # noqa: S324


def scan_folders(folders: Iterable[str]) -> Iterator[DemoRecord]:
    """
    Yields a record for each demo file directly inside the given folders.

    Folders that cannot be read are logged and skipped.
    """
    for folder in folders:
        try:
            entries = sorted(Path(folder).iterdir())
        except OSError as e:
            log.warning(f"[yellow]Cannot scan '{folder}': {e}[/yellow]")
            continue

        for entry in entries:
            if entry.suffix.lower() != DEMO_EXTENSION or not entry.is_file():
                continue
            try:
                yield DemoRecord(id=demo_id_for(entry), name=entry.stem, path=str(entry))
            except OSError as e:
                log.debug(f"Skipping unreadable demo '{entry}': {e}")
