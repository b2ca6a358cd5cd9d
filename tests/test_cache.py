"""Tests for the demo cache and its custom data backups."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from demos_manager.exceptions import CacheClearError, CacheExportError
from demos_manager.models.demo import DemoRecord
from demos_manager.storage.cache import DemoCache


def _fill(cache: DemoCache) -> None:
    cache.put(DemoRecord(id="a", name="de_dust2", comment="clutch at 12:03", status="Watched"))
    cache.put(DemoRecord(id="b", name="de_inferno"))
    cache.put(DemoRecord(id="c", name="de_nuke", status="To watch"))


def test_empty_cache_does_not_exist(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path)
    assert not cache.exists()
    assert cache.count() == 0


def test_put_and_get_round_trip(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path)
    record = DemoRecord(id="a", name="de_dust2", path="/demos/de_dust2.dem")
    assert cache.put(record)
    assert cache.exists()
    assert cache.get("a") == record
    assert cache.get("missing") is None


def test_corrupt_entry_is_skipped(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path)
    _fill(cache)
    (cache.cache_dir / "broken.json").write_text("{not json", encoding="utf-8")
    assert {r.id for r in cache.records()} == {"a", "b", "c"}


def test_export_writes_only_customized_demos(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path / "cache")
    _fill(cache)
    backup = tmp_path / "out" / "backup.json"

    assert cache.export_custom_data(backup) == 2

    payload = json.loads(backup.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    assert {d["id"] for d in payload["demos"]} == {"a", "c"}


def test_export_failure_raises(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path / "cache")
    _fill(cache)
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(CacheExportError):
        cache.export_custom_data(blocker / "backup.json")


def test_import_restores_custom_data_after_clear(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path / "cache")
    _fill(cache)
    backup = tmp_path / "backup.json"
    cache.export_custom_data(backup)

    cache.clear()
    assert not cache.exists()
    cache.put(DemoRecord(id="a", name="de_dust2"))
    cache.put(DemoRecord(id="b", name="de_inferno"))

    assert cache.import_custom_data(backup) == 1
    restored = cache.get("a")
    assert restored.comment == "clutch at 12:03"
    assert restored.status == "Watched"


def test_import_skips_invalid_entries(tmp_path: Path) -> None:
    cache = DemoCache(tmp_path / "cache")
    cache.put(DemoRecord(id="a", name="de_dust2"))
    backup = tmp_path / "backup.json"
    backup.write_text(
        json.dumps({"version": 1, "demos": [{"id": "a", "status": "Bogus"}, "junk"]}),
        encoding="utf-8",
    )
    assert cache.import_custom_data(backup) == 0
    assert cache.get("a").status == "None"


@pytest.mark.parametrize("content", ["{not json", "[]", '{"demos": 3}'])
def test_import_rejects_malformed_backup(tmp_path: Path, content: str) -> None:
    cache = DemoCache(tmp_path / "cache")
    backup = tmp_path / "backup.json"
    backup.write_text(content, encoding="utf-8")
    with pytest.raises(CacheExportError):
        cache.import_custom_data(backup)


def test_clear_failure_raises(tmp_path: Path, monkeypatch) -> None:
    cache = DemoCache(tmp_path)
    _fill(cache)

    def locked(self, *args, **kwargs):
        raise PermissionError("file in use")

    monkeypatch.setattr(Path, "unlink", locked)
    with pytest.raises(CacheClearError, match="file in use"):
        cache.clear()
