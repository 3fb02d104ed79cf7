"""Tests for the storage backends."""

from __future__ import annotations

from pathlib import Path

import pytest

from pyfeedlot.exceptions import StorageError, StorageUnavailableError
from pyfeedlot.storage import JsonFileStorage, MemoryStorage, StorageBackend
from pyfeedlot.store import FeedlotStore


class TestMemoryStorage:
    def test_get_set_remove(self) -> None:
        storage = MemoryStorage()
        assert storage.get_item("k") is None
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"
        storage.remove_item("k")
        assert storage.get_item("k") is None
        storage.remove_item("k")

    def test_satisfies_protocol(self) -> None:
        backend: StorageBackend = MemoryStorage()
        backend.set_item("a", "1")
        assert backend.get_item("a") == "1"

    def test_quota_exceeded_keeps_previous_value(self) -> None:
        storage = MemoryStorage(quota_bytes=10)
        storage.set_item("k", "12345")
        with pytest.raises(StorageUnavailableError) as exc_info:
            storage.set_item("k", "x" * 11)
        assert exc_info.value.key == "k"
        assert storage.get_item("k") == "12345"

    def test_quota_counts_other_keys(self) -> None:
        storage = MemoryStorage(quota_bytes=10)
        storage.set_item("a", "123456")
        storage.set_item("a", "1234567890")
        with pytest.raises(StorageUnavailableError):
            storage.set_item("b", "1")

    def test_store_write_failure_propagates(self, clock) -> None:
        store = FeedlotStore(MemoryStorage(quota_bytes=50), clock=clock)
        with pytest.raises(StorageError):
            store.add_cattle({"tag_number": "A1", "lot_id": 1, "notes": "x" * 100})
        assert store.get_all_cattle() == []

    def test_keys_sorted(self) -> None:
        storage = MemoryStorage()
        storage.set_item("b", "")
        storage.set_item("a", "")
        assert storage.keys() == ["a", "b"]
        assert len(storage) == 2


class TestJsonFileStorage:
    def test_round_trip(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path / "data")
        storage.set_item("cflm_lots", '[{"id": 1}]')
        assert (tmp_path / "data" / "cflm_lots.json").read_text(encoding="utf-8") == '[{"id": 1}]'
        assert JsonFileStorage(tmp_path / "data").get_item("cflm_lots") == '[{"id": 1}]'

    def test_missing_key(self, tmp_path: Path) -> None:
        assert JsonFileStorage(tmp_path).get_item("nothing") is None

    def test_remove(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path)
        storage.set_item("k", "v")
        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path)
        storage.set_item("k", "one")
        storage.set_item("k", "two")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
    def test_invalid_key(self, tmp_path: Path, key: str) -> None:
        with pytest.raises(ValueError):
            JsonFileStorage(tmp_path).get_item(key)

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(StorageUnavailableError):
            JsonFileStorage(blocker / "data")

    def test_store_persists_across_instances(self, tmp_path: Path, clock) -> None:
        store = FeedlotStore(JsonFileStorage(tmp_path), clock=clock)
        animal = store.add_cattle({"tag_number": "A1", "lot_id": 3})
        reopened = FeedlotStore(JsonFileStorage(tmp_path), clock=clock)
        assert reopened.get_cattle_by_id(animal.id) == animal
        assert sorted(p.name for p in tmp_path.iterdir()) == ["cflm_cattle.json"]
