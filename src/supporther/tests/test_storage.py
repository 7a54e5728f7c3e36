"""Tests for the key-value stores."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from supporther.config import Settings
from supporther.storage import (
    CYCLE_START_KEY,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    open_store,
)


@pytest.fixture(params=["memory", "file"])
def any_store(request, tmp_path: Path) -> KeyValueStore:
    if request.param == "memory":
        return InMemoryStore()
    return JsonFileStore(tmp_path / "store.json")


class TestTypedHelpers:
    def test_datetime_round_trip(self, any_store: KeyValueStore) -> None:
        value = datetime(2025, 1, 1, 14, 30)
        any_store.set_datetime(CYCLE_START_KEY, value)
        assert any_store.get(CYCLE_START_KEY) == "2025-01-01T14:30:00"
        assert any_store.get_datetime(CYCLE_START_KEY) == value

    def test_plain_date_stored_as_midnight(self, any_store: KeyValueStore) -> None:
        any_store.set_datetime("d", date(2025, 3, 4))
        assert any_store.get_datetime("d") == datetime(2025, 3, 4)

    def test_missing_values(self, any_store: KeyValueStore) -> None:
        assert any_store.get("nope") is None
        assert any_store.get_datetime("nope") is None
        assert any_store.get_set("nope") == set()

    def test_undecodable_datetime(self, any_store: KeyValueStore) -> None:
        any_store.set("d", "yesterday-ish")
        assert any_store.get_datetime("d") is None

    def test_set_round_trip(self, any_store: KeyValueStore) -> None:
        any_store.set_set("days", {3, 1, 2})
        assert any_store.get("days") == [1, 2, 3]
        assert any_store.get_set("days", int) == {1, 2, 3}

    def test_undecodable_set(self, any_store: KeyValueStore) -> None:
        any_store.set("days", "not a list")
        assert any_store.get_set("days", int) == set()

    def test_delete(self, any_store: KeyValueStore) -> None:
        any_store.set("k", 1)
        any_store.delete("k")
        any_store.delete("k")
        assert any_store.get("k") is None


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        JsonFileStore(path).set_datetime(CYCLE_START_KEY, datetime(2025, 1, 1))
        assert JsonFileStore(path).get_datetime(CYCLE_START_KEY) == datetime(2025, 1, 1)
        assert json.loads(path.read_text())[CYCLE_START_KEY] == "2025-01-01T00:00:00"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "store.json"
        JsonFileStore(path).set("k", "v")
        assert path.exists()
        assert not path.with_name("store.json.tmp").exists()

    def test_corrupt_file_starts_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{ definitely not json")
        store = JsonFileStore(path)
        assert store.get(CYCLE_START_KEY) is None
        store.set("k", "v")
        assert json.loads(path.read_text()) == {"k": "v"}

    def test_non_object_file_starts_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]")
        assert JsonFileStore(path).get("0") is None

    def test_write_failure_is_logged_not_raised(self, tmp_path: Path, caplog) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = JsonFileStore(blocker / "store.json")
        store.set("k", "v")
        assert store.get("k") == "v"
        assert "Failed to write store" in caplog.text


class TestOpenStore:
    def test_uses_configured_path(self, tmp_path: Path) -> None:
        path = tmp_path / "configured.json"
        store = open_store(Settings(store_path=path))
        assert isinstance(store, JsonFileStore)
        store.set("k", "v")
        assert json.loads(path.read_text()) == {"k": "v"}


class TestInMemoryStore:
    def test_initial_data_copied(self) -> None:
        initial = {"k": "v"}
        store = InMemoryStore(initial)
        store.set("k", "w")
        assert initial == {"k": "v"}
        assert store.snapshot() == {"k": "w"}
