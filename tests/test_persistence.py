"""Tests for WorkoutPersistence and the key-value adapters."""

import dataclasses
import json
import logging
import math
import sqlite3
import tempfile
from pathlib import Path

import pytest

from workout_map.db.adapters import InMemoryAdapter, SQLiteAdapter
from workout_map.db.persistence import DEFAULT_STORAGE_KEY, WorkoutPersistence
from workout_map.exceptions import PersistenceCorruptError, StorageError


@pytest.fixture
def memory_adapter():
    return InMemoryAdapter()


@pytest.fixture
def persistence(memory_adapter):
    return WorkoutPersistence(memory_adapter)


class TestSave:
    """Tests for save()."""

    def test_save_writes_json_array(self, persistence, memory_adapter, running_record, cycling_record):
        persistence.save([running_record, cycling_record])
        payload = json.loads(memory_adapter.get(DEFAULT_STORAGE_KEY))
        assert payload == [running_record.to_dict(), cycling_record.to_dict()]

    def test_save_overwrites(self, persistence, memory_adapter, running_record, cycling_record):
        persistence.save([running_record, cycling_record])
        persistence.save([cycling_record])
        assert len(json.loads(memory_adapter.get(DEFAULT_STORAGE_KEY))) == 1

    def test_save_is_idempotent(self, persistence, memory_adapter, running_record, cycling_record):
        """Saving the same snapshot twice leaves the stored value unchanged."""
        snapshot = (running_record, cycling_record)
        persistence.save(snapshot)
        first = memory_adapter.get(DEFAULT_STORAGE_KEY)
        persistence.save(snapshot)
        assert memory_adapter.get(DEFAULT_STORAGE_KEY) == first
        assert persistence.load() == [r.to_dict() for r in snapshot]

    def test_custom_key(self, memory_adapter, running_record):
        WorkoutPersistence(memory_adapter, key="mine").save([running_record])
        assert memory_adapter.get("mine") is not None
        assert memory_adapter.get(DEFAULT_STORAGE_KEY) is None


class TestLoad:
    """Tests for load() and its soft failure."""

    def test_absent_key_loads_empty(self, persistence):
        assert persistence.load() == []

    def test_load_returns_raw_entries(self, persistence, running_record):
        persistence.save([running_record])
        assert persistence.load() == [running_record.to_dict()]

    @pytest.mark.parametrize("payload", ["{not json", '{"id": 1}', '"text"', "null", ""])
    def test_corrupt_payload_loads_empty(self, memory_adapter, persistence, payload, caplog):
        memory_adapter.set(DEFAULT_STORAGE_KEY, payload)
        with caplog.at_level(logging.WARNING, logger="workout_map.db.persistence"):
            assert persistence.load() == []
        assert any("unreadable" in r.getMessage() for r in caplog.records)

    def test_non_mapping_entries_pass_through(self, memory_adapter, persistence):
        memory_adapter.set(DEFAULT_STORAGE_KEY, '[1, "x", {"id": "a"}]')
        assert persistence.load() == [1, "x", {"id": "a"}]

    def test_parse_raises_on_non_array(self):
        with pytest.raises(PersistenceCorruptError):
            WorkoutPersistence.parse('{"a": 1}')


class TestClear:
    """Tests for clear()."""

    def test_clear_removes_key(self, persistence, memory_adapter, running_record):
        persistence.save([running_record])
        persistence.clear()
        assert memory_adapter.get(DEFAULT_STORAGE_KEY) is None
        assert persistence.load() == []

    def test_clear_without_data(self, persistence):
        persistence.clear()
        assert persistence.load() == []


class TestSQLiteAdapter:
    """Tests for the SQLite key-value adapter."""

    def test_creates_table(self, temp_db_path):
        SQLiteAdapter(db_path=temp_db_path)
        conn = sqlite3.connect(temp_db_path)
        try:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='kv_store'"
            ).fetchone()
        finally:
            conn.close()
        assert row is not None

    def test_uses_custom_db_path(self, temp_db_path):
        assert SQLiteAdapter(db_path=temp_db_path).db_path == Path(temp_db_path)

    def test_set_get_delete(self, temp_db_path):
        adapter = SQLiteAdapter(db_path=temp_db_path)
        assert adapter.get("k") is None
        adapter.set("k", "v1")
        adapter.set("k", "v2")
        assert adapter.get("k") == "v2"
        adapter.delete("k")
        assert adapter.get("k") is None
        adapter.delete("k")

    def test_values_survive_new_instance(self, temp_db_path, running_record):
        WorkoutPersistence(SQLiteAdapter(db_path=temp_db_path)).save([running_record])
        reloaded = WorkoutPersistence(SQLiteAdapter(db_path=temp_db_path)).load()
        assert reloaded == [running_record.to_dict()]

    def test_unopenable_path_raises_storage_error(self):
        with tempfile.TemporaryDirectory() as directory:
            with pytest.raises(StorageError):
                SQLiteAdapter(db_path=directory)


class TestSaveEncoding:
    """Records that cannot be encoded surface as StorageError."""

    def test_non_finite_metric_raises_storage_error(self, persistence, memory_adapter, running_record):
        broken = dataclasses.replace(running_record, derived_metric=math.inf)
        with pytest.raises(StorageError) as exc_info:
            persistence.save([broken])
        assert exc_info.value.details["operation"] == "serialize"
        assert memory_adapter.get(DEFAULT_STORAGE_KEY) is None
