"""Tests for WorkoutStore - the ordered workout collection."""

import logging

import pytest

from workout_map.db.persistence import WorkoutPersistence
from workout_map.exceptions import DuplicateIdError, NotFoundError
from workout_map.models import create_cycling, create_running
from workout_map.store import WorkoutStore


@pytest.fixture
def store():
    return WorkoutStore()


@pytest.fixture
def filled_store(store, running_record, cycling_record):
    store.add(running_record)
    store.add(cycling_record)
    return store


class TestAddAndFind:
    """Tests for add / find_by_id / get."""

    def test_find_after_add(self, store, running_record):
        store.add(running_record)
        assert store.find_by_id(running_record.id) is running_record
        assert running_record.id in store
        assert len(store) == 1

    def test_find_missing_returns_none(self, store):
        assert store.find_by_id("nope") is None

    def test_get_missing_raises(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get("nope")
        assert exc_info.value.workout_id == "nope"

    def test_duplicate_id_rejected(self, store, running_record):
        store.add(running_record)
        clone = create_cycling(1, 1, (0, 0), 1, workout_id=running_record.id)
        with pytest.raises(DuplicateIdError):
            store.add(clone)
        assert store.snapshot() == (running_record,)

    def test_insertion_order_preserved(self, store):
        records = [create_running(i + 1, 10, (0, 0), 170) for i in range(5)]
        for record in records:
            store.add(record)
        assert list(store) == records
        assert [store.position_of(r.id) for r in records] == [0, 1, 2, 3, 4]


class TestRemoveAndUpdate:
    """Tests for remove_by_id / update / insert_at / record_interaction."""

    def test_remove_returns_record(self, filled_store, running_record, cycling_record):
        removed = filled_store.remove_by_id(running_record.id)
        assert removed is running_record
        assert filled_store.snapshot() == (cycling_record,)

    def test_get_fails_after_remove(self, filled_store, running_record):
        filled_store.remove_by_id(running_record.id)
        assert filled_store.find_by_id(running_record.id) is None
        with pytest.raises(NotFoundError):
            filled_store.get(running_record.id)

    def test_remove_missing_raises(self, filled_store):
        with pytest.raises(NotFoundError):
            filled_store.remove_by_id("nope")
        assert len(filled_store) == 2

    def test_update_keeps_position(self, filled_store, running_record, cycling_record):
        edited = create_running(
            8, 40, running_record.coordinates, 175,
            workout_id=running_record.id, created_at=running_record.created_at,
        )
        previous = filled_store.update(edited)
        assert previous is running_record
        assert filled_store.snapshot() == (edited, cycling_record)

    def test_update_missing_raises(self, store, running_record):
        with pytest.raises(NotFoundError):
            store.update(running_record)

    def test_insert_at_restores_position(self, filled_store, running_record, cycling_record):
        filled_store.remove_by_id(running_record.id)
        filled_store.insert_at(0, running_record)
        assert filled_store.snapshot() == (running_record, cycling_record)

    def test_record_interaction(self, filled_store, running_record):
        updated = filled_store.record_interaction(running_record.id)
        assert updated.interaction_count == 1
        assert filled_store.get(running_record.id).interaction_count == 1
        assert filled_store.position_of(running_record.id) == 0


class TestSnapshot:
    """Tests for snapshot()."""

    def test_snapshot_is_read_only_copy(self, filled_store, running_record):
        snapshot = filled_store.snapshot()
        assert isinstance(snapshot, tuple)
        filled_store.remove_by_id(running_record.id)
        assert len(snapshot) == 2


class TestReplaceAll:
    """Tests for hydration through replace_all()."""

    def test_accepts_raw_dicts(self, store, running_record, cycling_record):
        accepted = store.replace_all([running_record.to_dict(), cycling_record.to_dict()])
        assert accepted == [running_record, cycling_record]
        assert store.snapshot() == (running_record, cycling_record)

    def test_replaces_previous_contents(self, filled_store, cycling_record):
        filled_store.replace_all([cycling_record])
        assert filled_store.snapshot() == (cycling_record,)

    def test_discards_malformed_entries(self, store, running_record, cycling_record, caplog):
        bad = cycling_record.to_dict()
        bad["distanceKm"] = "abc"
        with caplog.at_level(logging.WARNING, logger="workout_map.store"):
            accepted = store.replace_all([running_record.to_dict(), bad, 42, None])
        assert accepted == [running_record]
        discards = [r for r in caplog.records if "Discarding malformed workout" in r.getMessage()]
        assert len(discards) == 3

    def test_discards_duplicate_ids(self, store, running_record, caplog):
        with caplog.at_level(logging.WARNING, logger="workout_map.store"):
            accepted = store.replace_all([running_record.to_dict(), running_record.to_dict()])
        assert accepted == [running_record]
        assert any("duplicate id" in r.getMessage() for r in caplog.records)

    def test_empty_clears(self, filled_store):
        assert filled_store.replace_all([]) == []
        assert len(filled_store) == 0

    def test_round_trip_law(self, filled_store):
        """replace_all(parse(serialize(snapshot()))) reproduces the snapshot."""
        original = filled_store.snapshot()
        payload = WorkoutPersistence.serialize(original)
        restored = WorkoutStore()
        restored.replace_all(WorkoutPersistence.parse(payload))
        assert restored.snapshot() == original
