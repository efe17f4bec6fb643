"""
Workout persistence.

Serializes the full workout collection as a JSON array under one fixed key
of a KeyValueStore. Validation of individual entries is left to
WorkoutStore.replace_all; this layer only guarantees that load() returns a
list, whatever the medium holds.
"""

import json
import logging
from typing import Any, Iterable, List

from .adapters import KeyValueStore
from ..exceptions import PersistenceCorruptError, StorageError
from ..models import WorkoutRecord

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "workouts"


class WorkoutPersistence:
    """Save, load and clear the workout collection."""

    def __init__(self, adapter: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        """
        Args:
            adapter: Storage medium
            key: Key holding the serialized collection
        """
        self.adapter = adapter
        self.key = key

    @staticmethod
    def serialize(records: Iterable[WorkoutRecord]) -> str:
        """Serialize records to the persisted JSON array."""
        return json.dumps(
            [record.to_dict() for record in records],
            ensure_ascii=False,
            allow_nan=False,
        )

    @staticmethod
    def parse(payload: str) -> List[Any]:
        """
        Parse a persisted payload into raw entries.

        Raises:
            PersistenceCorruptError: If the payload is not a JSON array
        """
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, TypeError) as e:
            raise PersistenceCorruptError(
                f"Stored workouts are not valid JSON: {e}"
            ) from e
        if not isinstance(data, list):
            raise PersistenceCorruptError(
                f"Stored workouts must be a JSON array, got {type(data).__name__}"
            )
        return data

    def save(self, records: Iterable[WorkoutRecord]) -> None:
        """
        Overwrite the stored collection.

        Raises:
            StorageError: If the records cannot be encoded or the medium
                fails to write
        """
        records = list(records)
        try:
            payload = self.serialize(records)
        except (TypeError, ValueError) as e:
            raise StorageError(
                f"Workouts could not be encoded: {e}", operation="serialize"
            ) from e
        self.adapter.set(self.key, payload)
        logger.debug(f"Saved {len(records)} workouts under '{self.key}'")

    def load(self) -> List[Any]:
        """
        Read the stored collection as raw entries.

        An absent key yields an empty list. A corrupt payload is logged and
        also yields an empty list.

        Raises:
            StorageError: If the medium fails to read
        """
        payload = self.adapter.get(self.key)
        if payload is None:
            return []
        try:
            return self.parse(payload)
        except PersistenceCorruptError as e:
            logger.warning(f"Discarding unreadable data under '{self.key}': {e.message}")
            return []

    def clear(self) -> None:
        """Remove the stored collection entirely."""
        self.adapter.delete(self.key)
        logger.info(f"Cleared stored workouts under '{self.key}'")
