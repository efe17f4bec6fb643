"""In-memory workout collection."""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .exceptions import DuplicateIdError, InvalidInputError, NotFoundError
from .models import WorkoutRecord

logger = logging.getLogger(__name__)


class WorkoutStore:
    """
    Ordered collection of WorkoutRecords, oldest first.

    The store is the only mutator of the collection. Ids are unique at all
    times; every mutator either succeeds completely or leaves the
    collection untouched.
    """

    def __init__(self) -> None:
        self._records: List[WorkoutRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WorkoutRecord]:
        return iter(tuple(self._records))

    def __contains__(self, workout_id: object) -> bool:
        return self._index_of(workout_id) is not None

    def _index_of(self, workout_id: object) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == workout_id:
                return index
        return None

    def add(self, record: WorkoutRecord) -> WorkoutRecord:
        """
        Append a record.

        Raises:
            DuplicateIdError: If a record with the same id is present
        """
        if record.id in self:
            raise DuplicateIdError(record.id)
        self._records.append(record)
        logger.debug(f"Added workout {record.id} ({record.kind.value})")
        return record

    def find_by_id(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Return the first record with workout_id, or None."""
        index = self._index_of(workout_id)
        return self._records[index] if index is not None else None

    def get(self, workout_id: str) -> WorkoutRecord:
        """
        Return the record with workout_id.

        Raises:
            NotFoundError: If no record has that id
        """
        record = self.find_by_id(workout_id)
        if record is None:
            raise NotFoundError(workout_id)
        return record

    def remove_by_id(self, workout_id: str) -> WorkoutRecord:
        """
        Remove a record and return it for downstream cleanup.

        Raises:
            NotFoundError: If no record has that id
        """
        index = self._index_of(workout_id)
        if index is None:
            raise NotFoundError(workout_id)
        record = self._records.pop(index)
        logger.debug(f"Removed workout {workout_id}")
        return record

    def update(self, record: WorkoutRecord) -> WorkoutRecord:
        """
        Replace the record sharing record.id, keeping its position.

        Returns:
            The record that was replaced

        Raises:
            NotFoundError: If no record has that id
        """
        index = self._index_of(record.id)
        if index is None:
            raise NotFoundError(record.id)
        previous = self._records[index]
        self._records[index] = record
        logger.debug(f"Updated workout {record.id}")
        return previous

    def insert_at(self, index: int, record: WorkoutRecord) -> WorkoutRecord:
        """Insert a record at index; used to roll back a removal."""
        if record.id in self:
            raise DuplicateIdError(record.id)
        self._records.insert(index, record)
        return record

    def position_of(self, workout_id: str) -> int:
        """
        Index of the record in insertion order.

        Raises:
            NotFoundError: If no record has that id
        """
        index = self._index_of(workout_id)
        if index is None:
            raise NotFoundError(workout_id)
        return index

    def record_interaction(self, workout_id: str) -> WorkoutRecord:
        """
        Bump the interaction counter of a record.

        Raises:
            NotFoundError: If no record has that id
        """
        record = self.get(workout_id).with_interaction()
        self.update(record)
        return record

    def replace_all(self, records: Iterable[Any]) -> List[WorkoutRecord]:
        """
        Replace the whole collection; used only for hydration.

        Each entry may be a WorkoutRecord or a raw persisted mapping.
        Malformed entries and repeated ids are discarded and logged rather
        than failing the load.

        Returns:
            The accepted records, in order
        """
        accepted: List[WorkoutRecord] = []
        seen = set()

        for position, entry in enumerate(records):
            if isinstance(entry, WorkoutRecord):
                record = entry
            else:
                try:
                    record = WorkoutRecord.from_dict(entry)
                except InvalidInputError as e:
                    logger.warning(
                        f"Discarding malformed workout at position {position}: "
                        f"{e.message} {e.details or ''}".rstrip()
                    )
                    continue

            if record.id in seen:
                logger.warning(
                    f"Discarding workout at position {position}: duplicate id {record.id}"
                )
                continue

            seen.add(record.id)
            accepted.append(record)

        self._records = accepted
        logger.info(f"Hydrated store with {len(accepted)} workouts")
        return list(accepted)

    def snapshot(self) -> Tuple[WorkoutRecord, ...]:
        """Read-only copy of the ordered collection."""
        return tuple(self._records)
