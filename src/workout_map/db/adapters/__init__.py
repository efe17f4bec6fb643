"""Key-value storage adapters.

The persistence layer treats its storage medium as an opaque string
key-value store. Each adapter implements the KeyValueStore interface so the
medium can be swapped without touching the store or the controller.

Usage:
    # In-memory (tests, throwaway sessions)
    from workout_map.db.adapters import InMemoryAdapter
    adapter = InMemoryAdapter()

    # SQLite file (CLI, API)
    from workout_map.db.adapters import SQLiteAdapter
    adapter = SQLiteAdapter(db_path="workouts.db")

    adapter.set("workouts", "[]")
    adapter.get("workouts")
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract string key-value store.

    Implementations raise StorageError when the medium itself fails.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, overwriting any prior value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        pass


# Export the adapter classes
from .memory_adapter import InMemoryAdapter
from .sqlite_adapter import SQLiteAdapter

__all__ = [
    "KeyValueStore",
    "InMemoryAdapter",
    "SQLiteAdapter",
]
