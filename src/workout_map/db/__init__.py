"""Workout persistence and storage adapters."""

from .adapters import KeyValueStore, InMemoryAdapter, SQLiteAdapter
from .persistence import WorkoutPersistence, DEFAULT_STORAGE_KEY

__all__ = [
    "KeyValueStore",
    "InMemoryAdapter",
    "SQLiteAdapter",
    "WorkoutPersistence",
    "DEFAULT_STORAGE_KEY",
]
