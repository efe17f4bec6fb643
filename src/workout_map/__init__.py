"""Workout Map: log running and cycling workouts at map locations."""

from workout_map.controller import ControllerMode, InteractionController
from workout_map.db import (
    InMemoryAdapter,
    KeyValueStore,
    SQLiteAdapter,
    WorkoutPersistence,
)
from workout_map.exceptions import (
    DuplicateIdError,
    InvalidInputError,
    NotFoundError,
    PersistenceCorruptError,
    PositioningUnavailableError,
    StorageError,
    WorkoutMapError,
)
from workout_map.forms import FormInput
from workout_map.models import (
    WorkoutKind,
    WorkoutRecord,
    create_cycling,
    create_running,
    create_workout,
)
from workout_map.session import WorkoutMapSession, create_session
from workout_map.store import WorkoutStore
from workout_map.views import ViewSynchronizer

__version__ = "0.1.0"

__all__ = [
    "ControllerMode",
    "InteractionController",
    "InMemoryAdapter",
    "KeyValueStore",
    "SQLiteAdapter",
    "WorkoutPersistence",
    "DuplicateIdError",
    "InvalidInputError",
    "NotFoundError",
    "PersistenceCorruptError",
    "PositioningUnavailableError",
    "StorageError",
    "WorkoutMapError",
    "FormInput",
    "WorkoutKind",
    "WorkoutRecord",
    "create_cycling",
    "create_running",
    "create_workout",
    "WorkoutMapSession",
    "create_session",
    "WorkoutStore",
    "ViewSynchronizer",
]
