"""Pytest configuration and fixtures."""

import logging
import os
import tempfile
from datetime import datetime

import pytest

from workout_map.config import Settings
from workout_map.db.adapters import InMemoryAdapter
from workout_map.exceptions import StorageError
from workout_map.models import create_cycling, create_running
from workout_map.session import create_session


class FailingAdapter(InMemoryAdapter):
    """In-memory adapter whose writes can be switched to fail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_writes = False

    def set(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full", operation="set")
        super().set(key, value)

    def delete(self, key):
        if self.fail_writes:
            raise StorageError("disk full", operation="delete")
        super().delete(key)


@pytest.fixture(autouse=True)
def reset_logging_handlers():
    """Drop handlers configure_logging bound to a test's captured stderr."""
    yield
    logger = logging.getLogger("workout_map")
    for handler in list(logger.handlers):
        if getattr(handler, "_workout_map_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    for suffix in ("", "-wal", "-shm"):
        try:
            os.unlink(db_path + suffix)
        except OSError:
            pass


@pytest.fixture
def created_at():
    return datetime(2024, 4, 3, 9, 30)


@pytest.fixture
def running_record(created_at):
    """Running 5 km in 25 min at (10, 20)."""
    return create_running(5, 25, (10, 20), 180, created_at=created_at)


@pytest.fixture
def cycling_record():
    """Cycling 20 km in 60 min."""
    return create_cycling(20, 60, (45.5, -73.6), 300, created_at=datetime(2024, 4, 4, 18, 0))


@pytest.fixture
def settings():
    """Settings with a home location so the map initializes."""
    return Settings(home_latitude=10.0, home_longitude=20.0)


@pytest.fixture
def adapter():
    return FailingAdapter()


@pytest.fixture
def session(settings, adapter):
    """A started session on in-memory storage."""
    return create_session(settings=settings, adapter=adapter)
