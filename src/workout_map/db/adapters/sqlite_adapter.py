"""SQLite key-value adapter.

Stores every key in a single two-column table. A connection is opened per
operation, so the adapter can be shared by the CLI and the API without
holding a file handle between gestures.

SQLite-Specific Considerations:
    - WAL journal mode for concurrent readers
    - Values stored as TEXT, one row per key
    - sqlite3 and filesystem errors surface as StorageError
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from . import KeyValueStore
from ...exceptions import StorageError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT (datetime('now'))
);
"""


class SQLiteAdapter(KeyValueStore):
    """SQLite implementation of the KeyValueStore interface.

    Usage:
        adapter = SQLiteAdapter(db_path="workouts.db")
        adapter.set("workouts", "[]")
    """

    def __init__(self, db_path: str):
        """Initialize the adapter and create the table if missing.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self.initialize()

    def initialize(self) -> None:
        """Create the kv_store table."""
        with self._get_connection("initialize") as conn:
            conn.executescript(SCHEMA)

    @contextmanager
    def _get_connection(self, operation: str):
        """Get a database connection, committing on success."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot open {self.db_path}: {e}", operation=operation) from e

        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            yield conn
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            conn.rollback()
            logger.error(f"SQLite {operation} failed on {self.db_path}: {e}")
            raise StorageError(f"Storage {operation} failed: {e}", operation=operation) from e
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._get_connection("get") as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._get_connection("set") as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._get_connection("delete") as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
