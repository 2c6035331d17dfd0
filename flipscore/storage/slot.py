"""
SQLite key-value slot for scoreboard snapshots.

This module provides a tiny key-value table in SQLite that stands in for the
browser's local storage: one text blob per key, last writer wins.
"""

import logging
import sqlite3
import threading
from typing import Optional

logger = logging.getLogger("flipscore.storage")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS slots (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""


class SQLiteStateSlot:
    """
    Store and retrieve text blobs by key in SQLite.

    One slot may be shared by several sessions, so statements on its
    connection are serialized.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the slot store.

        Args:
            db_path: Optional path to the database file. If None, uses an
                in-memory database that lives as long as this object.
        """
        self.db_path = db_path
        # Streamlit reruns the script on a worker thread, not the one that built us
        self.conn = sqlite3.connect(
            db_path if db_path else ":memory:", check_same_thread=False
        )
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self.initialize_database()

    def initialize_database(self) -> None:
        """Create the slots table if it does not exist yet."""
        cursor = self.conn.cursor()
        cursor.executescript(SCHEMA_SQL)
        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def read(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Returns:
            The stored text, or None if nothing was written under that key
        """
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute("SELECT value FROM slots WHERE key = ?", (key,))
            row = cursor.fetchone()
        return row["value"] if row else None

    def write(self, key: str, value: str) -> None:
        """Store a blob under a key, replacing whatever was there."""
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                INSERT INTO slots (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
            self.conn.commit()

    def delete(self, key: str) -> None:
        """Remove the blob stored under a key, if any."""
        with self._lock:
            cursor = self.conn.cursor()
            cursor.execute("DELETE FROM slots WHERE key = ?", (key,))
            self.conn.commit()
