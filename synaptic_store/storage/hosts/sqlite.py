"""SQLite-based host store implementation."""

import sqlite3
from pathlib import Path
from typing import List, Optional, Union

from ...core.exceptions import BackendError, QuotaExceededError
from .base import HostStore


class SQLiteHostStore(HostStore):
    """SQLite-backed host store.

    Entries are enumerated in insertion order. Overwriting a key keeps its
    position. Pass ``":memory:"`` for a store that lives as long as the
    process.
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        max_entries: Optional[int] = None,
    ) -> None:
        self.db_path = db_path
        self.max_entries = max_entries
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def in_memory(self) -> bool:
        return str(self.db_path) == ":memory:"

    def _connect(self) -> sqlite3.Connection:
        """Open the connection and create the table on first use."""
        if self._connection is not None:
            return self._connection

        try:
            if not self.in_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            connection = sqlite3.connect(str(self.db_path))
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS items (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            connection.commit()

        except (sqlite3.Error, OSError) as e:
            raise BackendError(f"Failed to open SQLite store: {e}", self.name)

        self._connection = connection
        self.logger.debug("SQLite host store opened", db_path=str(self.db_path))
        return connection

    def close(self) -> None:
        """Close SQLite connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            self.logger.debug("SQLite host store closed", db_path=str(self.db_path))

    def get_item(self, key: str) -> Optional[str]:
        connection = self._connect()
        try:
            row = connection.execute(
                "SELECT value FROM items WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise BackendError(f"Failed to read '{key}': {e}", self.name)

        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        connection = self._connect()
        try:
            if self.max_entries is not None and self._is_new_key(connection, key):
                if self._count(connection) >= self.max_entries:
                    raise QuotaExceededError(self.name, self.max_entries)

            connection.execute(
                """
                INSERT INTO items (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            connection.commit()

        except sqlite3.Error as e:
            raise BackendError(f"Failed to write '{key}': {e}", self.name)

    def remove_item(self, key: str) -> None:
        connection = self._connect()
        try:
            connection.execute("DELETE FROM items WHERE key = ?", (key,))
            connection.commit()
        except sqlite3.Error as e:
            raise BackendError(f"Failed to remove '{key}': {e}", self.name)

    def key(self, index: int) -> Optional[str]:
        if index < 0:
            return None

        connection = self._connect()
        try:
            row = connection.execute(
                "SELECT key FROM items ORDER BY rowid LIMIT 1 OFFSET ?", (index,)
            ).fetchone()
        except sqlite3.Error as e:
            raise BackendError(f"Failed to read key #{index}: {e}", self.name)

        return row[0] if row else None

    def keys(self) -> List[str]:
        connection = self._connect()
        try:
            rows = connection.execute("SELECT key FROM items ORDER BY rowid").fetchall()
        except sqlite3.Error as e:
            raise BackendError(f"Failed to list keys: {e}", self.name)

        return [row[0] for row in rows]

    @property
    def length(self) -> int:
        connection = self._connect()
        try:
            return self._count(connection)
        except sqlite3.Error as e:
            raise BackendError(f"Failed to count entries: {e}", self.name)

    def clear(self) -> None:
        connection = self._connect()
        try:
            connection.execute("DELETE FROM items")
            connection.commit()
        except sqlite3.Error as e:
            raise BackendError(f"Failed to clear store: {e}", self.name)

    def _count(self, connection: sqlite3.Connection) -> int:
        return connection.execute("SELECT COUNT(*) FROM items").fetchone()[0]

    def _is_new_key(self, connection: sqlite3.Connection, key: str) -> bool:
        row = connection.execute("SELECT 1 FROM items WHERE key = ?", (key,)).fetchone()
        return row is None
