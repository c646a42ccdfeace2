# ABOUTME: JSON key-value store on top of the SQLite kv table.
# ABOUTME: Backs the local library with get/set semantics keyed by a string.

import json
import sqlite3
from typing import Any

LIBRARY_KEY = "myshelf:library"


class KeyValueStore:
    """Wraps a sqlite3 connection and stores JSON documents by key."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for a key, or default if unset."""
        cursor = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row is None:
            return default
        return json.loads(row["value"])

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value, replacing any existing one."""
        encoded = json.dumps(value, ensure_ascii=False)
        self._conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET "
            "value = excluded.value, "
            "updated_at = strftime('%Y-%m-%dT%H:%M:%S', 'now')",
            (key, encoded),
        )
        self._conn.commit()


class SqliteBackend:
    """LibraryBackend that keeps the whole library as one JSON array."""

    def __init__(self, conn: sqlite3.Connection, key: str = LIBRARY_KEY) -> None:
        self._kv = KeyValueStore(conn)
        self._key = key

    def load(self) -> list[dict[str, Any]]:
        value = self._kv.get(self._key, default=[])
        return value if isinstance(value, list) else []

    def save(self, books: list[dict[str, Any]]) -> None:
        self._kv.set(self._key, books)
