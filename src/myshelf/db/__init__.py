# ABOUTME: Public API for the MyShelf local database layer.
# ABOUTME: Exports connection management, the key-value store, and the SQLite backend.

from myshelf.db.connection import DEFAULT_DB_PATH, open_database
from myshelf.db.kv import LIBRARY_KEY, KeyValueStore, SqliteBackend

__all__ = [
    "DEFAULT_DB_PATH",
    "LIBRARY_KEY",
    "KeyValueStore",
    "SqliteBackend",
    "open_database",
]
