# ABOUTME: Unit tests for the SQLite schema, key-value store, and SqliteBackend.
# ABOUTME: Validates table structure, migrations, WAL mode, and JSON document storage.

import sqlite3
from pathlib import Path

import pytest

from myshelf.db.connection import migrate, open_database, schema_version
from myshelf.db.kv import LIBRARY_KEY, KeyValueStore, SqliteBackend
from myshelf.db.schema import LATEST_VERSION, SCHEMA_V1
from myshelf.library.store import LibraryBackend


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test_library.db"


@pytest.fixture()
def conn(db_path: Path):
    connection = open_database(db_path)
    yield connection
    connection.close()


class TestOpenDatabase:
    """Tests for open_database() connection factory."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        nested = tmp_path / "deep" / "nested" / "library.db"
        open_database(nested).close()
        assert nested.exists()

    def test_kv_table_columns(self, conn: sqlite3.Connection) -> None:
        columns = {row[1] for row in conn.execute("PRAGMA table_info(kv)").fetchall()}
        assert columns == {"key", "value", "updated_at"}

    def test_schema_at_latest_version(self, conn: sqlite3.Connection) -> None:
        assert schema_version(conn) == LATEST_VERSION == 1

    def test_migrate_is_noop_when_current(self, conn: sqlite3.Connection) -> None:
        assert migrate(conn) == LATEST_VERSION
        rows = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()
        assert rows[0] == 1

    def test_fresh_connection_is_version_zero(self) -> None:
        raw = sqlite3.connect(":memory:")
        assert schema_version(raw) == 0
        raw.close()

    def test_wal_mode(self, conn: sqlite3.Connection) -> None:
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"

    def test_reopen_is_idempotent(self, db_path: Path) -> None:
        open_database(db_path).close()
        conn = open_database(db_path)
        versions = [r[0] for r in conn.execute("SELECT version FROM schema_version").fetchall()]
        conn.close()
        assert versions == [1]

    def test_existing_database_keeps_its_data(self, db_path: Path) -> None:
        """A database whose schema is already current is not re-initialized."""
        raw = sqlite3.connect(str(db_path))
        raw.executescript(SCHEMA_V1)
        raw.execute("INSERT INTO kv (key, value) VALUES (?, ?)", (LIBRARY_KEY, "[1]"))
        raw.commit()
        raw.close()

        conn = open_database(db_path)
        assert KeyValueStore(conn).get(LIBRARY_KEY) == [1]
        conn.close()


class TestKeyValueStore:
    def test_get_missing_returns_default(self, conn: sqlite3.Connection) -> None:
        assert KeyValueStore(conn).get("nope", default={"a": 1}) == {"a": 1}

    def test_set_and_get(self, conn: sqlite3.Connection) -> None:
        kv = KeyValueStore(conn)
        kv.set("prefs", {"theme": "dark", "tags": ["a", "b"]})
        assert kv.get("prefs") == {"theme": "dark", "tags": ["a", "b"]}

    def test_overwrite_replaces_value(self, conn: sqlite3.Connection) -> None:
        kv = KeyValueStore(conn)
        kv.set("count", 1)
        kv.set("count", 2)
        assert kv.get("count") == 2
        assert conn.execute("SELECT COUNT(*) FROM kv").fetchone()[0] == 1


class TestSqliteBackend:
    def test_satisfies_protocol(self, conn: sqlite3.Connection) -> None:
        assert isinstance(SqliteBackend(conn), LibraryBackend)

    def test_empty_library(self, conn: sqlite3.Connection) -> None:
        assert SqliteBackend(conn).load() == []

    def test_save_then_load(self, conn: sqlite3.Connection) -> None:
        backend = SqliteBackend(conn)
        backend.save([{"isbn": "9780547928227", "title": "The Hobbit"}])
        assert backend.load() == [{"isbn": "9780547928227", "title": "The Hobbit"}]
        assert KeyValueStore(conn).get(LIBRARY_KEY)[0]["title"] == "The Hobbit"

    def test_non_list_value_loads_empty(self, conn: sqlite3.Connection) -> None:
        KeyValueStore(conn).set(LIBRARY_KEY, {"oops": True})
        assert SqliteBackend(conn).load() == []
