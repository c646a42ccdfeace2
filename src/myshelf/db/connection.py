# ABOUTME: Opens the local MyShelf SQLite database and brings its schema up to date.
# ABOUTME: Every schema step, the initial one included, is a numbered migration.

import logging
import sqlite3
from pathlib import Path

from myshelf.db.schema import MIGRATIONS

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".myshelf" / "library.db"


def schema_version(conn: sqlite3.Connection) -> int:
    """Return the highest applied schema version, or 0 for a fresh file."""
    exists = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='schema_version'"
    ).fetchone()
    if exists is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def migrate(conn: sqlite3.Connection) -> int:
    """Apply every migration newer than the database, oldest first.

    Returns:
        The schema version the database ends up at.
    """
    current = schema_version(conn)
    for version, script in MIGRATIONS:
        if version <= current:
            continue
        logger.info("Migrating library database to schema v%d", version)
        conn.executescript(script)
        current = version
    return current


def open_database(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the MyShelf database.

    Parent directories are created as needed. The connection uses WAL
    journaling and sqlite3.Row rows.

    Args:
        path: Database file. Defaults to ~/.myshelf/library.db.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    migrate(conn)
    return conn
