# ABOUTME: Numbered SQL migrations for the MyShelf local key-value database.
# ABOUTME: Each script records its own version in schema_version.

# v1: JSON documents by key, plus the version ledger.
SCHEMA_V1 = """
CREATE TABLE kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

MIGRATIONS: list[tuple[int, str]] = [
    (1, SCHEMA_V1),
]

LATEST_VERSION = MIGRATIONS[-1][0]
