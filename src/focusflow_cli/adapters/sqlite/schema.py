"""Database schema definitions for the local SQLite vault.

The vault is a plain key-value table holding JSON documents, one key per
part of the snapshot.
"""

from __future__ import annotations

import sqlite3

# Schema version tracking
SCHEMA_VERSION = 1

CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at DATETIME NOT NULL
)
"""

CREATE_KV_STORE_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

ALL_TABLES = [
    CREATE_SCHEMA_VERSION_TABLE,
    CREATE_KV_STORE_TABLE,
]

# Keys mirror the browser localStorage keys
KEY_TASKS = "focusflow_tasks"
KEY_NOTES = "focusflow_notes"
KEY_SETTINGS = "focusflow_settings"
KEY_CYCLE = "focusflow_cycle"
KEY_TIMER = "focusflow_timer"
KEY_VERSION = "focusflow_version"

ALL_KEYS = [KEY_TASKS, KEY_NOTES, KEY_SETTINGS, KEY_CYCLE, KEY_TIMER, KEY_VERSION]


def initialize_schema(connection) -> None:
    """Initialize database schema.

    Args:
        connection: sqlite3.Connection object
    """
    cursor = connection.cursor()

    for create_statement in ALL_TABLES:
        cursor.execute(create_statement)

    cursor.execute(
        "INSERT OR IGNORE INTO schema_version (version, applied_at) VALUES (?, datetime('now'))",
        (SCHEMA_VERSION,),
    )

    connection.commit()


def get_schema_version(connection) -> int:
    """Get the highest applied schema version (0 for an empty database)."""
    try:
        row = connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
    except sqlite3.OperationalError:
        return 0
    return row[0] or 0
