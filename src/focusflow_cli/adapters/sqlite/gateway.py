"""SQLite implementation of PersistenceGateway.

Each part of the snapshot is stored as a JSON document under its own key,
the same layout the browser version keeps in localStorage.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import UTC, datetime

from focusflow_cli.adapters.sqlite import schema
from focusflow_cli.adapters.sqlite.connection import get_connection
from focusflow_cli.models.errors import GatewayError
from focusflow_cli.models.planner import Snapshot
from focusflow_cli.repositories import PersistenceGateway, parse_snapshot


class SqliteGateway(PersistenceGateway):
    """Local key-value vault backed by SQLite."""

    def __init__(self, db_path: str | None = None):
        """Initialize SQLite gateway.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    @property
    def storage_type(self) -> str:
        return "local"

    def get_item(self, key: str):
        """Return the decoded JSON value stored under key, or None."""
        row = self.connection.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return json.loads(row["value"])

    def set_items(self, items: dict) -> None:
        """Write several keys in one transaction."""
        now = datetime.now(UTC).isoformat()
        with self.connection:
            self.connection.executemany(
                "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = excluded.updated_at",
                [(key, json.dumps(value), now) for key, value in items.items()],
            )

    async def load(self) -> Snapshot | None:
        try:
            stored = {key: self.get_item(key) for key in schema.ALL_KEYS}
        except (sqlite3.Error, json.JSONDecodeError) as e:
            raise GatewayError(f"Failed to read local vault: {e}") from e

        if all(value is None for value in stored.values()):
            return None

        data = {"version": stored[schema.KEY_VERSION] or 1}
        if stored[schema.KEY_SETTINGS] is not None:
            data["settings"] = stored[schema.KEY_SETTINGS]
        data["tasks"] = stored[schema.KEY_TASKS] or []
        data["notes"] = stored[schema.KEY_NOTES] or []
        data["cycleCount"] = stored[schema.KEY_CYCLE] or 0
        data["timer"] = stored[schema.KEY_TIMER]
        return parse_snapshot(data)

    async def save(self, snapshot: Snapshot) -> None:
        data = snapshot.to_dict()
        try:
            self.set_items(
                {
                    schema.KEY_VERSION: data["version"],
                    schema.KEY_SETTINGS: data["settings"],
                    schema.KEY_TASKS: data["tasks"],
                    schema.KEY_NOTES: data["notes"],
                    schema.KEY_CYCLE: data["cycleCount"],
                    schema.KEY_TIMER: data["timer"],
                }
            )
        except sqlite3.Error as e:
            raise GatewayError(f"Failed to write local vault: {e}") from e
