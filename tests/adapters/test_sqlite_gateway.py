"""Tests for the SQLite local vault gateway."""

import json
import os
import sqlite3

import pytest

from focusflow_cli.adapters.sqlite import schema
from focusflow_cli.adapters.sqlite.connection import DatabaseConnection
from focusflow_cli.adapters.sqlite.gateway import SqliteGateway
from focusflow_cli.models.errors import CorruptSnapshotError, SnapshotVersionError
from focusflow_cli.models.planner import Chunk, Note, Snapshot, Task, TimerSettings, TimerSnapshot


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "vault.db"
    yield str(path)
    DatabaseConnection.close_connection()


@pytest.fixture
def gateway(db_path):
    return SqliteGateway(db_path=db_path)


# ---------------------------------------------------------------------------
# Schema and connection
# ---------------------------------------------------------------------------


class TestSchema:
    def test_initialize_creates_tables(self):
        conn = sqlite3.connect(":memory:")
        schema.initialize_schema(conn)
        tables = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        assert {"schema_version", "kv_store"} <= tables
        assert schema.get_schema_version(conn) == schema.SCHEMA_VERSION

    def test_initialize_is_idempotent(self):
        conn = sqlite3.connect(":memory:")
        schema.initialize_schema(conn)
        schema.initialize_schema(conn)
        count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        assert count == 1

    def test_schema_version_of_empty_database(self):
        assert schema.get_schema_version(sqlite3.connect(":memory:")) == 0


class TestConnection:
    def test_new_database_is_private(self, gateway, db_path):
        gateway.connection
        assert oct(os.stat(db_path).st_mode & 0o777) == "0o600"

    def test_connection_is_reused(self, db_path):
        first = DatabaseConnection.get_connection(db_path)
        assert DatabaseConnection.get_connection(db_path) is first

    def test_wal_mode(self, gateway):
        mode = gateway.connection.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode == "wal"


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


class TestSqliteGateway:
    def test_storage_type(self, gateway):
        assert gateway.storage_type == "local"

    async def test_load_empty_vault(self, gateway):
        assert await gateway.load() is None

    async def test_save_then_load(self, gateway):
        task = Task(day_index=2, content="Write report", chunks=[Chunk(text="intro")])
        snapshot = Snapshot(
            settings=TimerSettings(focus_time=50, dark_mode=True),
            tasks=[task],
            notes=[Note(text="buy milk")],
            cycle_count=3,
            timer=TimerSnapshot(mode="short", remaining_seconds=99, active_task_id=task.id),
        )
        await gateway.save(snapshot)

        loaded = await gateway.load()
        assert loaded.to_dict() == snapshot.to_dict()

    async def test_each_part_under_its_own_key(self, gateway):
        await gateway.save(Snapshot(cycle_count=2))
        assert gateway.get_item(schema.KEY_CYCLE) == 2
        assert gateway.get_item(schema.KEY_TASKS) == []
        assert gateway.get_item(schema.KEY_SETTINGS)["focusTime"] == 25

    async def test_save_overwrites(self, gateway):
        await gateway.save(Snapshot(cycle_count=1))
        await gateway.save(Snapshot(cycle_count=2))
        assert (await gateway.load()).cycle_count == 2
        rows = gateway.connection.execute("SELECT COUNT(*) FROM kv_store").fetchone()[0]
        assert rows == len(schema.ALL_KEYS)

    async def test_load_browser_style_partial_data(self, gateway):
        gateway.set_items(
            {
                schema.KEY_TASKS: [
                    {"id": 1700000000000, "dayIndex": 0, "content": "Legacy", "status": "done"}
                ],
            }
        )
        loaded = await gateway.load()
        assert loaded.tasks[0].id == "1700000000000"
        assert loaded.settings == TimerSettings()
        assert loaded.timer is None

    async def test_newer_version_rejected(self, gateway):
        gateway.set_items({schema.KEY_VERSION: 99})
        with pytest.raises(SnapshotVersionError):
            await gateway.load()

    async def test_out_of_range_day_is_corrupt(self, gateway):
        gateway.set_items({schema.KEY_TASKS: [{"id": "a", "dayIndex": 9}]})
        with pytest.raises(CorruptSnapshotError, match="dayIndex"):
            await gateway.load()

    async def test_non_numeric_version_is_corrupt(self, gateway):
        gateway.set_items({schema.KEY_VERSION: "two"})
        with pytest.raises(CorruptSnapshotError, match="invalid version"):
            await gateway.load()

    async def test_data_survives_new_gateway(self, gateway, db_path):
        await gateway.save(Snapshot(notes=[Note(text="persist me")]))
        DatabaseConnection.close_connection()

        reopened = SqliteGateway(db_path=db_path)
        assert (await reopened.load()).notes[0].text == "persist me"

    def test_values_stored_as_json(self, gateway):
        gateway.set_items({schema.KEY_NOTES: [{"id": "n1", "text": "x"}]})
        raw = gateway.connection.execute(
            "SELECT value FROM kv_store WHERE key = ?", (schema.KEY_NOTES,)
        ).fetchone()[0]
        assert json.loads(raw) == [{"id": "n1", "text": "x"}]
