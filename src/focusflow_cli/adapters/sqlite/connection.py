"""Process-wide SQLite connection for the local vault.

One connection is shared by every gateway in the process. It is opened in
WAL mode, the database file is created owner-only, and the connection is
committed and closed at interpreter exit.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from focusflow_cli.adapters.sqlite.schema import initialize_schema

DEFAULT_DB_NAME = "vault.db"
LOCK_TIMEOUT_SECONDS = 30.0


def default_db_path() -> Path:
    return Path(user_data_dir("focusflow_cli")) / DEFAULT_DB_NAME


def _open(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    created = not db_path.exists()

    connection = sqlite3.connect(
        str(db_path),
        check_same_thread=False,  # the countdown may save from another thread
        timeout=LOCK_TIMEOUT_SECONDS,
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA journal_mode = WAL")
    if created:
        os.chmod(db_path, 0o600)

    initialize_schema(connection)
    return connection


class DatabaseConnection:
    """Holds the single open vault connection.

    Asking for a different path closes the current connection first, so at
    most one vault file is open at a time.
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _atexit_registered: bool = False

    def __new__(cls) -> DatabaseConnection:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Return the open connection for db_path, opening it if needed.

        Args:
            db_path: Vault file; the platform data directory when omitted
        """
        instance = cls()
        path = Path(db_path) if db_path is not None else default_db_path()

        if instance._connection is not None:
            if instance._db_path == path:
                return instance._connection
            instance._connection.close()

        instance._connection = _open(path)
        instance._db_path = path

        if not cls._atexit_registered:
            atexit.register(cls.close_connection)
            cls._atexit_registered = True
        return instance._connection

    @classmethod
    def close_connection(cls) -> None:
        """Commit and close the open connection, if any."""
        instance = cls()
        connection, instance._connection, instance._db_path = instance._connection, None, None
        if connection is None:
            return
        try:
            connection.commit()
            connection.close()
        except sqlite3.Error:
            pass  # already unusable at shutdown


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Shortcut for DatabaseConnection.get_connection."""
    return DatabaseConnection.get_connection(db_path)
