"""
SQLite store integration and simple migration system.

The ``Store`` object is constructed once by ``create_app`` and kept on
``app.state``; handlers receive it through a FastAPI dependency.  It
opens a new SQLite connection for every operation (``cursor``) so it
can be used from the thread pool without any application‑level
locking.

``connect`` applies the schema migrations and marks the store usable;
``close`` marks it unusable again.  Every ``sqlite3.Error`` raised while
talking to the database, and any ``OverflowError`` from binding an
integer SQLite cannot hold, is re‑raised as ``StoreError``.

The ``exercises.user_id`` column intentionally has no ``REFERENCES``
clause: an exercise may point at a user that does not exist.
"""

import logging
import os
import secrets
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

from .errors import StoreError

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: users and exercises
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS exercises (
            id TEXT PRIMARY KEY,
            user_id TEXT,
            description TEXT NOT NULL,
            duration REAL NOT NULL,
            date TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_exercises_user_id ON exercises(user_id);
        """,
    ),
    # Migration 2: range queries on a user's log filter by date
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_exercises_user_date ON exercises(user_id, date);
        """,
    ),
]


def new_id() -> str:
    """Return a fresh 24 character hexadecimal identifier."""
    return secrets.token_hex(12)


def resolve_database_path(database_url: str) -> str:
    """Compute the SQLite file path for a connection string.

    A ``sqlite:///`` prefix is stripped.  Absolute paths are used as is;
    relative paths are resolved against the project root.
    """
    path = database_url
    if path.startswith(SQLITE_URL_PREFIX):
        path = path[len(SQLITE_URL_PREFIX):]
    if os.path.isabs(path):
        return path
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / path).resolve())


class Store:
    """Connection manager for the exercise tracker database."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.path = resolve_database_path(database_url)
        self.connected = False

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def connect(self) -> None:
        """Open the database and apply pending migrations."""
        try:
            conn = self._open()
            try:
                self._migrate(conn.cursor())
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StoreError(f"unable to connect to the store: {exc}") from exc
        self.connected = True
        logger.info("connected to store at %s", self.path)

    @staticmethod
    def _migrate(cursor: sqlite3.Cursor) -> None:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0
        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
                logger.debug("applied migration %s", version)

    def close(self) -> None:
        if not self.connected:
            return
        self.connected = False
        logger.info("closed store connection")

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor on a fresh connection and commit on success."""
        if not self.connected:
            raise StoreError("not connected to the store")
        try:
            conn = self._open()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        try:
            yield conn.cursor()
            conn.commit()
        except (sqlite3.Error, OverflowError) as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()
