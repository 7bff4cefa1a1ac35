"""Tests for the SQLite store: connection lifecycle and migrations."""

import os

import pytest

from exercise_tracker_api.app.core.db import MIGRATIONS, Store, new_id, resolve_database_path
from exercise_tracker_api.app.core.errors import StoreError


def test_connect_applies_all_migrations(store):
    with store.cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
        tables = {
            row["name"]
            for row in cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert versions == [version for version, _ in MIGRATIONS]
    assert {"users", "exercises", "migrations"} <= tables


def test_connect_is_repeatable(database_path):
    first = Store(database_path)
    first.connect()
    second = Store(database_path)
    second.connect()
    with second.cursor() as cursor:
        count = cursor.execute("SELECT COUNT(*) AS count FROM migrations").fetchone()["count"]
    assert count == len(MIGRATIONS)


def test_exercises_do_not_reference_users(store):
    with store.cursor() as cursor:
        cursor.execute(
            "INSERT INTO exercises (id, user_id, description, duration, date) VALUES (?, ?, ?, ?, ?)",
            (new_id(), "no-such-user", "run", 30, "2024-01-01T00:00:00.000000"),
        )
        count = cursor.execute("SELECT COUNT(*) AS count FROM exercises").fetchone()["count"]
    assert count == 1


def test_cursor_requires_connection(database_path):
    store = Store(database_path)
    with pytest.raises(StoreError, match="not connected"):
        with store.cursor():
            pass


def test_closed_store_rejects_operations(store):
    store.close()
    assert not store.connected
    with pytest.raises(StoreError, match="not connected"):
        with store.cursor():
            pass


def test_unreachable_database_raises_store_error(tmp_path):
    store = Store(str(tmp_path / "missing" / "exercise_tracker.db"))
    with pytest.raises(StoreError, match="unable to connect"):
        store.connect()
    assert not store.connected


def test_sqlite_errors_are_wrapped(store):
    with pytest.raises(StoreError, match="UNIQUE constraint failed"):
        with store.cursor() as cursor:
            cursor.execute("INSERT INTO users (id, username) VALUES (?, ?)", ("a", "alice"))
            cursor.execute("INSERT INTO users (id, username) VALUES (?, ?)", ("b", "alice"))


def test_resolve_database_path(tmp_path):
    absolute = str(tmp_path / "data.db")
    assert resolve_database_path(absolute) == absolute
    assert resolve_database_path("sqlite:///" + absolute) == absolute
    relative = resolve_database_path("exercise_tracker.db")
    assert os.path.isabs(relative)
    assert relative.endswith("exercise_tracker.db")


def test_new_id_shape():
    ids = {new_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(len(value) == 24 and int(value, 16) >= 0 for value in ids)


def test_integer_overflow_is_wrapped(store):
    with pytest.raises(StoreError, match="too large"):
        with store.cursor() as cursor:
            cursor.execute("SELECT ?", (2 ** 64,))
