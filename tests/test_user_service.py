"""Tests for UserService."""

import pytest

from exercise_tracker_api.app.core.errors import StoreError
from exercise_tracker_api.app.services.user_service import UserService


@pytest.fixture
def service(store):
    return UserService(store)


def test_upsert_creates_user(service, run):
    user = run(service.upsert_user("alice"))
    assert user.username == "alice"
    assert len(user.id) == 24


def test_upsert_is_idempotent(service, run):
    first = run(service.upsert_user("alice"))
    second = run(service.upsert_user("alice"))
    assert first.id == second.id
    users = run(service.list_users())
    assert [u.username for u in users].count("alice") == 1


def test_usernames_are_exact_matches(service, run):
    lower = run(service.upsert_user("alice"))
    upper = run(service.upsert_user("Alice"))
    assert lower.id != upper.id


@pytest.mark.parametrize("username", [None, ""])
def test_username_is_required(service, run, username):
    with pytest.raises(StoreError) as excinfo:
        run(service.upsert_user(username))
    assert "username" in excinfo.value.message
    assert run(service.list_users()) == []


def test_list_users_in_insertion_order(service, run):
    for name in ("carol", "alice", "bob"):
        run(service.upsert_user(name))
    users = run(service.list_users())
    assert [u.username for u in users] == ["carol", "alice", "bob"]
    assert all(set(u.model_dump()) == {"id", "username"} for u in users)


def test_store_failures_propagate(service, store, run):
    store.close()
    with pytest.raises(StoreError, match="not connected"):
        run(service.list_users())


def test_numeric_username_is_cast(service, run):
    assert run(service.upsert_user(42)).username == "42"


def test_structured_username_is_rejected(service, run):
    with pytest.raises(StoreError, match="Cast to string failed"):
        run(service.upsert_user(["alice"]))
