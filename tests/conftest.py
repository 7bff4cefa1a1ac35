"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` so tests never
share state.  ``client`` runs the application lifespan, which connects
the store on entry and closes it on exit.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from exercise_tracker_api.app.core.config import Settings
from exercise_tracker_api.app.core.db import Store
from exercise_tracker_api.app.main import create_app


@pytest.fixture
def database_path(tmp_path):
    return str(tmp_path / "exercise_tracker.db")


@pytest.fixture
def store(database_path):
    """A connected store on a fresh database file."""
    store = Store(database_path)
    store.connect()
    yield store
    store.close()


@pytest.fixture
def app_settings(database_path):
    return Settings(database_url=database_path)


@pytest.fixture
def client(app_settings):
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_user(client):
    """Create a user through the API and return the response body."""

    def _create(username):
        response = client.post("/api/users", data={"username": username})
        assert response.status_code == 200, response.text
        return response.json()

    return _create


@pytest.fixture
def run():
    """Run a service coroutine to completion."""
    return asyncio.run
