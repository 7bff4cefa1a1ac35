"""
FastAPI dependencies shared by the endpoint modules.
"""

from typing import Any, Dict

from fastapi import Depends, Request

from exercise_tracker_api.app.core.db import Store
from exercise_tracker_api.app.core.errors import StoreError
from exercise_tracker_api.app.services.exercise_service import ExerciseService
from exercise_tracker_api.app.services.user_service import UserService

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_store(request: Request) -> Store:
    """Return the store created by ``create_app`` for this application."""
    return request.app.state.store


def get_user_service(store: Store = Depends(get_store)) -> UserService:
    return UserService(store)


def get_exercise_service(store: Store = Depends(get_store)) -> ExerciseService:
    return ExerciseService(store)


async def read_payload(request: Request) -> Dict[str, Any]:
    """Read the request body as a flat mapping.

    HTML forms (the landing page) post URL‑encoded bodies; API clients
    may send JSON instead.  Any other body is treated as empty so that
    missing fields are reported by the services.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError as exc:
            raise StoreError(f"Invalid JSON body: {exc}") from exc
        return data if isinstance(data, dict) else {}
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)
    return {}
