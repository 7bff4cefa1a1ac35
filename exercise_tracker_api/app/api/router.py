"""
Top‑level API router.

Both domain routers live under ``/users``: the users router owns the
collection itself, the exercises router owns the per‑user
``/exercises`` and ``/logs`` sub‑resources.
"""

from fastapi import APIRouter

from .endpoints import exercises, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(exercises.router, prefix="/users", tags=["exercises"])
