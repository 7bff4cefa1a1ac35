"""
Business logic for users.

Users are created on first use of a username and are never updated or
deleted.  Uniqueness of ``username`` is enforced by the ``UNIQUE``
constraint on the ``users`` table; a concurrent duplicate insert
surfaces as a ``StoreError``.
"""

import logging
from typing import Any, List

from fastapi.concurrency import run_in_threadpool

from exercise_tracker_api.app.core.db import Store, new_id
from exercise_tracker_api.app.core.errors import StoreError
from exercise_tracker_api.app.schemas.user import UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Find‑or‑create and listing of users."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def upsert_user(self, username: Any) -> UserRead:
        """Return the user called ``username``, creating it if needed.

        Repeated calls with the same username return the same id and never
        modify the stored user.
        """
        return await run_in_threadpool(self._upsert_user, username)

    async def list_users(self) -> List[UserRead]:
        """Return every user in insertion order."""
        return await run_in_threadpool(self._list_users)

    def _upsert_user(self, username: Any) -> UserRead:
        if username is None or username == "":
            raise StoreError("User validation failed: username: Path `username` is required.")
        if isinstance(username, bool) or not isinstance(username, (str, int, float)):
            raise StoreError(f'Cast to string failed for value "{username}" at path "username"')
        username = str(username)
        with self.store.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username FROM users WHERE username = ?",
                (username,),
            ).fetchone()
            if row:
                return UserRead(id=row["id"], username=row["username"])
            user_id = new_id()
            cursor.execute(
                "INSERT INTO users (id, username) VALUES (?, ?)",
                (user_id, username),
            )
        logger.info("Created user %s (%s)", username, user_id)
        return UserRead(id=user_id, username=username)

    def _list_users(self) -> List[UserRead]:
        with self.store.cursor() as cursor:
            rows = cursor.execute("SELECT id, username FROM users ORDER BY rowid").fetchall()
        return [UserRead(id=row["id"], username=row["username"]) for row in rows]
