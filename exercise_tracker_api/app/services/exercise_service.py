"""
Business logic for exercises and exercise logs.

Exercises are written once and never changed.  The owning user id is
stored without checking that the user exists; the username is looked up
afterwards with a ``LEFT JOIN`` and a missing user is reported as a
``StoreError`` (or, for logs, as the degraded log shape).
"""

from __future__ import annotations

import logging
import math
import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from fastapi.concurrency import run_in_threadpool

from exercise_tracker_api.app.core.dates import (
    parse_bound,
    parse_date,
    to_calendar_string,
    to_iso_string,
    to_storage,
)
from exercise_tracker_api.app.core.db import Store, new_id
from exercise_tracker_api.app.core.errors import StoreError
from exercise_tracker_api.app.schemas.exercise import (
    DegradedExerciseLog,
    ExerciseEntry,
    ExerciseLog,
    ExerciseRead,
    LogEntry,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Largest integer SQLite can bind; integral values beyond it are kept as REAL.
MAX_INTEGER = 2 ** 63 - 1

_SELECT_WITH_OWNER = (
    "SELECT e.id, e.user_id, e.description, e.duration, e.date, u.username "
    "FROM exercises e LEFT JOIN users u ON u.id = e.user_id"
)


def to_number(value: Any) -> Optional[Number]:
    """Cast ``value`` to a finite number, or return ``None``.

    Integral values come back as ``int`` so that ``"30"`` is reported as
    ``30`` rather than ``30.0``, unless they do not fit in a 64 bit
    integer, in which case they stay ``float``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if abs(value) <= MAX_INTEGER:
            return value
        try:
            value = float(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, float) or not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) <= MAX_INTEGER:
        return int(value)
    return value


def cast_limit(value: Any) -> Optional[int]:
    """Turn the raw ``limit`` query value into a row cap.

    Missing, empty and zero mean "no cap"; negative values use their
    absolute value. Caps beyond the largest bindable integer are clamped.
    """
    if value is None or value == "":
        return None
    try:
        limit = int(str(value).strip())
    except ValueError:
        raise StoreError(f'Cast to Number failed for value "{value}" at path "limit"')
    return min(abs(limit), MAX_INTEGER) or None


def _validate(description: Any, duration: Any, date: Any) -> Tuple[str, Number, datetime]:
    errors: List[str] = []
    if description is None or description == "":
        errors.append("description: Path `description` is required.")
    elif isinstance(description, bool) or not isinstance(description, (str, int, float)):
        errors.append(f'description: Cast to string failed for value "{description}" at path "description"')
    number = None
    if duration is None or duration == "":
        errors.append("duration: Path `duration` is required.")
    else:
        number = to_number(duration)
        if number is None:
            errors.append(f'duration: Cast to Number failed for value "{duration}" at path "duration"')
    when = None
    try:
        when = parse_date(date)
    except StoreError as exc:
        errors.append(f"date: {exc.message}")
    if errors:
        raise StoreError("Exercise validation failed: " + ", ".join(errors))
    return str(description), number, when


def _unresolved(user_id: str) -> StoreError:
    return StoreError(f"Cannot read username of user {user_id}: user not found")


def _raw_document(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "user": None,
        "description": row["description"],
        "duration": to_number(row["duration"]),
        "date": to_iso_string(row["date"]),
    }


class ExerciseService:
    """Creation and listing of exercises."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def create_exercise(
        self,
        user_id: str,
        description: Any,
        duration: Any,
        date: Any = None,
    ) -> ExerciseRead:
        """Store an exercise for ``user_id`` and return it with the owner's username.

        ``date`` defaults to the current moment when missing or empty.  The
        exercise is persisted before the username is looked up, so an
        unknown ``user_id`` leaves the exercise in place and raises
        ``StoreError``.
        """
        return await run_in_threadpool(self._create_exercise, user_id, description, duration, date)

    async def list_exercises(self, user_id: str) -> List[ExerciseEntry]:
        return await run_in_threadpool(self._list_exercises, user_id)

    async def list_logs(
        self,
        user_id: str,
        from_: Optional[str] = None,
        to: Optional[str] = None,
        limit: Any = None,
    ) -> Union[ExerciseLog, DegradedExerciseLog]:
        """Return the user's log, optionally bounded by date and capped by ``limit``.

        Both bounds are inclusive.  If no matched exercise belongs to an
        existing user the degraded shape is returned, carrying the raw
        documents and no ``count``.
        """
        return await run_in_threadpool(self._list_logs, user_id, from_, to, limit)

    def _create_exercise(self, user_id: str, description: Any, duration: Any, date: Any) -> ExerciseRead:
        description, duration, when = _validate(description, duration, date)
        exercise_id = new_id()
        with self.store.cursor() as cursor:
            cursor.execute(
                "INSERT INTO exercises (id, user_id, description, duration, date) VALUES (?, ?, ?, ?, ?)",
                (exercise_id, user_id, description, duration, to_storage(when)),
            )
        logger.info("Created exercise %s for user %s", exercise_id, user_id)

        username = self._resolve_username(user_id)
        if username is None:
            raise _unresolved(user_id)
        return ExerciseRead(
            username=username,
            id=exercise_id,
            description=description,
            duration=duration,
            date=to_calendar_string(when),
        )

    def _resolve_username(self, user_id: str) -> Optional[str]:
        with self.store.cursor() as cursor:
            row = cursor.execute("SELECT username FROM users WHERE id = ?", (user_id,)).fetchone()
        return row["username"] if row else None

    def _list_exercises(self, user_id: str) -> List[ExerciseEntry]:
        with self.store.cursor() as cursor:
            rows = cursor.execute(
                _SELECT_WITH_OWNER + " WHERE e.user_id = ? ORDER BY e.rowid",
                (user_id,),
            ).fetchall()
        entries = []
        for row in rows:
            if row["username"] is None:
                raise _unresolved(user_id)
            entries.append(
                ExerciseEntry(
                    username=row["username"],
                    description=row["description"],
                    duration=to_number(row["duration"]),
                    date=to_calendar_string(row["date"]),
                )
            )
        return entries

    def _list_logs(
        self,
        user_id: str,
        from_: Optional[str],
        to: Optional[str],
        limit: Any,
    ) -> Union[ExerciseLog, DegradedExerciseLog]:
        conditions = ["e.user_id = ?"]
        params: List[Any] = [user_id]
        upper = parse_bound(to, "to")
        if upper is not None:
            conditions.append("e.date <= ?")
            params.append(upper)
        lower = parse_bound(from_, "from")
        if lower is not None:
            conditions.append("e.date >= ?")
            params.append(lower)
        query = f"{_SELECT_WITH_OWNER} WHERE {' AND '.join(conditions)} ORDER BY e.rowid"
        max_rows = cast_limit(limit)
        if max_rows is not None:
            query += " LIMIT ?"
            params.append(max_rows)

        with self.store.cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()

        first = next((row for row in rows if row["username"] is not None), None)
        if first is None:
            return DegradedExerciseLog(id=user_id, log=[_raw_document(row) for row in rows])

        log = [
            LogEntry(
                description=row["description"],
                duration=to_number(row["duration"]),
                date=to_calendar_string(row["date"]),
            )
            for row in rows
        ]
        return ExerciseLog(id=user_id, username=first["username"], count=len(log), log=log)
