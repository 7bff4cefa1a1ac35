"""
Pydantic models for exercises and exercise logs.

Incoming values are kept raw (``Any``): casting ``duration`` to a number
and ``date`` to a datetime is the job of ``ExerciseService`` so that
failures surface as store errors.  Outgoing dates are always calendar
strings such as ``"Mon Jan 01 2024"``, except in the raw documents of a
degraded log.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


class ExerciseCreate(BaseModel):
    """Payload for ``POST /api/users/{id}/exercises``."""

    description: Optional[Any] = Field(None, examples=["run"])
    duration: Optional[Any] = Field(None, examples=[30])
    date: Optional[Any] = Field(None, examples=["2024-01-01"])


class ExerciseRead(BaseModel):
    """Response for a newly created exercise."""

    username: str
    id: str
    description: str
    duration: Number
    date: str


class ExerciseEntry(BaseModel):
    """One item of ``GET /api/users/{id}/exercises`` (no ``id``)."""

    username: str
    description: str
    duration: Number
    date: str


class LogEntry(BaseModel):
    description: str
    duration: Number
    date: str


class ExerciseLog(BaseModel):
    """A user's log when the owner's username could be resolved."""

    id: str
    username: str
    count: int
    log: List[LogEntry]


class DegradedExerciseLog(BaseModel):
    """A user's log when no owner could be resolved.

    There is no ``count`` and ``log`` holds the matched documents as
    stored: ``{id, user: None, description, duration, date}`` with an
    ISO timestamp for ``date``.
    """

    id: str
    username: None = None
    log: List[Dict[str, Any]]
