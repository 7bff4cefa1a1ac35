"""Pydantic models for user data."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Payload for ``POST /api/users``.

    ``username`` is optional and untyped at this level so that a missing
    or malformed value is reported by the service as a store error
    (HTTP 500) instead of a FastAPI 422.
    """

    username: Optional[Any] = Field(None, examples=["alice"])


class UserRead(BaseModel):
    """A user as returned by the API."""

    id: str
    username: str

    model_config = {
        "from_attributes": True,
    }
