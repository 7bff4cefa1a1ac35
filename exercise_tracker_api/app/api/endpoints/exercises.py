"""
Exercise and log endpoints.

The user id in the path is never checked up front.  Creating or listing
exercises for an unknown user fails with a 500 once the username lookup
comes back empty; the log endpoint answers with the degraded shape
instead.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from exercise_tracker_api.app.api.deps import get_exercise_service, read_payload
from exercise_tracker_api.app.schemas.exercise import ExerciseCreate, ExerciseEntry, ExerciseRead
from exercise_tracker_api.app.services.exercise_service import ExerciseService

router = APIRouter()


@router.post("/{user_id}/exercises", response_model=ExerciseRead)
async def create_exercise(
    user_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    service: ExerciseService = Depends(get_exercise_service),
) -> ExerciseRead:
    """Log an exercise for the user.

    Accepts ``description``, ``duration`` and an optional ``date``; the
    date defaults to now and is returned as a calendar string.
    """
    data = ExerciseCreate.model_validate(payload)
    return await service.create_exercise(user_id, data.description, data.duration, data.date)


@router.get("/{user_id}/exercises", response_model=List[ExerciseEntry])
async def list_exercises(
    user_id: str,
    service: ExerciseService = Depends(get_exercise_service),
) -> List[ExerciseEntry]:
    return await service.list_exercises(user_id)


@router.get("/{user_id}/logs", response_model=Dict[str, Any])
async def get_logs(
    user_id: str,
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: ExerciseService = Depends(get_exercise_service),
) -> Dict[str, Any]:
    """Return the user's log filtered by ``from``/``to`` and capped by ``limit``.

    The response is either ``{id, username, count, log}`` or, when no
    exercise belongs to a known user, ``{id, username: null, log}``
    with the raw stored documents.
    """
    result = await service.list_logs(user_id, from_=from_, to=to, limit=limit)
    return result.model_dump()
