"""
User endpoints.

``POST /api/users`` is a find‑or‑create on ``username``; there is no
update or delete.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from exercise_tracker_api.app.api.deps import get_user_service, read_payload
from exercise_tracker_api.app.schemas.user import UserCreate, UserRead
from exercise_tracker_api.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserRead)
async def create_user(
    payload: Dict[str, Any] = Depends(read_payload),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Return the user with the posted ``username``, creating it on first use."""
    data = UserCreate.model_validate(payload)
    return await service.upsert_user(data.username)


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    return await service.list_users()
