"""Current user endpoints."""

from fastapi import APIRouter

from src.scrum.api.dependencies import CurrentUser, UserServiceDep
from src.scrum.schemas.user import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def get_me(user: CurrentUser) -> UserRead:
    """Get the authenticated user's profile."""
    return UserRead.model_validate(user)


@router.patch("/me", response_model=UserRead)
async def update_me(data: UserUpdate, user: CurrentUser, service: UserServiceDep) -> UserRead:
    """Update name, avatar or presence status."""
    return UserRead.model_validate(await service.update_profile(user, data))
