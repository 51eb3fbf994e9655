"""
User API routes.
"""

from fastapi import APIRouter, Depends

from dispatch.api.deps import get_user_service
from dispatch.api.schemas import UserEnvelope, UserListResponse, UserResponse
from dispatch.core.exceptions import NotFoundError
from dispatch.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(users: UserService = Depends(get_user_service)) -> UserListResponse:
    """List users with their voice profile (null until onboarding is done)."""
    items = await users.list_users()
    return UserListResponse(users=[UserResponse.from_model(u) for u in items])


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> UserEnvelope:
    user = await users.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return UserEnvelope(user=UserResponse.from_model(user))
