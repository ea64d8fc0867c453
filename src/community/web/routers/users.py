from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from community.core.modules.user.models import UserView
from community.web.deps import AppDep, AuthContextDep
from community.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


class UpdateProfileRequest(BaseModel):
    """Request to update own profile."""

    name: str = Field(..., description="Display name, 1-50 characters")
    bio: str | None = Field(None, description="Short profile text, up to 500 characters")


@router.get(
    "/users/{user_id}",
    summary="Get user profile",
    description="Get the public profile of a user.",
    operation_id="getUser",
    responses={
        200: {"description": "User profile"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_user(user_id: UUID, app: AppDep) -> UserView:
    return await app.get_user(user_id)


@router.put(
    "/users/{user_id}",
    summary="Update user profile",
    description="Update name and bio. Users can only update their own profile.",
    operation_id="updateUser",
    responses={
        200: {"description": "Profile updated"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not your profile"},
    },
)
async def update_user(user_id: UUID, update_data: UpdateProfileRequest, app: AppDep, context: AuthContextDep) -> UserView:
    return await app.update_profile(context, user_id, update_data.name, update_data.bio)
