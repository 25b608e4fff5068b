"""Profile endpoints.

Provides:
- GET /me for the caller's profile and session role
- PUT /me to change the display name
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_rebel.api.dependencies import get_profile_service
from recipe_rebel.auth.dependencies import AuthenticatedUser
from recipe_rebel.schemas import ProfileResponse, ProfileUpdateRequest
from recipe_rebel.services.profiles import ProfileService


router = APIRouter(tags=["Profile"])

Service = Annotated[ProfileService, Depends(get_profile_service)]


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    description="Display name of the caller and the role of the current session.",
    responses={401: {"description": "Authentication required"}},
)
async def get_me(user: AuthenticatedUser, service: Service) -> ProfileResponse:
    """Current profile; ``name`` is null until one is set."""
    profile = await service.get(user)
    return ProfileResponse.build(user.id, user.role, profile)


@router.put(
    "/me",
    response_model=ProfileResponse,
    summary="Update my profile",
    description="Sets the display name shown next to recipes and comments.",
    responses={
        401: {"description": "Authentication required"},
        422: {"description": "Name empty or longer than 100 characters"},
    },
)
async def update_me(
    body: ProfileUpdateRequest,
    user: AuthenticatedUser,
    service: Service,
) -> ProfileResponse:
    """Change the display name."""
    profile = await service.rename(user, body.name)
    return ProfileResponse.build(user.id, user.role, profile)
