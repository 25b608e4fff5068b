"""FastAPI dependencies for service access.

HTTP clients are initialized during application startup and stored in
``app.state``; services are cheap and built per request around them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from recipe_rebel.services.engagement import EngagementService
from recipe_rebel.services.moderation import ModerationService
from recipe_rebel.services.profiles import ProfileService
from recipe_rebel.services.recipes import RecipeService


if TYPE_CHECKING:
    from recipe_rebel.assistant import AssistantClient
    from recipe_rebel.storage import ImageStorageClient


def get_storage_client_optional(request: Request) -> ImageStorageClient | None:
    """Get the image storage client, or None when it failed to start.

    Recipes without an image can still be written in that case.
    """
    return getattr(request.app.state, "storage_client", None)


async def get_assistant_client(request: Request) -> AssistantClient:
    """Get the AI assistant client from app state.

    Raises:
        HTTPException: 503 if the client is not initialized.
    """
    client: AssistantClient | None = getattr(
        request.app.state, "assistant_client", None
    )
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "SERVICE_UNAVAILABLE",
                "message": "AI assistant not available",
            },
        )
    return client


def get_recipe_service(request: Request) -> RecipeService:
    """Recipe service bound to the shared storage client."""
    return RecipeService(storage=get_storage_client_optional(request))


def get_moderation_service() -> ModerationService:
    """Moderation service over the global pool."""
    return ModerationService()


def get_engagement_service() -> EngagementService:
    """Favorites, ratings and comments service over the global pool."""
    return EngagementService()


def get_profile_service() -> ProfileService:
    """Profile service over the global pool."""
    return ProfileService()
