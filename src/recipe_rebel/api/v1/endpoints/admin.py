"""Moderation endpoints for administrators.

Provides:
- GET /admin/recipes/pending for the review queue, oldest first
- GET /admin/recipes/stats for counts per moderation status
- POST /admin/recipes/{recipeId}/approve and /reject for decisions
- DELETE /admin/recipes/{recipeId} for removing any recipe

Every write answers with the re-read queue and counts.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, status

from recipe_rebel.api.dependencies import get_moderation_service
from recipe_rebel.auth.dependencies import AdminUser, CurrentUser
from recipe_rebel.schemas import (
    ModerationDecision,
    ModerationQueueResponse,
    ModerationStatsResponse,
    PendingRecipesResponse,
)
from recipe_rebel.services.moderation import (
    ModerationService,
    ModerationTargetNotFoundError,
)


router = APIRouter(prefix="/admin", tags=["Admin"])

RecipeId = Annotated[UUID, Path(alias="recipeId", description="Recipe identifier")]
Service = Annotated[ModerationService, Depends(get_moderation_service)]

_ADMIN_RESPONSES = {
    401: {"description": "Authentication required"},
    403: {
        "description": "Caller is not an administrator",
        "content": {
            "application/json": {
                "example": {
                    "error": "FORBIDDEN",
                    "message": "Administrator access required",
                }
            }
        },
    },
}

_WRITE_RESPONSES = {
    **_ADMIN_RESPONSES,
    404: {"description": "Recipe not found"},
}


def _not_found(e: ModerationTargetNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "NOT_FOUND", "message": str(e)},
    )


@router.get(
    "/recipes/pending",
    response_model=PendingRecipesResponse,
    summary="List pending recipes",
    description="Recipes awaiting review, in submission order (oldest first).",
    responses=_ADMIN_RESPONSES,
)
async def list_pending(
    _admin: AdminUser,
    service: Service,
) -> PendingRecipesResponse:
    """Review queue."""
    return PendingRecipesResponse.from_records(await service.list_pending())


@router.get(
    "/recipes/stats",
    response_model=ModerationStatsResponse,
    summary="Moderation statistics",
    description="Total number of recipes and the number per moderation status.",
    responses=_ADMIN_RESPONSES,
)
async def get_stats(
    _admin: AdminUser,
    service: Service,
) -> ModerationStatsResponse:
    """Counts for the admin dashboard."""
    return ModerationStatsResponse.from_counts(await service.stats())


async def _decide(
    service: ModerationService,
    admin: CurrentUser,
    recipe_id: UUID,
    decision: ModerationDecision,
) -> ModerationQueueResponse:
    try:
        queue = await service.decide(admin, recipe_id, decision)
    except ModerationTargetNotFoundError as e:
        raise _not_found(e) from None
    return ModerationQueueResponse.from_queue(queue)


@router.post(
    "/recipes/{recipeId}/approve",
    response_model=ModerationQueueResponse,
    summary="Approve a recipe",
    description="Publishes the recipe. Applying the same decision twice is harmless.",
    responses=_WRITE_RESPONSES,
)
async def approve_recipe(
    recipe_id: RecipeId,
    admin: AdminUser,
    service: Service,
) -> ModerationQueueResponse:
    """Set status ``approved``."""
    return await _decide(service, admin, recipe_id, ModerationDecision.APPROVE)


@router.post(
    "/recipes/{recipeId}/reject",
    response_model=ModerationQueueResponse,
    summary="Reject a recipe",
    description="Hides the recipe from everyone but its author and administrators.",
    responses=_WRITE_RESPONSES,
)
async def reject_recipe(
    recipe_id: RecipeId,
    admin: AdminUser,
    service: Service,
) -> ModerationQueueResponse:
    """Set status ``rejected``."""
    return await _decide(service, admin, recipe_id, ModerationDecision.REJECT)


@router.delete(
    "/recipes/{recipeId}",
    response_model=ModerationQueueResponse,
    summary="Delete a recipe",
    description="Deletes any recipe regardless of its status or author.",
    responses=_WRITE_RESPONSES,
)
async def delete_recipe(
    recipe_id: RecipeId,
    admin: AdminUser,
    service: Service,
) -> ModerationQueueResponse:
    """Remove a recipe and return the refreshed queue."""
    try:
        queue = await service.remove(admin, recipe_id)
    except ModerationTargetNotFoundError as e:
        raise _not_found(e) from None
    return ModerationQueueResponse.from_queue(queue)
