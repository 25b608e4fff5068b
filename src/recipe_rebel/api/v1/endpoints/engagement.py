"""Favorites, ratings and comments endpoints.

Provides:
- GET /recipes/favorites for the caller's favorite recipes
- POST /recipes/{recipeId}/favorite/toggle to flip favorite membership
- PUT / DELETE /recipes/{recipeId}/favorite for idempotent add / remove
- PUT /recipes/{recipeId}/rating to set the caller's 1-5 rating
- GET / POST /recipes/{recipeId}/comments to read and add comments
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, status

from recipe_rebel.api.dependencies import get_engagement_service
from recipe_rebel.auth.dependencies import AuthenticatedUser, OptionalUser
from recipe_rebel.schemas import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    FavoriteResponse,
    RatingRequest,
    RatingResponse,
    RecipeListResponse,
)
from recipe_rebel.services.engagement import EngagementService
from recipe_rebel.services.recipes import RecipeNotFoundError


router = APIRouter(tags=["Engagement"])

RecipeId = Annotated[UUID, Path(alias="recipeId", description="Recipe identifier")]
Service = Annotated[EngagementService, Depends(get_engagement_service)]

_NOT_FOUND_RESPONSE = {
    404: {
        "description": "Recipe not found or not visible to the caller",
        "content": {
            "application/json": {
                "example": {
                    "error": "NOT_FOUND",
                    "message": "Recipe with identifier '...' not found",
                }
            }
        },
    },
}


def _not_found(e: RecipeNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "NOT_FOUND", "message": str(e)},
    )


@router.get(
    "/recipes/favorites",
    response_model=RecipeListResponse,
    summary="List my favorites",
    description="Approved recipes the caller has marked as favorite.",
    responses={401: {"description": "Authentication required"}},
)
async def list_favorites(
    user: AuthenticatedUser,
    service: Service,
) -> RecipeListResponse:
    """Dashboard listing of favorites."""
    return RecipeListResponse.from_records(await service.list_favorites(user))


@router.post(
    "/recipes/{recipeId}/favorite/toggle",
    response_model=FavoriteResponse,
    summary="Toggle favorite",
    description=(
        "Adds the recipe to the caller's favorites when absent and removes it "
        "when present, in a single statement."
    ),
    responses=_NOT_FOUND_RESPONSE,
)
async def toggle_favorite(
    recipe_id: RecipeId,
    user: AuthenticatedUser,
    service: Service,
) -> FavoriteResponse:
    """Flip favorite membership."""
    try:
        favorited = await service.toggle_favorite(user, recipe_id)
    except RecipeNotFoundError as e:
        raise _not_found(e) from None
    return FavoriteResponse(recipe_id=recipe_id, is_favorite=favorited)


@router.put(
    "/recipes/{recipeId}/favorite",
    response_model=FavoriteResponse,
    summary="Add favorite",
    responses=_NOT_FOUND_RESPONSE,
)
async def add_favorite(
    recipe_id: RecipeId,
    user: AuthenticatedUser,
    service: Service,
) -> FavoriteResponse:
    """Mark the recipe as favorite; repeating the call changes nothing."""
    try:
        await service.add_favorite(user, recipe_id)
    except RecipeNotFoundError as e:
        raise _not_found(e) from None
    return FavoriteResponse(recipe_id=recipe_id, is_favorite=True)


@router.delete(
    "/recipes/{recipeId}/favorite",
    response_model=FavoriteResponse,
    summary="Remove favorite",
)
async def remove_favorite(
    recipe_id: RecipeId,
    user: AuthenticatedUser,
    service: Service,
) -> FavoriteResponse:
    """Unmark the recipe; removing a missing favorite is not an error."""
    await service.remove_favorite(user, recipe_id)
    return FavoriteResponse(recipe_id=recipe_id, is_favorite=False)


@router.put(
    "/recipes/{recipeId}/rating",
    response_model=RatingResponse,
    summary="Rate a recipe",
    description=(
        "Sets the caller's rating (1-5). Rating again replaces the previous "
        "value. Returns the refreshed average and count."
    ),
    responses={
        **_NOT_FOUND_RESPONSE,
        422: {"description": "Rating outside 1-5"},
    },
)
async def rate_recipe(
    recipe_id: RecipeId,
    body: RatingRequest,
    user: AuthenticatedUser,
    service: Service,
) -> RatingResponse:
    """Upsert the caller's rating."""
    try:
        outcome = await service.rate(user, recipe_id, body.rating)
    except RecipeNotFoundError as e:
        raise _not_found(e) from None
    return RatingResponse.from_outcome(outcome.user_rating, outcome.summary)


@router.get(
    "/recipes/{recipeId}/comments",
    response_model=CommentListResponse,
    summary="List comments",
    description="Comments of a visible recipe, newest first.",
    responses=_NOT_FOUND_RESPONSE,
)
async def list_comments(
    recipe_id: RecipeId,
    viewer: OptionalUser,
    service: Service,
) -> CommentListResponse:
    """Read the comment thread."""
    try:
        comments = await service.list_comments(recipe_id, viewer)
    except RecipeNotFoundError as e:
        raise _not_found(e) from None
    return CommentListResponse.from_records(comments)


@router.post(
    "/recipes/{recipeId}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment",
    responses={
        **_NOT_FOUND_RESPONSE,
        422: {"description": "Comment empty or longer than 1000 characters"},
    },
)
async def add_comment(
    recipe_id: RecipeId,
    body: CommentCreateRequest,
    user: AuthenticatedUser,
    service: Service,
) -> CommentResponse:
    """Append a comment signed by the caller."""
    try:
        comment = await service.add_comment(user, recipe_id, body.text)
    except RecipeNotFoundError as e:
        raise _not_found(e) from None
    return CommentResponse.from_record(comment)
