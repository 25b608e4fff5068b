"""Engagement service: favorites, ratings and comments.

Favorite toggling and rating are single SQL statements, so two requests
of the same user never race between a read and a write.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from recipe_rebel.database.repositories import (
    CommentRecord,
    CommentRepository,
    FavoriteRepository,
    RatingRepository,
    RatingSummary,
    RecipeRecord,
    RecipeRepository,
)
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.services.recipes import RecipeNotFoundError, is_visible_to
from recipe_rebel.validation import FormValidationError, validate_comment


if TYPE_CHECKING:
    from uuid import UUID

    from recipe_rebel.auth.dependencies import CurrentUser

logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class RatingOutcome(BaseModel):
    """A user's stored rating and the recipe's refreshed aggregate."""

    user_rating: int
    summary: RatingSummary


class EngagementService:
    """Per-user interactions with visible recipes."""

    def __init__(
        self,
        recipes: RecipeRepository | None = None,
        ratings: RatingRepository | None = None,
        favorites: FavoriteRepository | None = None,
        comments: CommentRepository | None = None,
    ) -> None:
        self._recipes = recipes or RecipeRepository()
        self._ratings = ratings or RatingRepository()
        self._favorites = favorites or FavoriteRepository()
        self._comments = comments or CommentRepository()

    async def _require_visible(
        self,
        recipe_id: UUID,
        user: CurrentUser | None,
    ) -> RecipeRecord:
        recipe = await self._recipes.get_by_id(recipe_id)
        if recipe is None or not is_visible_to(recipe, user):
            raise RecipeNotFoundError(recipe_id)
        return recipe

    async def toggle_favorite(self, user: CurrentUser, recipe_id: UUID) -> bool:
        """Flip favorite membership; returns True when the recipe is now a favorite."""
        await self._require_visible(recipe_id, user)
        favorited = await self._favorites.toggle(recipe_id, user.id)
        logger.info("Favorite toggled", recipe_id=str(recipe_id), favorited=favorited)
        return favorited

    async def add_favorite(self, user: CurrentUser, recipe_id: UUID) -> None:
        """Mark as favorite (idempotent)."""
        await self._require_visible(recipe_id, user)
        await self._favorites.add(recipe_id, user.id)

    async def remove_favorite(self, user: CurrentUser, recipe_id: UUID) -> None:
        """Unmark as favorite (idempotent)."""
        await self._favorites.remove(recipe_id, user.id)

    async def list_favorites(self, user: CurrentUser) -> list[RecipeRecord]:
        """Approved recipes the user has favorited."""
        return await self._recipes.list_favorites(user.id)

    async def rate(self, user: CurrentUser, recipe_id: UUID, rating: int) -> RatingOutcome:
        """Store the user's rating (one per user and recipe) and re-read the aggregate.

        Raises:
            FormValidationError: If the rating is outside 1-5.
            RecipeNotFoundError: If the recipe is missing or hidden.
        """
        if isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
            msg = "Rating must be between 1 and 5"
            raise FormValidationError(msg, field="rating")
        await self._require_visible(recipe_id, user)
        await self._ratings.upsert(recipe_id, user.id, rating)
        summary = await self._ratings.summary(recipe_id)
        logger.info("Recipe rated", recipe_id=str(recipe_id), rating=rating)
        return RatingOutcome(user_rating=rating, summary=summary)

    async def add_comment(
        self,
        user: CurrentUser,
        recipe_id: UUID,
        text: str | None,
    ) -> CommentRecord:
        """Append a trimmed comment.

        Raises:
            FormValidationError: If the text is empty or over 1000 characters.
            RecipeNotFoundError: If the recipe is missing or hidden.
        """
        body = validate_comment(text)
        await self._require_visible(recipe_id, user)
        comment = await self._comments.add(recipe_id, user.id, body)
        logger.info("Comment added", recipe_id=str(recipe_id), comment_id=str(comment.id))
        return comment

    async def list_comments(
        self,
        recipe_id: UUID,
        viewer: CurrentUser | None,
    ) -> list[CommentRecord]:
        """Comments of a visible recipe, newest first."""
        await self._require_visible(recipe_id, viewer)
        return await self._comments.list_for_recipe(recipe_id)
