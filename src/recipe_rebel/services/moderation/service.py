"""Moderation service.

Administrators review pending recipes in submission order (oldest first)
and approve or reject them. Transitions are plain updates: there is no
optimistic concurrency, the last decision wins. Every write returns the
freshly re-read queue and counts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from recipe_rebel.database.repositories import RecipeRecord, RecipeRepository, StatusCounts
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.schemas.enums import RecipeStatus
from recipe_rebel.services.moderation.exceptions import ModerationTargetNotFoundError


if TYPE_CHECKING:
    from uuid import UUID

    from recipe_rebel.auth.dependencies import CurrentUser
    from recipe_rebel.schemas.enums import ModerationDecision

logger = get_logger(__name__)


class ModerationQueue(BaseModel):
    """Pending recipes plus the per-status counts."""

    pending: list[RecipeRecord]
    stats: StatusCounts


class ModerationService:
    """Review queue operations. Callers must already be administrators."""

    def __init__(self, recipes: RecipeRepository | None = None) -> None:
        self._recipes = recipes or RecipeRepository()

    async def list_pending(self) -> list[RecipeRecord]:
        """Pending recipes, oldest first."""
        return await self._recipes.list_by_status(RecipeStatus.PENDING, oldest_first=True)

    async def stats(self) -> StatusCounts:
        """Number of recipes in total and per status."""
        return await self._recipes.count_by_status()

    async def queue(self) -> ModerationQueue:
        """Pending recipes and counts, read together."""
        return ModerationQueue(pending=await self.list_pending(), stats=await self.stats())

    async def decide(
        self,
        admin: CurrentUser,
        recipe_id: UUID,
        decision: ModerationDecision,
    ) -> ModerationQueue:
        """Approve or reject a recipe, then return the refreshed queue.

        Raises:
            ModerationTargetNotFoundError: If the recipe does not exist.
        """
        status = decision.status
        if not await self._recipes.set_status(recipe_id, status):
            raise ModerationTargetNotFoundError(recipe_id)

        logger.info(
            "Recipe moderated",
            recipe_id=str(recipe_id),
            status=status.value,
            admin_id=str(admin.id),
        )
        return await self.queue()

    async def remove(self, admin: CurrentUser, recipe_id: UUID) -> ModerationQueue:
        """Delete a recipe from the moderation view, then return the refreshed queue.

        Raises:
            ModerationTargetNotFoundError: If the recipe does not exist.
        """
        if not await self._recipes.delete(recipe_id):
            raise ModerationTargetNotFoundError(recipe_id)
        logger.info("Recipe removed by admin", recipe_id=str(recipe_id), admin_id=str(admin.id))
        return await self.queue()
