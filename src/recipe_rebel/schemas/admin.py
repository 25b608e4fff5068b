"""Moderation schemas.

Every moderation write responds with the refreshed queue so the admin view
never has to issue a second request to stay current.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from recipe_rebel.schemas.base import APIResponse
from recipe_rebel.schemas.recipe import RecipeResponse


if TYPE_CHECKING:
    from recipe_rebel.database.repositories import RecipeRecord, StatusCounts
    from recipe_rebel.services.moderation import ModerationQueue


class ModerationStatsResponse(APIResponse):
    """Recipe counts in total and per moderation status."""

    total: int = Field(..., ge=0)
    approved: int = Field(..., ge=0)
    pending: int = Field(..., ge=0)
    rejected: int = Field(..., ge=0)

    @classmethod
    def from_counts(cls, counts: StatusCounts) -> ModerationStatsResponse:
        """Build from repository counts."""
        return cls(**counts.model_dump())


class PendingRecipesResponse(APIResponse):
    """Pending recipes in submission order, oldest first."""

    recipes: list[RecipeResponse] = Field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[RecipeRecord]) -> PendingRecipesResponse:
        """Wrap pending recipes."""
        return cls(recipes=[RecipeResponse.from_record(r) for r in records])


class ModerationQueueResponse(APIResponse):
    """Pending queue and counts, re-read after a moderation write."""

    pending: list[RecipeResponse] = Field(default_factory=list)
    stats: ModerationStatsResponse

    @classmethod
    def from_queue(cls, queue: ModerationQueue) -> ModerationQueueResponse:
        """Build from the service's queue snapshot."""
        return cls(
            pending=[RecipeResponse.from_record(r) for r in queue.pending],
            stats=ModerationStatsResponse.from_counts(queue.stats),
        )
