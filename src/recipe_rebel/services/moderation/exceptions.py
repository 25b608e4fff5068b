"""Moderation service exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from uuid import UUID


class ModerationError(Exception):
    """Base exception for moderation errors."""


class ModerationTargetNotFoundError(ModerationError):
    """Raised when the recipe to moderate does not exist."""

    def __init__(self, recipe_id: UUID) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with identifier '{recipe_id}' not found")
