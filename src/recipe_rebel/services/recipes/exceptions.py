"""Recipe service exceptions.

These exceptions are caught by the endpoint layer and converted to
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from uuid import UUID


class RecipeError(Exception):
    """Base exception for recipe service errors."""


class RecipeNotFoundError(RecipeError):
    """Raised when a recipe does not exist or is hidden from the caller.

    Non-approved recipes of other users are reported as missing rather than
    forbidden so their existence is not disclosed.
    """

    def __init__(self, recipe_id: UUID) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with identifier '{recipe_id}' not found")


class RecipeAccessDeniedError(RecipeError):
    """Raised when a user other than the author (and not an admin) edits or deletes."""

    def __init__(self, recipe_id: UUID) -> None:
        self.recipe_id = recipe_id
        super().__init__("Only the author or an administrator can change this recipe")
