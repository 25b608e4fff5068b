"""Recipe submission, editing and browsing."""

from recipe_rebel.services.recipes.exceptions import (
    RecipeAccessDeniedError,
    RecipeError,
    RecipeNotFoundError,
)
from recipe_rebel.services.recipes.service import RecipeDetail, RecipeService, is_visible_to


__all__ = [
    "RecipeAccessDeniedError",
    "RecipeDetail",
    "RecipeError",
    "RecipeNotFoundError",
    "RecipeService",
    "is_visible_to",
]
