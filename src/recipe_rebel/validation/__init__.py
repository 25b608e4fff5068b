"""Form validation performed before any storage or network call."""

from recipe_rebel.validation.comment import validate_comment, validate_display_name
from recipe_rebel.validation.exceptions import FormValidationError
from recipe_rebel.validation.recipe import RecipeForm, validate_recipe_form


__all__ = [
    "FormValidationError",
    "RecipeForm",
    "validate_comment",
    "validate_display_name",
    "validate_recipe_form",
]
