"""Recipe form validation.

Raw form values (multipart fields or JSON) are normalized into a
``RecipeForm``: blank ingredient and step entries are dropped, numbers are
coerced, and every rule is checked in field order so that the first
violation is the one reported.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from recipe_rebel.schemas.enums import MealType
from recipe_rebel.validation.exceptions import FormValidationError


if TYPE_CHECKING:
    from collections.abc import Mapping


TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
MAX_INGREDIENTS = 50
INGREDIENT_MAX_LENGTH = 200
MAX_STEPS = 50
STEP_MAX_LENGTH = 2000
PREPARATION_TIME_MIN = 1
PREPARATION_TIME_MAX = 1440  # 24 hours
CALORIES_MAX = 10000.0
MACRO_MAX = 1000.0

# Optional sign and ASCII digits only, no exponent or separators
_WHOLE_NUMBER = re.compile(r"[+-]?[0-9]+")


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("form_rule", message)


def _entries(value: Any) -> list[str]:
    """Normalize ingredient or step input into non-blank entries.

    A single string is newline separated text and is split into lines; a
    list already holds one entry per item, so items are only trimmed.
    """
    if value is None:
        return []
    if isinstance(value, str):
        candidates = value.splitlines()
    else:
        candidates = [str(item) for item in value]
    return [entry.strip() for entry in candidates if entry.strip()]


def _whole_minutes(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _WHOLE_NUMBER.fullmatch(value.strip()):
        return int(value.strip())
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _bounded_number(value: Any, label: str, ceiling: float) -> float | None:
    if _is_blank(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise _fail(f"{label} must be a number") from None
    if math.isnan(number) or not 0 <= number <= ceiling:
        raise _fail(f"{label} must be between 0 and {ceiling:g}")
    return number


class RecipeForm(BaseModel):
    """Normalized recipe form values, ready to be stored."""

    model_config = ConfigDict(frozen=True)

    title: str
    ingredients: list[str]
    steps: list[str]
    preparation_time: int
    meal_type: MealType | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        title = "" if value is None else str(value).strip()
        if len(title) < TITLE_MIN_LENGTH:
            raise _fail("Title must be at least 3 characters")
        if len(title) > TITLE_MAX_LENGTH:
            raise _fail("Title must be less than 100 characters")
        return title

    @field_validator("ingredients", mode="before")
    @classmethod
    def _check_ingredients(cls, value: Any) -> list[str]:
        ingredients = _entries(value)
        if not ingredients:
            raise _fail("At least one ingredient is required")
        if len(ingredients) > MAX_INGREDIENTS:
            raise _fail("Maximum 50 ingredients allowed")
        if any(len(item) > INGREDIENT_MAX_LENGTH for item in ingredients):
            raise _fail("Ingredient must be less than 200 characters")
        return ingredients

    @field_validator("steps", mode="before")
    @classmethod
    def _check_steps(cls, value: Any) -> list[str]:
        steps = _entries(value)
        if not steps:
            raise _fail("At least one step is required")
        if len(steps) > MAX_STEPS:
            raise _fail("Maximum 50 steps allowed")
        if any(len(step) > STEP_MAX_LENGTH for step in steps):
            raise _fail("Step must be less than 2000 characters")
        return steps

    @field_validator("preparation_time", mode="before")
    @classmethod
    def _check_preparation_time(cls, value: Any) -> int:
        minutes = _whole_minutes(value)
        if minutes is None:
            raise _fail("Preparation time must be a whole number of minutes")
        if minutes < PREPARATION_TIME_MIN:
            raise _fail("Preparation time must be at least 1 minute")
        if minutes > PREPARATION_TIME_MAX:
            raise _fail("Preparation time must be less than 24 hours")
        return minutes

    @field_validator("meal_type", mode="before")
    @classmethod
    def _check_meal_type(cls, value: Any) -> MealType | None:
        if _is_blank(value):
            return None
        try:
            return MealType(str(value).strip().lower())
        except ValueError:
            raise _fail("Meal type must be one of: breakfast, lunch, dinner") from None

    @field_validator("calories", mode="before")
    @classmethod
    def _check_calories(cls, value: Any) -> float | None:
        return _bounded_number(value, "Calories", CALORIES_MAX)

    @field_validator("protein", "carbs", "fat", mode="before")
    @classmethod
    def _check_macro(cls, value: Any, info: Any) -> float | None:
        return _bounded_number(value, info.field_name.capitalize(), MACRO_MAX)


def validate_recipe_form(data: Mapping[str, Any]) -> RecipeForm:
    """Validate raw recipe form values.

    Args:
        data: Raw values keyed by field name. Missing keys count as empty.

    Returns:
        The normalized form.

    Raises:
        FormValidationError: With the message of the first violated rule.
    """
    try:
        return RecipeForm.model_validate(
            {field: data.get(field) for field in RecipeForm.model_fields}
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else None
        raise FormValidationError(first["msg"], field=field) from None
