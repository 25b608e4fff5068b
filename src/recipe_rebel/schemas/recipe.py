"""Recipe, comment, rating and favorite schemas.

Recipe writes arrive as multipart forms (see the recipe endpoints) and are
validated by ``recipe_rebel.validation``; the schemas here describe the JSON
bodies of every other request and of all responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import Field

from recipe_rebel.schemas.base import APIRequest, APIResponse
from recipe_rebel.schemas.enums import MealType, RecipeStatus


if TYPE_CHECKING:
    from recipe_rebel.database.repositories import (
        CommentRecord,
        RatingSummary,
        RecipeRecord,
    )
    from recipe_rebel.services.recipes import RecipeDetail


# =============================================================================
# Recipes
# =============================================================================


class NutritionInfo(APIResponse):
    """Optional nutrition facts per serving."""

    calories: float | None = Field(default=None, description="Energy in kcal")
    protein: float | None = Field(default=None, description="Protein in grams")
    carbs: float | None = Field(default=None, description="Carbohydrates in grams")
    fat: float | None = Field(default=None, description="Fat in grams")


class RecipeSummary(APIResponse):
    """Recipe as shown on a listing card."""

    id: UUID = Field(..., description="Recipe identifier")
    title: str = Field(..., description="Recipe title")
    preparation_time: int = Field(..., description="Preparation time in minutes")
    meal_type: MealType | None = Field(default=None, description="Meal category")
    image_url: str | None = Field(default=None, description="Public image URL")
    author_id: UUID = Field(..., description="Submitting user")
    author_name: str | None = Field(default=None, description="Author display name")
    status: RecipeStatus = Field(..., description="Moderation status")
    rating: float | None = Field(
        default=None,
        ge=1.0,
        le=5.0,
        description="Average rating, absent when nobody has rated yet",
    )
    rating_count: int = Field(default=0, ge=0, description="Number of ratings")
    created_at: datetime = Field(..., description="Submission time")

    @classmethod
    def from_record(cls, record: RecipeRecord) -> RecipeSummary:
        """Build a listing entry from a stored recipe."""
        return cls(
            id=record.id,
            title=record.title,
            preparation_time=record.preparation_time,
            meal_type=record.meal_type,
            image_url=record.image_url,
            author_id=record.author_id,
            author_name=record.author_name,
            status=record.status,
            rating=record.rating,
            rating_count=record.rating_count,
            created_at=record.created_at,
        )


class RecipeResponse(RecipeSummary):
    """Full recipe including ingredients, steps and nutrition."""

    ingredients: list[str] = Field(..., description="Ingredient lines in order")
    steps: list[str] = Field(..., description="Instruction steps in order")
    nutrition: NutritionInfo = Field(
        default_factory=NutritionInfo,
        description="Nutrition facts per serving",
    )
    updated_at: datetime = Field(..., description="Last modification time")

    @classmethod
    def from_record(cls, record: RecipeRecord) -> RecipeResponse:
        """Build the full representation of a stored recipe."""
        summary = RecipeSummary.from_record(record)
        return cls(
            **summary.model_dump(by_alias=False),
            ingredients=record.ingredients,
            steps=record.steps,
            nutrition=NutritionInfo(
                calories=record.calories,
                protein=record.protein,
                carbs=record.carbs,
                fat=record.fat,
            ),
            updated_at=record.updated_at,
        )


class RecipeListResponse(APIResponse):
    """A page of recipes."""

    recipes: list[RecipeSummary] = Field(default_factory=list)
    count: int = Field(..., ge=0, description="Number of recipes in this page")
    limit: int | None = Field(default=None, description="Page size requested")
    offset: int | None = Field(default=None, description="Offset requested")

    @classmethod
    def from_records(
        cls,
        records: list[RecipeRecord],
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> RecipeListResponse:
        """Wrap stored recipes in a listing page."""
        return cls(
            recipes=[RecipeSummary.from_record(r) for r in records],
            count=len(records),
            limit=limit,
            offset=offset,
        )


# =============================================================================
# Comments
# =============================================================================


class CommentCreateRequest(APIRequest):
    """Body of ``POST /recipes/{id}/comments``."""

    # Length rules are enforced by the comment validator for uniform messages
    text: str | None = Field(default=None, description="Comment text")


class CommentResponse(APIResponse):
    """A comment with its author's display name."""

    id: UUID
    recipe_id: UUID
    user_id: UUID
    author_name: str | None = None
    text: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: CommentRecord) -> CommentResponse:
        """Build from a stored comment."""
        return cls(**record.model_dump())


class CommentListResponse(APIResponse):
    """Comments of a recipe, newest first."""

    comments: list[CommentResponse] = Field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[CommentRecord]) -> CommentListResponse:
        """Wrap stored comments."""
        return cls(comments=[CommentResponse.from_record(c) for c in records])


# =============================================================================
# Detail page
# =============================================================================


class RecipeDetailResponse(APIResponse):
    """Everything the recipe page needs in one response."""

    recipe: RecipeResponse
    comments: list[CommentResponse] = Field(default_factory=list)
    user_rating: int | None = Field(
        default=None,
        description="The caller's own rating, when signed in and rated",
    )
    is_favorite: bool = Field(
        default=False,
        description="Whether the caller has favorited the recipe",
    )

    @classmethod
    def from_detail(cls, detail: RecipeDetail) -> RecipeDetailResponse:
        """Build from the service's detail aggregate."""
        return cls(
            recipe=RecipeResponse.from_record(detail.recipe),
            comments=[CommentResponse.from_record(c) for c in detail.comments],
            user_rating=detail.user_rating,
            is_favorite=detail.is_favorite,
        )


# =============================================================================
# Ratings & favorites
# =============================================================================


class RatingRequest(APIRequest):
    """Body of ``PUT /recipes/{id}/rating``; range checked by the service."""

    rating: int = Field(..., description="Star rating from 1 to 5", examples=[4])


class RatingResponse(APIResponse):
    """The caller's rating and the recipe's refreshed aggregate."""

    user_rating: int = Field(..., ge=1, le=5)
    average: float | None = Field(default=None, description="Average rating")
    count: int = Field(..., ge=0, description="Number of ratings")

    @classmethod
    def from_outcome(cls, user_rating: int, summary: RatingSummary) -> RatingResponse:
        """Build from the stored rating and aggregate."""
        return cls(
            user_rating=user_rating,
            average=summary.average,
            count=summary.count,
        )


class FavoriteResponse(APIResponse):
    """Favorite membership after a toggle, add or remove."""

    recipe_id: UUID
    is_favorite: bool
