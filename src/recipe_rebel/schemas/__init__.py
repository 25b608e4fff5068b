"""Pydantic schemas for request/response validation.

This module exports all schema classes for the Recipe Rebel API.
"""

# Admin schemas
from recipe_rebel.schemas.admin import (
    ModerationQueueResponse,
    ModerationStatsResponse,
    PendingRecipesResponse,
)

# Assistant schemas
from recipe_rebel.schemas.assistant import ChatMessageIn, ChatRequest, ChatResponse

# Base classes
from recipe_rebel.schemas.base import (
    APIRequest,
    APIResponse,
    DownstreamRequest,
    DownstreamResponse,
)

# Enums
from recipe_rebel.schemas.enums import (
    ChatRole,
    HealthStatus,
    MealType,
    ModerationDecision,
    ReadinessStatus,
    RecipeStatus,
)

# Health schemas
from recipe_rebel.schemas.health import HealthResponse, ReadinessResponse

# Profile schemas
from recipe_rebel.schemas.profile import ProfileResponse, ProfileUpdateRequest

# Recipe schemas
from recipe_rebel.schemas.recipe import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    FavoriteResponse,
    NutritionInfo,
    RatingRequest,
    RatingResponse,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeResponse,
    RecipeSummary,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "ChatMessageIn",
    "ChatRequest",
    "ChatResponse",
    "ChatRole",
    "CommentCreateRequest",
    "CommentListResponse",
    "CommentResponse",
    "DownstreamRequest",
    "DownstreamResponse",
    "FavoriteResponse",
    "HealthResponse",
    "HealthStatus",
    "MealType",
    "ModerationDecision",
    "ModerationQueueResponse",
    "ModerationStatsResponse",
    "NutritionInfo",
    "PendingRecipesResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RatingRequest",
    "RatingResponse",
    "ReadinessResponse",
    "ReadinessStatus",
    "RecipeDetailResponse",
    "RecipeListResponse",
    "RecipeResponse",
    "RecipeStatus",
    "RecipeSummary",
]
