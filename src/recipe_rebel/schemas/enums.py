"""Enumeration types shared by schemas, repositories and services."""

from __future__ import annotations

from enum import StrEnum


class MealType(StrEnum):
    """Meal category a recipe belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class RecipeStatus(StrEnum):
    """Moderation status of a recipe.

    Only APPROVED recipes show up in public listings and search.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ModerationDecision(StrEnum):
    """Outcome an administrator can apply to a pending recipe."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def status(self) -> RecipeStatus:
        """Status the recipe ends up in."""
        if self is ModerationDecision.APPROVE:
            return RecipeStatus.APPROVED
        return RecipeStatus.REJECTED


class ChatRole(StrEnum):
    """Author of an assistant transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ReadinessStatus(StrEnum):
    """Readiness probe status values."""

    READY = "ready"
    DEGRADED = "degraded"
    NOT_READY = "not_ready"
