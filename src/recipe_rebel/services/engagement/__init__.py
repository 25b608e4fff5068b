"""Favorites, ratings and comments."""

from recipe_rebel.services.engagement.service import EngagementService, RatingOutcome


__all__ = ["EngagementService", "RatingOutcome"]
