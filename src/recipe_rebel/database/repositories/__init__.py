"""Database repositories."""

from recipe_rebel.database.repositories.comments import CommentRecord, CommentRepository
from recipe_rebel.database.repositories.favorites import FavoriteRepository
from recipe_rebel.database.repositories.profiles import (
    ProfileRecord,
    ProfileRepository,
    UserRoleRepository,
)
from recipe_rebel.database.repositories.ratings import RatingRepository, RatingSummary
from recipe_rebel.database.repositories.recipes import (
    RecipeRecord,
    RecipeRepository,
    StatusCounts,
)


__all__ = [
    "CommentRecord",
    "CommentRepository",
    "FavoriteRepository",
    "ProfileRecord",
    "ProfileRepository",
    "RatingRepository",
    "RatingSummary",
    "RecipeRecord",
    "RecipeRepository",
    "StatusCounts",
    "UserRoleRepository",
]
