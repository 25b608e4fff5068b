"""Administrator review of submitted recipes."""

from recipe_rebel.services.moderation.exceptions import (
    ModerationError,
    ModerationTargetNotFoundError,
)
from recipe_rebel.services.moderation.service import ModerationQueue, ModerationService


__all__ = [
    "ModerationError",
    "ModerationQueue",
    "ModerationService",
    "ModerationTargetNotFoundError",
]
