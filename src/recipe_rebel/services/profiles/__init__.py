"""User profiles."""

from recipe_rebel.services.profiles.service import ProfileService


__all__ = ["ProfileService"]
