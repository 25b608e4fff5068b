"""Application lifecycle events."""

from recipe_rebel.core.events.lifespan import lifespan


__all__ = ["lifespan"]
