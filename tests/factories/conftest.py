"""Factory configuration and exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.auth import AuthResultFactory
from tests.factories.recipes import CommentRecordFactory, RecipeRecordFactory


__all__ = [
    "AuthResultFactory",
    "CommentRecordFactory",
    "RecipeRecordFactory",
]
