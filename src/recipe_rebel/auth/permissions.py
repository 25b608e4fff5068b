"""Application roles.

A user is either an ordinary USER or an ADMIN. The role is not carried in
the token: it comes from the ``user_roles`` table and is resolved once per
session (see ``recipe_rebel.auth.roles``).
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Application roles."""

    # Submits, rates, comments on and favorites recipes
    USER = "user"

    # Moderates submissions and may edit or delete any recipe
    ADMIN = "admin"


def can_manage_recipe(role: Role, user_id: object, author_id: object) -> bool:
    """Whether a user may edit or delete a recipe: its author, or any admin."""
    return role is Role.ADMIN or user_id == author_id
