"""Authentication and session roles."""

from recipe_rebel.auth.dependencies import (
    AdminUser,
    AuthenticatedUser,
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_current_user_optional,
    require_admin,
)
from recipe_rebel.auth.permissions import Role
from recipe_rebel.auth.roles import SessionRoleResolver, get_role_resolver


__all__ = [
    "AdminUser",
    "AuthenticatedUser",
    "CurrentUser",
    "OptionalUser",
    "Role",
    "SessionRoleResolver",
    "get_current_user",
    "get_current_user_optional",
    "get_role_resolver",
    "require_admin",
]
