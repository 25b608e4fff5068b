"""FastAPI security dependencies.

Authentication is delegated to the configured provider (local_jwt or
header); the role of the caller is then resolved once per session by
``SessionRoleResolver`` and attached to ``CurrentUser``.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from recipe_rebel.auth.permissions import Role, can_manage_recipe
from recipe_rebel.auth.providers import (
    AuthenticationError,
    AuthResult,
    TokenExpiredError,
    get_auth_provider,
)
from recipe_rebel.auth.roles import SessionRoleResolver, get_role_resolver
from recipe_rebel.core.config import AuthMode, get_settings
from recipe_rebel.observability.logging import bind_context


# Tokens are issued by the external auth platform; this scheme only extracts them
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/auth/v1/token",
    scheme_name="JWT",
    description="JWT Bearer token issued by the auth platform",
    auto_error=False,
)

_WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


class CurrentUser(BaseModel):
    """The authenticated caller with its session role."""

    id: UUID
    session_id: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        """Whether the session holds the administrator role."""
        return self.role is Role.ADMIN

    def can_manage(self, author_id: UUID) -> bool:
        """Whether the user may edit or delete a recipe by ``author_id``."""
        return can_manage_recipe(self.role, self.id, author_id)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "UNAUTHORIZED", "message": message},
        headers=_WWW_AUTHENTICATE,
    )


async def _authenticate(request: Request, token: str | None) -> AuthResult:
    provider = get_auth_provider()
    if get_settings().auth_mode_enum == AuthMode.HEADER:
        token = ""  # Header provider ignores the token
    elif not token:
        msg = "Not authenticated"
        raise AuthenticationError(msg)
    return await provider.validate_token(token, request)


async def get_auth_result(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> AuthResult:
    """Validate the caller's credentials.

    Raises:
        HTTPException: 401 if authentication fails.
    """
    try:
        return await _authenticate(request, token)
    except TokenExpiredError:
        raise _unauthorized("Token has expired") from None
    except AuthenticationError as e:
        raise _unauthorized(str(e) or "Authentication failed") from None


async def get_auth_result_optional(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> AuthResult | None:
    """Validate credentials when present; anonymous callers get None."""
    try:
        return await _authenticate(request, token)
    except AuthenticationError:
        return None


async def _to_current_user(
    request: Request,
    auth_result: AuthResult,
    resolver: SessionRoleResolver,
) -> CurrentUser:
    try:
        user_id = UUID(auth_result.user_id)
    except ValueError:
        raise _unauthorized("Token subject is not a valid user id") from None

    role = await resolver.resolve(auth_result, user_id)
    user = CurrentUser(id=user_id, session_id=auth_result.session_id, role=role)

    # Rate limiting keys on the authenticated user
    request.state.user = user
    bind_context(user_id=str(user_id))
    return user


async def get_current_user(
    request: Request,
    auth_result: Annotated[AuthResult, Depends(get_auth_result)],
    resolver: Annotated[SessionRoleResolver, Depends(get_role_resolver)],
) -> CurrentUser:
    """Primary dependency of routes that need a signed-in user."""
    return await _to_current_user(request, auth_result, resolver)


async def get_current_user_optional(
    request: Request,
    auth_result: Annotated[AuthResult | None, Depends(get_auth_result_optional)],
    resolver: Annotated[SessionRoleResolver, Depends(get_role_resolver)],
) -> CurrentUser | None:
    """Dependency of routes open to anonymous visitors."""
    if auth_result is None:
        return None
    return await _to_current_user(request, auth_result, resolver)


async def require_admin(
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Allow only sessions holding the administrator role.

    Raises:
        HTTPException: 403 for ordinary users.
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "FORBIDDEN",
                "message": "Administrator access required",
            },
        )
    return user


AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_current_user_optional)]
AdminUser = Annotated[CurrentUser, Depends(require_admin)]
