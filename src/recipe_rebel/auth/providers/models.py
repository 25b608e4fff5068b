"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Identity extracted from a validated token, whatever provider validated it.

    Attributes:
        user_id: Identifier of the authenticated user (from 'sub' claim).
        session_id: Stable identifier of the authenticated session. Every
            request of the same sign-in carries the same value.
        token_type: Type of token that was validated (access, header).
        issuer: Token issuer (from 'iss' claim).
        expires_at: Token expiration timestamp (from 'exp' claim).
        issued_at: Token issuance timestamp (from 'iat' claim).
        raw_claims: Original token claims for debugging/auditing.
    """

    user_id: str = Field(..., description="User identifier from token 'sub' claim")
    session_id: str = Field(..., description="Identifier of the signed-in session")
    token_type: str = Field(default="access", description="Type of validated token")
    issuer: str | None = Field(default=None, description="Token issuer")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    issued_at: int | None = Field(default=None, description="Issuance timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original token claims",
    )

    model_config = {"frozen": True}
