"""AI assistant bridge exceptions.

Upstream failures are classified once, from the HTTP status, into an
``AssistantErrorKind`` that callers switch on.
"""

from __future__ import annotations

from enum import StrEnum


class AssistantErrorKind(StrEnum):
    """Why a request to the AI dietician failed."""

    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNKNOWN = "unknown"

    @classmethod
    def from_status(cls, status_code: int | None) -> AssistantErrorKind:
        """Classify an upstream HTTP status."""
        if status_code == 429:
            return cls.RATE_LIMITED
        if status_code == 402:
            return cls.QUOTA_EXCEEDED
        return cls.UNKNOWN


_USER_MESSAGES = {
    AssistantErrorKind.RATE_LIMITED: "Too many requests. Please try again in a moment.",
    AssistantErrorKind.QUOTA_EXCEEDED: "AI credits exhausted. Please try again later.",
    AssistantErrorKind.UNKNOWN: "Failed to get a response from the AI assistant.",
}


class AssistantError(Exception):
    """Raised when the AI dietician could not produce a reply."""

    def __init__(
        self,
        kind: AssistantErrorKind,
        detail: str | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail or self.user_message)

    @property
    def user_message(self) -> str:
        """Short message that can be shown to the person chatting."""
        return _USER_MESSAGES[self.kind]
