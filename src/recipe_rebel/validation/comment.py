"""Comment and profile text validation."""

from __future__ import annotations

from recipe_rebel.validation.exceptions import FormValidationError


COMMENT_MAX_LENGTH = 1000
DISPLAY_NAME_MAX_LENGTH = 100


def validate_comment(text: str | None) -> str:
    """Return the trimmed comment body.

    Raises:
        FormValidationError: If the body is empty after trimming or longer
            than 1000 characters.
    """
    body = (text or "").strip()
    if not body:
        raise FormValidationError("Comment cannot be empty", field="text")
    if len(body) > COMMENT_MAX_LENGTH:
        raise FormValidationError(
            "Comment must be less than 1000 characters", field="text"
        )
    return body


def validate_display_name(name: str | None) -> str:
    """Return the trimmed profile display name."""
    value = (name or "").strip()
    if not value:
        raise FormValidationError("Name cannot be empty", field="name")
    if len(value) > DISPLAY_NAME_MAX_LENGTH:
        raise FormValidationError("Name must be less than 100 characters", field="name")
    return value
