"""Form validation exceptions."""

from __future__ import annotations

from fastapi import status

from recipe_rebel.core.exceptions import AppException, ErrorDetail


class FormValidationError(AppException):
    """A submitted form broke a validation rule.

    Only the first violated rule is reported; ``field`` names the offending
    form field and ``message`` is the user-facing text.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error="VALIDATION_ERROR",
            message=message,
            details=[
                ErrorDetail(code="VALIDATION_ERROR", message=message, field=field)
            ],
        )
