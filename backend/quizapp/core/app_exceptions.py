"""Domain exceptions shared by the store adapter, repositories and services.

Repositories and services raise these and never HTTP errors; the API layer maps them
to responses in ``quizapp.core.errors``.
"""

from typing import Any

from fastapi import status


class QuizError(Exception):
    """Base error with a stable error code."""

    code: str = "QUIZ_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(QuizError):
    """Malformed or missing required input. Raised before any write."""

    code = "VALIDATION_ERROR"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(QuizError):
    """Referenced test or result does not exist."""

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(QuizError):
    """A key-value call failed, or a stored record could not be decoded."""

    code = "STORE_ERROR"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def validation_details(exc: Exception) -> list[dict[str, Any]] | None:
    """Flatten a pydantic validation error into ``{field, issue, type}`` items."""
    errors = getattr(exc, "errors", None)
    if not callable(errors):
        return None
    return [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "issue": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        for error in errors()
    ]
