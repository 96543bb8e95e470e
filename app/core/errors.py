"""
Application error types.

Every error is rendered by the handlers in app.main as
{"success": false, "message": ..., "errors": [...]}.
"""
from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base error carrying an HTTP status code and a client-safe message."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AppError):
    status_code = 404


class AuthorizationError(AppError):
    status_code = 403


class ValidationFailed(AppError):
    """
    Raised when request parameters are malformed or out of range.

    Carries one entry per offending field so nothing is partially applied.
    """

    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("Validation failed")
        self.errors = errors


def validation_error(field: str, message: str, value: Any = None) -> Dict[str, Any]:
    """Build a single validation error entry."""
    return {"field": field, "message": message, "value": value}
