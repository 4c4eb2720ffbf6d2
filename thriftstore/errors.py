"""Application error taxonomy.

Each error carries the HTTP status it maps to and a short ``kind`` string
that is echoed back to clients in the ``error`` field of the JSON body.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors rendered as ``{"success": false, ...}``."""

    status_code = 500
    kind = "internal"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    kind = "validation"
    default_message = "Invalid request"


class InvalidCredentialsError(AppError):
    """Login failure. Never says whether the email exists."""

    status_code = 401
    kind = "invalid_credentials"
    default_message = "Invalid credentials"


class UnauthenticatedError(AppError):
    status_code = 401
    kind = "unauthenticated"
    default_message = "Not authenticated"


class ForbiddenError(AppError):
    status_code = 403
    kind = "forbidden"
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    kind = "not_found"
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    kind = "conflict"
    default_message = "Resource already exists"


class UpstreamError(AppError):
    status_code = 502
    kind = "upstream"
    default_message = "Identity provider request failed"


class InternalError(AppError):
    """Anything unexpected. The client only ever sees the default message."""


__all__ = [
    "AppError",
    "ConflictError",
    "ForbiddenError",
    "InternalError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UnauthenticatedError",
    "UpstreamError",
    "ValidationError",
]
