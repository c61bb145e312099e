"""
Application error taxonomy.

Route handlers raise these; the handlers registered in ``app.main`` turn them
into JSON responses of the form ``{"message": ..., "field": ...}``.
"""
from typing import Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(AppError):
    """Missing or invalid credential."""
    status_code = 401
    default_message = "Authentication required"


class Forbidden(AppError):
    """Authenticated but not entitled to the resource."""
    status_code = 403
    default_message = "Access denied"


class NotFound(AppError):
    """No matching record, or a record whose existence is deliberately masked."""
    status_code = 404
    default_message = "Not found"
