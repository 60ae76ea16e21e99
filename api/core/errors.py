"""
Error taxonomy shared by services and routers.

Services raise these; the app maps every ApiError to its status code with a
JSON body of the form {"error": message}.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that translate into an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Access denied"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Invalid token"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class PayloadTooLarge(ApiError):
    status_code = 413
    default_message = "File too large"


class ServerError(ApiError):
    status_code = 500


class StorageError(ServerError):
    """Raised when the persistence backend or the asset directory fails."""


class ConfigurationError(Exception):
    """Invalid or missing configuration detected at startup."""
