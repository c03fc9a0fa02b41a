"""
Error types shared by the storefront services.

Services raise these; the application layer maps them to HTTP
status codes and the standard response envelope.
"""
from typing import Optional


class StorefrontError(Exception):
    """Base class for failures reported to API callers."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Invalid or expired token"


class AuthorizationError(StorefrontError):
    status_code = 403
    default_message = "Admin access required"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ConflictError(StorefrontError):
    status_code = 409
    default_message = "Resource already exists"


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""
