"""Custom exception classes for the design marketplace API.

Every request-level failure is expressed as a ``MarketplaceError`` subclass
carrying the HTTP status it maps to. The handlers in
``core.error_handlers`` turn them into ``{"success": false, "error": ...}``
responses.
"""

from typing import Any, Dict, List, Optional


class MarketplaceError(Exception):
    """Base exception for all request-level marketplace errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        """Initialize the exception.

        Args:
            message: Human-readable message returned to the caller.
        """
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class ValidationError(MarketplaceError):
    """Raised when request input is malformed or missing."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
    ):
        """Initialize the exception.

        Args:
            message: Summary message.
            errors: Field-level details as ``{"field", "message"}`` dicts.
        """
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class AuthenticationError(MarketplaceError):
    """Raised when a token is missing, invalid or expired."""

    status_code = 401
    default_message = "Invalid or expired token"


class AuthorizationError(MarketplaceError):
    """Raised when a valid identity lacks the required role or ownership."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(MarketplaceError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(MarketplaceError):
    """Raised on duplicate unique keys or disallowed status transitions."""

    status_code = 409
    default_message = "Conflict"


class PayloadTooLargeError(MarketplaceError):
    status_code = 413
    default_message = "File too large"


class RateLimitError(MarketplaceError):
    status_code = 429
    default_message = "Too many requests, please try again later."


class InternalError(MarketplaceError):
    """Raised for unexpected failures, including data-store errors."""

    pass


class ConfigurationError(Exception):
    """Raised when there is a configuration error at startup."""

    pass


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with or carries bad claims."""

    pass


class ExpiredTokenError(InvalidTokenError):
    """Raised when a token's expiry has passed."""

    pass
