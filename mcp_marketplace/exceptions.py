"""
Structured exception types for the marketplace.

The search core itself never raises; these errors come from store
mutations, the contact relay and the MCP tool layer.
"""

from typing import Any


class MarketplaceError(Exception):
    """Base exception for marketplace errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


class NotFoundError(MarketplaceError):
    """Referenced vendor, product or user does not exist."""

    pass


class PermissionDeniedError(MarketplaceError):
    """Caller's session is not allowed to perform the operation."""

    pass


class SanctionedError(MarketplaceError):
    """Operation refused because an account or vendor is blocked."""

    pass


class ValidationError(MarketplaceError):
    """Invalid input to a mutating operation."""

    pass


class StoreError(MarketplaceError):
    """Error loading or saving the store document."""

    pass


class ContactRelayError(MarketplaceError):
    """Contact form could not be delivered."""

    pass


class ErrorResult:
    """Structured error result for tool responses."""

    def __init__(self, error: Exception, context: str = "", recoverable: bool = False):
        self.error = error
        self.context = context
        self.recoverable = recoverable
        self.error_type = type(error).__name__
        self.message = str(error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "details": getattr(self.error, "details", {}),
        }
