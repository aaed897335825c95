"""
Base exception classes for the Gavel backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status, so module code only
has to pick the right parent.
"""

from typing import Optional, Any


class GavelError(Exception):
    """
    Base exception for all Gavel errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GavelError):
    """Resource not found."""

    pass


class ValidationError(GavelError):
    """Input validation failed."""

    pass


class AuthenticationError(GavelError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(GavelError):
    """Authorization failed (caller not entitled to the action)."""

    pass


class ConflictError(GavelError):
    """The requested change conflicts with current state."""

    pass


class ExternalServiceError(GavelError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
