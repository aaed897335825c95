"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
The debate core only ever sees the resulting AuthenticatedUser.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """Interface for authentication operations."""

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
