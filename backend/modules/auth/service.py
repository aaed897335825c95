"""
Authentication service implementation.

Validates Supabase JWT tokens with PyJWT.
"""

from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

JWT_ALGORITHMS = ["HS256"]
JWT_AUDIENCE = "authenticated"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses the Supabase project's JWT secret; no database round trip is
    needed to authenticate a request.
    """

    def __init__(self, jwt_secret: Optional[str] = None):
        self._jwt_secret = jwt_secret if jwt_secret is not None else get_settings().supabase_jwt_secret

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """Validate a JWT token and return the authenticated user."""
        if not token:
            raise MissingTokenError()
        if not self._jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=JWT_ALGORITHMS,
                audience=JWT_AUDIENCE,
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        claims = JWTPayload(**payload)
        return AuthenticatedUser(
            id=claims.sub,
            email=claims.email,
            wallet_address=claims.wallet_address,
            last_sign_in=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
            role=claims.app_role,
        )
