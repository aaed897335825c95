import pytest

from modules.auth.models import JWTPayload
from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    def test_create_user(self):
        """Should create an authenticated user."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            role="user",
        )
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert not user.is_admin

    def test_user_is_immutable(self):
        """AuthenticatedUser should be immutable."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(Exception):  # Pydantic ValidationError
            user.id = "different-id"

    def test_admin(self):
        assert AuthenticatedUser(id="user-1", role="admin").is_admin


class TestJWTPayload:
    def test_parse_jwt_payload(self):
        """Should parse JWT payload from dict."""
        data = {
            "sub": "user-123",
            "email": "test@example.com",
            "exp": 1704067200,
            "iat": 1704063600,
            "aud": "authenticated",
            "role": "authenticated",
        }
        payload = JWTPayload(**data)
        assert payload.sub == "user-123"
        assert payload.email == "test@example.com"

    def test_jwt_defaults(self):
        """JWTPayload should have sensible defaults."""
        payload = JWTPayload(sub="user-123", exp=1704067200, iat=1704063600)
        assert payload.aud == "authenticated"
        assert payload.app_metadata == {}
        assert payload.wallet_address is None
        assert payload.app_role == "user"

    def test_jwt_with_metadata(self):
        """Wallet comes from user_metadata, application role from app_metadata."""
        payload = JWTPayload(
            sub="user-123",
            exp=1704067200,
            iat=1704063600,
            app_metadata={"provider": "email", "role": "admin"},
            user_metadata={"wallet_address": "0x1234"},
        )
        assert payload.wallet_address == "0x1234"
        assert payload.app_role == "admin"
