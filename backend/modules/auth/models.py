"""
Authentication module data models.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs. A connected wallet is
    carried in user_metadata; an administrator has role "admin" in
    app_metadata.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role")

    # Supabase-specific claims
    app_metadata: dict[str, Any] = Field(default_factory=dict)
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def wallet_address(self) -> Optional[str]:
        return self.user_metadata.get("wallet_address")

    @property
    def app_role(self) -> str:
        """Application role; 'user' unless app_metadata says otherwise."""
        return self.app_metadata.get("role") or "user"
