"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Populated from JWT claims and made available to route handlers via
    dependency injection. The debate core only ever sees ``id``; wallet
    addresses and basenames are resolved upstream.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: Optional[str] = Field(None, description="User's email address, if any")
    wallet_address: Optional[str] = Field(None, description="Connected wallet, if any")

    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")
    role: str = Field(default="user", description="User role")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }

    @property
    def is_admin(self) -> bool:
        """Whether the user may perform administrative transitions."""
        return self.role == "admin"
