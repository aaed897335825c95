"""
Shared infrastructure for Gavel backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- debate_config: Injected debate policy (weights, thresholds, percentages)
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Root logger setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .debate_config import DebatePolicy, ScoreWeights, get_debate_policy
from .exceptions import (
    GavelError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "DebatePolicy",
    "ScoreWeights",
    "get_debate_policy",
    "GavelError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "ExternalServiceError",
    "AuthenticatedUser",
]
