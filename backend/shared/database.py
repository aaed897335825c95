"""
Database client factory for Supabase.

The backend talks to Supabase with the service role key: authorization is
decided by the debate services, not by row level security.
"""

from typing import Any, Optional
from supabase import create_client, Client

from .config import get_settings

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If Supabase settings are missing
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set GAVEL_SUPABASE_URL and GAVEL_SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def is_unique_violation(error: Any) -> bool:
    """Whether a postgrest APIError was raised by a unique constraint."""
    return getattr(error, "code", None) == UNIQUE_VIOLATION


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
