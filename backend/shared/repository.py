"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the row-mapping helpers they share.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - Conversions between Python values and PostgREST JSON

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class DebateRepository(BaseRepository[Debate]):
            def get_debate(self, debate_id: str) -> Optional[Debate]:
                result = self._db.table("debates").select("*").eq("id", debate_id).execute()
                if not result.data:
                    return None
                return self._map_to_debate(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _decimal(value: Any, default: str = "0") -> Decimal:
        """Read a numeric column; PostgREST returns numerics as str or float."""
        if value is None:
            return Decimal(default)
        return Decimal(str(value))

    @staticmethod
    def _timestamp(value: Optional[datetime]) -> Optional[str]:
        """Serialize an optional datetime for an insert/update payload."""
        return value.isoformat() if value is not None else None
