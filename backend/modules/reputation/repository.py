"""
Reputation repository for database access.

Stores reputation deltas in the reputation_events table; a user's score is
the sum of their deltas.
"""

import threading
from decimal import Decimal
from typing import Any, Sequence

from shared.repository import BaseRepository
from .models import ReputationEvent, ReputationEventType


class ReputationRepository(BaseRepository[ReputationEvent]):
    """Supabase implementation of IReputationStore."""

    def record_events(self, events: Sequence[ReputationEvent]) -> None:
        """Insert events in one request. No-op for an empty batch."""
        if not events:
            return
        rows = [
            {
                "id": e.id,
                "user_id": e.user_id,
                "event_type": e.event_type.value,
                "delta": str(e.delta),
                "debate_id": e.debate_id,
                "reason": e.reason,
                "created_at": self._timestamp(e.created_at),
            }
            for e in events
        ]
        self._db.table("reputation_events").insert(rows).execute()

    def remove_events(self, event_ids: Sequence[str]) -> None:
        """Delete events by ID. No-op for an empty batch."""
        if not event_ids:
            return
        self._db.table("reputation_events").delete().in_("id", list(event_ids)).execute()

    def list_events(self, user_id: str, limit: int = 50) -> list[ReputationEvent]:
        """Most recent events for a user."""
        result = (
            self._db.table("reputation_events")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._map_to_event(row) for row in result.data]

    def get_score(self, user_id: str) -> Decimal:
        """Sum of every delta recorded for the user."""
        result = (
            self._db.table("reputation_events")
            .select("delta")
            .eq("user_id", user_id)
            .execute()
        )
        return sum((self._decimal(row["delta"]) for row in result.data), Decimal(0))

    def _map_to_event(self, data: dict[str, Any]) -> ReputationEvent:
        """Map database row to ReputationEvent model."""
        return ReputationEvent(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            event_type=ReputationEventType(data["event_type"]),
            delta=self._decimal(data["delta"]),
            debate_id=str(data["debate_id"]) if data.get("debate_id") else None,
            reason=data.get("reason"),
            created_at=data["created_at"],
        )


class InMemoryReputationRepository:
    """List-backed IReputationStore for local development and tests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[ReputationEvent] = []

    def record_events(self, events: Sequence[ReputationEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def remove_events(self, event_ids: Sequence[str]) -> None:
        doomed = set(event_ids)
        with self._lock:
            self._events = [e for e in self._events if e.id not in doomed]

    def list_events(self, user_id: str, limit: int = 50) -> list[ReputationEvent]:
        with self._lock:
            mine = [e for e in self._events if e.user_id == user_id]
        mine.sort(key=lambda e: e.created_at, reverse=True)
        return mine[:limit]

    def get_score(self, user_id: str) -> Decimal:
        with self._lock:
            return sum((e.delta for e in self._events if e.user_id == user_id), Decimal(0))
