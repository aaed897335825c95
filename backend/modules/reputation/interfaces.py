"""
Reputation module interfaces.

The debates module depends on IReputationService to record deltas after
settlement; it never touches reputation storage directly.
"""

from decimal import Decimal
from typing import Protocol, Sequence, runtime_checkable

from modules.debates.models import Debate, Vote, WinnerResult

from .models import ReputationEvent, ReputationSummary


@runtime_checkable
class IReputationStore(Protocol):
    """Persistence port for reputation events."""

    def record_events(self, events: Sequence[ReputationEvent]) -> None:
        ...

    def remove_events(self, event_ids: Sequence[str]) -> None:
        """Delete previously recorded events."""
        ...

    def list_events(self, user_id: str, limit: int = 50) -> list[ReputationEvent]:
        """Most recent events first."""
        ...

    def get_score(self, user_id: str) -> Decimal:
        """Sum of every delta recorded for the user."""
        ...


@runtime_checkable
class IReputationService(Protocol):
    """Interface for reading and writing reputation deltas."""

    async def apply_settlement(
        self,
        debate: Debate,
        result: WinnerResult,
        votes: Sequence[Vote],
    ) -> list[ReputationEvent]:
        """
        Record the deltas that follow a finalized debate.

        Returns:
            The recorded events
        """
        ...

    async def revoke_settlement(self, events: Sequence[ReputationEvent]) -> None:
        """Remove events recorded by apply_settlement for a finalize that did not commit."""
        ...

    async def get_summary(self, user_id: str, limit: int = 50) -> ReputationSummary:
        ...
