"""
Reputation service.

Turns a debate outcome into numeric reputation deltas and records them.
Badges and any other gamification live outside this backend.
"""

import logging
from typing import Optional, Sequence

from shared.debate_config import DebatePolicy, ReputationRewards

from modules.debates.models import Debate, Vote, WinnerResult

from .interfaces import IReputationService, IReputationStore
from .models import ReputationEvent, ReputationEventType, ReputationSummary

logger = logging.getLogger(__name__)


def compute_settlement_events(
    debate: Debate,
    result: WinnerResult,
    votes: Sequence[Vote],
    rewards: ReputationRewards,
) -> list[ReputationEvent]:
    """
    Reputation deltas for a finalized debate.

    Winner gets the win reward and the other side the loss reward; on a tie
    both sides get the loss reward. Every voter gets the vote reward, plus
    the prediction reward when they picked the winner.
    """
    events: list[ReputationEvent] = []
    participants = [p for p in (debate.creator_id, debate.challenger_id) if p]

    for participant in participants:
        if participant == result.winner_id:
            events.append(ReputationEvent(
                user_id=participant,
                event_type=ReputationEventType.DEBATE_WIN,
                delta=rewards.winner,
                debate_id=debate.id,
                reason="Won debate",
            ))
        else:
            events.append(ReputationEvent(
                user_id=participant,
                event_type=ReputationEventType.DEBATE_LOSS,
                delta=rewards.loser,
                debate_id=debate.id,
                reason="Tied debate" if result.is_tie else "Lost debate",
            ))

    for vote in votes:
        events.append(ReputationEvent(
            user_id=vote.voter_id,
            event_type=ReputationEventType.VOTE_CAST,
            delta=rewards.vote_cast,
            debate_id=debate.id,
            reason="Voted on debate",
        ))
        if result.winner_id is not None and vote.winner_id == result.winner_id:
            events.append(ReputationEvent(
                user_id=vote.voter_id,
                event_type=ReputationEventType.CORRECT_PREDICTION,
                delta=rewards.correct_prediction,
                debate_id=debate.id,
                reason="Picked the winner",
            ))

    return events


class ReputationService(IReputationService):
    """Records reputation deltas through an IReputationStore."""

    def __init__(self, store: IReputationStore, policy: Optional[DebatePolicy] = None):
        self._store = store
        self._rewards = (policy or DebatePolicy()).reputation

    async def apply_settlement(
        self,
        debate: Debate,
        result: WinnerResult,
        votes: Sequence[Vote],
    ) -> list[ReputationEvent]:
        """Compute and store the deltas of a finalized debate."""
        events = compute_settlement_events(debate, result, votes, self._rewards)
        self._store.record_events(events)
        logger.info("Recorded %d reputation events for debate %s", len(events), debate.id)
        return events

    async def revoke_settlement(self, events: Sequence[ReputationEvent]) -> None:
        """Remove events recorded for a finalize that did not commit."""
        self._store.remove_events([e.id for e in events])
        logger.warning("Revoked %d reputation events", len(events))

    async def get_summary(self, user_id: str, limit: int = 50) -> ReputationSummary:
        """A user's reputation score with recent events."""
        return ReputationSummary(
            user_id=user_id,
            score=self._store.get_score(user_id),
            events=self._store.list_events(user_id, limit=limit),
        )
