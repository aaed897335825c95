"""
Debate lifecycle state machine.

    pending --join--> active --advance_to_voting--> voting --finalize--> completed
       |                 |
       +-----cancel------+----> cancelled

Every transition checks the current status first and raises
InvalidTransitionError naming both states when it is not allowed. Effects
are returned as an updated copy of the Debate; persisting it (with a
compare-and-set on the previous status) is the service's job.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from shared.debate_config import DebatePolicy

from .exceptions import (
    CannotJoinOwnDebateError,
    ChallengerAlreadyJoinedError,
    InvalidTransitionError,
    VotingNotReadyError,
)
from .models import (
    Argument,
    Debate,
    DebateStatus,
    FinalizeOutcome,
    Vote,
    utc_now,
)
from .prizes import PrizeDistributor
from .resolver import WinnerResolver

logger = logging.getLogger(__name__)


# Statuses each transition may start from
TRANSITIONS: dict[str, frozenset[DebateStatus]] = {
    "join": frozenset({DebateStatus.PENDING}),
    "advance_to_voting": frozenset({DebateStatus.ACTIVE}),
    "finalize": frozenset({DebateStatus.VOTING}),
    "cancel": frozenset({DebateStatus.PENDING, DebateStatus.ACTIVE}),
}


class DebateStateMachine:
    """
    Owns debate status and the preconditions and effects of each transition.

    Policy thresholds (minimum arguments, round and voting durations,
    minimum votes) come from the injected DebatePolicy.
    """

    def __init__(
        self,
        policy: DebatePolicy,
        resolver: Optional[WinnerResolver] = None,
        distributor: Optional[PrizeDistributor] = None,
    ) -> None:
        self._policy = policy
        self._resolver = resolver or WinnerResolver()
        self._distributor = distributor or PrizeDistributor(policy)

    @staticmethod
    def allowed_from(transition: str, status: DebateStatus) -> bool:
        """Whether transition may start from status."""
        return status in TRANSITIONS[transition]

    def _require(self, debate: Debate, transition: str) -> None:
        if not self.allowed_from(transition, debate.status):
            raise InvalidTransitionError(debate.id, debate.status.value, transition)

    # ------------------------------------------------------------------
    # join
    # ------------------------------------------------------------------

    def join(self, debate: Debate, challenger_id: str, now: Optional[datetime] = None) -> Debate:
        """
        Seat a challenger and open the argument exchange.

        Raises:
            InvalidTransitionError: If the debate is not pending
            ChallengerAlreadyJoinedError: If a challenger is already seated
            CannotJoinOwnDebateError: If the creator tries to join
        """
        self._require(debate, "join")
        if debate.challenger_id is not None:
            raise ChallengerAlreadyJoinedError(debate.id)
        if challenger_id == debate.creator_id:
            raise CannotJoinOwnDebateError(debate.id, challenger_id)

        now = now or utc_now()
        return debate.model_copy(update={
            "challenger_id": challenger_id,
            "status": DebateStatus.ACTIVE,
            "prize_pool": debate.stake_amount * 2,
            "start_time": now,
            "updated_at": now,
        })

    # ------------------------------------------------------------------
    # advance_to_voting
    # ------------------------------------------------------------------

    def round_deadline(self, debate: Debate, history: Sequence[Argument]) -> Optional[datetime]:
        """When the current turn times out: last activity + round duration."""
        last_activity = history[-1].posted_at if history else debate.start_time
        if last_activity is None:
            return None
        return last_activity + timedelta(hours=self._policy.round_duration_hours)

    def has_minimum_arguments(self, debate: Debate, history: Sequence[Argument]) -> bool:
        """Whether both sides posted at least the policy minimum."""
        minimum = self._policy.min_arguments_per_side
        return all(
            sum(1 for a in history if a.user_id == participant) >= minimum
            for participant in (debate.creator_id, debate.challenger_id)
        )

    def voting_readiness(
        self,
        debate: Debate,
        history: Sequence[Argument],
        now: Optional[datetime] = None,
    ) -> Optional[str]:
        """
        Why the debate cannot open voting yet.

        Returns:
            None when voting may open, otherwise a human-readable reason
        """
        if self.has_minimum_arguments(debate, history):
            return None
        deadline = self.round_deadline(debate, history)
        if deadline is not None and (now or utc_now()) >= deadline:
            return None
        return (
            f"each side needs {self._policy.min_arguments_per_side} arguments "
            "or the round deadline must pass"
        )

    def can_advance_to_voting(
        self,
        debate: Debate,
        history: Sequence[Argument],
        now: Optional[datetime] = None,
    ) -> bool:
        return (
            self.allowed_from("advance_to_voting", debate.status)
            and self.voting_readiness(debate, history, now) is None
        )

    def advance_to_voting(
        self,
        debate: Debate,
        history: Sequence[Argument],
        now: Optional[datetime] = None,
    ) -> Debate:
        """
        Close the argument exchange and open the voting window.

        Raises:
            InvalidTransitionError: If the debate is not active
            VotingNotReadyError: If neither argument minimum nor deadline is met
        """
        self._require(debate, "advance_to_voting")
        now = now or utc_now()
        reason = self.voting_readiness(debate, history, now)
        if reason is not None:
            raise VotingNotReadyError(debate.id, reason, {"arguments": len(history)})

        return debate.model_copy(update={
            "status": DebateStatus.VOTING,
            "end_time": now,
            "voting_ends_at": now + timedelta(hours=self._policy.voting_duration_hours),
            "updated_at": now,
        })

    # ------------------------------------------------------------------
    # finalize
    # ------------------------------------------------------------------

    def finalize_readiness(
        self,
        debate: Debate,
        vote_count: int,
        now: Optional[datetime] = None,
    ) -> Optional[str]:
        """Why the debate cannot be finalized yet (None when it can)."""
        if vote_count >= self._policy.min_votes_for_conclusion:
            return None
        if debate.voting_ends_at is not None and (now or utc_now()) >= debate.voting_ends_at:
            return None
        return (
            f"needs {self._policy.min_votes_for_conclusion} votes "
            "or the voting window must close"
        )

    def can_finalize(self, debate: Debate, vote_count: int, now: Optional[datetime] = None) -> bool:
        return (
            self.allowed_from("finalize", debate.status)
            and self.finalize_readiness(debate, vote_count, now) is None
        )

    def finalize(
        self,
        debate: Debate,
        votes: Sequence[Vote],
        now: Optional[datetime] = None,
    ) -> FinalizeOutcome:
        """
        Resolve the winner, settle the prize pool and complete the debate.

        Raises:
            InvalidTransitionError: If the debate is not in voting
            VotingNotReadyError: If neither vote threshold nor deadline is met
        """
        self._require(debate, "finalize")
        now = now or utc_now()
        reason = self.finalize_readiness(debate, len(votes), now)
        if reason is not None:
            raise VotingNotReadyError(debate.id, reason, {"votes": len(votes)})

        result = self._resolver.resolve(
            votes,
            creator_id=debate.creator_id,
            challenger_id=debate.challenger_id or "",
        )
        settlement = self._distributor.distribute(debate.prize_pool, len(votes))

        completed = debate.model_copy(update={
            "status": DebateStatus.COMPLETED,
            "winner_id": result.winner_id,
            "settlement": settlement,
            "updated_at": now,
        })
        logger.debug(
            "Finalized debate %s: winner=%s (%d vs %d)",
            debate.id, result.winner_id, result.creator_votes, result.challenger_votes,
        )
        return FinalizeOutcome(debate=completed, result=result, settlement=settlement)

    # ------------------------------------------------------------------
    # cancel
    # ------------------------------------------------------------------

    def cancel(self, debate: Debate, reason: str, now: Optional[datetime] = None) -> Debate:
        """
        Cancel a debate before any winner has been committed.

        Raises:
            InvalidTransitionError: If the debate is voting, completed or cancelled
        """
        self._require(debate, "cancel")
        now = now or utc_now()
        return debate.model_copy(update={
            "status": DebateStatus.CANCELLED,
            "cancel_reason": reason,
            "updated_at": now,
        })
