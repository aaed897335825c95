"""
Debate lifecycle service.

Orchestrates the pure engines (DebateStateMachine, turn gate) against an
IDebateStore. Every operation that reads state and then writes it runs
inside the per-debate lock, and status writes are compare-and-set on the
status the transition started from.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from shared.debate_config import DebatePolicy
from shared.models import AuthenticatedUser

from .exceptions import (
    DebateAccessDeniedError,
    DebateNotFoundError,
    DebateValidationError,
    DuplicateArgumentError,
    InvalidTransitionError,
    NotParticipantError,
    OutOfTurnError,
    StaleDebateError,
)
from .interfaces import IDebateService, IDebateStore
from .locks import DebateLockManager
from .models import (
    Argument,
    CreateDebateRequest,
    Debate,
    DebateCategory,
    DebateFilters,
    DebateFormat,
    DebateListResponse,
    DebateStatus,
    Eligibility,
    FinalizeOutcome,
    SubmitArgumentRequest,
    utc_now,
)
from .state_machine import DebateStateMachine
from .turn_gate import NOT_A_PARTICIPANT, OPPONENT_NOT_JOINED, check_turn, count_words

logger = logging.getLogger(__name__)

TOPIC_MIN_LENGTH = 10
TOPIC_MAX_LENGTH = 200
RESOLUTION_MIN_LENGTH = 50
RESOLUTION_MAX_LENGTH = 1000

DEBATE_NOT_ACTIVE = "debate is not active"
NOT_IN_VOTING = "debate is not in voting phase"
PARTICIPANT_VOTE = "participants cannot vote"
ALREADY_VOTED = "already voted"


class DebateService(IDebateService):
    """
    Debate service over an IDebateStore.

    Implements IDebateService protocol.
    """

    def __init__(
        self,
        store: IDebateStore,
        policy: DebatePolicy,
        locks: Optional[DebateLockManager] = None,
        reputation: Any = None,  # IReputationService - injected
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._policy = policy
        self._locks = locks or DebateLockManager()
        self._reputation = reputation
        self._clock = clock
        self._machine = DebateStateMachine(policy)

    @property
    def state_machine(self) -> DebateStateMachine:
        return self._machine

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _load(self, debate_id: str) -> Debate:
        debate = self._store.get_debate(debate_id)
        if debate is None:
            raise DebateNotFoundError(debate_id)
        return debate

    async def get_debate(self, debate_id: str) -> Debate:
        """Get a debate by ID."""
        return self._load(debate_id)

    async def list_debates(self, filters: DebateFilters) -> DebateListResponse:
        """List debates with filters, sort and pagination."""
        return self._store.list_debates(filters)

    async def list_arguments(self, debate_id: str) -> list[Argument]:
        """Arguments of a debate in posting order."""
        self._load(debate_id)
        return self._store.list_arguments(debate_id)

    # -------------------------------------------------------------------------
    # Create / delete
    # -------------------------------------------------------------------------

    def _validate_create(self, request: CreateDebateRequest) -> list[dict[str, str]]:
        errors: list[dict[str, str]] = []

        topic = request.topic.strip()
        if not TOPIC_MIN_LENGTH <= len(topic) <= TOPIC_MAX_LENGTH:
            errors.append({
                "field": "topic",
                "message": f"must be between {TOPIC_MIN_LENGTH} and {TOPIC_MAX_LENGTH} characters",
            })

        resolution = request.resolution.strip()
        if not RESOLUTION_MIN_LENGTH <= len(resolution) <= RESOLUTION_MAX_LENGTH:
            errors.append({
                "field": "resolution",
                "message": f"must be between {RESOLUTION_MIN_LENGTH} and {RESOLUTION_MAX_LENGTH} characters",
            })

        if request.category not in {c.value for c in DebateCategory}:
            errors.append({"field": "category", "message": "Invalid category"})

        if request.format not in {f.value for f in DebateFormat}:
            errors.append({"field": "format", "message": "must be 'async' or 'timed'"})

        stake = request.stake_amount
        if not self._policy.min_stake <= stake <= self._policy.max_stake:
            errors.append({
                "field": "stake_amount",
                "message": f"must be between {self._policy.min_stake} and {self._policy.max_stake} USDC",
            })
        elif stake != stake.to_integral_value():
            errors.append({"field": "stake_amount", "message": "must be a whole number"})

        return errors

    async def create_debate(self, creator_id: str, request: CreateDebateRequest) -> Debate:
        """
        Create a new debate in PENDING status.

        Raises:
            DebateValidationError: With every invalid field
        """
        errors = self._validate_create(request)
        if errors:
            raise DebateValidationError(errors)

        now = self._clock()
        debate = Debate(
            id=str(uuid.uuid4()),
            topic=request.topic.strip(),
            resolution=request.resolution.strip(),
            category=DebateCategory(request.category),
            format=DebateFormat(request.format),
            status=DebateStatus.PENDING,
            creator_id=creator_id,
            stake_amount=request.stake_amount,
            prize_pool=Decimal(0),
            created_at=now,
            updated_at=now,
        )
        created = self._store.create_debate(debate)
        logger.info("Debate %s created by %s (stake %s)", created.id, creator_id, created.stake_amount)
        return created

    async def delete_debate(self, debate_id: str, user: AuthenticatedUser) -> None:
        """
        Delete a debate and its arguments and votes.

        Raises:
            DebateAccessDeniedError: If the user is not the creator
            InvalidTransitionError: If the debate is neither pending nor cancelled
        """
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            if debate.creator_id != user.id:
                raise DebateAccessDeniedError(debate_id, user.id, "delete")
            if debate.status not in (DebateStatus.PENDING, DebateStatus.CANCELLED):
                raise InvalidTransitionError(debate_id, debate.status.value, "delete")
            self._store.delete_debate(debate_id)
        logger.info("Debate %s deleted by %s", debate_id, user.id)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _persist(self, updated: Debate, expected: DebateStatus, transition: str) -> Debate:
        """Compare-and-set write; a lost race surfaces as InvalidTransitionError."""
        try:
            return self._store.update_debate(updated, expected)
        except StaleDebateError:
            current = self._load(updated.id)
            raise InvalidTransitionError(updated.id, current.status.value, transition)

    async def join_debate(self, debate_id: str, challenger_id: str) -> Debate:
        """Join a pending debate as challenger."""
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            joined = self._machine.join(debate, challenger_id, now=self._clock())
            stored = self._persist(joined, DebateStatus.PENDING, "join")
        logger.info("User %s joined debate %s", challenger_id, debate_id)
        return stored

    async def advance_to_voting(self, debate_id: str) -> Debate:
        """Open voting once arguments or the round deadline allow it."""
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            history = self._store.list_arguments(debate_id)
            voting = self._machine.advance_to_voting(debate, history, now=self._clock())
            stored = self._persist(voting, DebateStatus.ACTIVE, "advance_to_voting")
        logger.info("Debate %s moved to voting until %s", debate_id, stored.voting_ends_at)
        return stored

    async def finalize_debate(self, debate_id: str) -> FinalizeOutcome:
        """
        Resolve the winner, settle the pool and complete the debate.

        Reputation deltas are recorded before the status write so that a
        failure leaves the debate in voting and finalize can be retried.
        If the status write fails, the recorded deltas are revoked.
        """
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            votes = self._store.list_votes(debate_id)
            outcome = self._machine.finalize(debate, votes, now=self._clock())

            events = []
            if self._reputation is not None:
                events = await self._reputation.apply_settlement(
                    outcome.debate, outcome.result, votes
                )
            try:
                stored = self._persist(outcome.debate, DebateStatus.VOTING, "finalize")
            except Exception:
                if events:
                    await self._reputation.revoke_settlement(events)
                raise
            outcome = outcome.model_copy(update={"debate": stored})

        logger.info(
            "Debate %s completed: winner=%s tie=%s prize=%s",
            debate_id, outcome.result.winner_id, outcome.result.is_tie,
            outcome.settlement.winner_prize,
        )
        return outcome

    async def cancel_debate(self, debate_id: str, user: AuthenticatedUser, reason: str) -> Debate:
        """Cancel a pending or active debate (creator or admin)."""
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            if debate.creator_id != user.id and not user.is_admin:
                raise DebateAccessDeniedError(debate_id, user.id, "cancel")
            previous = debate.status
            cancelled = self._machine.cancel(debate, reason, now=self._clock())
            stored = self._persist(cancelled, previous, "cancel")
        logger.info("Debate %s cancelled by %s: %s", debate_id, user.id, reason)
        return stored

    # -------------------------------------------------------------------------
    # Arguments
    # -------------------------------------------------------------------------

    def _validate_content(self, content: str) -> tuple[str, int]:
        cleaned = content.strip()
        words = count_words(cleaned)
        low, high = self._policy.min_argument_words, self._policy.max_argument_words
        if not cleaned:
            raise DebateValidationError([{"field": "content", "message": "is required"}])
        if words < low or words > high:
            raise DebateValidationError([{
                "field": "content",
                "message": f"must be between {low} and {high} words (got {words})",
            }])
        return cleaned, words

    async def submit_argument(
        self,
        debate_id: str,
        user_id: str,
        request: SubmitArgumentRequest,
    ) -> Argument:
        """
        Post the next argument in turn.

        History is read, the turn is checked and the argument appended under
        the debate's lock. When both sides have reached the argument
        minimum the debate moves to voting in the same critical section.
        """
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            history = self._store.list_arguments(debate_id)
            decision = check_turn(debate, history, user_id)
            if not decision.allowed:
                if decision.reason == NOT_A_PARTICIPANT:
                    raise NotParticipantError(debate_id, user_id)
                raise OutOfTurnError(debate_id, user_id, decision.reason or "")
            if debate.status != DebateStatus.ACTIVE:
                raise InvalidTransitionError(debate_id, debate.status.value, "submit_argument")

            content, words = self._validate_content(request.content)

            round_number = decision.round_number or 1
            if request.round_number is not None and request.round_number != round_number:
                raise DebateValidationError([{
                    "field": "round_number",
                    "message": f"expected round {round_number}, got {request.round_number}",
                }])

            argument = Argument(
                id=str(uuid.uuid4()),
                debate_id=debate_id,
                user_id=user_id,
                content=content,
                round_number=round_number,
                word_count=words,
                posted_at=self._clock(),
            )
            try:
                stored = self._store.append_argument(argument)
            except DuplicateArgumentError:
                logger.warning(
                    "Duplicate round %d by %s on debate %s", round_number, user_id, debate_id
                )
                raise OutOfTurnError(debate_id, user_id, "round already submitted")

            history = [*history, stored]
            if self._machine.has_minimum_arguments(debate, history):
                voting = self._machine.advance_to_voting(debate, history, now=self._clock())
                self._persist(voting, DebateStatus.ACTIVE, "advance_to_voting")
                logger.info("Debate %s reached the argument minimum; voting opened", debate_id)

        logger.debug("Argument %s (round %d) posted on %s", stored.id, round_number, debate_id)
        return stored

    # -------------------------------------------------------------------------
    # Eligibility
    # -------------------------------------------------------------------------

    async def check_eligibility(self, debate_id: str, user_id: str) -> Eligibility:
        """What user_id may do on the debate right now."""
        debate = self._load(debate_id)

        can_join = (
            debate.status == DebateStatus.PENDING
            and debate.challenger_id is None
            and debate.creator_id != user_id
        )

        can_submit = False
        argument_reason: Optional[str] = None
        next_round: Optional[int] = None
        if not debate.is_participant(user_id):
            argument_reason = NOT_A_PARTICIPANT
        elif debate.challenger_id is None:
            argument_reason = OPPONENT_NOT_JOINED
        elif debate.status != DebateStatus.ACTIVE:
            argument_reason = DEBATE_NOT_ACTIVE
        else:
            decision = check_turn(debate, self._store.list_arguments(debate_id), user_id)
            can_submit = decision.allowed
            argument_reason = decision.reason
            next_round = decision.round_number

        can_vote = False
        vote_reason: Optional[str] = None
        if debate.status != DebateStatus.VOTING:
            vote_reason = NOT_IN_VOTING
        elif debate.is_participant(user_id):
            vote_reason = PARTICIPANT_VOTE
        elif self._store.has_voted(debate_id, user_id):
            vote_reason = ALREADY_VOTED
        else:
            can_vote = True

        return Eligibility(
            can_join=can_join,
            can_submit_argument=can_submit,
            argument_reason=argument_reason,
            next_round_number=next_round,
            can_vote=can_vote,
            vote_reason=vote_reason,
        )
