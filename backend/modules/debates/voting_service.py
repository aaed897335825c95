"""
Audience voting service.

Validation and scoring live in VotingEngine; this service adds the
per-debate lock, the "already voted" lookup and persistence. The store's
unique (debate, voter) constraint backs up the lookup across processes.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from shared.debate_config import DebatePolicy

from .exceptions import AlreadyVotedError, DebateNotFoundError, DuplicateVoteError
from .interfaces import IDebateStore, IVotingService
from .locks import DebateLockManager
from .models import Debate, SubmitVoteRequest, Vote, VoteSummary, utc_now
from .resolver import WinnerResolver
from .voting_engine import SCORE_PRECISION, VotingEngine

logger = logging.getLogger(__name__)


class VotingService(IVotingService):
    """Voting service over an IDebateStore."""

    def __init__(
        self,
        store: IDebateStore,
        policy: DebatePolicy,
        locks: Optional[DebateLockManager] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._engine = VotingEngine(policy)
        self._resolver = WinnerResolver(self._engine)
        self._locks = locks or DebateLockManager()
        self._clock = clock

    def _load(self, debate_id: str) -> Debate:
        debate = self._store.get_debate(debate_id)
        if debate is None:
            raise DebateNotFoundError(debate_id)
        return debate

    async def submit_vote(self, debate_id: str, voter_id: str, request: SubmitVoteRequest) -> Vote:
        """Validate, score and record a vote."""
        async with self._locks.hold(debate_id):
            debate = self._load(debate_id)
            vote = self._engine.evaluate(
                debate,
                voter_id=voter_id,
                winner_choice=request.winner_id,
                raw_scores=request.raw_scores(),
                feedback=request.feedback,
                already_voted=self._store.has_voted(debate_id, voter_id),
                now=self._clock(),
            )
            try:
                stored = self._store.insert_vote(vote)
            except DuplicateVoteError:
                logger.warning("Duplicate vote on %s by %s rejected by store", debate_id, voter_id)
                raise AlreadyVotedError(debate_id, voter_id)

        logger.info("Vote on %s by %s for %s (%s)", debate_id, voter_id, vote.winner_id, vote.total_score)
        return stored

    async def get_votes(self, debate_id: str) -> list[Vote]:
        """All votes of a debate."""
        self._load(debate_id)
        return self._store.list_votes(debate_id)

    async def get_vote_summary(self, debate_id: str) -> VoteSummary:
        """Counts, averages and percentages per side."""
        debate = self._load(debate_id)
        votes = self._store.list_votes(debate_id)
        result = self._resolver.resolve(
            votes,
            creator_id=debate.creator_id,
            challenger_id=debate.challenger_id or "",
        )

        total = len(votes)
        if total:
            creator_pct = (Decimal(result.creator_votes) * 100 / total).quantize(SCORE_PRECISION)
            challenger_pct = (Decimal(result.challenger_votes) * 100 / total).quantize(SCORE_PRECISION)
        else:
            creator_pct = challenger_pct = Decimal(0)

        return VoteSummary(
            total_votes=total,
            creator_votes=result.creator_votes,
            challenger_votes=result.challenger_votes,
            creator_average=result.creator_average,
            challenger_average=result.challenger_average,
            creator_percentage=creator_pct,
            challenger_percentage=challenger_pct,
        )
