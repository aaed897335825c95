"""
In-memory implementation of IDebateStore.

Used when GAVEL_STORAGE_BACKEND=memory (local development) and by the
service tests. It enforces the same guarantees as the database schema:
unique votes per voter, unique rounds per author, compare-and-set status
updates and cascading deletes.
"""

import threading
from typing import Iterable, Optional

from .exceptions import DuplicateArgumentError, DuplicateVoteError, StaleDebateError
from .models import (
    Argument,
    Debate,
    DebateFilters,
    DebateListItem,
    DebateListResponse,
    DebateSort,
    DebateStatus,
    Vote,
)


class InMemoryDebateRepository:
    """
    Dictionary-backed store.

    A single threading.Lock makes every method atomic, which stands in for
    the row-level guarantees a database gives the Supabase repository.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._debates: dict[str, Debate] = {}
        self._arguments: dict[str, list[Argument]] = {}
        self._votes: dict[str, list[Vote]] = {}

    # Debates

    def create_debate(self, debate: Debate) -> Debate:
        with self._lock:
            self._debates[debate.id] = debate
            self._arguments.setdefault(debate.id, [])
            self._votes.setdefault(debate.id, [])
            return debate

    def get_debate(self, debate_id: str) -> Optional[Debate]:
        with self._lock:
            return self._debates.get(debate_id)

    def list_debates(self, filters: DebateFilters) -> DebateListResponse:
        with self._lock:
            debates = list(self._debates.values())

        if filters.status:
            debates = [d for d in debates if d.status == filters.status]
        if filters.category:
            debates = [d for d in debates if d.category == filters.category]
        if filters.min_stake is not None:
            debates = [d for d in debates if d.stake_amount >= filters.min_stake]
        if filters.max_stake is not None:
            debates = [d for d in debates if d.stake_amount <= filters.max_stake]
        if filters.search:
            term = filters.search.lower()
            debates = [
                d for d in debates
                if term in d.topic.lower() or term in d.resolution.lower()
            ]

        if filters.sort == DebateSort.STAKE:
            debates.sort(key=lambda d: d.stake_amount, reverse=True)
        elif filters.sort == DebateSort.ENDING:
            # Open voting windows first, soonest closing first
            debates.sort(key=lambda d: (d.voting_ends_at is None, d.voting_ends_at or d.created_at, d.created_at))
        else:
            debates.sort(key=lambda d: d.created_at, reverse=True)

        total = len(debates)
        offset = (filters.page - 1) * filters.page_size
        page = debates[offset:offset + filters.page_size]

        return DebateListResponse(
            debates=[
                DebateListItem(
                    id=d.id,
                    topic=d.topic[:100] + "..." if len(d.topic) > 100 else d.topic,
                    category=d.category,
                    status=d.status,
                    creator_id=d.creator_id,
                    challenger_id=d.challenger_id,
                    stake_amount=d.stake_amount,
                    prize_pool=d.prize_pool,
                    voting_ends_at=d.voting_ends_at,
                    created_at=d.created_at,
                )
                for d in page
            ],
            total=total,
            page=filters.page,
            page_size=filters.page_size,
            has_more=(offset + filters.page_size) < total,
        )

    def list_debates_by_status(self, statuses: Iterable[DebateStatus]) -> list[Debate]:
        wanted = set(statuses)
        with self._lock:
            return [d for d in self._debates.values() if d.status in wanted]

    def update_debate(self, debate: Debate, expected_status: DebateStatus) -> Debate:
        with self._lock:
            stored = self._debates.get(debate.id)
            if stored is None or stored.status != expected_status:
                raise StaleDebateError(debate.id, expected_status.value)
            self._debates[debate.id] = debate
            return debate

    def delete_debate(self, debate_id: str) -> None:
        with self._lock:
            self._debates.pop(debate_id, None)
            self._arguments.pop(debate_id, None)
            self._votes.pop(debate_id, None)

    # Arguments

    def list_arguments(self, debate_id: str) -> list[Argument]:
        with self._lock:
            return sorted(self._arguments.get(debate_id, []), key=lambda a: a.posted_at)

    def append_argument(self, argument: Argument) -> Argument:
        with self._lock:
            history = self._arguments.setdefault(argument.debate_id, [])
            if any(
                a.user_id == argument.user_id and a.round_number == argument.round_number
                for a in history
            ):
                raise DuplicateArgumentError(argument.debate_id, argument.user_id, argument.round_number)
            history.append(argument)
            return argument

    # Votes

    def list_votes(self, debate_id: str) -> list[Vote]:
        with self._lock:
            return list(self._votes.get(debate_id, []))

    def has_voted(self, debate_id: str, voter_id: str) -> bool:
        with self._lock:
            return any(v.voter_id == voter_id for v in self._votes.get(debate_id, []))

    def insert_vote(self, vote: Vote) -> Vote:
        with self._lock:
            votes = self._votes.setdefault(vote.debate_id, [])
            if any(v.voter_id == vote.voter_id for v in votes):
                raise DuplicateVoteError(vote.debate_id, vote.voter_id)
            votes.append(vote)
            return vote
