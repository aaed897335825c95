"""Tests for the voting service."""

import asyncio
from decimal import Decimal
from unittest.mock import patch

import pytest

from modules.debates.exceptions import (
    AlreadyVotedError,
    DebateNotFoundError,
    DuplicateVoteError,
    NotInVotingPhaseError,
    ParticipantCannotVoteError,
    VoteValidationError,
)
from modules.debates.interfaces import IVotingService
from modules.debates.memory_repository import InMemoryDebateRepository
from modules.debates.models import DebateStatus, SubmitVoteRequest
from modules.debates.voting_service import VotingService
from shared.exceptions import ConflictError

from tests.conftest import CHALLENGER_ID, CREATOR_ID, make_debate, make_vote


@pytest.fixture
def store():
    repo = InMemoryDebateRepository()
    repo.create_debate(make_debate(status=DebateStatus.VOTING))
    return repo


@pytest.fixture
def service(store, policy, clock):
    return VotingService(store=store, policy=policy, clock=clock)


def ballot(winner_id: str = CREATOR_ID, score=8, **overrides) -> SubmitVoteRequest:
    fields = dict(
        winner_id=winner_id,
        argument_quality=score,
        rebuttal_strength=score,
        clarity=score,
        evidence=score,
        persuasiveness=score,
    )
    fields.update(overrides)
    return SubmitVoteRequest(**fields)


class TestSubmitVote:
    def test_implements_interface(self, service):
        assert isinstance(service, IVotingService)

    @pytest.mark.asyncio
    async def test_records_weighted_total(self, service, store, clock):
        vote = await service.submit_vote("debate-1", "voter-1", ballot(
            argument_quality=10, rebuttal_strength=8, clarity=6, evidence=4, persuasiveness=2,
        ))
        # 10*.30 + 8*.25 + 6*.20 + 4*.15 + 2*.10
        assert vote.total_score == Decimal("7.00")
        assert vote.submitted_at == clock.now
        assert store.has_voted("debate-1", "voter-1")

    @pytest.mark.asyncio
    async def test_second_vote_rejected_even_with_new_scores(self, service):
        await service.submit_vote("debate-1", "voter-1", ballot(score=8))
        with pytest.raises(ConflictError):
            await service.submit_vote("debate-1", "voter-1", ballot(CHALLENGER_ID, score=3))

    @pytest.mark.asyncio
    async def test_concurrent_votes_by_same_voter(self, service, store):
        results = await asyncio.gather(
            service.submit_vote("debate-1", "voter-1", ballot()),
            service.submit_vote("debate-1", "voter-1", ballot(CHALLENGER_ID)),
            return_exceptions=True,
        )
        assert sum(isinstance(r, AlreadyVotedError) for r in results) == 1
        assert len(store.list_votes("debate-1")) == 1

    @pytest.mark.asyncio
    async def test_store_constraint_maps_to_already_voted(self, service, store):
        with patch.object(store, "insert_vote", side_effect=DuplicateVoteError("debate-1", "voter-1")):
            with pytest.raises(AlreadyVotedError):
                await service.submit_vote("debate-1", "voter-1", ballot())

    @pytest.mark.asyncio
    async def test_participant_cannot_vote(self, service):
        with pytest.raises(ParticipantCannotVoteError):
            await service.submit_vote("debate-1", CHALLENGER_ID, ballot())

    @pytest.mark.asyncio
    async def test_not_in_voting(self, store, service):
        store.create_debate(make_debate(debate_id="debate-2"))
        with pytest.raises(NotInVotingPhaseError):
            await service.submit_vote("debate-2", "voter-1", ballot())

    @pytest.mark.asyncio
    async def test_invalid_fields_reported_together(self, service):
        with pytest.raises(VoteValidationError) as exc_info:
            await service.submit_vote("debate-1", "voter-1", ballot("stranger", clarity=11))
        assert {e["field"] for e in exc_info.value.errors} == {"winner_id", "clarity"}

    @pytest.mark.asyncio
    async def test_missing_debate(self, service):
        with pytest.raises(DebateNotFoundError):
            await service.submit_vote("missing", "voter-1", ballot())


class TestVoteSummary:
    @pytest.mark.asyncio
    async def test_percentages(self, service, store):
        store.insert_vote(make_vote("v1", CREATOR_ID, "8.00"))
        store.insert_vote(make_vote("v2", CREATOR_ID, "6.00"))
        store.insert_vote(make_vote("v3", CHALLENGER_ID, "9.00"))

        summary = await service.get_vote_summary("debate-1")

        assert summary.total_votes == 3
        assert summary.creator_votes == 2
        assert summary.challenger_votes == 1
        assert summary.creator_percentage == Decimal("66.67")
        assert summary.challenger_percentage == Decimal("33.33")

    @pytest.mark.asyncio
    async def test_empty(self, service):
        summary = await service.get_vote_summary("debate-1")
        assert summary.total_votes == 0
        assert summary.creator_percentage == Decimal(0)
        assert summary.challenger_percentage == Decimal(0)

    @pytest.mark.asyncio
    async def test_get_votes(self, service, store):
        store.insert_vote(make_vote("v1", CREATOR_ID))
        votes = await service.get_votes("debate-1")
        assert [v.voter_id for v in votes] == ["v1"]
