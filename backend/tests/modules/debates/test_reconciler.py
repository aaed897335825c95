"""Tests for the deadline reconciler."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest

from modules.debates.exceptions import InvalidTransitionError
from modules.debates.memory_repository import InMemoryDebateRepository
from modules.debates.models import DebateStatus
from modules.debates.reconciler import DebateReconciler
from modules.debates.service import DebateService
from modules.debates.state_machine import DebateStateMachine

from tests.conftest import CREATOR_ID, START, make_argument, make_debate, make_vote


@pytest.fixture
def store():
    return InMemoryDebateRepository()


@pytest.fixture
def service(store, policy, clock):
    return DebateService(store=store, policy=policy, clock=clock)


@pytest.fixture
def reconciler(service, store, policy, clock):
    return DebateReconciler(service, store, DebateStateMachine(policy), clock=clock)


class TestRunOnce:
    @pytest.mark.asyncio
    async def test_nothing_due(self, reconciler, store):
        store.create_debate(make_debate())
        report = await reconciler.run_once()
        assert report.advanced == [] and report.finalized == [] and report.failed == []

    @pytest.mark.asyncio
    async def test_advances_after_round_deadline(self, reconciler, store, clock):
        store.create_debate(make_debate())
        store.append_argument(make_argument(CREATOR_ID, 1, START))
        clock.advance(hours=24)

        report = await reconciler.run_once()

        assert report.advanced == ["debate-1"]
        assert store.get_debate("debate-1").status == DebateStatus.VOTING

    @pytest.mark.asyncio
    async def test_skips_pending(self, reconciler, store, clock):
        store.create_debate(make_debate(status=DebateStatus.PENDING, challenger_id=None))
        clock.advance(days=30)
        report = await reconciler.run_once()
        assert report.advanced == []
        assert store.get_debate("debate-1").status == DebateStatus.PENDING

    @pytest.mark.asyncio
    async def test_finalizes_after_window(self, reconciler, store, clock):
        store.create_debate(make_debate(
            status=DebateStatus.VOTING,
            voting_ends_at=START + timedelta(hours=72),
        ))
        store.insert_vote(make_vote("v1", CREATOR_ID))

        assert (await reconciler.run_once()).finalized == []

        clock.advance(hours=72)
        report = await reconciler.run_once()

        assert report.finalized == ["debate-1"]
        debate = store.get_debate("debate-1")
        assert debate.status == DebateStatus.COMPLETED
        assert debate.winner_id == CREATOR_ID

    @pytest.mark.asyncio
    async def test_open_window_left_alone_with_enough_votes(self, reconciler, store):
        """Early finalization is a user action; the sweep only acts on closed windows."""
        store.create_debate(make_debate(
            status=DebateStatus.VOTING,
            voting_ends_at=START + timedelta(hours=72),
        ))
        for voter in ("v1", "v2", "v3"):
            store.insert_vote(make_vote(voter, CREATOR_ID))

        report = await reconciler.run_once()
        assert report.finalized == []

    @pytest.mark.asyncio
    async def test_lost_race_is_recorded(self, store, policy, clock):
        store.create_debate(make_debate(status=DebateStatus.VOTING, voting_ends_at=START))
        service = AsyncMock()
        service.finalize_debate.side_effect = InvalidTransitionError("debate-1", "completed", "finalize")
        reconciler = DebateReconciler(service, store, DebateStateMachine(policy), clock=clock)

        report = await reconciler.run_once()

        assert report.failed == ["debate-1"]

    @pytest.mark.asyncio
    async def test_one_failing_debate_does_not_stop_the_sweep(self, store, policy, clock):
        for debate_id in ("debate-1", "debate-2"):
            store.create_debate(make_debate(
                debate_id=debate_id, status=DebateStatus.VOTING, voting_ends_at=START,
            ))

        async def finalize(debate_id):
            if debate_id == "debate-1":
                raise RuntimeError("database down")

        service = AsyncMock()
        service.finalize_debate.side_effect = finalize
        reconciler = DebateReconciler(service, store, DebateStateMachine(policy), clock=clock)

        report = await reconciler.run_once()

        assert report.failed == ["debate-1"]
        assert report.finalized == ["debate-2"]

    @pytest.mark.asyncio
    async def test_listing_errors_propagate(self, store, policy, clock):
        reconciler = DebateReconciler(AsyncMock(), store, DebateStateMachine(policy), clock=clock)

        with patch.object(
            store, "list_debates_by_status", side_effect=RuntimeError("connection reset")
        ):
            with pytest.raises(RuntimeError):
                await reconciler.run_once()
