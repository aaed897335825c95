"""Tests for the in-memory debate store."""

from datetime import timedelta
from decimal import Decimal

import pytest

from modules.debates.exceptions import DuplicateArgumentError, DuplicateVoteError, StaleDebateError
from modules.debates.interfaces import IDebateStore
from modules.debates.memory_repository import InMemoryDebateRepository
from modules.debates.models import DebateCategory, DebateFilters, DebateSort, DebateStatus

from tests.conftest import CHALLENGER_ID, CREATOR_ID, START, make_argument, make_debate, make_vote


@pytest.fixture
def store():
    return InMemoryDebateRepository()


class TestInMemoryDebateRepository:
    def test_satisfies_store_protocol(self, store):
        assert isinstance(store, IDebateStore)

    def test_create_and_get(self, store):
        debate = store.create_debate(make_debate())
        assert store.get_debate(debate.id) == debate
        assert store.get_debate("missing") is None

    def test_compare_and_set(self, store):
        debate = store.create_debate(make_debate(status=DebateStatus.ACTIVE))
        voting = debate.model_copy(update={"status": DebateStatus.VOTING})

        store.update_debate(voting, DebateStatus.ACTIVE)
        assert store.get_debate(debate.id).status == DebateStatus.VOTING

        # Second writer expecting ACTIVE loses
        with pytest.raises(StaleDebateError):
            store.update_debate(voting, DebateStatus.ACTIVE)

    def test_unique_argument_round(self, store):
        store.create_debate(make_debate())
        store.append_argument(make_argument(CREATOR_ID, 1, START))
        with pytest.raises(DuplicateArgumentError):
            store.append_argument(make_argument(CREATOR_ID, 1, START + timedelta(minutes=1)))
        # Same round number for the other side is fine
        store.append_argument(make_argument(CHALLENGER_ID, 1, START + timedelta(minutes=2)))
        assert len(store.list_arguments("debate-1")) == 2

    def test_arguments_ordered_by_posted_at(self, store):
        store.append_argument(make_argument(CHALLENGER_ID, 1, START + timedelta(minutes=5)))
        store.append_argument(make_argument(CREATOR_ID, 1, START))
        assert [a.user_id for a in store.list_arguments("debate-1")] == [CREATOR_ID, CHALLENGER_ID]

    def test_unique_vote(self, store):
        store.insert_vote(make_vote("voter-1", CREATOR_ID))
        assert store.has_voted("debate-1", "voter-1")
        with pytest.raises(DuplicateVoteError):
            store.insert_vote(make_vote("voter-1", CHALLENGER_ID, score=3))
        assert len(store.list_votes("debate-1")) == 1

    def test_delete_cascades(self, store):
        store.create_debate(make_debate())
        store.append_argument(make_argument(CREATOR_ID, 1, START))
        store.insert_vote(make_vote("voter-1", CREATOR_ID))

        store.delete_debate("debate-1")

        assert store.get_debate("debate-1") is None
        assert store.list_arguments("debate-1") == []
        assert store.list_votes("debate-1") == []

    def test_list_by_status(self, store):
        store.create_debate(make_debate(debate_id="a", status=DebateStatus.ACTIVE))
        store.create_debate(make_debate(debate_id="b", status=DebateStatus.VOTING))
        store.create_debate(make_debate(debate_id="c", status=DebateStatus.COMPLETED))
        found = store.list_debates_by_status([DebateStatus.ACTIVE, DebateStatus.VOTING])
        assert {d.id for d in found} == {"a", "b"}


class TestListDebates:
    @pytest.fixture
    def populated(self, store):
        store.create_debate(make_debate(debate_id="a", stake="10", created_at=START))
        store.create_debate(make_debate(
            debate_id="b",
            stake="500",
            category=DebateCategory.TECH,
            topic="Tabs are better than spaces",
            created_at=START + timedelta(hours=1),
        ))
        store.create_debate(make_debate(
            debate_id="c",
            stake="50",
            status=DebateStatus.VOTING,
            voting_ends_at=START + timedelta(days=1),
            created_at=START + timedelta(hours=2),
        ))
        return store

    def test_newest_first(self, populated):
        result = populated.list_debates(DebateFilters())
        assert [d.id for d in result.debates] == ["c", "b", "a"]
        assert result.total == 3
        assert result.has_more is False

    def test_sort_by_stake(self, populated):
        result = populated.list_debates(DebateFilters(sort=DebateSort.STAKE))
        assert [d.id for d in result.debates] == ["b", "c", "a"]

    def test_sort_by_ending(self, populated):
        result = populated.list_debates(DebateFilters(sort=DebateSort.ENDING))
        assert result.debates[0].id == "c"

    def test_filters(self, populated):
        assert populated.list_debates(DebateFilters(category=DebateCategory.TECH)).total == 1
        assert populated.list_debates(DebateFilters(status=DebateStatus.VOTING)).total == 1
        assert populated.list_debates(DebateFilters(min_stake=Decimal("50"))).total == 2
        assert populated.list_debates(DebateFilters(max_stake=Decimal("50"))).total == 2
        assert populated.list_debates(DebateFilters(search="tabs")).total == 1

    def test_pagination(self, populated):
        page = populated.list_debates(DebateFilters(page=1, page_size=2))
        assert len(page.debates) == 2
        assert page.has_more is True
        last = populated.list_debates(DebateFilters(page=2, page_size=2))
        assert [d.id for d in last.debates] == ["a"]
        assert last.has_more is False

    def test_long_topic_truncated(self, store):
        store.create_debate(make_debate(topic="x" * 150))
        item = store.list_debates(DebateFilters()).debates[0]
        assert item.topic == "x" * 100 + "..."
