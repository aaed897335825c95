"""
Debate repository for database access.

Encapsulates all Supabase queries and data mapping for the debate tables:
- debates
- debate_arguments
- votes

Uniqueness and compare-and-set guarantees come from the schema in
migrations/ (unique indexes on votes and arguments) and from filtering
updates on the expected status.
"""

import logging
from typing import Iterable, Optional, Any

from postgrest.exceptions import APIError

from shared.database import is_unique_violation
from shared.repository import BaseRepository
from .exceptions import DuplicateArgumentError, DuplicateVoteError, StaleDebateError
from .models import (
    Argument,
    Debate,
    DebateCategory,
    DebateFilters,
    DebateFormat,
    DebateListItem,
    DebateListResponse,
    DebateSort,
    DebateStatus,
    PrizeSettlement,
    Vote,
    VoteScores,
)

logger = logging.getLogger(__name__)


class DebateRepository(BaseRepository[Debate]):
    """
    Supabase implementation of IDebateStore.

    Note: This repository does NOT perform authorization or turn checks.
    The service layer is responsible for those.
    """

    # -------------------------------------------------------------------------
    # Debate operations
    # -------------------------------------------------------------------------

    def create_debate(self, debate: Debate) -> Debate:
        """
        Insert a new debate record.

        Args:
            debate: Debate to insert (its ID is used as primary key)

        Returns:
            The stored Debate as returned by the database
        """
        result = self._db.table("debates").insert(self._debate_to_row(debate)).execute()
        return self._map_to_debate(result.data[0])

    def get_debate(self, debate_id: str) -> Optional[Debate]:
        """
        Get a debate by ID.

        Returns:
            Debate, or None if not found
        """
        result = self._db.table("debates").select("*").eq("id", debate_id).execute()
        if not result.data:
            return None
        return self._map_to_debate(result.data[0])

    def list_debates(self, filters: DebateFilters) -> DebateListResponse:
        """
        List debates with filtering, sorting and pagination.

        Args:
            filters: Status/category/stake/search filters and paging

        Returns:
            Paginated list response
        """
        offset = (filters.page - 1) * filters.page_size

        query = self._db.table("debates").select("*", count="exact")
        if filters.status:
            query = query.eq("status", filters.status.value)
        if filters.category:
            query = query.eq("category", filters.category.value)
        if filters.min_stake is not None:
            query = query.gte("stake_amount", str(filters.min_stake))
        if filters.max_stake is not None:
            query = query.lte("stake_amount", str(filters.max_stake))
        if filters.search:
            term = filters.search.replace(",", " ").strip()
            query = query.or_(f"topic.ilike.%{term}%,resolution.ilike.%{term}%")

        if filters.sort == DebateSort.STAKE:
            query = query.order("stake_amount", desc=True)
        elif filters.sort == DebateSort.ENDING:
            query = query.order("voting_ends_at").order("created_at")
        else:
            query = query.order("created_at", desc=True)

        result = query.range(offset, offset + filters.page_size - 1).execute()
        total = result.count or 0

        return DebateListResponse(
            debates=[self._map_to_list_item(d) for d in result.data],
            total=total,
            page=filters.page,
            page_size=filters.page_size,
            has_more=(offset + filters.page_size) < total,
        )

    def list_debates_by_status(self, statuses: Iterable[DebateStatus]) -> list[Debate]:
        """All debates currently in one of the given statuses."""
        values = [status.value for status in statuses]
        result = self._db.table("debates").select("*").in_("status", values).execute()
        return [self._map_to_debate(d) for d in result.data]

    def update_debate(self, debate: Debate, expected_status: DebateStatus) -> Debate:
        """
        Write a transitioned debate if its stored status is still expected_status.

        Args:
            debate: Updated debate
            expected_status: Status the row must still have

        Returns:
            The stored Debate

        Raises:
            StaleDebateError: If another writer changed the status first
        """
        data = self._debate_to_row(debate)
        data.pop("id")
        data.pop("created_at")

        result = (
            self._db.table("debates")
            .update(data)
            .eq("id", debate.id)
            .eq("status", expected_status.value)
            .execute()
        )
        if not result.data:
            logger.warning(
                "Compare-and-set on debate %s lost: expected %s", debate.id, expected_status.value
            )
            raise StaleDebateError(debate.id, expected_status.value)
        return self._map_to_debate(result.data[0])

    def delete_debate(self, debate_id: str) -> None:
        """
        Delete a debate. Arguments and votes go with it via ON DELETE CASCADE.
        """
        self._db.table("debates").delete().eq("id", debate_id).execute()

    # -------------------------------------------------------------------------
    # Argument operations
    # -------------------------------------------------------------------------

    def list_arguments(self, debate_id: str) -> list[Argument]:
        """Arguments for a debate ordered by posted_at."""
        result = (
            self._db.table("debate_arguments")
            .select("*")
            .eq("debate_id", debate_id)
            .order("posted_at")
            .execute()
        )
        return [self._map_to_argument(a) for a in result.data]

    def append_argument(self, argument: Argument) -> Argument:
        """
        Insert an argument.

        Raises:
            DuplicateArgumentError: If the author already posted that round
        """
        data = {
            "id": argument.id,
            "debate_id": argument.debate_id,
            "user_id": argument.user_id,
            "content": argument.content,
            "round_number": argument.round_number,
            "word_count": argument.word_count,
            "posted_at": self._timestamp(argument.posted_at),
        }
        try:
            result = self._db.table("debate_arguments").insert(data).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise DuplicateArgumentError(
                    argument.debate_id, argument.user_id, argument.round_number
                ) from e
            raise
        return self._map_to_argument(result.data[0])

    # -------------------------------------------------------------------------
    # Vote operations
    # -------------------------------------------------------------------------

    def list_votes(self, debate_id: str) -> list[Vote]:
        """All votes for a debate, oldest first."""
        result = (
            self._db.table("votes")
            .select("*")
            .eq("debate_id", debate_id)
            .order("submitted_at")
            .execute()
        )
        return [self._map_to_vote(v) for v in result.data]

    def has_voted(self, debate_id: str, voter_id: str) -> bool:
        result = (
            self._db.table("votes")
            .select("id")
            .eq("debate_id", debate_id)
            .eq("voter_id", voter_id)
            .limit(1)
            .execute()
        )
        return bool(result.data)

    def insert_vote(self, vote: Vote) -> Vote:
        """
        Insert a vote.

        Raises:
            DuplicateVoteError: If the voter already voted on the debate
        """
        data = {
            "id": vote.id,
            "debate_id": vote.debate_id,
            "voter_id": vote.voter_id,
            "winner_id": vote.winner_id,
            **vote.scores.model_dump(),
            "total_score": str(vote.total_score),
            "feedback": vote.feedback,
            "submitted_at": self._timestamp(vote.submitted_at),
        }
        try:
            result = self._db.table("votes").insert(data).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise DuplicateVoteError(vote.debate_id, vote.voter_id) from e
            raise
        return self._map_to_vote(result.data[0])

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _debate_to_row(self, debate: Debate) -> dict[str, Any]:
        return {
            "id": debate.id,
            "topic": debate.topic,
            "resolution": debate.resolution,
            "category": debate.category.value,
            "format": debate.format.value,
            "status": debate.status.value,
            "creator_id": debate.creator_id,
            "challenger_id": debate.challenger_id,
            "stake_amount": str(debate.stake_amount),
            "prize_pool": str(debate.prize_pool),
            "start_time": self._timestamp(debate.start_time),
            "end_time": self._timestamp(debate.end_time),
            "voting_ends_at": self._timestamp(debate.voting_ends_at),
            "winner_id": debate.winner_id,
            "cancel_reason": debate.cancel_reason,
            "settlement": debate.settlement.model_dump(mode="json") if debate.settlement else None,
            "created_at": self._timestamp(debate.created_at),
            "updated_at": self._timestamp(debate.updated_at),
        }

    def _map_to_debate(self, data: dict[str, Any]) -> Debate:
        """Map database row to Debate model."""
        return Debate(
            id=str(data["id"]),
            topic=data["topic"],
            resolution=data["resolution"],
            category=DebateCategory(data["category"]),
            format=DebateFormat(data.get("format") or DebateFormat.ASYNC.value),
            status=DebateStatus(data["status"]),
            creator_id=str(data["creator_id"]),
            challenger_id=str(data["challenger_id"]) if data.get("challenger_id") else None,
            stake_amount=self._decimal(data["stake_amount"]),
            prize_pool=self._decimal(data.get("prize_pool")),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            voting_ends_at=data.get("voting_ends_at"),
            winner_id=str(data["winner_id"]) if data.get("winner_id") else None,
            cancel_reason=data.get("cancel_reason"),
            settlement=PrizeSettlement(**data["settlement"]) if data.get("settlement") else None,
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    def _map_to_list_item(self, data: dict[str, Any]) -> DebateListItem:
        """Map database row to DebateListItem model."""
        topic = data["topic"]
        truncated_topic = topic[:100] + "..." if len(topic) > 100 else topic

        return DebateListItem(
            id=str(data["id"]),
            topic=truncated_topic,
            category=DebateCategory(data["category"]),
            status=DebateStatus(data["status"]),
            creator_id=str(data["creator_id"]),
            challenger_id=str(data["challenger_id"]) if data.get("challenger_id") else None,
            stake_amount=self._decimal(data["stake_amount"]),
            prize_pool=self._decimal(data.get("prize_pool")),
            voting_ends_at=data.get("voting_ends_at"),
            created_at=data["created_at"],
        )

    def _map_to_argument(self, data: dict[str, Any]) -> Argument:
        """Map database row to Argument model."""
        return Argument(
            id=str(data["id"]),
            debate_id=str(data["debate_id"]),
            user_id=str(data["user_id"]),
            content=data["content"],
            round_number=data["round_number"],
            word_count=data["word_count"],
            posted_at=data["posted_at"],
        )

    def _map_to_vote(self, data: dict[str, Any]) -> Vote:
        """Map database row to Vote model."""
        return Vote(
            id=str(data["id"]),
            debate_id=str(data["debate_id"]),
            voter_id=str(data["voter_id"]),
            winner_id=str(data["winner_id"]),
            scores=VoteScores(
                argument_quality=data["argument_quality"],
                rebuttal_strength=data["rebuttal_strength"],
                clarity=data["clarity"],
                evidence=data["evidence"],
                persuasiveness=data["persuasiveness"],
            ),
            total_score=self._decimal(data["total_score"]),
            feedback=data.get("feedback"),
            submitted_at=data["submitted_at"],
        )
