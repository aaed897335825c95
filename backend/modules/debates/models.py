"""
Debates module data models.

These models define the core data structures for staked debates: the
debate itself, its arguments and votes, and the derived outcome of a
finished debate (winner decision and prize settlement).
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field, StrictFloat, StrictInt


def utc_now() -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(timezone.utc)


class DebateStatus(str, Enum):
    """Debate lifecycle status."""

    PENDING = "pending"      # Created, waiting for a challenger
    ACTIVE = "active"        # Both sides joined, arguments being exchanged
    VOTING = "voting"        # Audience voting open
    COMPLETED = "completed"  # Winner resolved and prize settled
    CANCELLED = "cancelled"  # Cancelled before settlement


class DebateCategory(str, Enum):
    """Topic categories."""

    CRYPTO = "crypto"
    TECH = "tech"
    POLICY = "policy"
    ECONOMICS = "economics"
    SOCIAL = "social"
    ENTERTAINMENT = "entertainment"
    DAO = "dao"
    CUSTOM = "custom"


class DebateFormat(str, Enum):
    """How arguments are exchanged."""

    ASYNC = "async"  # Extended debate with long response windows
    TIMED = "timed"  # Live, time-boxed debate


class DebateSort(str, Enum):
    """Sort orders for debate listings."""

    NEWEST = "newest"
    STAKE = "stake"
    ENDING = "ending"


class PrizeSettlement(BaseModel):
    """Split of a prize pool. The three shares sum to prize_pool exactly."""

    model_config = {"frozen": True}

    prize_pool: Decimal
    winner_prize: Decimal
    platform_fee: Decimal
    voter_reward_pool: Decimal
    per_voter_reward: Decimal
    total_votes: int
    undistributed_remainder: Decimal = Field(
        default=Decimal(0),
        description="Rounding dust left after paying per_voter_reward to every voter",
    )


class Debate(BaseModel):
    """
    A staked debate between a creator and a challenger.

    Transitions never mutate a Debate in place; the state machine returns
    an updated copy that the service persists.
    """

    id: str = Field(..., description="Debate ID (UUID)")
    topic: str = Field(..., description="The proposition being debated")
    resolution: str = Field(..., description="Longer statement of the motion")
    category: DebateCategory = Field(..., description="Topic category")
    format: DebateFormat = Field(default=DebateFormat.ASYNC, description="Debate format")
    status: DebateStatus = Field(default=DebateStatus.PENDING, description="Current status")

    # Participants
    creator_id: str = Field(..., description="User who created the debate")
    challenger_id: Optional[str] = Field(None, description="User who accepted the challenge")

    # Stakes
    stake_amount: Decimal = Field(..., gt=0, description="Stake each side commits")
    prize_pool: Decimal = Field(default=Decimal(0), ge=0, description="Gross pool once both sides joined")

    # Timing
    start_time: Optional[datetime] = Field(None, description="When the challenger joined")
    end_time: Optional[datetime] = Field(None, description="When argument exchange closed")
    voting_ends_at: Optional[datetime] = Field(None, description="When the voting window closes")

    # Outcome
    winner_id: Optional[str] = Field(None, description="Winner, once completed (None on a tie)")
    cancel_reason: Optional[str] = Field(None, description="Why the debate was cancelled")
    settlement: Optional[PrizeSettlement] = Field(None, description="Prize split, once completed")

    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last update time")

    @property
    def participant_ids(self) -> tuple[str, ...]:
        """Creator and, once joined, challenger."""
        if self.challenger_id is None:
            return (self.creator_id,)
        return (self.creator_id, self.challenger_id)

    def is_participant(self, user_id: str) -> bool:
        """Whether user_id is the creator or the challenger."""
        return user_id in self.participant_ids


class Argument(BaseModel):
    """A single written argument. Created once, never edited."""

    id: str = Field(..., description="Argument ID (UUID)")
    debate_id: str = Field(..., description="Parent debate ID")
    user_id: str = Field(..., description="Author (creator or challenger)")
    content: str = Field(..., description="Argument text")
    round_number: int = Field(..., ge=1, description="Per-author sequence number (1-indexed)")
    word_count: int = Field(..., ge=0, description="Whitespace-delimited word count")
    posted_at: datetime = Field(default_factory=utc_now, description="When the argument was posted")


class VoteScores(BaseModel):
    """The five criterion scores of a vote.

    Values are kept as submitted so the voting engine can report every
    problem at once instead of failing at parse time.
    """

    argument_quality: int
    rebuttal_strength: int
    clarity: int
    evidence: int
    persuasiveness: int


class Vote(BaseModel):
    """An audience member's verdict on a debate."""

    id: str = Field(..., description="Vote ID (UUID)")
    debate_id: str = Field(..., description="Debate voted on")
    voter_id: str = Field(..., description="Voter (never a participant)")
    winner_id: str = Field(..., description="Participant the voter picked")
    scores: VoteScores = Field(..., description="Criterion scores, each in [1, 10]")
    total_score: Decimal = Field(..., description="Weighted score in [1.00, 10.00]")
    feedback: Optional[str] = Field(None, description="Optional written feedback")
    submitted_at: datetime = Field(default_factory=utc_now, description="Submission time")


class WinnerResult(BaseModel):
    """Outcome of vote aggregation.

    Raw counts are always reported so callers can show "7 vs 5" next to
    the decision.
    """

    winner_id: Optional[str] = Field(None, description="Winner, or None on a true tie")
    is_tie: bool = Field(..., description="Whether no winner could be determined")
    creator_votes: int = Field(..., ge=0, description="Votes for the creator")
    challenger_votes: int = Field(..., ge=0, description="Votes for the challenger")
    creator_average: Decimal = Field(default=Decimal(0), description="Average total score for the creator")
    challenger_average: Decimal = Field(default=Decimal(0), description="Average total score for the challenger")
    decided_by_tiebreak: bool = Field(default=False, description="Whether average score broke a count tie")


class TurnDecision(BaseModel):
    """Result of asking whether a user may post the next argument."""

    model_config = {"frozen": True}

    allowed: bool
    reason: Optional[str] = None
    round_number: Optional[int] = None


class FinalizeOutcome(BaseModel):
    """Everything produced by finalizing a debate."""

    debate: Debate
    result: WinnerResult
    settlement: PrizeSettlement


# Requests

class CreateDebateRequest(BaseModel):
    """Request to create a new debate.

    Bounds (lengths, stake range) are enforced by the service against the
    active DebatePolicy so all field problems are reported together.
    """

    topic: str = Field(..., description="The proposition (10-200 characters)")
    resolution: str = Field(..., description="Motion details (50-1000 characters)")
    category: str = Field(..., description="One of the DebateCategory values")
    format: str = Field(default=DebateFormat.ASYNC.value, description="'async' or 'timed'")
    stake_amount: Decimal = Field(..., description="Stake in USDC")


class SubmitArgumentRequest(BaseModel):
    """Request to post an argument."""

    content: str = Field(..., description="Argument text")
    round_number: Optional[int] = Field(
        None,
        description="Expected round number; rejected if it disagrees with history",
    )


class SubmitVoteRequest(BaseModel):
    """Request to vote on a debate."""

    winner_id: str = Field(..., description="Participant the voter picks")
    # Floats are accepted here so the voting engine can report
    # "must be a whole number" alongside the other field errors.
    # Strict so numeric strings and booleans are rejected, not coerced.
    argument_quality: Union[StrictInt, StrictFloat]
    rebuttal_strength: Union[StrictInt, StrictFloat]
    clarity: Union[StrictInt, StrictFloat]
    evidence: Union[StrictInt, StrictFloat]
    persuasiveness: Union[StrictInt, StrictFloat]
    feedback: Optional[str] = Field(None, description="Optional written feedback")

    def raw_scores(self) -> dict[str, Union[int, float]]:
        """Criterion name to submitted value."""
        return {
            "argument_quality": self.argument_quality,
            "rebuttal_strength": self.rebuttal_strength,
            "clarity": self.clarity,
            "evidence": self.evidence,
            "persuasiveness": self.persuasiveness,
        }


class CancelDebateRequest(BaseModel):
    """Request to cancel a debate."""

    reason: str = Field(..., min_length=1, max_length=500, description="Why the debate is cancelled")


# Responses

class DebateListItem(BaseModel):
    """Summary item for debate lists."""

    id: str
    topic: str = Field(..., description="Topic (may be truncated)")
    category: DebateCategory
    status: DebateStatus
    creator_id: str
    challenger_id: Optional[str] = None
    stake_amount: Decimal
    prize_pool: Decimal
    voting_ends_at: Optional[datetime] = None
    created_at: datetime


class DebateListResponse(BaseModel):
    """Paginated list of debates."""

    debates: list[DebateListItem] = Field(..., description="Debate items")
    total: int = Field(..., description="Total count")
    page: int = Field(..., description="Current page")
    page_size: int = Field(..., description="Items per page")
    has_more: bool = Field(..., description="Whether more pages exist")


class DebateFilters(BaseModel):
    """Listing filters and paging."""

    status: Optional[DebateStatus] = None
    category: Optional[DebateCategory] = None
    search: Optional[str] = None
    min_stake: Optional[Decimal] = None
    max_stake: Optional[Decimal] = None
    sort: DebateSort = DebateSort.NEWEST
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1, le=100)


class VoteSummary(BaseModel):
    """Aggregate vote statistics for display."""

    total_votes: int
    creator_votes: int
    challenger_votes: int
    creator_average: Decimal
    challenger_average: Decimal
    creator_percentage: Decimal
    challenger_percentage: Decimal


class Eligibility(BaseModel):
    """What a given user may do on a debate right now."""

    can_join: bool
    can_submit_argument: bool
    argument_reason: Optional[str] = None
    next_round_number: Optional[int] = None
    can_vote: bool
    vote_reason: Optional[str] = None
