"""
Policy configuration for the Gavel debate engine.

The engines (state machine, turn gate, voting, prize split) never read
module-level constants. They receive a frozen DebatePolicy at construction,
so a deployment or a test can vary thresholds without touching logic.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from .config import Settings, get_settings


CRITERIA = (
    "argument_quality",
    "rebuttal_strength",
    "clarity",
    "evidence",
    "persuasiveness",
)


class ScoreWeights(BaseModel):
    """Percentage weight of each voting criterion.

    Attributes:
        argument_quality: Strength and coherence of main arguments
        rebuttal_strength: Effectiveness in countering the opponent
        clarity: How clearly arguments were communicated
        evidence: Quality and relevance of supporting evidence
        persuasiveness: Overall ability to convince
    """

    model_config = {"frozen": True}

    argument_quality: int = Field(default=30, ge=0, le=100)
    rebuttal_strength: int = Field(default=25, ge=0, le=100)
    clarity: int = Field(default=20, ge=0, le=100)
    evidence: int = Field(default=15, ge=0, le=100)
    persuasiveness: int = Field(default=10, ge=0, le=100)

    @model_validator(mode="after")
    def _check_total(self) -> "ScoreWeights":
        total = sum(self.as_dict().values())
        if total != 100:
            raise ValueError(f"Score weights must sum to 100, got {total}")
        return self

    def as_dict(self) -> dict[str, int]:
        """Weights keyed by criterion name, in canonical order."""
        return {name: getattr(self, name) for name in CRITERIA}


class ReputationRewards(BaseModel):
    """Numeric reputation deltas written after a debate settles."""

    model_config = {"frozen": True}

    winner: Decimal = Decimal("50")
    loser: Decimal = Decimal("10")
    vote_cast: Decimal = Decimal("2")
    correct_prediction: Decimal = Decimal("5")


class DebatePolicy(BaseModel):
    """Complete policy for debate lifecycle, voting and settlement.

    Attributes:
        score_weights: Criterion weights (sum to 100)
        min_score: Lowest allowed criterion score
        max_score: Highest allowed criterion score
        min_arguments_per_side: Arguments each side needs before voting opens
        round_duration_hours: Inactivity window after which voting may open early
        voting_duration_hours: Length of the voting window
        min_votes_for_conclusion: Votes that allow finalizing before the window closes
        max_feedback_length: Max characters of vote feedback
        min_argument_words: Min words per argument
        max_argument_words: Max words per argument
        min_stake: Lowest stake a creator may post
        max_stake: Highest stake a creator may post
        platform_fee_percent: Share of the prize pool kept by the platform
        voter_reward_percent: Share of the prize pool paid to voters
        unclaimed_voter_rewards: Who receives the voter pool when nobody voted
        reputation: Reputation deltas applied on settlement
    """

    model_config = {"frozen": True}

    score_weights: ScoreWeights = Field(default_factory=ScoreWeights)
    min_score: int = 1
    max_score: int = 10

    min_arguments_per_side: int = Field(default=2, ge=1)
    round_duration_hours: int = Field(default=24, ge=1)
    voting_duration_hours: int = Field(default=72, ge=1)
    min_votes_for_conclusion: int = Field(default=3, ge=1)

    max_feedback_length: int = Field(default=500, ge=0)
    min_argument_words: int = Field(default=200, ge=1)
    max_argument_words: int = Field(default=1000, ge=1)

    min_stake: Decimal = Decimal("5")
    max_stake: Decimal = Decimal("1000")

    platform_fee_percent: Decimal = Field(default=Decimal("5"), ge=0, le=100)
    voter_reward_percent: Decimal = Field(default=Decimal("10"), ge=0, le=100)
    unclaimed_voter_rewards: Literal["platform", "winner"] = "platform"

    reputation: ReputationRewards = Field(default_factory=ReputationRewards)

    @model_validator(mode="after")
    def _check_bounds(self) -> "DebatePolicy":
        if self.min_score > self.max_score:
            raise ValueError("min_score must not exceed max_score")
        if self.min_argument_words > self.max_argument_words:
            raise ValueError("min_argument_words must not exceed max_argument_words")
        if self.min_stake > self.max_stake:
            raise ValueError("min_stake must not exceed max_stake")
        if self.platform_fee_percent + self.voter_reward_percent > 100:
            raise ValueError("Platform fee and voter reward percentages exceed 100")
        return self


def policy_from_settings(settings: Settings) -> DebatePolicy:
    """Build a DebatePolicy from environment-backed settings.

    Args:
        settings: Loaded application settings

    Returns:
        Frozen policy value object
    """
    return DebatePolicy(
        min_arguments_per_side=settings.min_arguments_per_side,
        round_duration_hours=settings.round_duration_hours,
        voting_duration_hours=settings.voting_duration_hours,
        min_votes_for_conclusion=settings.min_votes_for_conclusion,
        max_feedback_length=settings.max_feedback_length,
        min_argument_words=settings.min_argument_words,
        max_argument_words=settings.max_argument_words,
        min_stake=Decimal(settings.min_stake),
        max_stake=Decimal(settings.max_stake),
        platform_fee_percent=Decimal(settings.platform_fee_percent),
        voter_reward_percent=Decimal(settings.voter_reward_percent),
        unclaimed_voter_rewards=settings.unclaimed_voter_rewards,
    )


def get_debate_policy() -> DebatePolicy:
    """Policy for the running deployment."""
    return policy_from_settings(get_settings())
