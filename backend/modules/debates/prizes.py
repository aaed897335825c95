"""
Prize pool settlement.

Pure arithmetic on Decimal values. The platform fee and the voter pool are
exact percentages of the pool and the winner receives the exact
remainder, so the three shares always add back up to the pool. Only the
per-voter share is rounded (down, to USDC precision); what rounding leaves
behind is reported as ``undistributed_remainder``.

When nobody voted, the voter pool has no recipients. The policy's
``unclaimed_voter_rewards`` decides who receives it: the platform
(default) or the winner.
"""

from decimal import ROUND_DOWN, Decimal

from shared.debate_config import DebatePolicy
from shared.exceptions import ValidationError

from .models import PrizeSettlement

# USDC has 6 decimals
SETTLEMENT_PRECISION = Decimal("0.000001")


class PrizeDistributor:
    """Splits a prize pool into winner, platform and voter shares."""

    def __init__(self, policy: DebatePolicy) -> None:
        self._policy = policy

    def distribute(self, prize_pool: Decimal, total_votes: int) -> PrizeSettlement:
        """
        Compute the settlement for a pool.

        Args:
            prize_pool: Gross pool (both stakes)
            total_votes: Number of votes cast on the debate

        Returns:
            PrizeSettlement whose three shares sum to prize_pool

        Raises:
            ValidationError: If the pool or vote count is negative
        """
        if prize_pool < 0:
            raise ValidationError(
                "Prize pool cannot be negative",
                code="INVALID_PRIZE_POOL",
                details={"prize_pool": str(prize_pool)},
            )
        if total_votes < 0:
            raise ValidationError(
                "Vote count cannot be negative",
                code="INVALID_VOTE_COUNT",
                details={"total_votes": total_votes},
            )

        platform_fee = prize_pool * self._policy.platform_fee_percent / 100
        voter_reward_pool = prize_pool * self._policy.voter_reward_percent / 100
        winner_prize = prize_pool - platform_fee - voter_reward_pool

        if total_votes == 0:
            if self._policy.unclaimed_voter_rewards == "winner":
                winner_prize += voter_reward_pool
            else:
                platform_fee += voter_reward_pool
            return PrizeSettlement(
                prize_pool=prize_pool,
                winner_prize=winner_prize,
                platform_fee=platform_fee,
                voter_reward_pool=Decimal(0),
                per_voter_reward=Decimal(0),
                total_votes=0,
            )

        per_voter_reward = (voter_reward_pool / total_votes).quantize(
            SETTLEMENT_PRECISION, rounding=ROUND_DOWN
        )

        return PrizeSettlement(
            prize_pool=prize_pool,
            winner_prize=winner_prize,
            platform_fee=platform_fee,
            voter_reward_pool=voter_reward_pool,
            per_voter_reward=per_voter_reward,
            total_votes=total_votes,
            undistributed_remainder=voter_reward_pool - per_voter_reward * total_votes,
        )
