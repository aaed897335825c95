"""
Winner resolution from audience votes.

Vote count decides; on equal counts the side with the higher average
weighted score wins; equal counts and equal averages is a true tie.
"""

from decimal import Decimal
from typing import Optional, Sequence

from .models import Vote, WinnerResult
from .voting_engine import SCORE_PRECISION, VotingEngine


def _average(scores: Sequence[Decimal]) -> Decimal:
    """Mean of scores; an empty side averages 0 for comparison."""
    if not scores:
        return Decimal(0)
    return sum(scores, Decimal(0)) / len(scores)


class WinnerResolver:
    """
    Aggregates the votes of a concluded debate into a winner decision.

    When constructed with a VotingEngine and asked to recompute, total
    scores are re-derived from the criterion scores with the same formula
    the engine used at submission time instead of trusting stored values.
    """

    def __init__(self, engine: Optional[VotingEngine] = None) -> None:
        self._engine = engine

    def _total(self, vote: Vote, recompute: bool) -> Decimal:
        if recompute and self._engine is not None:
            return self._engine.compute_total_score(vote.scores)
        return vote.total_score

    def resolve(
        self,
        votes: Sequence[Vote],
        creator_id: str,
        challenger_id: str,
        recompute: bool = False,
    ) -> WinnerResult:
        """
        Decide the winner.

        Args:
            votes: Every vote of the debate
            creator_id: Debate creator
            challenger_id: Debate challenger
            recompute: Re-derive total scores from criterion scores

        Returns:
            WinnerResult with raw counts and per-side averages
        """
        creator_scores = [self._total(v, recompute) for v in votes if v.winner_id == creator_id]
        challenger_scores = [self._total(v, recompute) for v in votes if v.winner_id == challenger_id]

        creator_count = len(creator_scores)
        challenger_count = len(challenger_scores)
        creator_average = _average(creator_scores)
        challenger_average = _average(challenger_scores)

        winner_id: Optional[str] = None
        tiebreak = False
        if creator_count > challenger_count:
            winner_id = creator_id
        elif challenger_count > creator_count:
            winner_id = challenger_id
        elif creator_average > challenger_average:
            winner_id, tiebreak = creator_id, True
        elif challenger_average > creator_average:
            winner_id, tiebreak = challenger_id, True

        return WinnerResult(
            winner_id=winner_id,
            is_tie=winner_id is None,
            creator_votes=creator_count,
            challenger_votes=challenger_count,
            creator_average=creator_average.quantize(SCORE_PRECISION),
            challenger_average=challenger_average.quantize(SCORE_PRECISION),
            decided_by_tiebreak=tiebreak,
        )
