"""
Vote validation and weighted scoring.

The engine checks eligibility first (phase, participant, uniqueness) and
then validates every field, collecting all problems into one
VoteValidationError. The weighted total is
sum(score * weight) / 100 with integer weights summing to 100, so a valid
vote always lands in [min_score, max_score] with two decimal places.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from shared.debate_config import CRITERIA, DebatePolicy

from .exceptions import (
    AlreadyVotedError,
    NotInVotingPhaseError,
    ParticipantCannotVoteError,
    VoteValidationError,
)
from .models import Debate, DebateStatus, Vote, VoteScores, utc_now

logger = logging.getLogger(__name__)

SCORE_PRECISION = Decimal("0.01")


class VotingEngine:
    """
    Validates incoming votes and computes their weighted total.

    The engine is pure: it reads the debate and a "has this voter already
    voted" fact supplied by the caller, and returns a Vote ready to persist.
    """

    def __init__(self, policy: DebatePolicy) -> None:
        self._policy = policy
        self._weights = policy.score_weights.as_dict()

    @property
    def policy(self) -> DebatePolicy:
        return self._policy

    def compute_total_score(self, scores: VoteScores) -> Decimal:
        """Weighted total of a validated score set, to two decimal places."""
        weighted = sum(getattr(scores, name) * weight for name, weight in self._weights.items())
        return (Decimal(weighted) / Decimal(100)).quantize(SCORE_PRECISION)

    def validate_scores(self, raw_scores: Mapping[str, Any]) -> list[dict[str, str]]:
        """
        Check every criterion score.

        Args:
            raw_scores: Criterion name to submitted value

        Returns:
            One {field, message} entry per invalid score (empty when valid)
        """
        errors: list[dict[str, str]] = []
        low, high = self._policy.min_score, self._policy.max_score

        for name in CRITERIA:
            value = raw_scores.get(name)
            if value is None:
                errors.append({"field": name, "message": "is required"})
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append({"field": name, "message": "must be a number"})
            elif value < low or value > high:
                errors.append({"field": name, "message": f"must be between {low} and {high}"})
            elif isinstance(value, float) and not value.is_integer():
                errors.append({"field": name, "message": "must be a whole number"})

        return errors

    def evaluate(
        self,
        debate: Debate,
        voter_id: str,
        winner_choice: str,
        raw_scores: Mapping[str, Any],
        feedback: Optional[str] = None,
        already_voted: bool = False,
        now: Optional[datetime] = None,
    ) -> Vote:
        """
        Validate a vote and build it with its weighted total.

        Args:
            debate: Debate being voted on
            voter_id: Voting user
            winner_choice: Participant the voter picks
            raw_scores: Criterion name to submitted value
            feedback: Optional written feedback
            already_voted: Whether storage already holds a vote by this voter
            now: Submission time (defaults to current time)

        Returns:
            Vote ready to persist

        Raises:
            NotInVotingPhaseError: If the debate is not in voting
            ParticipantCannotVoteError: If the voter is creator or challenger
            AlreadyVotedError: If the voter already voted
            VoteValidationError: With every invalid field
        """
        if debate.status != DebateStatus.VOTING:
            raise NotInVotingPhaseError(debate.id, debate.status.value)

        if debate.is_participant(voter_id):
            raise ParticipantCannotVoteError(debate.id, voter_id)

        if already_voted:
            raise AlreadyVotedError(debate.id, voter_id)

        errors: list[dict[str, str]] = []
        if winner_choice not in (debate.creator_id, debate.challenger_id):
            errors.append({"field": "winner_id", "message": "Invalid winner selected"})

        errors.extend(self.validate_scores(raw_scores))

        cleaned_feedback = feedback.strip() if feedback else None
        if cleaned_feedback and len(cleaned_feedback) > self._policy.max_feedback_length:
            errors.append({
                "field": "feedback",
                "message": f"must be at most {self._policy.max_feedback_length} characters",
            })

        if errors:
            logger.debug("Rejected vote on %s by %s: %s", debate.id, voter_id, errors)
            raise VoteValidationError(errors)

        scores = VoteScores(**{name: int(raw_scores[name]) for name in CRITERIA})

        return Vote(
            id=str(uuid.uuid4()),
            debate_id=debate.id,
            voter_id=voter_id,
            winner_id=winner_choice,
            scores=scores,
            total_score=self.compute_total_score(scores),
            feedback=cleaned_feedback or None,
            submitted_at=now or utc_now(),
        )
