"""Tests for vote validation and weighted scoring."""

import itertools
from decimal import Decimal

import pytest

from modules.debates.exceptions import (
    AlreadyVotedError,
    NotInVotingPhaseError,
    ParticipantCannotVoteError,
    VoteValidationError,
)
from modules.debates.models import DebateStatus, VoteScores
from modules.debates.voting_engine import VotingEngine
from shared.debate_config import DebatePolicy, ScoreWeights
from shared.exceptions import AuthorizationError, ConflictError, ValidationError

from tests.conftest import CHALLENGER_ID, CREATOR_ID, START, make_debate


def scores(**overrides):
    values = {
        "argument_quality": 8,
        "rebuttal_strength": 7,
        "clarity": 9,
        "evidence": 6,
        "persuasiveness": 8,
    }
    values.update(overrides)
    return values


@pytest.fixture
def engine():
    return VotingEngine(DebatePolicy())


@pytest.fixture
def voting_debate():
    return make_debate(status=DebateStatus.VOTING)


class TestComputeTotalScore:
    def test_weighted_total(self, engine):
        """8*30 + 7*25 + 9*20 + 6*15 + 8*10 = 765 -> 7.65."""
        total = engine.compute_total_score(VoteScores(**scores()))
        assert total == Decimal("7.65")

    def test_bounds(self, engine):
        assert engine.compute_total_score(VoteScores(**{k: 1 for k in scores()})) == Decimal("1.00")
        assert engine.compute_total_score(VoteScores(**{k: 10 for k in scores()})) == Decimal("10.00")

    def test_range_and_determinism(self, engine):
        """Every valid score set lands in [1.00, 10.00] and scores the same twice."""
        for values in itertools.product([1, 4, 7, 10], repeat=5):
            vote_scores = VoteScores(**dict(zip(scores(), values)))
            total = engine.compute_total_score(vote_scores)
            assert Decimal("1.00") <= total <= Decimal("10.00")
            assert total == engine.compute_total_score(vote_scores)
            assert total.as_tuple().exponent == -2

    def test_uses_injected_weights(self):
        equal = ScoreWeights(
            argument_quality=20, rebuttal_strength=20, clarity=20, evidence=20, persuasiveness=20
        )
        engine = VotingEngine(DebatePolicy(score_weights=equal))
        assert engine.compute_total_score(VoteScores(**scores())) == Decimal("7.60")


class TestValidateScores:
    def test_valid(self, engine):
        assert engine.validate_scores(scores()) == []

    def test_collects_every_problem(self, engine):
        errors = engine.validate_scores(scores(clarity=0, evidence=11, persuasiveness=7.5))
        fields = {e["field"]: e["message"] for e in errors}
        assert fields["clarity"] == "must be between 1 and 10"
        assert fields["evidence"] == "must be between 1 and 10"
        assert fields["persuasiveness"] == "must be a whole number"

    def test_missing_and_non_numeric(self, engine):
        raw = scores(clarity="nine")
        del raw["evidence"]
        fields = {e["field"]: e["message"] for e in engine.validate_scores(raw)}
        assert fields == {"clarity": "must be a number", "evidence": "is required"}

    def test_bool_is_not_a_score(self, engine):
        errors = engine.validate_scores(scores(clarity=True))
        assert errors == [{"field": "clarity", "message": "must be a number"}]

    def test_integral_float_accepted(self, engine):
        assert engine.validate_scores(scores(clarity=9.0)) == []


class TestEvaluate:
    def test_builds_vote(self, engine, voting_debate):
        vote = engine.evaluate(voting_debate, "voter-1", CREATOR_ID, scores(), feedback="  Sharp  ", now=START)
        assert vote.voter_id == "voter-1"
        assert vote.winner_id == CREATOR_ID
        assert vote.total_score == Decimal("7.65")
        assert vote.feedback == "Sharp"
        assert vote.submitted_at == START

    def test_not_voting_phase(self, engine):
        debate = make_debate(status=DebateStatus.ACTIVE)
        with pytest.raises(NotInVotingPhaseError) as exc_info:
            engine.evaluate(debate, "voter-1", CREATOR_ID, scores())
        assert isinstance(exc_info.value, ConflictError)

    @pytest.mark.parametrize("participant", [CREATOR_ID, CHALLENGER_ID])
    def test_participant_cannot_vote(self, engine, voting_debate, participant):
        with pytest.raises(ParticipantCannotVoteError) as exc_info:
            engine.evaluate(voting_debate, participant, CREATOR_ID, scores())
        assert isinstance(exc_info.value, AuthorizationError)

    def test_already_voted(self, engine, voting_debate):
        with pytest.raises(AlreadyVotedError):
            engine.evaluate(voting_debate, "voter-1", CREATOR_ID, scores(), already_voted=True)

    def test_reports_all_field_errors(self, engine, voting_debate):
        with pytest.raises(VoteValidationError) as exc_info:
            engine.evaluate(
                voting_debate,
                "voter-1",
                "someone-else",
                scores(clarity=0),
                feedback="x" * 501,
            )
        error = exc_info.value
        assert isinstance(error, ValidationError)
        assert error.code == "VOTE_VALIDATION_FAILED"
        assert {e["field"] for e in error.errors} == {"winner_id", "clarity", "feedback"}

    def test_feedback_at_limit(self, engine, voting_debate):
        vote = engine.evaluate(voting_debate, "voter-1", CHALLENGER_ID, scores(), feedback="x" * 500)
        assert len(vote.feedback) == 500

    def test_blank_feedback_dropped(self, engine, voting_debate):
        vote = engine.evaluate(voting_debate, "voter-1", CHALLENGER_ID, scores(), feedback="   ")
        assert vote.feedback is None
