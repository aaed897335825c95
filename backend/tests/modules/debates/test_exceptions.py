"""Tests for debates module exceptions."""

import pytest

from modules.debates.exceptions import (
    AlreadyVotedError,
    DebateError,
    DebateNotFoundError,
    DebateAccessDeniedError,
    DebateValidationError,
    DuplicateArgumentError,
    InvalidTransitionError,
    OutOfTurnError,
    StaleDebateError,
    VoteValidationError,
    VotingNotReadyError,
)
from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    GavelError,
    NotFoundError,
    ValidationError,
)


class TestDebateError:
    def test_debate_error(self):
        """Should create a base debate error."""
        error = DebateError("Something went wrong", code="DEBATE_ERROR")
        assert str(error) == "Something went wrong"
        assert error.code == "DEBATE_ERROR"
        assert isinstance(error, GavelError)


class TestDebateNotFoundError:
    def test_debate_not_found_error(self):
        """Should create not found error with debate ID."""
        error = DebateNotFoundError("debate-123")
        assert "debate-123" in str(error)
        assert error.code == "DEBATE_NOT_FOUND"
        assert error.details["debate_id"] == "debate-123"
        assert isinstance(error, NotFoundError)


class TestDebateAccessDeniedError:
    def test_names_the_action(self):
        error = DebateAccessDeniedError("debate-1", "user-9", "cancel")
        assert error.details == {"debate_id": "debate-1", "user_id": "user-9", "action": "cancel"}
        assert isinstance(error, AuthorizationError)


class TestDebateValidationError:
    def test_carries_every_field_error(self):
        errors = [
            {"field": "topic", "message": "too short"},
            {"field": "category", "message": "Invalid category"},
        ]
        error = DebateValidationError(errors)
        assert error.errors == errors
        assert error.to_dict()["details"]["errors"] == errors
        assert "topic: too short" in error.message
        assert isinstance(error, ValidationError)

    def test_vote_validation_code(self):
        error = VoteValidationError([{"field": "clarity", "message": "must be between 1 and 10"}])
        assert error.code == "VOTE_VALIDATION_FAILED"
        assert isinstance(error, DebateValidationError)


class TestConflicts:
    @pytest.mark.parametrize("error", [
        InvalidTransitionError("debate-1", "voting", "join"),
        OutOfTurnError("debate-1", "user-1", "wait for opponent's response"),
        AlreadyVotedError("debate-1", "voter-1"),
        VotingNotReadyError("debate-1", "needs 3 votes"),
    ])
    def test_are_conflicts(self, error):
        assert isinstance(error, ConflictError)

    def test_invalid_transition_names_both_states(self):
        error = InvalidTransitionError("debate-1", "voting", "join")
        assert error.details["current"] == "voting"
        assert error.details["requested"] == "join"
        assert "voting" in error.message and "join" in error.message

    def test_voting_not_ready_merges_details(self):
        error = VotingNotReadyError("debate-1", "needs 3 votes", {"votes": 1})
        assert error.details == {"debate_id": "debate-1", "reason": "needs 3 votes", "votes": 1}


class TestStoreErrors:
    """Store-level errors are not HTTP-mapped; services translate them."""

    @pytest.mark.parametrize("error", [
        StaleDebateError("debate-1", "pending"),
        DuplicateArgumentError("debate-1", "user-1", 2),
    ])
    def test_not_conflict_subclasses(self, error):
        assert isinstance(error, DebateError)
        assert not isinstance(error, ConflictError)
