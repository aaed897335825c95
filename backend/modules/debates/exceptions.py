"""
Debates module exceptions.
"""

from typing import Any, Optional

from shared.exceptions import (
    GavelError,
    NotFoundError,
    ValidationError,
    AuthorizationError,
    ConflictError,
)


class DebateError(GavelError):
    """Base exception for debate-related errors."""

    pass


class DebateNotFoundError(NotFoundError):
    """Raised when a debate is not found."""

    def __init__(self, debate_id: str):
        super().__init__(
            f"Debate not found: {debate_id}",
            code="DEBATE_NOT_FOUND",
            details={"debate_id": debate_id},
        )


class DebateAccessDeniedError(AuthorizationError):
    """Raised when a user may not perform an action on a debate."""

    def __init__(self, debate_id: str, user_id: str, action: str):
        super().__init__(
            f"User may not {action} debate: {debate_id}",
            code="DEBATE_ACCESS_DENIED",
            details={"debate_id": debate_id, "user_id": user_id, "action": action},
        )


class DebateValidationError(ValidationError):
    """Raised when debate input fails validation. Carries every field error."""

    def __init__(self, errors: list[dict[str, str]], code: str = "DEBATE_VALIDATION_FAILED"):
        messages = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        super().__init__(
            f"Validation failed: {messages}",
            code=code,
            details={"errors": errors},
        )
        self.errors = errors


class InvalidTransitionError(ConflictError):
    """Raised when a transition is not valid from the debate's current status."""

    def __init__(self, debate_id: str, current: str, requested: str):
        super().__init__(
            f"Cannot {requested} debate {debate_id} while it is {current}",
            code="INVALID_TRANSITION",
            details={"debate_id": debate_id, "current": current, "requested": requested},
        )


class CannotJoinOwnDebateError(AuthorizationError):
    """Raised when the creator tries to join as challenger."""

    def __init__(self, debate_id: str, user_id: str):
        super().__init__(
            f"Creator cannot join their own debate: {debate_id}",
            code="CANNOT_JOIN_OWN_DEBATE",
            details={"debate_id": debate_id, "user_id": user_id},
        )


class ChallengerAlreadyJoinedError(ConflictError):
    """Raised when a debate already has a challenger."""

    def __init__(self, debate_id: str):
        super().__init__(
            f"Debate already has a challenger: {debate_id}",
            code="CHALLENGER_ALREADY_JOINED",
            details={"debate_id": debate_id},
        )


class NotParticipantError(AuthorizationError):
    """Raised when a non-participant tries to post an argument."""

    def __init__(self, debate_id: str, user_id: str):
        super().__init__(
            f"Only debate participants can submit arguments: {debate_id}",
            code="NOT_PARTICIPANT",
            details={"debate_id": debate_id, "user_id": user_id},
        )


class OutOfTurnError(ConflictError):
    """Raised when a participant posts out of turn."""

    def __init__(self, debate_id: str, user_id: str, reason: str):
        super().__init__(
            f"Cannot submit argument: {reason}",
            code="OUT_OF_TURN",
            details={"debate_id": debate_id, "user_id": user_id, "reason": reason},
        )


class VotingNotReadyError(ConflictError):
    """Raised when a phase-ending condition (arguments, votes, deadline) is not met."""

    def __init__(self, debate_id: str, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            f"Debate {debate_id} cannot advance: {reason}",
            code="PHASE_CONDITION_NOT_MET",
            details={"debate_id": debate_id, "reason": reason, **(details or {})},
        )


class NotInVotingPhaseError(ConflictError):
    """Raised when voting on a debate that is not in the voting phase."""

    def __init__(self, debate_id: str, status: str):
        super().__init__(
            "Debate is not in voting phase",
            code="NOT_IN_VOTING_PHASE",
            details={"debate_id": debate_id, "status": status},
        )


class ParticipantCannotVoteError(AuthorizationError):
    """Raised when a participant tries to vote on their own debate."""

    def __init__(self, debate_id: str, user_id: str):
        super().__init__(
            "Debate participants cannot vote",
            code="PARTICIPANT_CANNOT_VOTE",
            details={"debate_id": debate_id, "user_id": user_id},
        )


class AlreadyVotedError(ConflictError):
    """Raised when a voter has already voted on a debate."""

    def __init__(self, debate_id: str, voter_id: str):
        super().__init__(
            "You have already voted on this debate",
            code="ALREADY_VOTED",
            details={"debate_id": debate_id, "voter_id": voter_id},
        )


class VoteValidationError(DebateValidationError):
    """Raised when a vote's scores, winner or feedback are invalid."""

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__(errors, code="VOTE_VALIDATION_FAILED")


class DuplicateVoteError(DebateError):
    """Raised by a store when the (debate, voter) unique constraint fires."""

    def __init__(self, debate_id: str, voter_id: str):
        super().__init__(
            f"Duplicate vote for debate {debate_id} by {voter_id}",
            code="DUPLICATE_VOTE",
            details={"debate_id": debate_id, "voter_id": voter_id},
        )


class DuplicateArgumentError(DebateError):
    """Raised by a store when the (debate, author, round) unique constraint fires."""

    def __init__(self, debate_id: str, user_id: str, round_number: int):
        super().__init__(
            f"Round {round_number} already posted by {user_id} in debate {debate_id}",
            code="DUPLICATE_ARGUMENT",
            details={"debate_id": debate_id, "user_id": user_id, "round_number": round_number},
        )


class StaleDebateError(DebateError):
    """Raised by a store when a compare-and-set status update loses a race."""

    def __init__(self, debate_id: str, expected_status: str):
        super().__init__(
            f"Debate {debate_id} is no longer {expected_status}",
            code="STALE_DEBATE",
            details={"debate_id": debate_id, "expected_status": expected_status},
        )
