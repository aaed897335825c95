"""
Debates module interfaces.

IDebateService and IVotingService are what the API layer depends on.
IDebateStore is the persistence port the services consume; the Supabase
repository and the in-memory repository both satisfy it.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    Argument,
    CreateDebateRequest,
    Debate,
    DebateFilters,
    DebateListResponse,
    DebateStatus,
    Eligibility,
    FinalizeOutcome,
    SubmitArgumentRequest,
    SubmitVoteRequest,
    Vote,
    VoteSummary,
)


@runtime_checkable
class IDebateStore(Protocol):
    """
    Persistence port for debates, arguments and votes.

    Implementations must enforce:
    - UNIQUE(debate_id, voter_id) on votes, raising DuplicateVoteError
    - UNIQUE(debate_id, user_id, round_number) on arguments, raising
      DuplicateArgumentError
    - compare-and-set on update_debate, raising StaleDebateError when the
      stored status no longer matches expected_status
    """

    def create_debate(self, debate: Debate) -> Debate:
        ...

    def get_debate(self, debate_id: str) -> Optional[Debate]:
        ...

    def list_debates(self, filters: DebateFilters) -> DebateListResponse:
        ...

    def list_debates_by_status(self, statuses: Iterable[DebateStatus]) -> list[Debate]:
        ...

    def update_debate(self, debate: Debate, expected_status: DebateStatus) -> Debate:
        ...

    def delete_debate(self, debate_id: str) -> None:
        ...

    def list_arguments(self, debate_id: str) -> list[Argument]:
        """Arguments of a debate ordered by posted_at."""
        ...

    def append_argument(self, argument: Argument) -> Argument:
        ...

    def list_votes(self, debate_id: str) -> list[Vote]:
        ...

    def has_voted(self, debate_id: str, voter_id: str) -> bool:
        ...

    def insert_vote(self, vote: Vote) -> Vote:
        ...


@runtime_checkable
class IDebateService(Protocol):
    """
    Interface for debate lifecycle operations.

    All methods raise DebateNotFoundError for unknown debate IDs.
    """

    async def create_debate(self, creator_id: str, request: CreateDebateRequest) -> Debate:
        """
        Create a new debate in PENDING status.

        Raises:
            DebateValidationError: With every invalid field
        """
        ...

    async def get_debate(self, debate_id: str) -> Debate:
        ...

    async def list_debates(self, filters: DebateFilters) -> DebateListResponse:
        ...

    async def join_debate(self, debate_id: str, challenger_id: str) -> Debate:
        """
        Join a pending debate as challenger.

        Raises:
            InvalidTransitionError: If the debate is not pending
            ChallengerAlreadyJoinedError: If a challenger already joined
            CannotJoinOwnDebateError: If the creator tries to join
        """
        ...

    async def list_arguments(self, debate_id: str) -> list[Argument]:
        ...

    async def submit_argument(
        self,
        debate_id: str,
        user_id: str,
        request: SubmitArgumentRequest,
    ) -> Argument:
        """
        Post the next argument, advancing to voting when conditions are met.

        Raises:
            NotParticipantError: If the user is not creator or challenger
            OutOfTurnError: If it is not the user's turn
            InvalidTransitionError: If the debate is not active
            DebateValidationError: If content fails the length policy
        """
        ...

    async def advance_to_voting(self, debate_id: str) -> Debate:
        """
        Open voting.

        Raises:
            InvalidTransitionError: If the debate is not active
            VotingNotReadyError: If neither argument minimum nor deadline is met
        """
        ...

    async def finalize_debate(self, debate_id: str) -> FinalizeOutcome:
        """
        Resolve the winner, settle the pool and complete the debate.

        Raises:
            InvalidTransitionError: If the debate is not in voting
            VotingNotReadyError: If neither vote threshold nor deadline is met
        """
        ...

    async def cancel_debate(self, debate_id: str, user: AuthenticatedUser, reason: str) -> Debate:
        """
        Cancel a pending or active debate.

        Raises:
            DebateAccessDeniedError: If the user is neither creator nor admin
            InvalidTransitionError: If the debate is voting or later
        """
        ...

    async def delete_debate(self, debate_id: str, user: AuthenticatedUser) -> None:
        ...

    async def check_eligibility(self, debate_id: str, user_id: str) -> Eligibility:
        ...


@runtime_checkable
class IVotingService(Protocol):
    """Interface for audience voting."""

    async def submit_vote(self, debate_id: str, voter_id: str, request: SubmitVoteRequest) -> Vote:
        """
        Record a vote.

        Raises:
            NotInVotingPhaseError: If the debate is not voting
            ParticipantCannotVoteError: If the voter is a participant
            AlreadyVotedError: If the voter already voted
            VoteValidationError: With every invalid field
        """
        ...

    async def get_votes(self, debate_id: str) -> list[Vote]:
        ...

    async def get_vote_summary(self, debate_id: str) -> VoteSummary:
        ...
