"""
Debates module.

Handles the staked-debate lifecycle: joining, turn-based arguments,
audience voting, winner resolution and prize settlement.

Public API:
- IDebateService / IVotingService: Interfaces for the API layer
- IDebateStore: Persistence port
- DebateStateMachine, VotingEngine, WinnerResolver, PrizeDistributor: Pure engines
- Debate, Argument, Vote: Core models
"""

from .interfaces import IDebateService, IDebateStore, IVotingService
from .models import (
    Argument,
    CreateDebateRequest,
    Debate,
    DebateCategory,
    DebateFilters,
    DebateFormat,
    DebateListResponse,
    DebateStatus,
    FinalizeOutcome,
    PrizeSettlement,
    SubmitArgumentRequest,
    SubmitVoteRequest,
    Vote,
    VoteScores,
    WinnerResult,
)
from .exceptions import (
    DebateError,
    DebateNotFoundError,
    DebateAccessDeniedError,
    DebateValidationError,
    InvalidTransitionError,
    NotParticipantError,
    OutOfTurnError,
    AlreadyVotedError,
    VoteValidationError,
)
from .state_machine import DebateStateMachine
from .voting_engine import VotingEngine
from .resolver import WinnerResolver
from .prizes import PrizeDistributor

__all__ = [
    # Interfaces
    "IDebateService",
    "IDebateStore",
    "IVotingService",
    # Engines
    "DebateStateMachine",
    "VotingEngine",
    "WinnerResolver",
    "PrizeDistributor",
    # Models
    "Argument",
    "CreateDebateRequest",
    "Debate",
    "DebateCategory",
    "DebateFilters",
    "DebateFormat",
    "DebateListResponse",
    "DebateStatus",
    "FinalizeOutcome",
    "PrizeSettlement",
    "SubmitArgumentRequest",
    "SubmitVoteRequest",
    "Vote",
    "VoteScores",
    "WinnerResult",
    # Exceptions
    "DebateError",
    "DebateNotFoundError",
    "DebateAccessDeniedError",
    "DebateValidationError",
    "InvalidTransitionError",
    "NotParticipantError",
    "OutOfTurnError",
    "AlreadyVotedError",
    "VoteValidationError",
]
