"""
Debate API endpoints.

Provides REST endpoints for the debate lifecycle, arguments and votes.
Domain errors propagate to the application's GavelError handler, which
maps them to 404/422/401/403/409 responses.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_debate_service, get_voting_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IDebateService, IVotingService
from .models import (
    Argument,
    CancelDebateRequest,
    CreateDebateRequest,
    Debate,
    DebateCategory,
    DebateFilters,
    DebateListResponse,
    DebateSort,
    DebateStatus,
    Eligibility,
    FinalizeOutcome,
    SubmitArgumentRequest,
    SubmitVoteRequest,
    Vote,
    VoteSummary,
)

router = APIRouter()


@router.post("", response_model=Debate, status_code=201)
async def create_debate(
    request: CreateDebateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Debate:
    """
    Create a new debate.

    The debate starts 'pending' until a challenger joins.
    """
    return await service.create_debate(user.id, request)


@router.get("", response_model=DebateListResponse)
async def list_debates(
    status: Optional[DebateStatus] = Query(default=None, description="Filter by status"),
    category: Optional[DebateCategory] = Query(default=None, description="Filter by category"),
    search: Optional[str] = Query(default=None, description="Search topic and resolution"),
    min_stake: Optional[Decimal] = Query(default=None, ge=0, description="Minimum stake"),
    max_stake: Optional[Decimal] = Query(default=None, ge=0, description="Maximum stake"),
    sort: DebateSort = Query(default=DebateSort.NEWEST, description="newest, stake or ending"),
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(default=12, ge=1, le=100, description="Items per page"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> DebateListResponse:
    """List debates with filters, sorting and pagination."""
    filters = DebateFilters(
        status=status,
        category=category,
        search=search,
        min_stake=min_stake,
        max_stake=max_stake,
        sort=sort,
        page=page,
        page_size=page_size,
    )
    return await service.list_debates(filters)


@router.get("/{debate_id}", response_model=Debate)
async def get_debate(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Debate:
    """Get a specific debate."""
    return await service.get_debate(debate_id)


@router.post("/{debate_id}/join", response_model=Debate)
async def join_debate(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Debate:
    """Accept the challenge; the debate becomes active."""
    return await service.join_debate(debate_id, user.id)


@router.post("/{debate_id}/cancel", response_model=Debate)
async def cancel_debate(
    debate_id: str,
    request: CancelDebateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Debate:
    """Cancel a pending or active debate (creator or admin)."""
    return await service.cancel_debate(debate_id, user, request.reason)


@router.delete("/{debate_id}", status_code=204)
async def delete_debate(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Response:
    """Delete a pending or cancelled debate and all associated data."""
    await service.delete_debate(debate_id, user)
    return Response(status_code=204)


@router.get("/{debate_id}/arguments", response_model=list[Argument])
async def list_arguments(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> list[Argument]:
    """Arguments in posting order."""
    return await service.list_arguments(debate_id)


@router.post("/{debate_id}/arguments", response_model=Argument, status_code=201)
async def submit_argument(
    debate_id: str,
    request: SubmitArgumentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Argument:
    """
    Post the caller's next argument.

    Arguments alternate, creator first. Voting opens automatically once
    both sides reach the argument minimum.
    """
    return await service.submit_argument(debate_id, user.id, request)


@router.post("/{debate_id}/advance", response_model=Debate)
async def advance_to_voting(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Debate:
    """Open voting after the argument minimum or the round deadline."""
    return await service.advance_to_voting(debate_id)


@router.post("/{debate_id}/finalize", response_model=FinalizeOutcome)
async def finalize_debate(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> FinalizeOutcome:
    """Resolve the winner and settle the prize pool."""
    return await service.finalize_debate(debate_id)


@router.get("/{debate_id}/eligibility", response_model=Eligibility)
async def check_eligibility(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDebateService = Depends(get_debate_service),
) -> Eligibility:
    """What the caller may do on this debate right now."""
    return await service.check_eligibility(debate_id, user.id)


@router.get("/{debate_id}/votes", response_model=list[Vote])
async def get_votes(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    voting: IVotingService = Depends(get_voting_service),
) -> list[Vote]:
    return await voting.get_votes(debate_id)


@router.post("/{debate_id}/votes", response_model=Vote, status_code=201)
async def submit_vote(
    debate_id: str,
    request: SubmitVoteRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    voting: IVotingService = Depends(get_voting_service),
) -> Vote:
    """Vote for a participant with five criterion scores."""
    return await voting.submit_vote(debate_id, user.id, request)


@router.get("/{debate_id}/votes/summary", response_model=VoteSummary)
async def get_vote_summary(
    debate_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    voting: IVotingService = Depends(get_voting_service),
) -> VoteSummary:
    return await voting.get_vote_summary(debate_id)
