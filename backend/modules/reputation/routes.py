"""
Reputation API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_reputation_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IReputationService
from .models import ReputationSummary

router = APIRouter()


@router.get("/{user_id}", response_model=ReputationSummary)
async def get_reputation(
    user_id: str,
    limit: int = Query(default=50, ge=1, le=200, description="Recent events to include"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IReputationService = Depends(get_reputation_service),
) -> ReputationSummary:
    """A user's reputation score and recent events."""
    return await service.get_summary(user_id, limit=limit)
