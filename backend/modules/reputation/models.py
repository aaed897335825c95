"""
Reputation module data models.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.debates.models import utc_now


class ReputationEventType(str, Enum):
    """Why a user's reputation changed."""

    DEBATE_WIN = "debate_win"
    DEBATE_LOSS = "debate_loss"
    VOTE_CAST = "vote_cast"
    CORRECT_PREDICTION = "correct_prediction"


class ReputationEvent(BaseModel):
    """A single reputation delta for one user."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Event ID (UUID)")
    user_id: str = Field(..., description="User whose reputation changes")
    event_type: ReputationEventType = Field(..., description="Reason category")
    delta: Decimal = Field(..., description="Signed change in reputation")
    debate_id: Optional[str] = Field(None, description="Debate that caused the change")
    reason: Optional[str] = Field(None, description="Human-readable reason")
    created_at: datetime = Field(default_factory=utc_now, description="When it was recorded")


class ReputationSummary(BaseModel):
    """A user's reputation total and recent history."""

    user_id: str
    score: Decimal
    events: list[ReputationEvent]
