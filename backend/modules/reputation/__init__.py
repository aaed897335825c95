"""
Reputation module.

Records numeric reputation deltas when debates settle.

Public API:
- IReputationService: Interface for recording and reading reputation
- ReputationEvent: A single delta
- ReputationSummary: Score plus recent events
"""

from .interfaces import IReputationService, IReputationStore
from .models import ReputationEvent, ReputationEventType, ReputationSummary
from .service import ReputationService, compute_settlement_events

__all__ = [
    # Interfaces
    "IReputationService",
    "IReputationStore",
    # Models
    "ReputationEvent",
    "ReputationEventType",
    "ReputationSummary",
    # Service
    "ReputationService",
    "compute_settlement_events",
]
