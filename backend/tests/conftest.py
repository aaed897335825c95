"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Optional
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.debates.models import Argument, Debate, DebateCategory, DebateStatus, Vote, VoteScores
from shared.debate_config import DebatePolicy


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

CREATOR_ID = "creator-1"
CHALLENGER_ID = "challenger-1"
START = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    role: Optional[str] = None,
    wallet_address: Optional[str] = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        role: Application role placed in app_metadata (e.g. "admin")
        wallet_address: Wallet placed in user_metadata

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "app_metadata": {"role": role} if role else {},
        "user_metadata": {"wallet_address": wallet_address} if wallet_address else {},
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def words(count: int, word: str = "point") -> str:
    """Argument text with exactly `count` words."""
    return " ".join([word] * count)


def make_debate(
    status: DebateStatus = DebateStatus.ACTIVE,
    challenger_id: Optional[str] = CHALLENGER_ID,
    debate_id: str = "debate-1",
    stake: str = "100",
    **overrides,
) -> Debate:
    """Build a debate in the given status with sensible timestamps."""
    fields = dict(
        id=debate_id,
        topic="Proof of stake beats proof of work",
        resolution="Proof of stake is a better consensus mechanism than proof of work for public chains.",
        category=DebateCategory.CRYPTO,
        status=status,
        creator_id=CREATOR_ID,
        challenger_id=challenger_id,
        stake_amount=Decimal(stake),
        prize_pool=Decimal(stake) * 2 if challenger_id else Decimal(0),
        start_time=START if challenger_id else None,
        created_at=START,
        updated_at=START,
    )
    fields.update(overrides)
    return Debate(**fields)


def make_argument(
    user_id: str,
    round_number: int,
    posted_at: datetime,
    debate_id: str = "debate-1",
) -> Argument:
    return Argument(
        id=f"arg-{user_id}-{round_number}",
        debate_id=debate_id,
        user_id=user_id,
        content=words(200),
        round_number=round_number,
        word_count=200,
        posted_at=posted_at,
    )


def make_vote(
    voter_id: str,
    winner_id: str,
    total_score: str = "7.00",
    debate_id: str = "debate-1",
    score: int = 7,
) -> Vote:
    return Vote(
        id=f"vote-{voter_id}",
        debate_id=debate_id,
        voter_id=voter_id,
        winner_id=winner_id,
        scores=VoteScores(
            argument_quality=score,
            rebuttal_strength=score,
            clarity=score,
            evidence=score,
            persuasiveness=score,
        ),
        total_score=Decimal(total_score),
        submitted_at=START,
    )


class FakeClock:
    """Settable clock for services."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container around each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def policy() -> DebatePolicy:
    """Default debate policy."""
    return DebatePolicy()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
