"""
Centralized configuration for the Gavel backend.

All settings are loaded from environment variables (prefixed with GAVEL_)
with sensible defaults. Debate policy knobs live here too and are turned
into a DebatePolicy value object by shared.debate_config.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GAVEL_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Gavel API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Persistence
    storage_backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""

    # Debate lifecycle
    min_arguments_per_side: int = 2
    round_duration_hours: int = 24
    voting_duration_hours: int = 72
    min_votes_for_conclusion: int = 3
    min_argument_words: int = 200
    max_argument_words: int = 1000
    max_feedback_length: int = 500

    # Stakes and prizes (USDC)
    min_stake: int = 5
    max_stake: int = 1000
    platform_fee_percent: int = 5
    voter_reward_percent: int = 10
    unclaimed_voter_rewards: Literal["platform", "winner"] = "platform"

    # Reconciler
    reconcile_interval_seconds: int = 300


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
