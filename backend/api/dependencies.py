"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The debate and voting services share one store and one lock manager, so
an argument, a vote and a finalize on the same debate never interleave.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.debates.interfaces import IDebateService, IDebateStore, IVotingService
    from modules.debates.locks import DebateLockManager
    from modules.debates.reconciler import DebateReconciler
    from modules.reputation.interfaces import IReputationService, IReputationStore
    from shared.debate_config import DebatePolicy


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._policy: "DebatePolicy | None" = None
        self._auth_service: "IAuthService | None" = None
        self._debate_store: "IDebateStore | None" = None
        self._reputation_store: "IReputationStore | None" = None
        self._locks: "DebateLockManager | None" = None
        self._debate_service: "IDebateService | None" = None
        self._voting_service: "IVotingService | None" = None
        self._reputation_service: "IReputationService | None" = None
        self._reconciler: "DebateReconciler | None" = None

    @property
    def policy(self) -> "DebatePolicy":
        """Get the debate policy for this deployment."""
        if self._policy is None:
            from shared.debate_config import get_debate_policy
            self._policy = get_debate_policy()
        return self._policy

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    def _use_memory(self) -> bool:
        from shared.config import get_settings
        return get_settings().storage_backend == "memory"

    @property
    def debate_store(self) -> "IDebateStore":
        """Get the debate store (Supabase, or in-memory for local runs)."""
        if self._debate_store is None:
            if self._use_memory():
                from modules.debates.memory_repository import InMemoryDebateRepository
                self._debate_store = InMemoryDebateRepository()
            else:
                from modules.debates.repository import DebateRepository
                from shared.database import get_supabase_client
                self._debate_store = DebateRepository(get_supabase_client())
        return self._debate_store

    @property
    def reputation_store(self) -> "IReputationStore":
        """Get the reputation store."""
        if self._reputation_store is None:
            if self._use_memory():
                from modules.reputation.repository import InMemoryReputationRepository
                self._reputation_store = InMemoryReputationRepository()
            else:
                from modules.reputation.repository import ReputationRepository
                from shared.database import get_supabase_client
                self._reputation_store = ReputationRepository(get_supabase_client())
        return self._reputation_store

    @property
    def locks(self) -> "DebateLockManager":
        """Get the per-debate lock manager."""
        if self._locks is None:
            from modules.debates.locks import DebateLockManager
            self._locks = DebateLockManager()
        return self._locks

    @property
    def reputation(self) -> "IReputationService":
        """Get the reputation service instance."""
        if self._reputation_service is None:
            from modules.reputation.service import ReputationService
            self._reputation_service = ReputationService(self.reputation_store, self.policy)
        return self._reputation_service

    @property
    def debates(self) -> "IDebateService":
        """Get the debate service instance."""
        if self._debate_service is None:
            from modules.debates.service import DebateService
            self._debate_service = DebateService(
                store=self.debate_store,
                policy=self.policy,
                locks=self.locks,
                reputation=self.reputation,
            )
        return self._debate_service

    @property
    def voting(self) -> "IVotingService":
        """Get the voting service instance."""
        if self._voting_service is None:
            from modules.debates.voting_service import VotingService
            self._voting_service = VotingService(
                store=self.debate_store,
                policy=self.policy,
                locks=self.locks,
            )
        return self._voting_service

    @property
    def reconciler(self) -> "DebateReconciler":
        """Get the deadline reconciler."""
        if self._reconciler is None:
            from modules.debates.reconciler import DebateReconciler
            from modules.debates.state_machine import DebateStateMachine
            self._reconciler = DebateReconciler(
                service=self.debates,
                store=self.debate_store,
                machine=DebateStateMachine(self.policy),
            )
        return self._reconciler

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._policy = None
        self._auth_service = None
        self._debate_store = None
        self._reputation_store = None
        self._locks = None
        self._debate_service = None
        self._voting_service = None
        self._reputation_service = None
        self._reconciler = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_debate_service() -> "IDebateService":
    """FastAPI dependency for debate service."""
    return get_container().debates


def get_voting_service() -> "IVotingService":
    """FastAPI dependency for voting service."""
    return get_container().voting


def get_reputation_service() -> "IReputationService":
    """FastAPI dependency for reputation service."""
    return get_container().reputation
