"""
Per-debate mutual exclusion.

Argument submission, vote submission and every status transition run
inside ``async with locks.hold(debate_id)``. Locks are keyed by debate, so
unrelated debates never wait on each other. Entries live in a
WeakValueDictionary and disappear once no coroutine holds or awaits them.

This serializes requests within one process. Across processes the stores
back it up with unique constraints and compare-and-set status updates.
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator


class DebateLockManager:
    """Hands out one asyncio.Lock per debate ID."""

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, debate_id: str) -> asyncio.Lock:
        lock = self._locks.get(debate_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[debate_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, debate_id: str) -> AsyncIterator[None]:
        """Exclusive section for one debate."""
        lock = self._lock_for(debate_id)
        async with lock:
            yield

    def is_locked(self, debate_id: str) -> bool:
        lock = self._locks.get(debate_id)
        return lock is not None and lock.locked()
