"""Tests for the reconciler runner loop."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from modules.debates.reconciler import ReconcileReport
from run_reconciler import run


class TestRun:
    @pytest.mark.asyncio
    async def test_periodic_mode_survives_failed_sweep(self):
        reconciler = AsyncMock()
        reconciler.run_once.side_effect = [
            RuntimeError("connection reset"),
            ReconcileReport(),
            asyncio.CancelledError(),
        ]

        with pytest.raises(asyncio.CancelledError):
            await run(once=False, interval=0, reconciler=reconciler)

        assert reconciler.run_once.await_count == 3

    @pytest.mark.asyncio
    async def test_once_mode_reports_failure(self):
        reconciler = AsyncMock()
        reconciler.run_once.side_effect = RuntimeError("connection reset")

        with pytest.raises(RuntimeError):
            await run(once=True, interval=0, reconciler=reconciler)

    @pytest.mark.asyncio
    async def test_once_mode_single_sweep(self):
        reconciler = AsyncMock()
        reconciler.run_once.return_value = ReconcileReport()

        await run(once=True, interval=0, reconciler=reconciler)

        reconciler.run_once.assert_awaited_once()
