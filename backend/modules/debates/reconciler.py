"""
Deadline reconciliation.

Nothing inside a request moves a debate forward when a deadline passes
quietly. The reconciler sweeps active and voting debates and calls the
same service operations a user would: advance_to_voting once the round
deadline has passed, finalize_debate once the voting window has closed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from shared.exceptions import GavelError

from .interfaces import IDebateService, IDebateStore
from .models import DebateStatus, utc_now
from .state_machine import DebateStateMachine

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    """What one sweep did."""

    advanced: list[str] = field(default_factory=list)
    finalized: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class DebateReconciler:
    """Periodic sweeper over debates whose deadline may have passed."""

    def __init__(
        self,
        service: IDebateService,
        store: IDebateStore,
        machine: DebateStateMachine,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._service = service
        self._store = store
        self._machine = machine
        self._clock = clock

    async def run_once(self) -> ReconcileReport:
        """
        Sweep once.

        Expected rejections (another request won the race, conditions no
        longer hold) are logged as warnings. Any other error on one debate
        is logged with its traceback and the sweep moves on. A failure to
        list debates propagates.
        """
        report = ReconcileReport()
        now = self._clock()

        debates = self._store.list_debates_by_status([DebateStatus.ACTIVE, DebateStatus.VOTING])
        for debate in debates:
            try:
                if debate.status == DebateStatus.ACTIVE:
                    history = self._store.list_arguments(debate.id)
                    if self._machine.can_advance_to_voting(debate, history, now):
                        await self._service.advance_to_voting(debate.id)
                        report.advanced.append(debate.id)
                else:
                    vote_count = len(self._store.list_votes(debate.id))
                    expired = debate.voting_ends_at is not None and now >= debate.voting_ends_at
                    if expired and self._machine.can_finalize(debate, vote_count, now):
                        await self._service.finalize_debate(debate.id)
                        report.finalized.append(debate.id)
            except GavelError as e:
                logger.warning("Reconcile skipped debate %s: %s", debate.id, e.message)
                report.failed.append(debate.id)
            except Exception:
                logger.exception("Reconcile failed for debate %s", debate.id)
                report.failed.append(debate.id)

        if report.advanced or report.finalized or report.failed:
            logger.info(
                "Reconciled: %d advanced, %d finalized, %d skipped",
                len(report.advanced), len(report.finalized), len(report.failed),
            )
        return report
