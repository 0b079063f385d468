"""
Recover Sessions Use Case

Reconciles persisted state after a restart.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.clock import Clock
from src.app.services.engine_lock import EngineLock
from src.app.services.session_transitions import close_enforcement
from src.app.services.sweeps import clear_expired_locks
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import CompletionStatus

from .dtos import RecoveryResponse

logger = logging.getLogger(__name__)


class RecoverSessionsUseCase:
    """
    Business Rules:
    - An enforced session whose window already ended is completed
    - An enforced session still inside its window keeps running
    - An ongoing log with no enforced record behind it is closed as interrupted
    - Expired commitment locks are cleared
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        lock: EngineLock,
        tracker: Optional[RepeatedActionTracker] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.lock = lock
        self.tracker = tracker

    @persistence_guard
    async def execute(self) -> Result[RecoveryResponse]:
        completed = 0
        interrupted = 0

        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                locks_cleared = await clear_expired_locks(self.uow, now)

                open_log_ids = set()
                for record in await self.uow.active_records.list_enforced():
                    if record.window_end is not None and record.window_end <= now:
                        session = await self.uow.sessions.get_by_id(record.session_id)
                        await close_enforcement(
                            self.uow,
                            session,
                            record,
                            CompletionStatus.completed,
                            now,
                            tracker=self.tracker,
                        )
                        completed += 1
                    elif record.log_id is not None:
                        open_log_ids.add(record.log_id)

                for log in await self.uow.logs.list_ongoing():
                    if log.id in open_log_ids:
                        continue
                    log.close(CompletionStatus.interrupted, now)
                    await self.uow.logs.update(log)
                    interrupted += 1
                    logger.info(
                        "Session interrupted: session=%s log=%s", log.session_id, log.id
                    )

                await self.uow.commit()

        if completed or interrupted or locks_cleared:
            logger.info(
                "Startup recovery: completed=%d interrupted=%d locks_cleared=%d",
                completed,
                interrupted,
                locks_cleared,
            )
        return Return.ok(
            RecoveryResponse(
                interrupted=interrupted, completed=completed, locks_cleared=locks_cleared
            )
        )
