"""
Evaluate Tick Use Case

The periodic evaluation driving the session state machine.
"""

import logging
from datetime import datetime
from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.errors import TICK_SKIPPED
from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.clock import Clock
from src.app.services.decision_publisher import DecisionPublisher
from src.app.services.engine_lock import EngineLock, TickSkipped
from src.app.services.policy import EnginePolicy
from src.app.services.session_transitions import (
    close_enforcement,
    current_window,
    find_enforced,
    open_enforcement,
)
from src.app.services.sweeps import clear_expired_locks, expire_goals, purge_expired_grants
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import CompletionStatus, SessionKind

from .dtos import DecisionResponse, TickResponse, TransitionResponse

logger = logging.getLogger(__name__)


class EvaluateTickUseCase:
    """
    Use case for one tick.

    Business Rules:
    - Ticks never overlap with each other or with start/override/lock calls;
      a tick that cannot get the engine lock in time is skipped
    - Every window is re-derived from the current instant, so a tick after a
      long sleep completes what should have ended and does not replay
      intermediate windows
    - A second tick at the same instant writes nothing and publishes nothing
    - Decisions are published only after the transaction committed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        lock: EngineLock,
        policy: EnginePolicy,
        publisher: DecisionPublisher,
        tracker: Optional[RepeatedActionTracker] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.lock = lock
        self.policy = policy
        self.publisher = publisher
        self.tracker = tracker

    @persistence_guard
    async def execute(self, now: Optional[datetime] = None) -> Result[TickResponse]:
        try:
            async with self.lock.exclusive_within(self.policy.tick_lock_timeout_seconds):
                return await self._evaluate(now or self.clock.now())
        except TickSkipped as exc:
            logger.warning("Tick skipped: %s", exc)
            return Return.err(Error(TICK_SKIPPED, "Engine busy, tick skipped", reason=str(exc)))

    async def _evaluate(self, now: datetime) -> Result[TickResponse]:
        transitions: List[TransitionResponse] = []

        async with self.uow:
            await clear_expired_locks(self.uow, now)
            await expire_goals(self.uow, now)
            await purge_expired_grants(self.uow, now)

            enforced = await find_enforced(self.uow)
            if enforced is not None and enforced.window_end <= now:
                session = await self.uow.sessions.get_by_id(enforced.session_id)
                await close_enforcement(
                    self.uow,
                    session,
                    enforced,
                    CompletionStatus.completed,
                    now,
                    tracker=self.tracker,
                )
                transitions.append(
                    TransitionResponse(session_id=session.id, status=CompletionStatus.completed)
                )
                enforced = None

            for session in await self.uow.sessions.list_enabled_by_kind(
                SessionKind.recurring_window
            ):
                window = current_window(session.schedule, now, self.policy.timezone)
                is_this_enforced = enforced is not None and enforced.session_id == session.id

                if is_this_enforced:
                    # Stays enforced until its recorded window_end
                    continue

                if window is None:
                    continue
                if session.is_on_cooldown(now):
                    continue
                if enforced is not None:
                    logger.debug(
                        "Window of %s opened while %s is enforced, not arming",
                        session.id,
                        enforced.session_id,
                    )
                    continue

                enforced = await open_enforcement(
                    self.uow, session, window[0], window[1], now, tracker=self.tracker
                )
                transitions.append(
                    TransitionResponse(session_id=session.id, status=CompletionStatus.ongoing)
                )

            await self.uow.commit()

        decisions, changed = await self.publisher.refresh_after_commit(self.uow, now)
        return Return.ok(
            TickResponse(
                evaluated_at=now,
                transitions=transitions,
                decisions=[DecisionResponse.from_decision(d) for d in decisions],
                published=len(changed),
            )
        )
