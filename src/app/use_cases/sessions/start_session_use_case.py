"""
Start Session Use Case

Explicitly arms a session right now.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import (
    ALREADY_ACTIVE,
    ON_COOLDOWN,
    OUTSIDE_WINDOW,
    SESSION_DISABLED,
    SESSION_NOT_FOUND,
)
from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.clock import Clock
from src.app.services.decision_publisher import DecisionPublisher
from src.app.services.engine_lock import EngineLock
from src.app.services.policy import EnginePolicy
from src.app.services.session_transitions import current_window, find_enforced, open_enforcement
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import DurationSchedule

from .dtos import ActiveSessionResponse

logger = logging.getLogger(__name__)


class StartSessionUseCase:
    """
    Use case for starting a session on demand.

    Business Rules:
    - At most one session is enforced at any instant; starting while any
      session (the same one included) is enforced fails with ALREADY_ACTIVE
    - A session inside its post-override cooldown cannot be started
    - Duration sessions run for their minutes from now; recurring sessions
      can only be started inside their window and end with it
    - Record and log entry are written in one transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        lock: EngineLock,
        policy: EnginePolicy,
        publisher: Optional[DecisionPublisher] = None,
        tracker: Optional[RepeatedActionTracker] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.lock = lock
        self.policy = policy
        self.publisher = publisher
        self.tracker = tracker

    @persistence_guard
    async def execute(self, session_id: UUID) -> Result[ActiveSessionResponse]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if not session:
                    return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
                if not session.is_enabled:
                    return Return.err(Error(SESSION_DISABLED, "Session is disabled"))
                if session.is_on_cooldown(now):
                    return Return.err(
                        Error(
                            ON_COOLDOWN,
                            "Session was overridden recently",
                            reason=f"Available again at {session.canceled_until.isoformat()}",
                        )
                    )

                enforced = await find_enforced(self.uow)
                if enforced is not None:
                    logger.warning(
                        "Start of %s refused, session %s is already enforced",
                        session_id,
                        enforced.session_id,
                    )
                    return Return.err(
                        Error(ALREADY_ACTIVE, "Another session is already enforced")
                    )

                schedule = session.schedule
                if isinstance(schedule, DurationSchedule):
                    window = (now, now + timedelta(minutes=schedule.minutes))
                else:
                    window = current_window(schedule, now, self.policy.timezone)
                    if window is None:
                        return Return.err(
                            Error(OUTSIDE_WINDOW, "Session can only start inside its window")
                        )

                record = await open_enforcement(
                    self.uow, session, window[0], window[1], now, tracker=self.tracker
                )
                response = ActiveSessionResponse.from_record(session, record, now)
                await self.uow.commit()

            if self.publisher is not None:
                await self.publisher.refresh_after_commit(self.uow, now)

        return Return.ok(response)
