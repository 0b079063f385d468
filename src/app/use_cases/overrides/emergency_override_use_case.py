"""
Emergency Override Use Case

The only way to end an enforced session early: complete the session's
challenge, then request the override with a reason.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import (
    CHALLENGE_INCOMPLETE,
    NO_CHALLENGE,
    NOT_ENFORCED,
    SESSION_NOT_FOUND,
)
from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.clock import Clock
from src.app.services.decision_publisher import DecisionPublisher
from src.app.services.engine_lock import EngineLock
from src.app.services.policy import EnginePolicy
from src.app.services.session_transitions import close_enforcement
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.app.use_cases.unlocks.dtos import UnlockGrantResponse
from src.domain.entities import (
    ActiveSessionRecord,
    BrickSession,
    ChallengeType,
    CompletionStatus,
    CountdownState,
    TemporaryUnlockGrant,
)

from .dtos import ChallengeStatusResponse, OverrideResponse

logger = logging.getLogger(__name__)


class EmergencyOverrideUseCase:
    """
    Use case for challenges and emergency overrides.

    Business Rules:
    - Challenges exist only for the enforced session
    - A TimedWait countdown is persisted and never reset by beginning again;
      remaining time is recomputed from its start instant
    - RepeatedAction progress lives in memory and restarts with the process
    - Challenge progress belongs to one enforcement; it is dropped whenever
      the session is enforced or released
    - A satisfied override closes the log as emergency_override, bumps the
      override count, starts the cooldown and returns short unlock grants
      for the session's targets
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        lock: EngineLock,
        policy: EnginePolicy,
        tracker: RepeatedActionTracker,
        publisher: Optional[DecisionPublisher] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.lock = lock
        self.policy = policy
        self.tracker = tracker
        self.publisher = publisher

    async def _load_enforced(self, session_id: UUID) -> Union[Error, tuple]:
        session = await self.uow.sessions.get_by_id(session_id)
        if not session:
            return Error(SESSION_NOT_FOUND, "Session not found")
        record = await self.uow.active_records.get(session_id)
        if record is None or not record.is_currently_enforced:
            return Error(NOT_ENFORCED, "Session is not currently enforced")
        return session, record

    def _status(
        self, session: BrickSession, countdown: Optional[CountdownState], now: datetime
    ) -> ChallengeStatusResponse:
        challenge = session.challenge
        if challenge.type == ChallengeType.timed_wait:
            remaining = countdown.remaining_seconds(now) if countdown else challenge.param * 60
            return ChallengeStatusResponse(
                session_id=session.id,
                type=challenge.type,
                satisfied=countdown is not None and remaining == 0,
                remaining_seconds=remaining,
            )

        completed = self.tracker.count(session.id)
        return ChallengeStatusResponse(
            session_id=session.id,
            type=challenge.type,
            satisfied=self.tracker.is_tracking(session.id) and completed >= challenge.param,
            completed_actions=completed,
            required_actions=challenge.param,
        )

    @persistence_guard
    async def begin_challenge(self, session_id: UUID) -> Result[ChallengeStatusResponse]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                loaded = await self._load_enforced(session_id)
                if isinstance(loaded, Error):
                    return Return.err(loaded)
                session, _ = loaded

                countdown = None
                if session.challenge_type == ChallengeType.timed_wait:
                    countdown = await self.uow.countdowns.get(str(session_id))
                    if countdown is None:
                        countdown = await self.uow.countdowns.save(
                            CountdownState(
                                identifier=str(session_id),
                                started_at=now,
                                total_minutes=session.challenge_param,
                            )
                        )
                        await self.uow.commit()
                else:
                    self.tracker.reset(session_id)

                response = self._status(session, countdown, now)

        logger.info("Challenge begun: session=%s type=%s", session_id, response.type.value)
        return Return.ok(response)

    @persistence_guard
    async def challenge_status(self, session_id: UUID) -> Result[ChallengeStatusResponse]:
        now = self.clock.now()
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if not session:
                return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))

            countdown = None
            if session.challenge_type == ChallengeType.timed_wait:
                countdown = await self.uow.countdowns.get(str(session_id))
                if countdown is None:
                    return Return.err(Error(NO_CHALLENGE, "No challenge in progress"))
            elif not self.tracker.is_tracking(session_id):
                return Return.err(Error(NO_CHALLENGE, "No challenge in progress"))

            return Return.ok(self._status(session, countdown, now))

    @persistence_guard
    async def record_action(self, session_id: UUID) -> Result[ChallengeStatusResponse]:
        now = self.clock.now()
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if not session:
                return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
            if (
                session.challenge_type != ChallengeType.repeated_action
                or not self.tracker.is_tracking(session_id)
            ):
                return Return.err(Error(NO_CHALLENGE, "No repeated-action challenge in progress"))

            self.tracker.record(session_id)
            return Return.ok(self._status(session, None, now))

    @persistence_guard
    async def cancel_challenge(self, session_id: UUID) -> Result[None]:
        async with self.lock.exclusive():
            async with self.uow:
                removed = await self.uow.countdowns.delete(str(session_id))
                if removed:
                    await self.uow.commit()
            self.tracker.clear(session_id)

        logger.info("Challenge cancelled: session=%s", session_id)
        return Return.ok(None)

    @persistence_guard
    async def request_override(
        self, session_id: UUID, reason: str, note: Optional[str] = None
    ) -> Result[OverrideResponse]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                loaded = await self._load_enforced(session_id)
                if isinstance(loaded, Error):
                    return Return.err(loaded)
                session, record = loaded

                countdown = None
                if session.challenge_type == ChallengeType.timed_wait:
                    countdown = await self.uow.countdowns.get(str(session_id))
                status = self._status(session, countdown, now)
                if not status.satisfied:
                    return Return.err(
                        Error(
                            CHALLENGE_INCOMPLETE,
                            "Complete the challenge before overriding",
                            reason=self._describe(status),
                        )
                    )

                response = await self._override(session, record, reason, note, now)
                await self.uow.commit()

            if self.publisher is not None:
                await self.publisher.refresh_after_commit(self.uow, now)

        logger.info("Session overridden: session=%s reason=%s", session_id, reason)
        return Return.ok(response)

    async def _override(
        self,
        session: BrickSession,
        record: ActiveSessionRecord,
        reason: str,
        note: Optional[str],
        now: datetime,
    ) -> OverrideResponse:
        session.canceled_until = now + timedelta(minutes=self.policy.override_cooldown_minutes)
        log_id = record.log_id
        await close_enforcement(
            self.uow,
            session,
            record,
            CompletionStatus.emergency_override,
            now,
            reason=reason,
            note=note,
            tracker=self.tracker,
        )

        grants = []
        for identifier in session.target.identifiers:
            grant = await self.uow.grants.save(
                TemporaryUnlockGrant(
                    identifier=identifier,
                    granted_at=now,
                    duration_minutes=self.policy.override_unlock_minutes,
                )
            )
            grants.append(UnlockGrantResponse.from_entity(grant, now))

        return OverrideResponse(
            session_id=session.id,
            log_id=log_id,
            overridden_at=now,
            canceled_until=session.canceled_until,
            grants=grants,
        )

    @staticmethod
    def _describe(status: ChallengeStatusResponse) -> str:
        if status.type == ChallengeType.timed_wait:
            return f"{status.remaining_seconds}s left to wait"
        return f"{status.completed_actions}/{status.required_actions} actions done"
