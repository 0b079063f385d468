"""
Commitment Lock Use Case

Protects a session definition from edits for a number of days, unless the
user retypes the exact phrase they wrote when locking it.
"""

import logging
from datetime import timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import (
    INVALID_LOCK_DURATION,
    PHRASE_TOO_SHORT,
    SESSION_LOCKED,
    SESSION_NOT_FOUND,
    SESSION_NOT_LOCKED,
    WRONG_PHRASE,
)
from src.app.services.clock import Clock
from src.app.services.engine_lock import EngineLock
from src.app.services.sweeps import clear_expired_locks
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard

from .dtos import SessionLockResponse

logger = logging.getLogger(__name__)

MIN_PHRASE_LENGTH = 10


class CommitmentLockUseCase:
    """
    Use case for commitment locks.

    Business Rules:
    - Phrase must have at least 10 characters after trimming; stored verbatim
    - Lock lasts at least one day
    - Unlock compares the typed phrase exactly (case and whitespace matter)
    - A lock past lock_expires_at is treated as cleared everywhere
    """

    def __init__(self, uow: UnitOfWork, clock: Clock, lock: EngineLock):
        self.uow = uow
        self.clock = clock
        self.lock = lock

    @persistence_guard
    async def lock_session(
        self, session_id: UUID, duration_days: int, phrase: str
    ) -> Result[SessionLockResponse]:
        if len(phrase.strip()) < MIN_PHRASE_LENGTH:
            return Return.err(
                Error(
                    PHRASE_TOO_SHORT,
                    f"Unlock phrase must be at least {MIN_PHRASE_LENGTH} characters",
                )
            )
        if duration_days < 1:
            return Return.err(Error(INVALID_LOCK_DURATION, "Lock must last at least one day"))

        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if not session:
                    return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
                if session.is_lock_active(now):
                    return Return.err(Error(SESSION_LOCKED, "Session is already locked"))

                session.is_locked = True
                session.lock_expires_at = now + timedelta(days=duration_days)
                session.lock_phrase = phrase
                session = await self.uow.sessions.update(session)
                response = SessionLockResponse.from_entity(session)
                await self.uow.commit()

        logger.info(
            "Commitment lock set: session=%s until=%s",
            session_id,
            response.lock_expires_at.isoformat(),
        )
        return Return.ok(response)

    @persistence_guard
    async def unlock_session(
        self, session_id: UUID, typed_phrase: str
    ) -> Result[SessionLockResponse]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if not session:
                    return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
                if not session.is_lock_active(now):
                    return Return.err(Error(SESSION_NOT_LOCKED, "Session is not locked"))
                if typed_phrase != session.lock_phrase:
                    logger.warning("Wrong unlock phrase for session %s", session_id)
                    return Return.err(Error(WRONG_PHRASE, "Phrase does not match"))

                session.clear_lock()
                session = await self.uow.sessions.update(session)
                response = SessionLockResponse.from_entity(session)
                await self.uow.commit()

        logger.info("Commitment lock removed by phrase: session=%s", session_id)
        return Return.ok(response)

    @persistence_guard
    async def clear_expired(self) -> Result[int]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                cleared = await clear_expired_locks(self.uow, now)
                await self.uow.commit()
        return Return.ok(cleared)
