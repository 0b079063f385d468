"""
Manage Session Use Case

Read, edit, delete and enable/disable session definitions.
"""

import logging
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import SESSION_ENFORCED, SESSION_LOCKED, SESSION_NOT_FOUND
from src.app.services.clock import Clock
from src.app.services.engine_lock import EngineLock
from src.app.services.session_transitions import reset_challenge
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import BrickSession

from .dtos import SessionResponse, UpdateSessionCommand
from .validation import to_definition

logger = logging.getLogger(__name__)


class ManageSessionUseCase:
    """
    Business Rules:
    - A live commitment lock blocks edit, delete and disable (SESSION_LOCKED)
    - The enforced session cannot be edited, deleted or disabled
      (SESSION_ENFORCED); it ends by completion or emergency override only
    - Enabling is always allowed since it only makes things stricter
    """

    def __init__(self, uow: UnitOfWork, clock: Clock, lock: EngineLock):
        self.uow = uow
        self.clock = clock
        self.lock = lock

    async def _is_enforced(self, session_id: UUID) -> bool:
        record = await self.uow.active_records.get(session_id)
        return record is not None and record.is_currently_enforced

    async def _check_mutable(self, session: BrickSession, now) -> Optional[Error]:
        if session.is_lock_active(now):
            logger.warning("Edit refused, session %s is under a commitment lock", session.id)
            return Error(SESSION_LOCKED, "Session is locked", reason="Commitment lock in force")
        if await self._is_enforced(session.id):
            return Error(SESSION_ENFORCED, "Session is currently enforced")
        return None

    @persistence_guard
    async def get_session(self, session_id: UUID) -> Result[SessionResponse]:
        now = self.clock.now()
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if not session:
                return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
            return Return.ok(
                SessionResponse.from_entity(session, await self._is_enforced(session_id), now)
            )

    @persistence_guard
    async def list_sessions(self) -> Result[List[SessionResponse]]:
        now = self.clock.now()
        async with self.uow:
            enforced = {r.session_id for r in await self.uow.active_records.list_enforced()}
            sessions = await self.uow.sessions.list_all()
            return Return.ok(
                [SessionResponse.from_entity(s, s.id in enforced, now) for s in sessions]
            )

    @persistence_guard
    async def update_session(
        self, session_id: UUID, command: UpdateSessionCommand
    ) -> Result[SessionResponse]:
        definition = to_definition(command.schedule, command.target, command.challenge)
        if isinstance(definition, Error):
            return Return.err(definition)
        schedule, target, challenge = definition

        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if not session:
                    return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
                error = await self._check_mutable(session, now)
                if error:
                    return Return.err(error)

                if command.name is not None:
                    session.name = command.name
                if schedule is not None:
                    session.apply_schedule(schedule)
                if target is not None:
                    session.apply_target(target)
                if challenge is not None:
                    session.challenge_type = challenge.type
                    session.challenge_param = challenge.param
                session.allow_emergency_override = True

                session = await self.uow.sessions.update(session)
                response = SessionResponse.from_entity(session, False, now)
                await self.uow.commit()

        logger.info("Session updated: session=%s", session_id)
        return Return.ok(response)

    @persistence_guard
    async def delete_session(self, session_id: UUID) -> Result[None]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if not session:
                    return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
                error = await self._check_mutable(session, now)
                if error:
                    return Return.err(error)

                await reset_challenge(self.uow, session)
                await self.uow.sessions.delete(session)
                await self.uow.commit()

        logger.info("Session deleted: session=%s", session_id)
        return Return.ok(None)

    @persistence_guard
    async def set_enabled(self, session_id: UUID, enabled: bool) -> Result[SessionResponse]:
        async with self.lock.exclusive():
            now = self.clock.now()
            async with self.uow:
                session = await self.uow.sessions.get_by_id(session_id)
                if not session:
                    return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
                if not enabled:
                    error = await self._check_mutable(session, now)
                    if error:
                        return Return.err(error)

                session.is_enabled = enabled
                session = await self.uow.sessions.update(session)
                response = SessionResponse.from_entity(
                    session, await self._is_enforced(session_id), now
                )
                await self.uow.commit()

        logger.info("Session %s: session=%s", "enabled" if enabled else "disabled", session_id)
        return Return.ok(response)
