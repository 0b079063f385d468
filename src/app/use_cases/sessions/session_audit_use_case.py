"""
Session Audit Use Case

Write-only audit trail on the open log entry, plus log history.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import NOT_ENFORCED, SESSION_NOT_FOUND
from src.app.services.clock import Clock
from src.app.services.session_transitions import find_enforced
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import SessionLog

from .dtos import SessionLogResponse

logger = logging.getLogger(__name__)


class SessionAuditUseCase:
    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def _open_log(self) -> Optional[SessionLog]:
        record = await find_enforced(self.uow)
        if record is None or record.log_id is None:
            return None
        return await self.uow.logs.get_by_id(record.log_id)

    @persistence_guard
    async def record_bypass_attempt(self) -> Result[int]:
        """Count an attempt to get past the overlay; returns the running total."""
        async with self.uow:
            log = await self._open_log()
            if log is None:
                return Return.err(Error(NOT_ENFORCED, "No session is enforced"))
            log.bypass_attempts += 1
            log = await self.uow.logs.update(log)
            session_id, attempts = log.session_id, log.bypass_attempts
            await self.uow.commit()

        logger.info("Bypass attempt recorded: session=%s total=%d", session_id, attempts)
        return Return.ok(attempts)

    @persistence_guard
    async def record_identifier_access(self, identifier: str) -> Result[List[str]]:
        async with self.uow:
            log = await self._open_log()
            if log is None:
                return Return.err(Error(NOT_ENFORCED, "No session is enforced"))
            accessed = list(log.accessed_identifiers or [])
            if identifier not in accessed:
                accessed.append(identifier)
                # Reassign so the JSON column is flagged dirty
                log.accessed_identifiers = accessed
                await self.uow.logs.update(log)
                await self.uow.commit()
        return Return.ok(accessed)

    @persistence_guard
    async def list_session_logs(
        self,
        session_id: UUID,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> Result[List[SessionLogResponse]]:
        async with self.uow:
            if not await self.uow.sessions.get_by_id(session_id):
                return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))
            logs = await self.uow.logs.list_by_session(session_id, since, until)
            return Return.ok([SessionLogResponse.from_entity(log) for log in logs])
