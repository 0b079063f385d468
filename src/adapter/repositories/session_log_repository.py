from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_log_repository import ISessionLogRepository
from src.domain.entities import CompletionStatus, SessionLog


class SessionLogRepository(ISessionLogRepository):
    """SessionLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, log_id: UUID) -> Optional[SessionLog]:
        stmt = select(SessionLog).where(SessionLog.id == log_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, log: SessionLog) -> SessionLog:
        self.session.add(log)
        await self.session.flush()
        await self.session.refresh(log)
        return log

    async def update(self, log: SessionLog) -> SessionLog:
        self.session.add(log)
        await self.session.flush()
        await self.session.refresh(log)
        return log

    async def list_ongoing(self) -> List[SessionLog]:
        stmt = select(SessionLog).where(SessionLog.status == CompletionStatus.ongoing)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_session(
        self,
        session_id: UUID,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[SessionLog]:
        stmt = select(SessionLog).where(SessionLog.session_id == session_id)
        if since is not None:
            stmt = stmt.where(SessionLog.started_at >= since)
        if until is not None:
            stmt = stmt.where(SessionLog.started_at < until)
        stmt = stmt.order_by(SessionLog.started_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())
