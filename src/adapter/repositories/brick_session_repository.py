from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.brick_session_repository import IBrickSessionRepository
from src.domain.entities import ActiveSessionRecord, BrickSession, SessionKind


class BrickSessionRepository(IBrickSessionRepository):
    """BrickSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[BrickSession]:
        stmt = select(BrickSession).where(BrickSession.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[BrickSession]:
        stmt = select(BrickSession).order_by(BrickSession.created_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_enabled_by_kind(self, kind: SessionKind) -> List[BrickSession]:
        stmt = (
            select(BrickSession)
            .where(BrickSession.kind == kind)
            .where(BrickSession.is_enabled == True)  # noqa: E712
            .order_by(BrickSession.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_with_expired_locks(self, now: datetime) -> List[BrickSession]:
        stmt = (
            select(BrickSession)
            .where(BrickSession.is_locked == True)  # noqa: E712
            .where(BrickSession.lock_expires_at != None)  # noqa: E711
            .where(BrickSession.lock_expires_at < now)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, session: BrickSession) -> BrickSession:
        self.session.add(session)
        await self.session.flush()
        await self.session.refresh(session)
        return session

    async def update(self, session: BrickSession) -> BrickSession:
        self.session.add(session)
        await self.session.flush()
        await self.session.refresh(session)
        return session

    async def delete(self, session: BrickSession) -> None:
        """Delete the definition and its runtime record; logs are kept as history"""
        record = await self.session.get(ActiveSessionRecord, session.id)
        if record is not None:
            await self.session.delete(record)
        await self.session.delete(session)
        await self.session.flush()
