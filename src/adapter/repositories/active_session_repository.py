from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.active_session_repository import IActiveSessionRepository
from src.domain.entities import ActiveSessionRecord


class ActiveSessionRepository(IActiveSessionRepository):
    """ActiveSessionRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, session_id: UUID) -> Optional[ActiveSessionRecord]:
        stmt = select(ActiveSessionRecord).where(ActiveSessionRecord.session_id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_enforced(self) -> List[ActiveSessionRecord]:
        stmt = select(ActiveSessionRecord).where(
            ActiveSessionRecord.is_currently_enforced == True  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def save(self, record: ActiveSessionRecord) -> ActiveSessionRecord:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record
