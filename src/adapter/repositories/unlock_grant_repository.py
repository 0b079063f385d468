from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.unlock_grant_repository import IUnlockGrantRepository
from src.domain.entities import TemporaryUnlockGrant


class UnlockGrantRepository(IUnlockGrantRepository):
    """TemporaryUnlockGrant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, identifier: str) -> Optional[TemporaryUnlockGrant]:
        return await self.session.get(TemporaryUnlockGrant, identifier)

    async def list_all(self) -> List[TemporaryUnlockGrant]:
        result = await self.session.exec(select(TemporaryUnlockGrant))
        return list(result.all())

    async def save(self, grant: TemporaryUnlockGrant) -> TemporaryUnlockGrant:
        """Insert or replace the grant for grant.identifier"""
        merged = await self.session.merge(grant)
        await self.session.flush()
        await self.session.refresh(merged)
        return merged

    async def delete(self, identifier: str) -> bool:
        grant = await self.session.get(TemporaryUnlockGrant, identifier)
        if grant is None:
            return False
        await self.session.delete(grant)
        await self.session.flush()
        return True
