from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.countdown_repository import ICountdownRepository
from src.domain.entities import CountdownState


class CountdownRepository(ICountdownRepository):
    """CountdownState repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, identifier: str) -> Optional[CountdownState]:
        return await self.session.get(CountdownState, identifier)

    async def save(self, state: CountdownState) -> CountdownState:
        merged = await self.session.merge(state)
        await self.session.flush()
        await self.session.refresh(merged)
        return merged

    async def delete(self, identifier: str) -> bool:
        state = await self.session.get(CountdownState, identifier)
        if state is None:
            return False
        await self.session.delete(state)
        await self.session.flush()
        return True
