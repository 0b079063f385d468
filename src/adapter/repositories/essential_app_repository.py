from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.essential_app_repository import IEssentialAppRepository
from src.domain.entities import EssentialApp


class EssentialAppRepository(IEssentialAppRepository):
    """EssentialApp repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_identifier(self, identifier: str) -> Optional[EssentialApp]:
        stmt = select(EssentialApp).where(EssentialApp.identifier == identifier)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[EssentialApp]:
        stmt = select(EssentialApp).order_by(EssentialApp.added_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, app: EssentialApp) -> EssentialApp:
        self.session.add(app)
        await self.session.flush()
        await self.session.refresh(app)
        return app

    async def delete(self, app: EssentialApp) -> None:
        await self.session.delete(app)
        await self.session.flush()
