from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.goal_repository import IGoalRepository
from src.domain.entities import Goal, GoalItem


class GoalRepository(IGoalRepository):
    """Goal repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, goal_id: UUID) -> Optional[Goal]:
        stmt = select(Goal).where(Goal.id == goal_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_goals(self, active_only: bool = False) -> List[Goal]:
        stmt = select(Goal)
        if active_only:
            stmt = stmt.where(Goal.is_active == True)  # noqa: E712
        stmt = stmt.order_by(Goal.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, goal: Goal) -> Goal:
        self.session.add(goal)
        await self.session.flush()
        await self.session.refresh(goal)
        return goal

    async def update(self, goal: Goal) -> Goal:
        self.session.add(goal)
        await self.session.flush()
        await self.session.refresh(goal)
        return goal

    async def delete(self, goal: Goal) -> None:
        for item in await self.get_items(goal.id):
            await self.session.delete(item)
        await self.session.delete(goal)
        await self.session.flush()

    async def get_items(self, goal_id: UUID) -> List[GoalItem]:
        stmt = select(GoalItem).where(GoalItem.goal_id == goal_id).order_by(GoalItem.added_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def add_item(self, item: GoalItem) -> GoalItem:
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item
