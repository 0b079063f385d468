from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Goal, GoalItem


class IGoalRepository(ABC):
    """Goal repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, goal_id: UUID) -> Optional[Goal]:
        """Get goal by ID"""
        pass

    @abstractmethod
    async def list_goals(self, active_only: bool = False) -> List[Goal]:
        """Goals, newest first"""
        pass

    @abstractmethod
    async def create(self, goal: Goal) -> Goal:
        """Create a new goal"""
        pass

    @abstractmethod
    async def update(self, goal: Goal) -> Goal:
        """Update existing goal"""
        pass

    @abstractmethod
    async def delete(self, goal: Goal) -> None:
        """Delete a goal together with its items"""
        pass

    @abstractmethod
    async def get_items(self, goal_id: UUID) -> List[GoalItem]:
        """Items of a goal in the order they were added"""
        pass

    @abstractmethod
    async def add_item(self, item: GoalItem) -> GoalItem:
        """Append an item to a goal"""
        pass
