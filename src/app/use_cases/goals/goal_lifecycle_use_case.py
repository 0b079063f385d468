"""
Goal Lifecycle Use Case

Expiry, lookup and deletion of goals.
"""

import logging
from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import GOAL_ACTIVE, GOAL_NOT_FOUND
from src.app.services.clock import Clock
from src.app.services.sweeps import expire_goals
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard

from .dtos import GoalResponse

logger = logging.getLogger(__name__)


class GoalLifecycleUseCase:
    """
    Business Rules:
    - A goal becomes inactive only through check_expiry, once now >= end_time
    - Only inactive goals can be deleted; an expired goal stays GOAL_ACTIVE
      until check_expiry has run
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @persistence_guard
    async def check_expiry(self) -> Result[List[GoalResponse]]:
        """Deactivate goals past their end time; returns the goals just completed."""
        now = self.clock.now()
        async with self.uow:
            expired = await expire_goals(self.uow, now)
            responses = [
                GoalResponse.from_entity(goal, await self.uow.goals.get_items(goal.id), now)
                for goal in expired
            ]
            await self.uow.commit()
        return Return.ok(responses)

    @persistence_guard
    async def get_goal(self, goal_id: UUID) -> Result[GoalResponse]:
        now = self.clock.now()
        async with self.uow:
            goal = await self.uow.goals.get_by_id(goal_id)
            if not goal:
                return Return.err(Error(GOAL_NOT_FOUND, "Goal not found"))
            items = await self.uow.goals.get_items(goal_id)
            return Return.ok(GoalResponse.from_entity(goal, items, now))

    @persistence_guard
    async def list_goals(self, active_only: bool = False) -> Result[List[GoalResponse]]:
        now = self.clock.now()
        async with self.uow:
            goals = await self.uow.goals.list_goals(active_only=active_only)
            return Return.ok(
                [
                    GoalResponse.from_entity(goal, await self.uow.goals.get_items(goal.id), now)
                    for goal in goals
                ]
            )

    @persistence_guard
    async def delete_goal(self, goal_id: UUID) -> Result[None]:
        async with self.uow:
            goal = await self.uow.goals.get_by_id(goal_id)
            if not goal:
                return Return.err(Error(GOAL_NOT_FOUND, "Goal not found"))
            if goal.is_active:
                logger.warning("Refused deletion of active goal %s", goal_id)
                return Return.err(Error(GOAL_ACTIVE, "Active goals cannot be deleted"))

            await self.uow.goals.delete(goal)
            await self.uow.commit()

        logger.info("Goal deleted: goal=%s", goal_id)
        return Return.ok(None)
