"""
Goal Items Use Case

Items can only ever be appended to a goal.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import (
    COMMITMENT_VIOLATION,
    DUPLICATE_GOAL_ITEM,
    GOAL_EXPIRED,
    GOAL_INACTIVE,
    GOAL_NOT_FOUND,
)
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import GoalItem

from .dtos import GoalItemInput, GoalItemResponse

logger = logging.getLogger(__name__)


class GoalItemsUseCase:
    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @persistence_guard
    async def add_item(self, goal_id: UUID, item: GoalItemInput) -> Result[GoalItemResponse]:
        now = self.clock.now()
        async with self.uow:
            goal = await self.uow.goals.get_by_id(goal_id)
            if not goal:
                return Return.err(Error(GOAL_NOT_FOUND, "Goal not found"))
            if not goal.is_active:
                return Return.err(Error(GOAL_INACTIVE, "Goal is no longer active"))
            if goal.is_expired(now):
                return Return.err(Error(GOAL_EXPIRED, "Goal has reached its end time"))

            existing = await self.uow.goals.get_items(goal_id)
            if any(e.identifier == item.identifier for e in existing):
                return Return.err(
                    Error(DUPLICATE_GOAL_ITEM, f"{item.identifier} is already part of this goal")
                )

            created = await self.uow.goals.add_item(
                GoalItem(
                    goal_id=goal_id,
                    name=item.name,
                    kind=item.kind,
                    identifier=item.identifier,
                    added_at=now,
                )
            )
            response = GoalItemResponse.from_entity(created)
            await self.uow.commit()

        logger.info("Goal item added: goal=%s identifier=%s", goal_id, item.identifier)
        return Return.ok(response)

    async def remove_item(self, goal_id: UUID, item_id: UUID) -> Result[None]:
        """Always refused; goal items are append-only."""
        logger.warning("Refused removal of item %s from goal %s", item_id, goal_id)
        return Return.err(
            Error(
                COMMITMENT_VIOLATION,
                "Items cannot be removed from a goal",
                reason="Goals are append-only until they end",
            )
        )
