"""
Create Goal Use Case
"""

import logging
from datetime import timedelta

from libs.result import Error, Result, Return
from src.app.errors import DUPLICATE_GOAL_ITEM, EMPTY_GOAL, INVALID_DURATION
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import Goal, GoalItem

from .dtos import CreateGoalCommand, GoalResponse

logger = logging.getLogger(__name__)

MIN_GOAL_DAYS = 1
MAX_GOAL_DAYS = 90


class CreateGoalUseCase:
    """
    Use case for opening a goal.

    Business Rules:
    - Duration between 1 and 90 days; end_time = start_time + duration
    - At least one item, identifiers unique within the goal
    - Items start blocking immediately and cannot be retracted
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @persistence_guard
    async def execute(self, command: CreateGoalCommand) -> Result[GoalResponse]:
        if not MIN_GOAL_DAYS <= command.duration_days <= MAX_GOAL_DAYS:
            return Return.err(
                Error(
                    INVALID_DURATION,
                    f"Goal duration must be between {MIN_GOAL_DAYS} and {MAX_GOAL_DAYS} days",
                )
            )
        if not command.items:
            return Return.err(Error(EMPTY_GOAL, "A goal needs at least one item"))

        identifiers = [item.identifier for item in command.items]
        duplicates = sorted({i for i in identifiers if identifiers.count(i) > 1})
        if duplicates:
            return Return.err(
                Error(DUPLICATE_GOAL_ITEM, f"Duplicate items: {', '.join(duplicates)}")
            )

        now = self.clock.now()
        async with self.uow:
            goal = await self.uow.goals.create(
                Goal(
                    name=command.name,
                    duration_days=command.duration_days,
                    start_time=now,
                    end_time=now + timedelta(days=command.duration_days),
                    is_active=True,
                )
            )
            items = []
            for item in command.items:
                items.append(
                    await self.uow.goals.add_item(
                        GoalItem(
                            goal_id=goal.id,
                            name=item.name,
                            kind=item.kind,
                            identifier=item.identifier,
                            added_at=now,
                        )
                    )
                )
            response = GoalResponse.from_entity(goal, items, now)
            await self.uow.commit()

        logger.info(
            "Goal created: goal=%s days=%d items=%d",
            response.id,
            command.duration_days,
            len(items),
        )
        return Return.ok(response)
