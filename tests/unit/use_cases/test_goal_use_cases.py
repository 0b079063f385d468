"""
Unit tests for the goal ledger use cases
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.goals import (
    CreateGoalCommand,
    CreateGoalUseCase,
    GoalItemInput,
    GoalItemsUseCase,
    GoalLifecycleUseCase,
)
from src.domain.entities import Goal, GoalItem


def _goal(clock, days=7, **kwargs):
    return Goal(
        id=uuid4(),
        name="No social",
        duration_days=days,
        start_time=clock.now(),
        end_time=clock.now() + timedelta(days=days),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_create_goal_success(mock_uow, clock):
    mock_uow.goals.create = AsyncMock(side_effect=lambda g: g)
    mock_uow.goals.add_item = AsyncMock(side_effect=lambda i: i)

    command = CreateGoalCommand(
        name="No social",
        duration_days=30,
        items=[GoalItemInput(name="Instagram", identifier="com.instagram.android")],
    )
    result = await CreateGoalUseCase(mock_uow, clock).execute(command)

    assert result.is_ok()
    goal = result.value
    assert goal.end_time == clock.now() + timedelta(days=30)
    assert goal.remaining_days == 30
    assert [i.identifier for i in goal.items] == ["com.instagram.android"]
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("days", [0, 91, -3])
async def test_create_goal_rejects_duration(mock_uow, clock, days):
    command = CreateGoalCommand(
        name="x", duration_days=days, items=[GoalItemInput(name="a", identifier="a")]
    )
    result = await CreateGoalUseCase(mock_uow, clock).execute(command)

    assert result.is_err()
    assert result.error.code == "INVALID_DURATION"


@pytest.mark.asyncio
async def test_create_goal_rejects_empty_and_duplicates(mock_uow, clock):
    empty = await CreateGoalUseCase(mock_uow, clock).execute(
        CreateGoalCommand(name="x", duration_days=7, items=[])
    )
    assert empty.error.code == "EMPTY_GOAL"

    duplicate = await CreateGoalUseCase(mock_uow, clock).execute(
        CreateGoalCommand(
            name="x",
            duration_days=7,
            items=[GoalItemInput(name="a", identifier="a"), GoalItemInput(name="A", identifier="a")],
        )
    )
    assert duplicate.error.code == "DUPLICATE_GOAL_ITEM"


@pytest.mark.asyncio
async def test_remove_goal_item_always_fails(mock_uow, clock):
    result = await GoalItemsUseCase(mock_uow, clock).remove_item(uuid4(), uuid4())

    assert result.is_err()
    assert result.error.code == "COMMITMENT_VIOLATION"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_add_item_to_expired_goal(mock_uow, clock):
    goal = _goal(clock, days=7)
    mock_uow.goals.get_by_id = AsyncMock(return_value=goal)
    clock.advance(days=8)

    result = await GoalItemsUseCase(mock_uow, clock).add_item(
        goal.id, GoalItemInput(name="Reddit", identifier="reddit.com")
    )

    assert result.is_err()
    assert result.error.code == "GOAL_EXPIRED"


@pytest.mark.asyncio
async def test_add_duplicate_item(mock_uow, clock):
    goal = _goal(clock)
    mock_uow.goals.get_by_id = AsyncMock(return_value=goal)
    mock_uow.goals.get_items = AsyncMock(
        return_value=[GoalItem(goal_id=goal.id, name="Reddit", identifier="reddit.com")]
    )

    result = await GoalItemsUseCase(mock_uow, clock).add_item(
        goal.id, GoalItemInput(name="Reddit", identifier="reddit.com")
    )

    assert result.is_err()
    assert result.error.code == "DUPLICATE_GOAL_ITEM"


@pytest.mark.asyncio
async def test_delete_active_goal_rejected_even_after_end(mock_uow, clock):
    goal = _goal(clock)
    mock_uow.goals.get_by_id = AsyncMock(return_value=goal)
    mock_uow.goals.delete = AsyncMock()
    clock.advance(days=10)

    result = await GoalLifecycleUseCase(mock_uow, clock).delete_goal(goal.id)

    assert result.is_err()
    assert result.error.code == "GOAL_ACTIVE"
    mock_uow.goals.delete.assert_not_called()


@pytest.mark.asyncio
async def test_check_expiry_completes_goal(mock_uow, clock):
    goal = _goal(clock)
    mock_uow.goals.list_goals = AsyncMock(return_value=[goal])
    mock_uow.goals.update = AsyncMock(side_effect=lambda g: g)
    mock_uow.goals.get_items = AsyncMock(return_value=[])
    clock.advance(days=7)

    result = await GoalLifecycleUseCase(mock_uow, clock).check_expiry()

    assert result.is_ok()
    assert [g.id for g in result.value] == [goal.id]
    assert goal.is_active is False
    assert goal.completed_at == clock.now()
    mock_uow.commit.assert_called_once()
