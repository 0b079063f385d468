from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.api.utils.api_key import verify_api_key
from src.app.use_cases.goals import (
    CreateGoalCommand,
    CreateGoalUseCase,
    GoalItemInput,
    GoalItemResponse,
    GoalItemsUseCase,
    GoalLifecycleUseCase,
    GoalResponse,
)
from src.depends import EngineContext

router = APIRouter(prefix="/goals", tags=["Goals"], dependencies=[Depends(verify_api_key)])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=GoalResponse)
async def create_goal(command: CreateGoalCommand, ctx: EngineContext = Depends()):
    result = await CreateGoalUseCase(ctx.uow, ctx.clock).execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("", response_model=List[GoalResponse])
async def list_goals(active_only: bool = False, ctx: EngineContext = Depends()):
    result = await GoalLifecycleUseCase(ctx.uow, ctx.clock).list_goals(active_only)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/check-expiry", response_model=List[GoalResponse])
async def check_expiry(ctx: EngineContext = Depends()):
    result = await GoalLifecycleUseCase(ctx.uow, ctx.clock).check_expiry()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(goal_id: UUID, ctx: EngineContext = Depends()):
    result = await GoalLifecycleUseCase(ctx.uow, ctx.clock).get_goal(goal_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/{goal_id}/items", status_code=status.HTTP_201_CREATED, response_model=GoalItemResponse
)
async def add_goal_item(goal_id: UUID, item: GoalItemInput, ctx: EngineContext = Depends()):
    """
    Add Goal Item

    Raises:
        - 409 GOAL_INACTIVE / GOAL_EXPIRED / DUPLICATE_GOAL_ITEM
    """
    result = await GoalItemsUseCase(ctx.uow, ctx.clock).add_item(goal_id, item)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/{goal_id}/items/{item_id}")
async def remove_goal_item(goal_id: UUID, item_id: UUID, ctx: EngineContext = Depends()):
    """Always 403 COMMITMENT_VIOLATION: goal items cannot be removed."""
    result = await GoalItemsUseCase(ctx.uow, ctx.clock).remove_item(goal_id, item_id)
    if result.is_err():
        raise to_http_error(result.error)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: UUID, ctx: EngineContext = Depends()):
    """
    Delete Goal

    Raises:
        - 409 GOAL_ACTIVE: only completed goals can be deleted
    """
    result = await GoalLifecycleUseCase(ctx.uow, ctx.clock).delete_goal(goal_id)
    if result.is_err():
        raise to_http_error(result.error)
