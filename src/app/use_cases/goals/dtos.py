"""
Goal Ledger DTOs
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import Goal, GoalItem, ItemKind


# ============================================================================
# Command DTOs
# ============================================================================


class GoalItemInput(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    identifier: str = Field(min_length=1, max_length=255)
    kind: ItemKind = ItemKind.app


class CreateGoalCommand(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    duration_days: int
    items: List[GoalItemInput]


# ============================================================================
# Response DTOs
# ============================================================================


class GoalItemResponse(BaseModel):
    id: UUID
    name: str
    identifier: str
    kind: ItemKind
    added_at: datetime

    @classmethod
    def from_entity(cls, item: GoalItem) -> "GoalItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            identifier=item.identifier,
            kind=item.kind,
            added_at=item.added_at,
        )


class GoalResponse(BaseModel):
    id: UUID
    name: str
    duration_days: int
    start_time: datetime
    end_time: datetime
    is_active: bool
    completed_at: Optional[datetime] = None
    remaining_days: int
    items: List[GoalItemResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, goal: Goal, items: List[GoalItem], now: datetime) -> "GoalResponse":
        return cls(
            id=goal.id,
            name=goal.name,
            duration_days=goal.duration_days,
            start_time=goal.start_time,
            end_time=goal.end_time,
            is_active=goal.is_active,
            completed_at=goal.completed_at,
            remaining_days=goal.remaining_days(now),
            items=[GoalItemResponse.from_entity(item) for item in items],
        )
