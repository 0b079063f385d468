"""
Goal Ledger Use Cases

Append-only long-term commitments.
"""

from .create_goal_use_case import MAX_GOAL_DAYS, MIN_GOAL_DAYS, CreateGoalUseCase
from .dtos import (
    CreateGoalCommand,
    GoalItemInput,
    GoalItemResponse,
    GoalResponse,
)
from .goal_items_use_case import GoalItemsUseCase
from .goal_lifecycle_use_case import GoalLifecycleUseCase

__all__ = [
    "CreateGoalUseCase",
    "GoalItemsUseCase",
    "GoalLifecycleUseCase",
    "CreateGoalCommand",
    "GoalItemInput",
    "GoalItemResponse",
    "GoalResponse",
    "MIN_GOAL_DAYS",
    "MAX_GOAL_DAYS",
]
