"""
Brick Engine Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    SessionKind,
    TargetType,
    ChallengeType,
    CompletionStatus,
    ItemKind,
    DecisionSource,
)

# Export session variants
from .values import (
    DurationSchedule,
    WindowSchedule,
    Schedule,
    WholeDevice,
    IdentifierSet,
    Target,
    ChallengeConfig,
)

# Export all entities
from .brick_session import BrickSession
from .session_log import SessionLog
from .active_session_record import ActiveSessionRecord
from .essential_app import EssentialApp, SYSTEM_ESSENTIALS
from .temporary_unlock_grant import TemporaryUnlockGrant
from .countdown_state import CountdownState
from .goal import Goal
from .goal_item import GoalItem

__all__ = [
    # Enums
    "SessionKind",
    "TargetType",
    "ChallengeType",
    "CompletionStatus",
    "ItemKind",
    "DecisionSource",
    # Variants
    "DurationSchedule",
    "WindowSchedule",
    "Schedule",
    "WholeDevice",
    "IdentifierSet",
    "Target",
    "ChallengeConfig",
    # Entities
    "BrickSession",
    "SessionLog",
    "ActiveSessionRecord",
    "EssentialApp",
    "SYSTEM_ESSENTIALS",
    "TemporaryUnlockGrant",
    "CountdownState",
    "Goal",
    "GoalItem",
]
