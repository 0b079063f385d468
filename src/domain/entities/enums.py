"""
Brick Engine Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SessionKind(str, Enum):
    """How a session decides when it is in force"""

    duration = "duration"
    recurring_window = "recurring_window"


class TargetType(str, Enum):
    """What a session restricts"""

    whole_device = "whole_device"
    identifier_set = "identifier_set"


class ChallengeType(str, Enum):
    """Effort required before an emergency override"""

    timed_wait = "timed_wait"
    repeated_action = "repeated_action"


class CompletionStatus(str, Enum):
    """Outcome of one enforcement window"""

    completed = "completed"
    emergency_override = "emergency_override"
    interrupted = "interrupted"
    ongoing = "ongoing"


class ItemKind(str, Enum):
    """Goal item type"""

    app = "app"
    website = "website"


class DecisionSource(str, Enum):
    """What produced an enforcement decision"""

    session = "session"
    goal = "goal"
