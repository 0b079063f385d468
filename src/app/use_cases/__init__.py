"""
Use Cases

Organized into domain folders:
- sessions/: definitions, start, tick, queries, recovery, audit
- locks/: commitment locks
- overrides/: challenges and emergency overrides
- unlocks/: temporary unlock grants
- essential_apps/: always-allowed identifiers
- goals/: append-only goal ledger
"""

from .essential_apps import EssentialAppsUseCase
from .goals import CreateGoalUseCase, GoalItemsUseCase, GoalLifecycleUseCase
from .locks import CommitmentLockUseCase
from .overrides import EmergencyOverrideUseCase
from .sessions import (
    CreateSessionUseCase,
    EnforcementQueryUseCase,
    EvaluateTickUseCase,
    ManageSessionUseCase,
    RecoverSessionsUseCase,
    SessionAuditUseCase,
    StartSessionUseCase,
)
from .unlocks import TemporaryUnlockUseCase

__all__ = [
    # Sessions
    "CreateSessionUseCase",
    "ManageSessionUseCase",
    "StartSessionUseCase",
    "EvaluateTickUseCase",
    "EnforcementQueryUseCase",
    "RecoverSessionsUseCase",
    "SessionAuditUseCase",
    # Locks
    "CommitmentLockUseCase",
    # Overrides
    "EmergencyOverrideUseCase",
    # Unlocks
    "TemporaryUnlockUseCase",
    # Essential apps
    "EssentialAppsUseCase",
    # Goals
    "CreateGoalUseCase",
    "GoalItemsUseCase",
    "GoalLifecycleUseCase",
]
