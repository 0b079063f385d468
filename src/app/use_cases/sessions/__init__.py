"""
Session State Machine Use Cases

Definitions, explicit start, the periodic tick, queries, recovery and audit.
"""

from .create_session_use_case import CreateSessionUseCase
from .dtos import (
    ActiveSessionResponse,
    BlockedResponse,
    ChallengeDTO,
    CreateSessionCommand,
    DecisionResponse,
    DurationScheduleDTO,
    IdentifierSetDTO,
    RecoveryResponse,
    SessionLogResponse,
    SessionResponse,
    SetEnabledCommand,
    TickResponse,
    TransitionResponse,
    UpdateSessionCommand,
    WholeDeviceDTO,
    WindowScheduleDTO,
)
from .enforcement_query_use_case import EnforcementQueryUseCase
from .evaluate_tick_use_case import EvaluateTickUseCase
from .manage_session_use_case import ManageSessionUseCase
from .recover_sessions_use_case import RecoverSessionsUseCase
from .session_audit_use_case import SessionAuditUseCase
from .start_session_use_case import StartSessionUseCase

__all__ = [
    "CreateSessionUseCase",
    "ManageSessionUseCase",
    "StartSessionUseCase",
    "EvaluateTickUseCase",
    "EnforcementQueryUseCase",
    "RecoverSessionsUseCase",
    "SessionAuditUseCase",
    "CreateSessionCommand",
    "UpdateSessionCommand",
    "SetEnabledCommand",
    "DurationScheduleDTO",
    "WindowScheduleDTO",
    "WholeDeviceDTO",
    "IdentifierSetDTO",
    "ChallengeDTO",
    "SessionResponse",
    "ActiveSessionResponse",
    "SessionLogResponse",
    "DecisionResponse",
    "TransitionResponse",
    "TickResponse",
    "BlockedResponse",
    "RecoveryResponse",
]
