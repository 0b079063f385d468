"""
Session Use Case DTOs

Schedules and targets are discriminated unions, so a duration session can
never carry window fields and a whole-device target never carries identifiers.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.services.enforcement_sink import EnforcementDecision
from src.domain.entities import (
    ActiveSessionRecord,
    BrickSession,
    ChallengeType,
    CompletionStatus,
    DecisionSource,
    DurationSchedule,
    SessionKind,
    SessionLog,
    WholeDevice,
)


# ============================================================================
# Definition parts
# ============================================================================


class DurationScheduleDTO(BaseModel):
    kind: Literal["duration"] = "duration"
    minutes: int


class WindowScheduleDTO(BaseModel):
    kind: Literal["recurring_window"] = "recurring_window"
    start_hour: int
    start_minute: int = 0
    end_hour: int
    end_minute: int = 0
    # 1=Monday ... 7=Sunday
    active_days: List[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5, 6, 7])


ScheduleDTO = Annotated[
    Union[DurationScheduleDTO, WindowScheduleDTO], Field(discriminator="kind")
]


class WholeDeviceDTO(BaseModel):
    type: Literal["whole_device"] = "whole_device"


class IdentifierSetDTO(BaseModel):
    type: Literal["identifier_set"] = "identifier_set"
    identifiers: List[str]


TargetDTO = Annotated[Union[WholeDeviceDTO, IdentifierSetDTO], Field(discriminator="type")]


class ChallengeDTO(BaseModel):
    type: ChallengeType = ChallengeType.timed_wait
    # Minutes to wait for timed_wait, number of actions for repeated_action
    param: int = 5


# ============================================================================
# Command DTOs
# ============================================================================


class CreateSessionCommand(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    schedule: ScheduleDTO
    target: TargetDTO = Field(default_factory=WholeDeviceDTO)
    challenge: ChallengeDTO = Field(default_factory=ChallengeDTO)
    is_enabled: bool = True


class UpdateSessionCommand(BaseModel):
    """Partial update; omitted parts are kept"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    schedule: Optional[ScheduleDTO] = None
    target: Optional[TargetDTO] = None
    challenge: Optional[ChallengeDTO] = None


class SetEnabledCommand(BaseModel):
    is_enabled: bool


# ============================================================================
# Response DTOs
# ============================================================================


class SessionResponse(BaseModel):
    id: UUID
    name: str
    kind: SessionKind
    schedule: ScheduleDTO
    target: TargetDTO
    challenge: ChallengeDTO
    is_enabled: bool
    allow_emergency_override: bool
    is_enforced: bool = False
    canceled_until: Optional[datetime] = None
    is_locked: bool
    lock_expires_at: Optional[datetime] = None
    completed_count: int
    override_count: int
    last_completed_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(
        cls, session: BrickSession, is_enforced: bool = False, now: Optional[datetime] = None
    ) -> "SessionResponse":
        schedule = session.schedule
        if isinstance(schedule, DurationSchedule):
            schedule_dto = DurationScheduleDTO(minutes=schedule.minutes)
        else:
            schedule_dto = WindowScheduleDTO(
                start_hour=schedule.start_hour,
                start_minute=schedule.start_minute,
                end_hour=schedule.end_hour,
                end_minute=schedule.end_minute,
                active_days=sorted(schedule.active_days),
            )

        target = session.target
        if isinstance(target, WholeDevice):
            target_dto = WholeDeviceDTO()
        else:
            target_dto = IdentifierSetDTO(identifiers=list(target.identifiers))

        is_locked = session.is_lock_active(now) if now is not None else session.is_locked
        return cls(
            id=session.id,
            name=session.name,
            kind=session.kind,
            schedule=schedule_dto,
            target=target_dto,
            challenge=ChallengeDTO(type=session.challenge_type, param=session.challenge_param),
            is_enabled=session.is_enabled,
            allow_emergency_override=session.allow_emergency_override,
            is_enforced=is_enforced,
            canceled_until=session.canceled_until,
            is_locked=is_locked,
            lock_expires_at=session.lock_expires_at if is_locked else None,
            completed_count=session.completed_count,
            override_count=session.override_count,
            last_completed_at=session.last_completed_at,
            created_at=session.created_at,
        )


class ActiveSessionResponse(BaseModel):
    """The enforced session and how long it has left"""

    session_id: UUID
    name: str
    kind: SessionKind
    window_start: datetime
    window_end: datetime
    remaining_seconds: int
    challenge: ChallengeDTO
    log_id: Optional[UUID] = None

    @classmethod
    def from_record(
        cls, session: BrickSession, record: ActiveSessionRecord, now: datetime
    ) -> "ActiveSessionResponse":
        return cls(
            session_id=session.id,
            name=session.name,
            kind=session.kind,
            window_start=record.window_start,
            window_end=record.window_end,
            remaining_seconds=max(0, int((record.window_end - now).total_seconds())),
            challenge=ChallengeDTO(type=session.challenge_type, param=session.challenge_param),
            log_id=record.log_id,
        )


class SessionLogResponse(BaseModel):
    id: UUID
    session_id: UUID
    started_at: datetime
    ended_at: Optional[datetime] = None
    scheduled_minutes: int
    actual_minutes: Optional[int] = None
    status: CompletionStatus
    override_used: bool
    override_at: Optional[datetime] = None
    override_reason: Optional[str] = None
    override_note: Optional[str] = None
    bypass_attempts: int
    accessed_identifiers: List[str]

    @classmethod
    def from_entity(cls, log: SessionLog) -> "SessionLogResponse":
        return cls(
            id=log.id,
            session_id=log.session_id,
            started_at=log.started_at,
            ended_at=log.ended_at,
            scheduled_minutes=log.scheduled_minutes,
            actual_minutes=log.actual_minutes,
            status=log.status,
            override_used=log.override_used,
            override_at=log.override_at,
            override_reason=log.override_reason,
            override_note=log.override_note,
            bypass_attempts=log.bypass_attempts,
            accessed_identifiers=list(log.accessed_identifiers or []),
        )


class DecisionResponse(BaseModel):
    target: str
    active: bool
    source: DecisionSource
    session_id: Optional[UUID] = None
    goal_id: Optional[UUID] = None
    exempt: List[str] = Field(default_factory=list)

    @classmethod
    def from_decision(cls, decision: EnforcementDecision) -> "DecisionResponse":
        return cls(
            target=decision.target,
            active=decision.active,
            source=decision.source,
            session_id=decision.session_id,
            goal_id=decision.goal_id,
            exempt=list(decision.exempt),
        )


class TransitionResponse(BaseModel):
    """One state change made by a tick"""

    session_id: UUID
    status: CompletionStatus  # ongoing = entered enforcement


class TickResponse(BaseModel):
    evaluated_at: datetime
    transitions: List[TransitionResponse] = Field(default_factory=list)
    decisions: List[DecisionResponse] = Field(default_factory=list)
    published: int = 0


class BlockedResponse(BaseModel):
    identifier: str
    blocked: bool


class RecoveryResponse(BaseModel):
    interrupted: int
    completed: int
    locks_cleared: int
