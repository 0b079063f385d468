"""
BrickSession Entity

A named restriction definition: what is blocked, when, and how hard it is to escape.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, Field, Index, SQLModel

from src.domain.base import UTCDateTime, utc_now
from src.domain.schedule import ALL_DAYS

from .enums import ChallengeType, SessionKind, TargetType
from .values import (
    ChallengeConfig,
    DurationSchedule,
    IdentifierSet,
    Schedule,
    Target,
    WholeDevice,
    WindowSchedule,
)


class BrickSession(SQLModel, table=True):
    """
    BrickSession entity - a restriction definition.

    Business Rules:
    - Kind-specific columns are read through `schedule` / `target` only
    - allow_emergency_override is always true (no session without an escape hatch)
    - canceled_until suppresses (re-)arming after an emergency override
    - While the commitment lock is live the definition cannot be edited or deleted
    """

    __tablename__ = "brick_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    kind: SessionKind

    # Duration kind
    duration_minutes: Optional[int] = None

    # RecurringWindow kind
    start_hour: Optional[int] = None
    start_minute: Optional[int] = None
    end_hour: Optional[int] = None
    end_minute: Optional[int] = None
    active_days: str = Field(default=ALL_DAYS, max_length=7)  # "12345" = Mon-Fri

    target_type: TargetType = Field(default=TargetType.whole_device)
    target_identifiers: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    is_enabled: bool = Field(default=True)

    challenge_type: ChallengeType = Field(default=ChallengeType.timed_wait)
    challenge_param: int = Field(default=5)  # minutes for timed_wait, count for repeated_action
    allow_emergency_override: bool = Field(default=True)

    canceled_until: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))

    # Commitment lock
    is_locked: bool = Field(default=False)
    lock_expires_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    lock_phrase: Optional[str] = None

    # Counters
    completed_count: int = Field(default=0)
    override_count: int = Field(default=0)
    last_completed_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))

    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False)
    )

    __table_args__ = (
        Index("idx_brick_session_kind_enabled", "kind", "is_enabled"),
    )

    @property
    def schedule(self) -> Schedule:
        if self.kind == SessionKind.duration:
            return DurationSchedule(minutes=self.duration_minutes)
        return WindowSchedule(
            start_hour=self.start_hour,
            start_minute=self.start_minute,
            end_hour=self.end_hour,
            end_minute=self.end_minute,
            active_days=frozenset(int(ch) for ch in self.active_days),
        )

    def apply_schedule(self, schedule: Schedule) -> None:
        self.kind = schedule.kind
        if isinstance(schedule, DurationSchedule):
            self.duration_minutes = schedule.minutes
            self.start_hour = self.start_minute = None
            self.end_hour = self.end_minute = None
        else:
            self.duration_minutes = None
            self.start_hour = schedule.start_hour
            self.start_minute = schedule.start_minute
            self.end_hour = schedule.end_hour
            self.end_minute = schedule.end_minute
            self.active_days = "".join(str(day) for day in sorted(schedule.active_days))

    @property
    def target(self) -> Target:
        if self.target_type == TargetType.whole_device:
            return WholeDevice()
        return IdentifierSet(identifiers=tuple(self.target_identifiers or ()))

    def apply_target(self, target: Target) -> None:
        self.target_type = target.target_type
        self.target_identifiers = (
            list(target.identifiers) if isinstance(target, IdentifierSet) else []
        )

    @property
    def challenge(self) -> ChallengeConfig:
        return ChallengeConfig(type=self.challenge_type, param=self.challenge_param)

    def is_lock_active(self, now: datetime) -> bool:
        """A lock past its expiry counts as cleared even before the sweep runs."""
        if not self.is_locked:
            return False
        return self.lock_expires_at is None or self.lock_expires_at >= now

    def clear_lock(self) -> None:
        self.is_locked = False
        self.lock_expires_at = None
        self.lock_phrase = None

    def is_on_cooldown(self, now: datetime) -> bool:
        return self.canceled_until is not None and self.canceled_until > now
