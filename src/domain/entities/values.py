"""
Session variants

A stored BrickSession keeps kind-specific columns side by side; use cases only
see them through these frozen variants, so a duration session never carries a
window and a whole-device target never carries identifiers.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, FrozenSet, Optional, Tuple, Union

from src.domain.base import WHOLE_DEVICE
from src.domain.schedule import (
    is_day_active,
    is_within_window,
    iso_day_index,
    window_bounds,
    window_duration_minutes,
)

from .enums import ChallengeType, SessionKind, TargetType


@dataclass(frozen=True)
class DurationSchedule:
    minutes: int

    kind: ClassVar[SessionKind] = SessionKind.duration


@dataclass(frozen=True)
class WindowSchedule:
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    active_days: FrozenSet[int]

    kind: ClassVar[SessionKind] = SessionKind.recurring_window

    @property
    def duration_minutes(self) -> Optional[int]:
        return window_duration_minutes(
            self.start_hour, self.start_minute, self.end_hour, self.end_minute
        )

    def contains(self, local_now: datetime) -> bool:
        return is_day_active(iso_day_index(local_now), self.active_days) and is_within_window(
            local_now.hour,
            local_now.minute,
            self.start_hour,
            self.start_minute,
            self.end_hour,
            self.end_minute,
        )

    def bounds(self, local_now: datetime) -> Tuple[datetime, datetime]:
        return window_bounds(
            local_now, self.start_hour, self.start_minute, self.end_hour, self.end_minute
        )


Schedule = Union[DurationSchedule, WindowSchedule]


@dataclass(frozen=True)
class WholeDevice:
    target_type: ClassVar[TargetType] = TargetType.whole_device

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return (WHOLE_DEVICE,)


@dataclass(frozen=True)
class IdentifierSet:
    identifiers: Tuple[str, ...]

    target_type: ClassVar[TargetType] = TargetType.identifier_set


Target = Union[WholeDevice, IdentifierSet]


@dataclass(frozen=True)
class ChallengeConfig:
    type: ChallengeType
    param: int
