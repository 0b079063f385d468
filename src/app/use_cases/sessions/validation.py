"""
Checks shared by create and update. Returns domain values or an Error;
nothing here touches storage.
"""

from typing import List, Tuple, Union

from libs.result import Error
from src.app.errors import (
    INVALID_CHALLENGE,
    INVALID_DURATION,
    INVALID_SCHEDULE,
    INVALID_TARGET,
    WINDOW_TOO_SHORT,
)
from src.domain.base import WHOLE_DEVICE
from src.domain.entities import (
    ChallengeConfig,
    DurationSchedule,
    IdentifierSet,
    Schedule,
    Target,
    WholeDevice,
    WindowSchedule,
)
from src.domain.schedule import (
    MINUTES_PER_DAY,
    WindowTooShortError,
    normalize_active_days,
    validate_window,
)

from .dtos import ChallengeDTO, DurationScheduleDTO, IdentifierSetDTO, WindowScheduleDTO

MAX_CHALLENGE_PARAM = 1000


def to_schedule(dto: Union[DurationScheduleDTO, WindowScheduleDTO]) -> Union[Schedule, Error]:
    if isinstance(dto, DurationScheduleDTO):
        if not 1 <= dto.minutes <= MINUTES_PER_DAY:
            return Error(
                INVALID_DURATION, f"Duration must be between 1 and {MINUTES_PER_DAY} minutes"
            )
        return DurationSchedule(minutes=dto.minutes)

    try:
        validate_window(dto.start_hour, dto.start_minute, dto.end_hour, dto.end_minute)
    except WindowTooShortError as exc:
        return Error(WINDOW_TOO_SHORT, str(exc))
    except ValueError as exc:
        return Error(INVALID_SCHEDULE, str(exc))

    try:
        days = normalize_active_days(dto.active_days)
    except ValueError as exc:
        return Error(INVALID_SCHEDULE, str(exc))
    if not days:
        return Error(INVALID_SCHEDULE, "At least one active day is required")

    return WindowSchedule(
        start_hour=dto.start_hour,
        start_minute=dto.start_minute,
        end_hour=dto.end_hour,
        end_minute=dto.end_minute,
        active_days=frozenset(int(day) for day in days),
    )


def to_target(dto) -> Union[Target, Error]:
    if not isinstance(dto, IdentifierSetDTO):
        return WholeDevice()

    identifiers: List[str] = []
    for raw in dto.identifiers:
        identifier = raw.strip()
        if not identifier or identifier == WHOLE_DEVICE:
            return Error(INVALID_TARGET, f"Invalid identifier: {raw!r}")
        if identifier not in identifiers:
            identifiers.append(identifier)
    if not identifiers:
        return Error(INVALID_TARGET, "An identifier set needs at least one identifier")
    return IdentifierSet(identifiers=tuple(identifiers))


def to_challenge(dto: ChallengeDTO) -> Union[ChallengeConfig, Error]:
    if not 1 <= dto.param <= MAX_CHALLENGE_PARAM:
        return Error(
            INVALID_CHALLENGE, f"Challenge parameter must be between 1 and {MAX_CHALLENGE_PARAM}"
        )
    return ChallengeConfig(type=dto.type, param=dto.param)


def to_definition(schedule_dto, target_dto, challenge_dto) -> Union[Tuple, Error]:
    """(schedule, target, challenge) for the given parts, or the first Error found."""
    schedule = to_schedule(schedule_dto) if schedule_dto is not None else None
    if isinstance(schedule, Error):
        return schedule
    target = to_target(target_dto) if target_dto is not None else None
    if isinstance(target, Error):
        return target
    challenge = to_challenge(challenge_dto) if challenge_dto is not None else None
    if isinstance(challenge, Error):
        return challenge
    return schedule, target, challenge
