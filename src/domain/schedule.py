"""
Schedule Evaluator

Pure time-of-day and day-of-week logic for recurring windows. No state, no I/O.

Times are compared as minutes since local midnight. The end bound is always
exclusive, so back-to-back windows never both match at the boundary minute.
Day indexes use 1=Monday ... 7=Sunday; convert platform numbering with
``sunday_first_to_iso`` before calling ``is_day_active``.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple, Union

MINUTES_PER_DAY = 24 * 60
MIN_WINDOW_MINUTES = 5
ALL_DAYS = "1234567"


def to_total_minutes(hour: int, minute: int) -> int:
    return hour * 60 + minute


def window_duration_minutes(
    start_hour: int, start_minute: int, end_hour: int, end_minute: int
) -> Optional[int]:
    """Length of the window with midnight wrap, or None when start == end."""
    start = to_total_minutes(start_hour, start_minute)
    end = to_total_minutes(end_hour, end_minute)
    if start == end:
        return None
    if end > start:
        return end - start
    return (MINUTES_PER_DAY - start) + end


def is_valid_window(
    start_hour: int, start_minute: int, end_hour: int, end_minute: int
) -> bool:
    if None in (start_hour, start_minute, end_hour, end_minute):
        return False
    duration = window_duration_minutes(start_hour, start_minute, end_hour, end_minute)
    return duration is not None and duration >= MIN_WINDOW_MINUTES


def is_within_window(
    now_hour: int,
    now_minute: int,
    start_hour: int,
    start_minute: int,
    end_hour: int,
    end_minute: int,
) -> bool:
    if now_hour is None or now_minute is None:
        return False
    if not is_valid_window(start_hour, start_minute, end_hour, end_minute):
        return False

    now = to_total_minutes(now_hour, now_minute)
    start = to_total_minutes(start_hour, start_minute)
    end = to_total_minutes(end_hour, end_minute)

    if end > start:
        return start <= now < end
    # Crosses midnight (e.g. 23:00 -> 06:00)
    return now >= start or now < end


def is_day_active(day: int, active_days: Union[str, Iterable[int]]) -> bool:
    if day < 1 or day > 7:
        return False
    if isinstance(active_days, str):
        return str(day) in active_days
    return day in set(active_days)


def iso_day_index(value: datetime) -> int:
    """1=Monday ... 7=Sunday for a (local) datetime."""
    return value.isoweekday()


def sunday_first_to_iso(day: int) -> int:
    """Convert a Sunday-first index (1=Sunday ... 7=Saturday) to 1=Monday ... 7=Sunday."""
    if day < 1 or day > 7:
        raise ValueError(f"Day index out of range: {day}")
    return 7 if day == 1 else day - 1


def normalize_active_days(active_days: Union[str, Iterable[int]]) -> str:
    """Sorted, de-duplicated digit string; raises ValueError on anything outside 1..7."""
    if isinstance(active_days, str):
        days = {int(ch) for ch in active_days if not ch.isspace()}
    else:
        days = {int(day) for day in active_days}
    for day in days:
        if day < 1 or day > 7:
            raise ValueError(f"Day index out of range: {day}")
    return "".join(str(day) for day in sorted(days))


def window_bounds(
    local_now: datetime,
    start_hour: int,
    start_minute: int,
    end_hour: int,
    end_minute: int,
) -> Tuple[datetime, datetime]:
    """
    Concrete start/end of the window occurrence that contains ``local_now``.

    For a wrap window evaluated after midnight the occurrence started the
    previous day; evaluated before midnight it ends the next day.
    """
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    now = to_total_minutes(local_now.hour, local_now.minute)
    start = to_total_minutes(start_hour, start_minute)
    end = to_total_minutes(end_hour, end_minute)

    start_at = midnight + timedelta(minutes=start)
    end_at = midnight + timedelta(minutes=end)
    if end <= start:
        if now >= start:
            end_at += timedelta(days=1)
        else:
            start_at -= timedelta(days=1)
    return start_at, end_at


class WindowTooShortError(ValueError):
    """Window is well-formed but shorter than MIN_WINDOW_MINUTES"""


def validate_window(start_hour: int, start_minute: int, end_hour: int, end_minute: int) -> int:
    """
    Check a window definition and return its length in minutes.

    Raises ValueError for out-of-range fields or start == end, and
    WindowTooShortError when the (wrapped) length is under MIN_WINDOW_MINUTES.
    """
    for name, value, upper in (
        ("start_hour", start_hour, 23),
        ("start_minute", start_minute, 59),
        ("end_hour", end_hour, 23),
        ("end_minute", end_minute, 59),
    ):
        if value is None or value < 0 or value > upper:
            raise ValueError(f"{name} must be between 0 and {upper}")

    duration = window_duration_minutes(start_hour, start_minute, end_hour, end_minute)
    if duration is None:
        raise ValueError("Window start and end must differ")
    if duration < MIN_WINDOW_MINUTES:
        raise WindowTooShortError(
            f"Window is {duration} minutes, minimum is {MIN_WINDOW_MINUTES}"
        )
    return duration
