"""
Unit tests for the schedule evaluator
"""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.domain.schedule import (
    WindowTooShortError,
    is_day_active,
    is_within_window,
    iso_day_index,
    normalize_active_days,
    sunday_first_to_iso,
    validate_window,
    window_bounds,
    window_duration_minutes,
)


@pytest.mark.parametrize(
    "hour,minute,expected",
    [
        (9, 0, True),  # start is inclusive
        (12, 0, True),
        (16, 59, True),
        (8, 59, False),
        (17, 0, False),  # end is exclusive
        (17, 1, False),
        (0, 0, False),
        (23, 59, False),
    ],
)
def test_same_day_window(hour, minute, expected):
    assert is_within_window(hour, minute, 9, 0, 17, 0) is expected


@pytest.mark.parametrize(
    "hour,minute,expected",
    [
        (23, 0, True),
        (23, 59, True),
        (0, 0, True),
        (3, 30, True),
        (5, 59, True),
        (6, 0, False),
        (6, 1, False),
        (12, 0, False),
        (22, 59, False),
    ],
)
def test_midnight_crossing_window(hour, minute, expected):
    assert is_within_window(hour, minute, 23, 0, 6, 0) is expected


def test_window_starting_at_midnight():
    assert is_within_window(0, 0, 0, 0, 6, 0)
    assert is_within_window(5, 59, 0, 0, 6, 0)
    assert not is_within_window(6, 0, 0, 0, 6, 0)


def test_window_ending_at_midnight():
    assert is_within_window(18, 0, 18, 0, 0, 0)
    assert is_within_window(23, 59, 18, 0, 0, 0)
    assert not is_within_window(0, 0, 18, 0, 0, 0)
    assert not is_within_window(17, 59, 18, 0, 0, 0)


def test_equal_start_and_end_never_matches():
    assert not is_within_window(12, 0, 12, 0, 12, 0)
    assert not is_within_window(0, 0, 0, 0, 0, 0)
    assert not is_within_window(23, 59, 23, 59, 23, 59)


def test_minimum_window_length():
    assert not is_within_window(9, 0, 9, 0, 9, 4)
    assert is_within_window(9, 2, 9, 0, 9, 5)


def test_missing_fields_never_match():
    assert not is_within_window(9, 0, None, 0, 17, 0)
    assert not is_within_window(9, 0, 9, 0, None, 0)


def test_window_duration_wraps_midnight():
    assert window_duration_minutes(23, 0, 6, 0) == 420
    assert window_duration_minutes(9, 0, 17, 30) == 510
    assert window_duration_minutes(8, 0, 8, 0) is None


def test_validate_window_errors():
    assert validate_window(23, 0, 6, 0) == 420
    with pytest.raises(WindowTooShortError):
        validate_window(9, 0, 9, 3)
    with pytest.raises(ValueError):
        validate_window(10, 0, 10, 0)
    with pytest.raises(ValueError):
        validate_window(24, 0, 6, 0)


def test_day_active_with_string_and_set():
    weekdays = "12345"
    assert is_day_active(1, weekdays)
    assert is_day_active(5, weekdays)
    assert not is_day_active(6, weekdays)
    assert not is_day_active(7, weekdays)
    assert is_day_active(6, {6, 7})
    assert not is_day_active(1, {6, 7})


def test_day_active_rejects_out_of_range_and_empty():
    assert not is_day_active(0, "1234567")
    assert not is_day_active(8, "1234567")
    for day in range(1, 8):
        assert not is_day_active(day, "")


def test_sunday_first_conversion():
    assert sunday_first_to_iso(1) == 7
    assert sunday_first_to_iso(2) == 1
    assert sunday_first_to_iso(7) == 6
    with pytest.raises(ValueError):
        sunday_first_to_iso(0)


def test_iso_day_index_is_monday_first():
    assert iso_day_index(datetime(2024, 1, 15)) == 1  # Monday
    assert iso_day_index(datetime(2024, 1, 21)) == 7  # Sunday


def test_normalize_active_days():
    assert normalize_active_days([5, 1, 3, 1]) == "135"
    assert normalize_active_days("7 6") == "67"
    with pytest.raises(ValueError):
        normalize_active_days([0, 1])


def test_window_bounds_same_day():
    start, end = window_bounds(datetime(2024, 1, 15, 12, 0), 9, 0, 17, 0)
    assert start == datetime(2024, 1, 15, 9, 0)
    assert end == datetime(2024, 1, 15, 17, 0)


def test_window_bounds_wrap_before_and_after_midnight():
    start, end = window_bounds(datetime(2024, 1, 15, 23, 30), 23, 0, 6, 0)
    assert start == datetime(2024, 1, 15, 23, 0)
    assert end == datetime(2024, 1, 16, 6, 0)

    start, end = window_bounds(datetime(2024, 1, 16, 2, 0), 23, 0, 6, 0)
    assert start == datetime(2024, 1, 15, 23, 0)
    assert end == datetime(2024, 1, 16, 6, 0)


def test_window_bounds_keep_timezone():
    tz = ZoneInfo("Europe/Berlin")
    start, end = window_bounds(datetime(2024, 1, 15, 10, 0, tzinfo=tz), 9, 0, 17, 0)
    assert start.tzinfo is tz
    assert end.hour == 17
