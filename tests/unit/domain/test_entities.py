"""
Unit tests for entity behaviour that does not need storage
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from src.domain.base import WHOLE_DEVICE, as_utc
from src.domain.entities import (
    BrickSession,
    ChallengeType,
    CompletionStatus,
    CountdownState,
    DurationSchedule,
    EssentialApp,
    Goal,
    IdentifierSet,
    SessionKind,
    SessionLog,
    TargetType,
    TemporaryUnlockGrant,
    WholeDevice,
    WindowSchedule,
)

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


def test_as_utc_treats_naive_as_utc():
    assert as_utc(datetime(2024, 1, 1, 8, 0)) == datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    assert as_utc(None) is None


def test_session_schedule_variants_round_trip():
    session = BrickSession(name="Night", kind=SessionKind.recurring_window)
    session.apply_schedule(
        WindowSchedule(
            start_hour=23, start_minute=0, end_hour=6, end_minute=0, active_days=frozenset({5, 1})
        )
    )
    assert session.active_days == "15"
    assert session.duration_minutes is None
    assert session.schedule.duration_minutes == 420

    session.apply_schedule(DurationSchedule(minutes=45))
    assert session.kind == SessionKind.duration
    assert session.start_hour is None
    assert session.schedule == DurationSchedule(minutes=45)


def test_session_target_variants():
    session = BrickSession(name="Apps", kind=SessionKind.duration, duration_minutes=30)
    session.apply_target(IdentifierSet(identifiers=("a.b", "c.d")))
    assert session.target_type == TargetType.identifier_set
    assert session.target.identifiers == ("a.b", "c.d")

    session.apply_target(WholeDevice())
    assert session.target_identifiers == []
    assert session.target.identifiers == (WHOLE_DEVICE,)


def test_lock_active_until_expiry():
    session = BrickSession(
        name="Locked",
        kind=SessionKind.duration,
        duration_minutes=30,
        is_locked=True,
        lock_expires_at=NOW + timedelta(days=1),
        lock_phrase="I will stay focused",
    )
    assert session.is_lock_active(NOW)
    assert session.is_lock_active(NOW + timedelta(days=1))
    assert not session.is_lock_active(NOW + timedelta(days=1, seconds=1))

    session.clear_lock()
    assert not session.is_locked
    assert session.lock_phrase is None


def test_challenge_defaults():
    session = BrickSession(name="x", kind=SessionKind.duration, duration_minutes=10)
    assert session.challenge.type == ChallengeType.timed_wait
    assert session.challenge.param == 5
    assert session.allow_emergency_override is True


def test_grant_liveness_is_strict():
    grant = TemporaryUnlockGrant(identifier="com.app", granted_at=NOW, duration_minutes=5)
    assert grant.is_live(NOW + timedelta(minutes=4, seconds=59))
    assert not grant.is_live(NOW + timedelta(minutes=5))
    assert grant.remaining_seconds(NOW + timedelta(minutes=2)) == 180


def test_countdown_remaining_clamped():
    countdown = CountdownState(identifier="s", started_at=NOW, total_minutes=10)
    assert countdown.remaining_seconds(NOW + timedelta(minutes=4)) == 360
    assert countdown.remaining_seconds(NOW + timedelta(hours=3)) == 0


def test_goal_remaining_days_rounds_up():
    goal = Goal(
        name="g",
        duration_days=7,
        start_time=NOW,
        end_time=NOW + timedelta(days=7),
    )
    assert goal.remaining_days(NOW + timedelta(days=1, hours=1)) == 6
    assert goal.remaining_days(NOW + timedelta(days=7)) == 0
    assert goal.is_expired(NOW + timedelta(days=7))


def test_essential_app_kind_filter():
    anywhere = EssentialApp(display_name="SOS", identifier="sos", allowed_session_kinds=[])
    settings = EssentialApp(
        display_name="Settings",
        identifier="settings",
        allowed_session_kinds=[SessionKind.recurring_window.value],
    )
    assert anywhere.allows(SessionKind.duration)
    assert settings.allows(SessionKind.recurring_window)
    assert not settings.allows(SessionKind.duration)


def test_log_close_computes_actual_minutes():
    log = SessionLog(session_id=uuid4(), started_at=NOW, scheduled_minutes=30)
    log.close(CompletionStatus.completed, NOW + timedelta(minutes=30, seconds=20))
    assert log.status == CompletionStatus.completed
    assert log.actual_minutes == 30
    assert log.ended_at == NOW + timedelta(minutes=30, seconds=20)
