"""
Session State Machine transitions

Unarmed -> Enforced -> {Completed | EmergencyOverride | Interrupted}.
Every transition writes the runtime record, the log entry and the session
counters through the same unit of work, so the caller's commit makes all of
them durable together or none of them.
"""

import logging
from datetime import UTC, datetime
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    ActiveSessionRecord,
    BrickSession,
    CompletionStatus,
    SessionLog,
    WindowSchedule,
)

logger = logging.getLogger(__name__)


async def find_enforced(uow: UnitOfWork) -> Optional[ActiveSessionRecord]:
    records = await uow.active_records.list_enforced()
    if len(records) > 1:
        # Only reachable if something wrote around the engine lock
        logger.error(
            "More than one session enforced: %d records (%s)",
            len(records),
            ", ".join(str(r.session_id) for r in records),
        )
    return records[0] if records else None


async def reset_challenge(
    uow: UnitOfWork, session: BrickSession, tracker: Optional[RepeatedActionTracker] = None
) -> None:
    """Drop challenge progress so it never carries over into another enforcement."""
    if await uow.countdowns.delete(str(session.id)):
        logger.debug("Countdown discarded: session=%s", session.id)
    if tracker is not None:
        tracker.clear(session.id)


async def open_enforcement(
    uow: UnitOfWork,
    session: BrickSession,
    window_start: datetime,
    window_end: datetime,
    now: datetime,
    tracker: Optional[RepeatedActionTracker] = None,
) -> ActiveSessionRecord:
    await reset_challenge(uow, session, tracker)
    scheduled_minutes = int((window_end - window_start).total_seconds() // 60)
    log = await uow.logs.create(
        SessionLog(
            session_id=session.id,
            started_at=now,
            scheduled_minutes=scheduled_minutes,
            status=CompletionStatus.ongoing,
        )
    )

    record = await uow.active_records.get(session.id)
    if record is None:
        record = ActiveSessionRecord(session_id=session.id)
    record.is_currently_enforced = True
    record.window_start = window_start
    record.window_end = window_end
    record.log_id = log.id
    record = await uow.active_records.save(record)

    logger.info(
        "Session enforced: session=%s kind=%s until=%s",
        session.id,
        session.kind.value,
        window_end.isoformat(),
    )
    return record


async def close_enforcement(
    uow: UnitOfWork,
    session: BrickSession,
    record: ActiveSessionRecord,
    status: CompletionStatus,
    now: datetime,
    reason: Optional[str] = None,
    note: Optional[str] = None,
    tracker: Optional[RepeatedActionTracker] = None,
) -> Optional[SessionLog]:
    # A window that ended while nobody was ticking closes at its scheduled end
    ended_at = now
    if status == CompletionStatus.completed and record.window_end is not None:
        ended_at = min(now, record.window_end)

    log = await uow.logs.get_by_id(record.log_id) if record.log_id else None
    if log is not None and log.status == CompletionStatus.ongoing:
        if status == CompletionStatus.emergency_override:
            log.override_used = True
            log.override_at = now
            log.override_reason = reason
            log.override_note = note
        log.close(status, ended_at)
        log = await uow.logs.update(log)
    elif log is None:
        logger.warning("Enforced session %s had no open log entry", session.id)

    if status == CompletionStatus.completed:
        session.completed_count += 1
        session.last_completed_at = ended_at
    elif status == CompletionStatus.emergency_override:
        session.override_count += 1
    await uow.sessions.update(session)

    record.clear()
    await uow.active_records.save(record)
    await reset_challenge(uow, session, tracker)

    logger.info("Session %s: session=%s", status.value, session.id)
    return log


def current_window(
    schedule: WindowSchedule, now: datetime, tz: ZoneInfo
) -> Optional[Tuple[datetime, datetime]]:
    """UTC bounds of the occurrence containing ``now``, or None outside the window."""
    local_now = now.astimezone(tz)
    if not schedule.contains(local_now):
        return None
    start, end = schedule.bounds(local_now)
    return start.astimezone(UTC), end.astimezone(UTC)
