"""
Unit tests for Commitment Lock Use Case
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.locks import CommitmentLockUseCase
from src.domain.entities import BrickSession, SessionKind

PHRASE = "I am stronger than my phone"


def _session(**kwargs):
    return BrickSession(id=uuid4(), name="Night", kind=SessionKind.duration, duration_minutes=60, **kwargs)


@pytest.mark.asyncio
async def test_lock_session_success(mock_uow, clock, engine_lock):
    session = _session()
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)
    mock_uow.sessions.update = AsyncMock(side_effect=lambda s: s)

    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).lock_session(
        session.id, 7, PHRASE
    )

    assert result.is_ok()
    assert result.value.is_locked is True
    assert result.value.lock_expires_at == clock.now() + timedelta(days=7)
    assert session.lock_phrase == PHRASE
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("phrase", ["short", "   nine char   ", "         "])
async def test_lock_rejects_short_phrase(mock_uow, clock, engine_lock, phrase):
    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).lock_session(
        uuid4(), 7, phrase
    )

    assert result.is_err()
    assert result.error.code == "PHRASE_TOO_SHORT"


@pytest.mark.asyncio
async def test_lock_phrase_of_exactly_ten_after_trim(mock_uow, clock, engine_lock):
    session = _session()
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)
    mock_uow.sessions.update = AsyncMock(side_effect=lambda s: s)

    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).lock_session(
        session.id, 1, "  0123456789  "
    )

    assert result.is_ok()
    # Stored verbatim, surrounding spaces included
    assert session.lock_phrase == "  0123456789  "


@pytest.mark.asyncio
async def test_lock_rejects_zero_days(mock_uow, clock, engine_lock):
    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).lock_session(
        uuid4(), 0, PHRASE
    )

    assert result.is_err()
    assert result.error.code == "INVALID_LOCK_DURATION"


@pytest.mark.asyncio
@pytest.mark.parametrize("typed", ["i am stronger than my phone", PHRASE + " ", ""])
async def test_unlock_requires_exact_phrase(mock_uow, clock, engine_lock, typed):
    session = _session(
        is_locked=True, lock_expires_at=clock.now() + timedelta(days=2), lock_phrase=PHRASE
    )
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)
    mock_uow.sessions.update = AsyncMock()

    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).unlock_session(
        session.id, typed
    )

    assert result.is_err()
    assert result.error.code == "WRONG_PHRASE"
    assert session.is_locked is True
    mock_uow.sessions.update.assert_not_called()


@pytest.mark.asyncio
async def test_unlock_with_exact_phrase_clears_lock(mock_uow, clock, engine_lock):
    session = _session(
        is_locked=True, lock_expires_at=clock.now() + timedelta(days=2), lock_phrase=PHRASE
    )
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)
    mock_uow.sessions.update = AsyncMock(side_effect=lambda s: s)

    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).unlock_session(
        session.id, PHRASE
    )

    assert result.is_ok()
    assert result.value.is_locked is False
    assert session.lock_phrase is None
    assert session.lock_expires_at is None


@pytest.mark.asyncio
async def test_unlock_when_not_locked(mock_uow, clock, engine_lock):
    session = _session()
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)

    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).unlock_session(
        session.id, PHRASE
    )

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_LOCKED"


@pytest.mark.asyncio
async def test_clear_expired_locks(mock_uow, clock, engine_lock):
    expired = _session(
        is_locked=True, lock_expires_at=clock.now() - timedelta(minutes=1), lock_phrase=PHRASE
    )
    mock_uow.sessions.list_with_expired_locks = AsyncMock(return_value=[expired])
    mock_uow.sessions.update = AsyncMock(side_effect=lambda s: s)

    result = await CommitmentLockUseCase(mock_uow, clock, engine_lock).clear_expired()

    assert result.is_ok()
    assert result.value == 1
    assert expired.is_locked is False
    mock_uow.sessions.list_with_expired_locks.assert_called_once_with(clock.now())
    mock_uow.commit.assert_called_once()
