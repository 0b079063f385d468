"""
Unit tests for Temporary Unlock Use Case
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock

from src.app.use_cases.unlocks import TemporaryUnlockUseCase
from src.domain.entities import TemporaryUnlockGrant


@pytest.mark.asyncio
async def test_grant_success(mock_uow, clock):
    mock_uow.grants.save = AsyncMock(side_effect=lambda g: g)

    result = await TemporaryUnlockUseCase(mock_uow, clock).grant("com.whatsapp", 15)

    assert result.is_ok()
    assert result.value.identifier == "com.whatsapp"
    assert result.value.expires_at == clock.now() + timedelta(minutes=15)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_grant_rejects_zero_minutes(mock_uow, clock):
    mock_uow.grants.save = AsyncMock()

    result = await TemporaryUnlockUseCase(mock_uow, clock).grant("com.whatsapp", 0)

    assert result.is_err()
    assert result.error.code == "INVALID_UNLOCK_DURATION"
    mock_uow.grants.save.assert_not_called()


@pytest.mark.asyncio
async def test_extend_keeps_original_grant_time(mock_uow, clock):
    granted_at = clock.now()
    grant = TemporaryUnlockGrant(identifier="x", granted_at=granted_at, duration_minutes=10)
    mock_uow.grants.get = AsyncMock(return_value=grant)
    mock_uow.grants.save = AsyncMock(side_effect=lambda g: g)
    clock.advance(minutes=8)

    result = await TemporaryUnlockUseCase(mock_uow, clock).extend("x", 5)

    assert result.is_ok()
    assert grant.granted_at == granted_at
    assert grant.duration_minutes == 15
    assert result.value.expires_at == granted_at + timedelta(minutes=15)


@pytest.mark.asyncio
async def test_extend_expired_grant_fails(mock_uow, clock):
    grant = TemporaryUnlockGrant(identifier="x", granted_at=clock.now(), duration_minutes=10)
    mock_uow.grants.get = AsyncMock(return_value=grant)
    clock.advance(minutes=10)

    result = await TemporaryUnlockUseCase(mock_uow, clock).extend("x", 5)

    assert result.is_err()
    assert result.error.code == "NO_GRANT"


@pytest.mark.asyncio
async def test_is_active_deletes_expired_grant(mock_uow, clock):
    grant = TemporaryUnlockGrant(identifier="x", granted_at=clock.now(), duration_minutes=10)
    mock_uow.grants.get = AsyncMock(return_value=grant)
    mock_uow.grants.delete = AsyncMock(return_value=True)

    use_case = TemporaryUnlockUseCase(mock_uow, clock)
    clock.advance(minutes=9, seconds=59)
    assert (await use_case.is_active("x")).value is True
    mock_uow.grants.delete.assert_not_called()

    clock.advance(seconds=1)
    assert (await use_case.is_active("x")).value is False
    mock_uow.grants.delete.assert_called_once_with("x")


@pytest.mark.asyncio
async def test_remaining_minutes_rounds_up(mock_uow, clock):
    grant = TemporaryUnlockGrant(identifier="x", granted_at=clock.now(), duration_minutes=10)
    mock_uow.grants.get = AsyncMock(return_value=grant)
    clock.advance(minutes=7, seconds=30)

    result = await TemporaryUnlockUseCase(mock_uow, clock).remaining_minutes("x")

    assert result.value == 3


@pytest.mark.asyncio
async def test_remaining_minutes_without_grant(mock_uow, clock):
    mock_uow.grants.get = AsyncMock(return_value=None)

    result = await TemporaryUnlockUseCase(mock_uow, clock).remaining_minutes("x")

    assert result.value == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("identifier", ["*", " * ", ""])
async def test_grant_rejects_whole_device(mock_uow, clock, identifier):
    mock_uow.grants.save = AsyncMock()

    result = await TemporaryUnlockUseCase(mock_uow, clock).grant(identifier, 600)

    assert result.is_err()
    assert result.error.code == "INVALID_TARGET"
    mock_uow.grants.save.assert_not_called()


@pytest.mark.asyncio
async def test_extend_rejects_whole_device(mock_uow, clock):
    # A device-wide grant left behind by an override cannot be stretched
    grant = TemporaryUnlockGrant(identifier="*", granted_at=clock.now(), duration_minutes=5)
    mock_uow.grants.get = AsyncMock(return_value=grant)
    mock_uow.grants.save = AsyncMock()

    result = await TemporaryUnlockUseCase(mock_uow, clock).extend("*", 60)

    assert result.is_err()
    assert result.error.code == "INVALID_TARGET"
    assert grant.duration_minutes == 5
    mock_uow.grants.save.assert_not_called()
