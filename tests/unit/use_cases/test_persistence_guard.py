"""
Unit tests for storage failures surfacing as results
"""

import pytest
from unittest.mock import AsyncMock

from src.app.services.unit_of_work import PersistenceError
from src.app.use_cases.goals import GoalLifecycleUseCase
from src.app.use_cases.unlocks import TemporaryUnlockUseCase


@pytest.mark.asyncio
async def test_persistence_error_becomes_result(mock_uow, clock):
    mock_uow.grants.save = AsyncMock(side_effect=PersistenceError("disk I/O error"))

    result = await TemporaryUnlockUseCase(mock_uow, clock).grant("com.whatsapp", 10)

    assert result.is_err()
    assert result.error.code == "PERSISTENCE_ERROR"
    assert result.error.reason == "disk I/O error"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_commit_failure_becomes_result(mock_uow, clock):
    mock_uow.goals.list_goals = AsyncMock(return_value=[])
    mock_uow.commit = AsyncMock(side_effect=PersistenceError("database is locked"))

    result = await GoalLifecycleUseCase(mock_uow, clock).check_expiry()

    assert result.is_err()
    assert result.error.code == "PERSISTENCE_ERROR"


@pytest.mark.asyncio
async def test_other_exceptions_propagate(mock_uow, clock):
    mock_uow.grants.get = AsyncMock(side_effect=RuntimeError("bug"))

    with pytest.raises(RuntimeError):
        await TemporaryUnlockUseCase(mock_uow, clock).is_active("x")
