import pytest
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

from src.app.services.engine_lock import EngineLock
from src.app.services.policy import EnginePolicy
from tests.fixtures.fake_clock import FakeClock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine_lock():
    return EngineLock()


@pytest.fixture
def policy():
    return EnginePolicy(timezone=ZoneInfo("UTC"))
