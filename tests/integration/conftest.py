import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from zoneinfo import ZoneInfo

from config import ApplicationConfig
from src.adapter.services.logging_enforcement_sink import LoggingEnforcementSink
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.decision_publisher import DecisionPublisher
from src.app.services.engine_lock import EngineLock
from src.app.services.policy import EnginePolicy
from src.depends import (
    get_clock,
    get_engine_lock,
    get_policy,
    get_publisher,
    get_tracker,
    get_unit_of_work,
)
from tests.fixtures.fake_clock import FakeClock
from tests.fixtures.payloads import Payloads


@pytest.fixture
def payloads():
    return Payloads()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return LoggingEnforcementSink()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, clock, sink):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    # Fresh engine state per test, bound to the test's event loop
    policy = EnginePolicy(timezone=ZoneInfo("UTC"))
    lock = EngineLock()
    tracker = RepeatedActionTracker()
    publisher = DecisionPublisher(sink)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_policy] = lambda: policy
    app.dependency_overrides[get_engine_lock] = lambda: lock
    app.dependency_overrides[get_tracker] = lambda: tracker
    app.dependency_overrides[get_publisher] = lambda: publisher

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-API-Key": ApplicationConfig.API_KEY},
    ) as ac:
        yield ac
