from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.logging_enforcement_sink import LoggingEnforcementSink
from src.adapter.services.system_clock import SystemClock
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.challenge_tracker import RepeatedActionTracker
from src.app.services.clock import Clock
from src.app.services.decision_publisher import DecisionPublisher
from src.app.services.engine_lock import EngineLock
from src.app.services.policy import EnginePolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Process-wide engine state; one instance per process
clock = SystemClock()
policy = EnginePolicy.from_config(ApplicationConfig)
engine_lock = EngineLock()
tracker = RepeatedActionTracker()
sink = LoggingEnforcementSink()
publisher = DecisionPublisher(sink)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return clock


def get_policy() -> EnginePolicy:
    return policy


def get_engine_lock() -> EngineLock:
    return engine_lock


def get_tracker() -> RepeatedActionTracker:
    return tracker


def get_publisher() -> DecisionPublisher:
    return publisher


class EngineContext:
    """Bundle of everything a state-machine use case needs for one request"""

    def __init__(
        self,
        uow=Depends(get_unit_of_work),
        clock: Clock = Depends(get_clock),
        policy: EnginePolicy = Depends(get_policy),
        lock: EngineLock = Depends(get_engine_lock),
        tracker: RepeatedActionTracker = Depends(get_tracker),
        publisher: DecisionPublisher = Depends(get_publisher),
    ):
        self.uow = uow
        self.clock = clock
        self.policy = policy
        self.lock = lock
        self.tracker = tracker
        self.publisher = publisher
