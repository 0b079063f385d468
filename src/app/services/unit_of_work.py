from abc import ABC, abstractmethod

from src.app.repositories.active_session_repository import IActiveSessionRepository
from src.app.repositories.brick_session_repository import IBrickSessionRepository
from src.app.repositories.countdown_repository import ICountdownRepository
from src.app.repositories.essential_app_repository import IEssentialAppRepository
from src.app.repositories.goal_repository import IGoalRepository
from src.app.repositories.session_log_repository import ISessionLogRepository
from src.app.repositories.unlock_grant_repository import IUnlockGrantRepository


class PersistenceError(Exception):
    """The store failed; the surrounding transaction has been rolled back"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    sessions: IBrickSessionRepository
    active_records: IActiveSessionRepository
    logs: ISessionLogRepository
    essential_apps: IEssentialAppRepository
    grants: IUnlockGrantRepository
    countdowns: ICountdownRepository
    goals: IGoalRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
