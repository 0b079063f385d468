from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.active_session_repository import ActiveSessionRepository
from src.adapter.repositories.brick_session_repository import BrickSessionRepository
from src.adapter.repositories.countdown_repository import CountdownRepository
from src.adapter.repositories.essential_app_repository import EssentialAppRepository
from src.adapter.repositories.goal_repository import GoalRepository
from src.adapter.repositories.session_log_repository import SessionLogRepository
from src.adapter.repositories.unlock_grant_repository import UnlockGrantRepository
from src.app.services.unit_of_work import PersistenceError, UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.sessions = BrickSessionRepository(self.session)
        self.active_records = ActiveSessionRepository(self.session)
        self.logs = SessionLogRepository(self.session)
        self.essential_apps = EssentialAppRepository(self.session)
        self.grants = UnlockGrantRepository(self.session)
        self.countdowns = CountdownRepository(self.session)
        self.goals = GoalRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # Anything not committed is discarded
        try:
            await self.rollback()
        except SQLAlchemyError as rollback_error:
            raise PersistenceError(str(rollback_error)) from rollback_error
        if isinstance(exc, SQLAlchemyError):
            raise PersistenceError(str(exc)) from exc

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
