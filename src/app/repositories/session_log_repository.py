from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import SessionLog


class ISessionLogRepository(ABC):
    """SessionLog repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, log_id: UUID) -> Optional[SessionLog]:
        """Get log entry by ID"""
        pass

    @abstractmethod
    async def create(self, log: SessionLog) -> SessionLog:
        """Open a new log entry"""
        pass

    @abstractmethod
    async def update(self, log: SessionLog) -> SessionLog:
        """Persist changes to a log entry"""
        pass

    @abstractmethod
    async def list_ongoing(self) -> List[SessionLog]:
        """Entries still marked ongoing"""
        pass

    @abstractmethod
    async def list_by_session(
        self,
        session_id: UUID,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[SessionLog]:
        """Entries of one session started within [since, until), newest first"""
        pass
