from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ActiveSessionRecord


class IActiveSessionRepository(ABC):
    """ActiveSessionRecord repository interface - application layer"""

    @abstractmethod
    async def get(self, session_id: UUID) -> Optional[ActiveSessionRecord]:
        """Runtime record of a session, if one was ever written"""
        pass

    @abstractmethod
    async def list_enforced(self) -> List[ActiveSessionRecord]:
        """Records with is_currently_enforced = true"""
        pass

    @abstractmethod
    async def save(self, record: ActiveSessionRecord) -> ActiveSessionRecord:
        """Insert or update the runtime record"""
        pass
