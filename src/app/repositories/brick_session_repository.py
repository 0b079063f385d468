from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import BrickSession, SessionKind


class IBrickSessionRepository(ABC):
    """BrickSession repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[BrickSession]:
        """Get session definition by ID"""
        pass

    @abstractmethod
    async def list_all(self) -> List[BrickSession]:
        """All sessions, oldest first"""
        pass

    @abstractmethod
    async def list_enabled_by_kind(self, kind: SessionKind) -> List[BrickSession]:
        """Enabled sessions of one kind"""
        pass

    @abstractmethod
    async def list_with_expired_locks(self, now: datetime) -> List[BrickSession]:
        """Locked sessions whose lock_expires_at is before now"""
        pass

    @abstractmethod
    async def create(self, session: BrickSession) -> BrickSession:
        """Create a new session definition"""
        pass

    @abstractmethod
    async def update(self, session: BrickSession) -> BrickSession:
        """Update existing session definition"""
        pass

    @abstractmethod
    async def delete(self, session: BrickSession) -> None:
        """Hard-delete a session and its runtime record"""
        pass
