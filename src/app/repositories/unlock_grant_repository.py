from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import TemporaryUnlockGrant


class IUnlockGrantRepository(ABC):
    """TemporaryUnlockGrant repository interface - application layer"""

    @abstractmethod
    async def get(self, identifier: str) -> Optional[TemporaryUnlockGrant]:
        """Grant for an identifier, live or not"""
        pass

    @abstractmethod
    async def list_all(self) -> List[TemporaryUnlockGrant]:
        """Every stored grant, live or not"""
        pass

    @abstractmethod
    async def save(self, grant: TemporaryUnlockGrant) -> TemporaryUnlockGrant:
        """Insert or update a grant"""
        pass

    @abstractmethod
    async def delete(self, identifier: str) -> bool:
        """Delete a grant. Returns True if one existed."""
        pass
