from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import CountdownState


class ICountdownRepository(ABC):
    """CountdownState repository interface - application layer"""

    @abstractmethod
    async def get(self, identifier: str) -> Optional[CountdownState]:
        """Persisted countdown for an identifier"""
        pass

    @abstractmethod
    async def save(self, state: CountdownState) -> CountdownState:
        """Insert or update a countdown"""
        pass

    @abstractmethod
    async def delete(self, identifier: str) -> bool:
        """Delete a countdown. Returns True if one existed."""
        pass
