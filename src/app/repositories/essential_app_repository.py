from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import EssentialApp


class IEssentialAppRepository(ABC):
    """EssentialApp repository interface - application layer"""

    @abstractmethod
    async def get_by_identifier(self, identifier: str) -> Optional[EssentialApp]:
        """Get registry entry by app/site identifier"""
        pass

    @abstractmethod
    async def list_all(self) -> List[EssentialApp]:
        """All registry entries"""
        pass

    @abstractmethod
    async def create(self, app: EssentialApp) -> EssentialApp:
        """Add a registry entry"""
        pass

    @abstractmethod
    async def delete(self, app: EssentialApp) -> None:
        """Remove a registry entry"""
        pass
