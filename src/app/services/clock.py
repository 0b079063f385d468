from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of the current instant; injected so tests can pin time"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as an aware UTC datetime"""
        pass
