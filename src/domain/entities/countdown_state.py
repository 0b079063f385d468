"""
CountdownState Entity

Persisted TimedWait challenge, so the wait survives a restart.
"""

from datetime import datetime

from sqlmodel import Column, Field, SQLModel

from src.domain.base import UTCDateTime


class CountdownState(SQLModel, table=True):
    """
    CountdownState entity.

    Business Rules:
    - Remaining time is total_minutes*60 - (now - started_at), never a
      decrementing counter
    - identifier is the session id the challenge belongs to
    """

    __tablename__ = "override_countdowns"

    identifier: str = Field(primary_key=True, max_length=255)
    started_at: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))
    total_minutes: int

    def remaining_seconds(self, now: datetime) -> int:
        elapsed = (now - self.started_at).total_seconds()
        return max(0, int(self.total_minutes * 60 - elapsed))
