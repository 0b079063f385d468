"""
Goal Entity

Long-term, append-only commitment.
"""

import math
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, Field, SQLModel

from src.domain.base import UTCDateTime, utc_now


class Goal(SQLModel, table=True):
    """
    Goal entity - long-duration commitment whose items cannot be retracted.

    Business Rules:
    - end_time = start_time + duration_days
    - Items may only be appended while active and unexpired
    - Deletable only once is_active = false
    """

    __tablename__ = "goals"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    duration_days: int
    start_time: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))
    end_time: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))
    is_active: bool = Field(default=True, index=True)
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False)
    )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.end_time

    def remaining_days(self, now: datetime) -> int:
        if not self.is_active or self.is_expired(now):
            return 0
        return math.ceil((self.end_time - now).total_seconds() / 86_400)
