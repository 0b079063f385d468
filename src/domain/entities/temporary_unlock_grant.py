"""
TemporaryUnlockGrant Entity

Time-boxed exemption for one identifier, independent of session state.
"""

from datetime import datetime, timedelta

from sqlmodel import Column, Field, SQLModel

from src.domain.base import UTCDateTime


class TemporaryUnlockGrant(SQLModel, table=True):
    """
    TemporaryUnlockGrant entity.

    Business Rules:
    - Live iff now - granted_at < duration_minutes; always re-derived, never timed
    - Extending adds minutes without resetting granted_at
    """

    __tablename__ = "temporary_unlock_grants"

    identifier: str = Field(primary_key=True, max_length=255)
    granted_at: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))
    duration_minutes: int

    @property
    def expires_at(self) -> datetime:
        return self.granted_at + timedelta(minutes=self.duration_minutes)

    def is_live(self, now: datetime) -> bool:
        return now - self.granted_at < timedelta(minutes=self.duration_minutes)

    def remaining_seconds(self, now: datetime) -> int:
        return max(0, int((self.expires_at - now).total_seconds()))
