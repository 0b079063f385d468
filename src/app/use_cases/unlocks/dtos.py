"""
Temporary Unlock DTOs
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.domain.entities import TemporaryUnlockGrant


class GrantUnlockCommand(BaseModel):
    identifier: str = Field(min_length=1, max_length=255)
    minutes: int


class ExtendUnlockCommand(BaseModel):
    extra_minutes: int


class UnlockGrantResponse(BaseModel):
    """A live grant as seen at the time of the request"""

    identifier: str
    granted_at: datetime
    duration_minutes: int
    expires_at: datetime
    remaining_seconds: int

    @classmethod
    def from_entity(cls, grant: TemporaryUnlockGrant, now: datetime) -> "UnlockGrantResponse":
        return cls(
            identifier=grant.identifier,
            granted_at=grant.granted_at,
            duration_minutes=grant.duration_minutes,
            expires_at=grant.expires_at,
            remaining_seconds=grant.remaining_seconds(now),
        )
