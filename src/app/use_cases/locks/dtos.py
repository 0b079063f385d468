"""
Commitment Lock DTOs
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import BrickSession


class LockSessionCommand(BaseModel):
    duration_days: int
    phrase: str


class UnlockSessionCommand(BaseModel):
    phrase: str


class SessionLockResponse(BaseModel):
    session_id: UUID
    is_locked: bool
    lock_expires_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, session: BrickSession) -> "SessionLockResponse":
        return cls(
            session_id=session.id,
            is_locked=session.is_locked,
            lock_expires_at=session.lock_expires_at,
        )
