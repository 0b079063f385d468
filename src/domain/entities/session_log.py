"""
SessionLog Entity

Audit record of one enforcement window.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, Field, Index, SQLModel

from src.domain.base import UTCDateTime, utc_now

from .enums import CompletionStatus


class SessionLog(SQLModel, table=True):
    """
    SessionLog entity - one row per enforcement window.

    Business Rules:
    - Opened as `ongoing` when enforcement starts, closed exactly once
    - Never deleted
    - bypass_attempts / accessed_identifiers are a write-only audit trail
    """

    __tablename__ = "session_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: UUID = Field(foreign_key="brick_sessions.id", nullable=False, index=True)

    started_at: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))
    ended_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    scheduled_minutes: int
    actual_minutes: Optional[int] = None

    status: CompletionStatus = Field(default=CompletionStatus.ongoing)

    override_used: bool = Field(default=False)
    override_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    override_reason: Optional[str] = Field(default=None, max_length=500)
    override_note: Optional[str] = None

    bypass_attempts: int = Field(default=0)
    accessed_identifiers: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False)
    )

    __table_args__ = (
        Index("idx_session_log_status", "status"),
    )

    def close(self, status: CompletionStatus, now: datetime) -> None:
        self.status = status
        self.ended_at = now
        self.actual_minutes = max(0, int((now - self.started_at).total_seconds() // 60))
