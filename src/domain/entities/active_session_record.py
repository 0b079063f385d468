"""
ActiveSessionRecord Entity

Mutable runtime state of a session, 1:1 with BrickSession.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, Field, Index, SQLModel

from src.domain.base import UTCDateTime


class ActiveSessionRecord(SQLModel, table=True):
    """
    ActiveSessionRecord entity - runtime fields of the enforced session.

    Business Rules:
    - At most one record has is_currently_enforced = true (guarded by the
      engine lock, not by storage)
    - log_id points at the ongoing SessionLog of the current window
    """

    __tablename__ = "active_session_records"

    session_id: UUID = Field(foreign_key="brick_sessions.id", primary_key=True)
    is_currently_enforced: bool = Field(default=False)
    window_start: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    window_end: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime))
    log_id: Optional[UUID] = Field(default=None, foreign_key="session_logs.id")

    __table_args__ = (Index("idx_active_record_enforced", "is_currently_enforced"),)

    def clear(self) -> None:
        self.is_currently_enforced = False
        self.window_start = None
        self.window_end = None
        self.log_id = None
