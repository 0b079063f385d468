"""
EssentialApp Entity

Identifiers that stay reachable while a session is enforced.
"""

from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, Field, SQLModel

from src.domain.base import UTCDateTime, utc_now

from .enums import SessionKind


class EssentialApp(SQLModel, table=True):
    """
    EssentialApp entity - always-allowed identifier.

    Business Rules:
    - Exempt under a session kind listed in allowed_session_kinds
    - Empty allowed_session_kinds means exempt under every kind
    - System-defined entries cannot be removed
    """

    __tablename__ = "essential_apps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    display_name: str = Field(max_length=255)
    identifier: str = Field(unique=True, index=True, max_length=255)
    is_system_defined: bool = Field(default=False)
    allowed_session_kinds: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    added_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False)
    )

    def allows(self, kind: SessionKind) -> bool:
        kinds = self.allowed_session_kinds or []
        return not kinds or SessionKind(kind).value in kinds


SYSTEM_ESSENTIALS = [
    ("Emergency SOS", "com.android.emergency", []),
    ("Settings", "com.android.settings", [SessionKind.recurring_window.value]),
    ("Clock", "com.android.deskclock", []),
    ("Clock", "com.google.android.deskclock", []),
    ("Calculator", "com.android.calculator2", [SessionKind.duration.value]),
    ("Calculator", "com.google.android.calculator", [SessionKind.duration.value]),
]
