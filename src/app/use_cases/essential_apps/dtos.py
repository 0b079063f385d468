"""
Essential-App DTOs
"""

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import EssentialApp, SessionKind


class AddEssentialAppCommand(BaseModel):
    """Command to register a user-defined essential app"""

    display_name: str = Field(min_length=1, max_length=255)
    identifier: str = Field(min_length=1, max_length=255)
    # Empty means exempt under every session kind
    allowed_session_kinds: List[SessionKind] = Field(default_factory=list)


class EssentialAppResponse(BaseModel):
    id: UUID
    display_name: str
    identifier: str
    is_system_defined: bool
    allowed_session_kinds: List[SessionKind]
    added_at: datetime

    @classmethod
    def from_entity(cls, app: EssentialApp) -> "EssentialAppResponse":
        return cls(
            id=app.id,
            display_name=app.display_name,
            identifier=app.identifier,
            is_system_defined=app.is_system_defined,
            allowed_session_kinds=[SessionKind(kind) for kind in app.allowed_session_kinds or []],
            added_at=app.added_at,
        )
