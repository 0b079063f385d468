"""
Emergency Override DTOs
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.use_cases.unlocks.dtos import UnlockGrantResponse
from src.domain.entities import ChallengeType


class OverrideCommand(BaseModel):
    reason: str = Field(min_length=1, max_length=500)
    note: Optional[str] = None


class ChallengeStatusResponse(BaseModel):
    session_id: UUID
    type: ChallengeType
    satisfied: bool
    # timed_wait
    remaining_seconds: Optional[int] = None
    # repeated_action
    completed_actions: Optional[int] = None
    required_actions: Optional[int] = None


class OverrideResponse(BaseModel):
    session_id: UUID
    log_id: Optional[UUID] = None
    overridden_at: datetime
    canceled_until: datetime
    grants: List[UnlockGrantResponse] = Field(default_factory=list)
