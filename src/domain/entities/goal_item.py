"""
GoalItem Entity

One blocked app or website inside a Goal.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, Field, SQLModel

from src.domain.base import UTCDateTime, utc_now

from .enums import ItemKind


class GoalItem(SQLModel, table=True):
    """
    GoalItem entity - never deleted while its goal is active.
    """

    __tablename__ = "goal_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    goal_id: UUID = Field(foreign_key="goals.id", nullable=False, index=True)
    name: str = Field(max_length=255)
    kind: ItemKind = Field(default=ItemKind.app)
    identifier: str = Field(max_length=255)
    added_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False)
    )

    __table_args__ = (UniqueConstraint("goal_id", "identifier", name="uq_goal_item_identifier"),)
