from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple
from uuid import UUID

from src.domain.entities import ChallengeConfig, DecisionSource


@dataclass(frozen=True)
class EnforcementDecision:
    """
    Whether one target is restricted right now.

    target is an app/site identifier or WHOLE_DEVICE. exempt lists the
    identifiers a whole-device decision lets through.
    """

    target: str
    active: bool
    source: DecisionSource
    session_id: Optional[UUID] = None
    goal_id: Optional[UUID] = None
    challenge: Optional[ChallengeConfig] = None
    exempt: Tuple[str, ...] = field(default_factory=tuple)


class EnforcementSink(ABC):
    """Consumer of enforcement decisions (the blocking overlay)"""

    @abstractmethod
    async def on_enforcement_changed(self, decision: EnforcementDecision) -> None:
        """Called once per decision whose state changed since the last push"""
        pass
