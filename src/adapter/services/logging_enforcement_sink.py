import logging
from typing import Dict, List

from src.app.services.enforcement_sink import EnforcementDecision, EnforcementSink

logger = logging.getLogger(__name__)


class LoggingEnforcementSink(EnforcementSink):
    """
    Default sink: logs every change and keeps the latest decision per target.

    The overlay process polls /enforcement instead of being pushed to, so this
    is the in-process end of the line.
    """

    def __init__(self) -> None:
        self.latest: Dict[str, EnforcementDecision] = {}
        self.history: List[EnforcementDecision] = []

    async def on_enforcement_changed(self, decision: EnforcementDecision) -> None:
        self.latest[f"{decision.source.value}:{decision.target}"] = decision
        self.history.append(decision)
        logger.info(
            "Enforcement %s: target=%s source=%s session=%s goal=%s",
            "on" if decision.active else "off",
            decision.target,
            decision.source.value,
            decision.session_id,
            decision.goal_id,
        )
