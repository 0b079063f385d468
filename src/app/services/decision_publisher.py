import logging
from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from src.app.services.enforcement_decisions import build_decisions
from src.app.services.enforcement_sink import EnforcementDecision, EnforcementSink
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.entities import DecisionSource

logger = logging.getLogger(__name__)

DecisionKey = Tuple[DecisionSource, str]


class DecisionPublisher:
    """
    Pushes decisions to the sink only when they change.

    Remembers the last pushed decision per (source, target); a target that
    disappears from the decision list is pushed once more as inactive. The
    memory is volatile, so after a restart everything is pushed again.
    """

    def __init__(self, sink: EnforcementSink):
        self.sink = sink
        self._last: Dict[DecisionKey, EnforcementDecision] = {}

    async def publish(self, decisions: Iterable[EnforcementDecision]) -> List[EnforcementDecision]:
        current: Dict[DecisionKey, EnforcementDecision] = {}
        for decision in decisions:
            key = (decision.source, decision.target)
            previous = current.get(key)
            # Two goals blocking the same identifier collapse to one decision
            if previous is None or (decision.active and not previous.active):
                current[key] = decision

        changed: List[EnforcementDecision] = []
        for key, decision in current.items():
            if self._last.get(key) != decision:
                changed.append(decision)

        for key, previous in self._last.items():
            if key not in current and previous.active:
                changed.append(
                    EnforcementDecision(
                        target=previous.target,
                        active=False,
                        source=previous.source,
                        session_id=previous.session_id,
                        goal_id=previous.goal_id,
                        challenge=previous.challenge,
                    )
                )

        for decision in changed:
            logger.debug(
                "Enforcement changed: target=%s active=%s source=%s",
                decision.target,
                decision.active,
                decision.source.value,
            )
            await self.sink.on_enforcement_changed(decision)

        self._last = current
        return changed

    async def refresh(
        self, uow: UnitOfWork, now: datetime
    ) -> Tuple[List[EnforcementDecision], List[EnforcementDecision]]:
        """Rebuild decisions from committed state and push what changed; returns (all, changed)."""
        async with uow:
            decisions = await build_decisions(uow, now)
            # build_decisions drops expired grants it meets
            await uow.commit()
        changed = await self.publish(decisions)
        return decisions, changed

    async def refresh_after_commit(
        self, uow: UnitOfWork, now: datetime
    ) -> Tuple[List[EnforcementDecision], List[EnforcementDecision]]:
        """
        Like refresh, for callers whose own transaction already committed.

        A storage failure here must not turn a durable transition into an
        error for the caller; it is logged and the next tick publishes.
        """
        try:
            return await self.refresh(uow, now)
        except PersistenceError:
            logger.exception("Publishing decisions failed after commit, next tick retries")
            return [], []
