"""
Enforcement Query Use Case

Read side of the state machine, used by the blocking overlay.
"""

from typing import List, Optional

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.enforcement_decisions import build_decisions, is_identifier_blocked
from src.app.services.session_transitions import find_enforced
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard

from .dtos import ActiveSessionResponse, BlockedResponse, DecisionResponse


class EnforcementQueryUseCase:
    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @persistence_guard
    async def is_blocked(self, identifier: str) -> Result[BlockedResponse]:
        now = self.clock.now()
        async with self.uow:
            blocked = await is_identifier_blocked(self.uow, identifier, now)
            # Expired grants met during the check are dropped
            await self.uow.commit()
        return Return.ok(BlockedResponse(identifier=identifier, blocked=blocked))

    @persistence_guard
    async def get_active_session(self) -> Result[Optional[ActiveSessionResponse]]:
        """The enforced session, or None. Remaining time is clamped at zero until the next tick."""
        now = self.clock.now()
        async with self.uow:
            record = await find_enforced(self.uow)
            if record is None:
                return Return.ok(None)
            session = await self.uow.sessions.get_by_id(record.session_id)
            return Return.ok(ActiveSessionResponse.from_record(session, record, now))

    @persistence_guard
    async def current_decisions(self) -> Result[List[DecisionResponse]]:
        now = self.clock.now()
        async with self.uow:
            decisions = await build_decisions(self.uow, now)
            await self.uow.commit()
        return Return.ok([DecisionResponse.from_decision(d) for d in decisions])
