"""
Temporary Unlock Use Case

Short exemptions for single identifiers, independent of session state.
"""

import logging
import math
from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.errors import INVALID_TARGET, INVALID_UNLOCK_DURATION, NO_GRANT
from src.app.services.clock import Clock
from src.app.services.sweeps import purge_expired_grants
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.base import WHOLE_DEVICE
from src.domain.entities import TemporaryUnlockGrant

from .dtos import UnlockGrantResponse

logger = logging.getLogger(__name__)


class TemporaryUnlockUseCase:
    """
    Use case for temporary unlock grants.

    Business Rules:
    - Liveness is recomputed from granted_at on every read, never counted down
    - Granting again replaces the previous grant (granted_at = now)
    - Extending keeps granted_at and adds minutes to a live grant only
    - Expired grants found on the way are deleted
    - Grants name one identifier; the whole-device target is only ever
      unlocked by an emergency override
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @staticmethod
    def _check_identifier(identifier: str) -> Optional[Error]:
        if not identifier.strip() or identifier.strip() == WHOLE_DEVICE:
            return Error(
                INVALID_TARGET,
                "Unlocks apply to a single app or website",
                reason=f"{identifier!r} is not a grantable identifier",
            )
        return None

    @persistence_guard
    async def grant(self, identifier: str, minutes: int) -> Result[UnlockGrantResponse]:
        error = self._check_identifier(identifier)
        if error:
            return Return.err(error)
        if minutes < 1:
            return Return.err(
                Error(INVALID_UNLOCK_DURATION, "Unlock duration must be at least one minute")
            )

        now = self.clock.now()
        async with self.uow:
            grant = await self.uow.grants.save(
                TemporaryUnlockGrant(
                    identifier=identifier, granted_at=now, duration_minutes=minutes
                )
            )
            response = UnlockGrantResponse.from_entity(grant, now)
            await self.uow.commit()

        logger.info("Unlock granted: identifier=%s minutes=%d", identifier, minutes)
        return Return.ok(response)

    @persistence_guard
    async def is_active(self, identifier: str) -> Result[bool]:
        now = self.clock.now()
        async with self.uow:
            grant = await self.uow.grants.get(identifier)
            if grant is None:
                return Return.ok(False)
            if grant.is_live(now):
                return Return.ok(True)

            await self.uow.grants.delete(identifier)
            await self.uow.commit()
            return Return.ok(False)

    @persistence_guard
    async def extend(self, identifier: str, extra_minutes: int) -> Result[UnlockGrantResponse]:
        error = self._check_identifier(identifier)
        if error:
            return Return.err(error)
        if extra_minutes < 1:
            return Return.err(
                Error(INVALID_UNLOCK_DURATION, "Extension must be at least one minute")
            )

        now = self.clock.now()
        async with self.uow:
            grant = await self.uow.grants.get(identifier)
            if grant is None or not grant.is_live(now):
                return Return.err(Error(NO_GRANT, f"No live unlock for {identifier}"))

            grant.duration_minutes += extra_minutes
            grant = await self.uow.grants.save(grant)
            response = UnlockGrantResponse.from_entity(grant, now)
            await self.uow.commit()

        logger.info("Unlock extended: identifier=%s extra=%d", identifier, extra_minutes)
        return Return.ok(response)

    @persistence_guard
    async def remaining_minutes(self, identifier: str) -> Result[int]:
        """Whole minutes left, rounded up; 0 when there is no live grant."""
        now = self.clock.now()
        async with self.uow:
            grant = await self.uow.grants.get(identifier)
            if grant is None or not grant.is_live(now):
                return Return.ok(0)
            return Return.ok(math.ceil(grant.remaining_seconds(now) / 60))

    @persistence_guard
    async def list_active(self) -> Result[List[UnlockGrantResponse]]:
        now = self.clock.now()
        async with self.uow:
            grants = await self.uow.grants.list_all()
            return Return.ok(
                [UnlockGrantResponse.from_entity(g, now) for g in grants if g.is_live(now)]
            )

    @persistence_guard
    async def revoke(self, identifier: str) -> Result[bool]:
        async with self.uow:
            removed = await self.uow.grants.delete(identifier)
            await self.uow.commit()

        if removed:
            logger.info("Unlock revoked: identifier=%s", identifier)
        return Return.ok(removed)

    @persistence_guard
    async def purge_expired(self) -> Result[int]:
        now = self.clock.now()
        async with self.uow:
            purged = await purge_expired_grants(self.uow, now)
            await self.uow.commit()
        return Return.ok(purged)
