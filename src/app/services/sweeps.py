"""
Housekeeping run at startup and at the top of every tick.

Each sweep only stages changes on the unit of work; the caller commits.
"""

import logging
from datetime import datetime
from typing import List

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Goal

logger = logging.getLogger(__name__)


async def clear_expired_locks(uow: UnitOfWork, now: datetime) -> int:
    sessions = await uow.sessions.list_with_expired_locks(now)
    for session in sessions:
        session.clear_lock()
        await uow.sessions.update(session)
        logger.info("Commitment lock expired: session=%s", session.id)
    return len(sessions)


async def expire_goals(uow: UnitOfWork, now: datetime) -> List[Goal]:
    expired = []
    for goal in await uow.goals.list_goals(active_only=True):
        if goal.is_expired(now):
            goal.is_active = False
            goal.completed_at = now
            await uow.goals.update(goal)
            expired.append(goal)
            logger.info("Goal completed: goal=%s name=%s", goal.id, goal.name)
    return expired


async def purge_expired_grants(uow: UnitOfWork, now: datetime) -> int:
    purged = 0
    for grant in await uow.grants.list_all():
        if not grant.is_live(now):
            await uow.grants.delete(grant.identifier)
            purged += 1
    if purged:
        logger.debug("Purged %d expired unlock grants", purged)
    return purged
