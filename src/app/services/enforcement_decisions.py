"""
Per-identifier enforcement rules.

Order of precedence for one identifier:
1. a live temporary unlock grant lets it through, whatever restricts it
2. an essential app allowed under the enforced session's kind lets it through
3. the enforced session's target, then every active unexpired goal, restrict it

Exemptions are read from storage on every call, never cached, so registry
edits apply to a running session immediately.
"""

from datetime import datetime
from typing import List, Optional, Set

from src.app.services.enforcement_sink import EnforcementDecision
from src.app.services.session_transitions import find_enforced
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import WHOLE_DEVICE
from src.domain.entities import (
    BrickSession,
    DecisionSource,
    SessionKind,
    WholeDevice,
)


async def live_grant_identifiers(uow: UnitOfWork, now: datetime) -> Set[str]:
    """Identifiers with a live grant; expired grants met on the way are deleted."""
    live = set()
    for grant in await uow.grants.list_all():
        if grant.is_live(now):
            live.add(grant.identifier)
        else:
            await uow.grants.delete(grant.identifier)
    return live


async def exempt_identifiers(uow: UnitOfWork, kind: SessionKind) -> Set[str]:
    return {app.identifier for app in await uow.essential_apps.list_all() if app.allows(kind)}


async def enforced_session(uow: UnitOfWork) -> Optional[BrickSession]:
    record = await find_enforced(uow)
    if record is None:
        return None
    return await uow.sessions.get_by_id(record.session_id)


async def build_decisions(uow: UnitOfWork, now: datetime) -> List[EnforcementDecision]:
    decisions: List[EnforcementDecision] = []
    granted = await live_grant_identifiers(uow, now)

    session = await enforced_session(uow)
    if session is not None:
        exempt = await exempt_identifiers(uow, session.kind)
        target = session.target
        if isinstance(target, WholeDevice):
            decisions.append(
                EnforcementDecision(
                    target=WHOLE_DEVICE,
                    active=WHOLE_DEVICE not in granted,
                    source=DecisionSource.session,
                    session_id=session.id,
                    challenge=session.challenge,
                    exempt=tuple(sorted((exempt | granted) - {WHOLE_DEVICE})),
                )
            )
        else:
            for identifier in target.identifiers:
                decisions.append(
                    EnforcementDecision(
                        target=identifier,
                        active=identifier not in exempt and identifier not in granted,
                        source=DecisionSource.session,
                        session_id=session.id,
                        challenge=session.challenge,
                    )
                )

    for goal in await uow.goals.list_goals(active_only=True):
        if goal.is_expired(now):
            continue
        for item in await uow.goals.get_items(goal.id):
            decisions.append(
                EnforcementDecision(
                    target=item.identifier,
                    active=item.identifier not in granted,
                    source=DecisionSource.goal,
                    goal_id=goal.id,
                )
            )

    return decisions


async def is_identifier_blocked(uow: UnitOfWork, identifier: str, now: datetime) -> bool:
    grant = await uow.grants.get(identifier)
    if grant is not None:
        if grant.is_live(now):
            return False
        await uow.grants.delete(identifier)

    session = await enforced_session(uow)
    if session is not None:
        exempt = await exempt_identifiers(uow, session.kind)
        target = session.target
        if isinstance(target, WholeDevice):
            whole_device_grant = await uow.grants.get(WHOLE_DEVICE)
            device_unlocked = whole_device_grant is not None and whole_device_grant.is_live(now)
            if not device_unlocked and identifier not in exempt:
                return True
        elif identifier in target.identifiers and identifier not in exempt:
            return True

    for goal in await uow.goals.list_goals(active_only=True):
        if goal.is_expired(now):
            continue
        if any(item.identifier == identifier for item in await uow.goals.get_items(goal.id)):
            return True

    return False
