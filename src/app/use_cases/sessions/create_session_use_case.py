"""
Create Session Use Case
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.entities import BrickSession

from .dtos import CreateSessionCommand, SessionResponse
from .validation import to_definition

logger = logging.getLogger(__name__)


class CreateSessionUseCase:
    """
    Use case for defining a new session.

    Business Rules:
    - Windows are at least 5 minutes with start != end (midnight wrap allowed)
    - Active days are a non-empty subset of 1..7
    - Duration between 1 and 1440 minutes
    - Identifier-set targets are non-empty
    - allow_emergency_override is always true
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @persistence_guard
    async def execute(self, command: CreateSessionCommand) -> Result[SessionResponse]:
        definition = to_definition(command.schedule, command.target, command.challenge)
        if isinstance(definition, Error):
            return Return.err(definition)
        schedule, target, challenge = definition

        session = BrickSession(
            name=command.name,
            kind=schedule.kind,
            is_enabled=command.is_enabled,
            challenge_type=challenge.type,
            challenge_param=challenge.param,
            allow_emergency_override=True,
        )
        session.apply_schedule(schedule)
        session.apply_target(target)

        async with self.uow:
            session = await self.uow.sessions.create(session)
            response = SessionResponse.from_entity(session)
            await self.uow.commit()

        logger.info("Session created: session=%s kind=%s", response.id, response.kind.value)
        return Return.ok(response)
