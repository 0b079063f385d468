"""
Essential-App Registry Use Case

Identifiers that stay reachable while a session is enforced.
"""

import logging
from typing import List

from libs.result import Error, Result, Return
from src.app.errors import (
    DUPLICATE_ESSENTIAL_APP,
    ESSENTIAL_APP_NOT_FOUND,
    INVALID_TARGET,
    SYSTEM_ESSENTIAL_APP,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.guards import persistence_guard
from src.domain.base import WHOLE_DEVICE
from src.domain.entities import SYSTEM_ESSENTIALS, EssentialApp, SessionKind

from .dtos import AddEssentialAppCommand, EssentialAppResponse

logger = logging.getLogger(__name__)


class EssentialAppsUseCase:
    """
    Use case for the essential-app registry.

    Business Rules:
    - Exemption is read from storage on every call, never cached
    - An app is exempt under a kind listed in its allowed kinds (empty = all)
    - Identifiers are unique; system-defined entries cannot be removed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @persistence_guard
    async def is_exempt(self, identifier: str, session_kind: SessionKind) -> Result[bool]:
        async with self.uow:
            app = await self.uow.essential_apps.get_by_identifier(identifier)
            return Return.ok(app is not None and app.allows(session_kind))

    @persistence_guard
    async def list_apps(self) -> Result[List[EssentialAppResponse]]:
        async with self.uow:
            apps = await self.uow.essential_apps.list_all()
            return Return.ok([EssentialAppResponse.from_entity(app) for app in apps])

    @persistence_guard
    async def add(self, command: AddEssentialAppCommand) -> Result[EssentialAppResponse]:
        identifier = command.identifier.strip()
        if not identifier or identifier == WHOLE_DEVICE:
            return Return.err(Error(INVALID_TARGET, f"Invalid identifier: {command.identifier!r}"))

        async with self.uow:
            if await self.uow.essential_apps.get_by_identifier(identifier):
                return Return.err(
                    Error(DUPLICATE_ESSENTIAL_APP, f"{identifier} is already an essential app")
                )

            app = await self.uow.essential_apps.create(
                EssentialApp(
                    display_name=command.display_name,
                    identifier=identifier,
                    is_system_defined=False,
                    allowed_session_kinds=[kind.value for kind in command.allowed_session_kinds],
                )
            )
            response = EssentialAppResponse.from_entity(app)
            await self.uow.commit()

        logger.info("Essential app added: %s", identifier)
        return Return.ok(response)

    @persistence_guard
    async def remove(self, identifier: str) -> Result[None]:
        async with self.uow:
            app = await self.uow.essential_apps.get_by_identifier(identifier)
            if not app:
                return Return.err(Error(ESSENTIAL_APP_NOT_FOUND, "Essential app not found"))
            if app.is_system_defined:
                logger.warning("Refused removal of system essential app %s", identifier)
                return Return.err(
                    Error(SYSTEM_ESSENTIAL_APP, "System-defined essential apps cannot be removed")
                )

            await self.uow.essential_apps.delete(app)
            await self.uow.commit()

        logger.info("Essential app removed: %s", identifier)
        return Return.ok(None)

    @persistence_guard
    async def seed_system_defaults(self) -> Result[int]:
        """Insert the built-in entries that are missing; returns how many were added."""
        added = 0
        async with self.uow:
            for display_name, identifier, kinds in SYSTEM_ESSENTIALS:
                if await self.uow.essential_apps.get_by_identifier(identifier):
                    continue
                await self.uow.essential_apps.create(
                    EssentialApp(
                        display_name=display_name,
                        identifier=identifier,
                        is_system_defined=True,
                        allowed_session_kinds=list(kinds),
                    )
                )
                added += 1
            await self.uow.commit()

        if added:
            logger.info("Seeded %d system essential apps", added)
        return Return.ok(added)
