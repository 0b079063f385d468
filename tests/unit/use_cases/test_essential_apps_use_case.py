"""
Unit tests for Essential Apps Use Case
"""

import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.essential_apps import AddEssentialAppCommand, EssentialAppsUseCase
from src.domain.entities import SYSTEM_ESSENTIALS, EssentialApp, SessionKind


@pytest.mark.asyncio
async def test_add_essential_app(mock_uow):
    mock_uow.essential_apps.get_by_identifier = AsyncMock(return_value=None)
    mock_uow.essential_apps.create = AsyncMock(side_effect=lambda a: a)

    command = AddEssentialAppCommand(
        display_name="Maps",
        identifier="com.google.android.apps.maps",
        allowed_session_kinds=[SessionKind.duration],
    )
    result = await EssentialAppsUseCase(mock_uow).add(command)

    assert result.is_ok()
    assert result.value.identifier == "com.google.android.apps.maps"
    assert result.value.is_system_defined is False
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_add_duplicate_essential_app(mock_uow):
    mock_uow.essential_apps.get_by_identifier = AsyncMock(
        return_value=EssentialApp(display_name="Maps", identifier="maps")
    )
    mock_uow.essential_apps.create = AsyncMock()

    result = await EssentialAppsUseCase(mock_uow).add(
        AddEssentialAppCommand(display_name="Maps", identifier="maps")
    )

    assert result.is_err()
    assert result.error.code == "DUPLICATE_ESSENTIAL_APP"
    mock_uow.essential_apps.create.assert_not_called()


@pytest.mark.asyncio
async def test_add_rejects_whole_device_marker(mock_uow):
    result = await EssentialAppsUseCase(mock_uow).add(
        AddEssentialAppCommand(display_name="All", identifier="*")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_TARGET"


@pytest.mark.asyncio
async def test_remove_system_defined_app_refused(mock_uow):
    app = EssentialApp(
        display_name="Emergency SOS", identifier="com.android.emergency", is_system_defined=True
    )
    mock_uow.essential_apps.get_by_identifier = AsyncMock(return_value=app)
    mock_uow.essential_apps.delete = AsyncMock()

    result = await EssentialAppsUseCase(mock_uow).remove("com.android.emergency")

    assert result.is_err()
    assert result.error.code == "SYSTEM_ESSENTIAL_APP"
    mock_uow.essential_apps.delete.assert_not_called()


@pytest.mark.asyncio
async def test_is_exempt_depends_on_session_kind(mock_uow):
    app = EssentialApp(
        display_name="Settings",
        identifier="com.android.settings",
        allowed_session_kinds=[SessionKind.recurring_window.value],
    )
    mock_uow.essential_apps.get_by_identifier = AsyncMock(return_value=app)
    use_case = EssentialAppsUseCase(mock_uow)

    assert (await use_case.is_exempt("com.android.settings", SessionKind.recurring_window)).value
    assert not (await use_case.is_exempt("com.android.settings", SessionKind.duration)).value


@pytest.mark.asyncio
async def test_is_exempt_unknown_identifier(mock_uow):
    mock_uow.essential_apps.get_by_identifier = AsyncMock(return_value=None)

    result = await EssentialAppsUseCase(mock_uow).is_exempt("com.instagram", SessionKind.duration)

    assert result.value is False


@pytest.mark.asyncio
async def test_seed_skips_existing_entries(mock_uow):
    existing = SYSTEM_ESSENTIALS[0][1]

    async def lookup(identifier):
        if identifier == existing:
            return EssentialApp(display_name="x", identifier=identifier, is_system_defined=True)
        return None

    mock_uow.essential_apps.get_by_identifier = AsyncMock(side_effect=lookup)
    mock_uow.essential_apps.create = AsyncMock(side_effect=lambda a: a)

    result = await EssentialAppsUseCase(mock_uow).seed_system_defaults()

    assert result.value == len(SYSTEM_ESSENTIALS) - 1
    created = [call.args[0] for call in mock_uow.essential_apps.create.call_args_list]
    assert all(app.is_system_defined for app in created)
    assert existing not in {app.identifier for app in created}
