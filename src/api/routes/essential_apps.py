from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import to_http_error
from src.api.utils.api_key import verify_api_key
from src.app.use_cases.essential_apps import (
    AddEssentialAppCommand,
    EssentialAppResponse,
    EssentialAppsUseCase,
)
from src.depends import get_unit_of_work
from src.domain.entities import SessionKind

router = APIRouter(
    prefix="/essential-apps", tags=["Essential Apps"], dependencies=[Depends(verify_api_key)]
)


class ExemptResponse(BaseModel):
    identifier: str
    session_kind: SessionKind
    exempt: bool


class SeedResponse(BaseModel):
    added: int


@router.get("", response_model=List[EssentialAppResponse])
async def list_essential_apps(uow=Depends(get_unit_of_work)):
    result = await EssentialAppsUseCase(uow).list_apps()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=EssentialAppResponse)
async def add_essential_app(command: AddEssentialAppCommand, uow=Depends(get_unit_of_work)):
    result = await EssentialAppsUseCase(uow).add(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/seed", response_model=SeedResponse)
async def seed_system_defaults(uow=Depends(get_unit_of_work)):
    result = await EssentialAppsUseCase(uow).seed_system_defaults()
    if result.is_err():
        raise to_http_error(result.error)
    return {"added": result.value}


@router.get("/{identifier}/exempt", response_model=ExemptResponse)
async def is_exempt(identifier: str, session_kind: SessionKind, uow=Depends(get_unit_of_work)):
    result = await EssentialAppsUseCase(uow).is_exempt(identifier, session_kind)
    if result.is_err():
        raise to_http_error(result.error)
    return {"identifier": identifier, "session_kind": session_kind, "exempt": result.value}


@router.delete("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_essential_app(identifier: str, uow=Depends(get_unit_of_work)):
    """
    Remove Essential App

    Raises:
        - 404 ESSENTIAL_APP_NOT_FOUND
        - 409 SYSTEM_ESSENTIAL_APP: built-in entries stay
    """
    result = await EssentialAppsUseCase(uow).remove(identifier)
    if result.is_err():
        raise to_http_error(result.error)
