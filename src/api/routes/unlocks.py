from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import to_http_error
from src.api.utils.api_key import verify_api_key
from src.app.use_cases.unlocks import (
    ExtendUnlockCommand,
    GrantUnlockCommand,
    TemporaryUnlockUseCase,
    UnlockGrantResponse,
)
from src.depends import EngineContext

router = APIRouter(
    prefix="/unlocks", tags=["Temporary Unlocks"], dependencies=[Depends(verify_api_key)]
)


class UnlockStatusResponse(BaseModel):
    identifier: str
    active: bool
    remaining_minutes: int


class PurgeResponse(BaseModel):
    purged: int


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UnlockGrantResponse)
async def grant_unlock(command: GrantUnlockCommand, ctx: EngineContext = Depends()):
    use_case = TemporaryUnlockUseCase(ctx.uow, ctx.clock)
    result = await use_case.grant(command.identifier, command.minutes)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("", response_model=List[UnlockGrantResponse])
async def list_active_unlocks(ctx: EngineContext = Depends()):
    result = await TemporaryUnlockUseCase(ctx.uow, ctx.clock).list_active()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/purge", response_model=PurgeResponse)
async def purge_expired(ctx: EngineContext = Depends()):
    result = await TemporaryUnlockUseCase(ctx.uow, ctx.clock).purge_expired()
    if result.is_err():
        raise to_http_error(result.error)
    return {"purged": result.value}


@router.get("/{identifier}", response_model=UnlockStatusResponse)
async def unlock_status(identifier: str, ctx: EngineContext = Depends()):
    use_case = TemporaryUnlockUseCase(ctx.uow, ctx.clock)
    active = await use_case.is_active(identifier)
    if active.is_err():
        raise to_http_error(active.error)
    remaining = await use_case.remaining_minutes(identifier)
    if remaining.is_err():
        raise to_http_error(remaining.error)
    return {"identifier": identifier, "active": active.value, "remaining_minutes": remaining.value}


@router.post("/{identifier}/extend", response_model=UnlockGrantResponse)
async def extend_unlock(
    identifier: str, command: ExtendUnlockCommand, ctx: EngineContext = Depends()
):
    use_case = TemporaryUnlockUseCase(ctx.uow, ctx.clock)
    result = await use_case.extend(identifier, command.extra_minutes)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_unlock(identifier: str, ctx: EngineContext = Depends()):
    result = await TemporaryUnlockUseCase(ctx.uow, ctx.clock).revoke(identifier)
    if result.is_err():
        raise to_http_error(result.error)
