from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.api.utils.api_key import verify_api_key
from src.app.use_cases.locks import CommitmentLockUseCase
from src.app.use_cases.sessions import (
    ActiveSessionResponse,
    BlockedResponse,
    DecisionResponse,
    EnforcementQueryUseCase,
    EvaluateTickUseCase,
    RecoverSessionsUseCase,
    RecoveryResponse,
    SessionAuditUseCase,
    TickResponse,
)
from src.depends import EngineContext

router = APIRouter(
    prefix="/enforcement", tags=["Enforcement"], dependencies=[Depends(verify_api_key)]
)


class AccessRequest(BaseModel):
    identifier: str = Field(min_length=1, max_length=255)


class BypassResponse(BaseModel):
    bypass_attempts: int


class AccessResponse(BaseModel):
    accessed_identifiers: List[str]


class ClearedLocksResponse(BaseModel):
    cleared: int


@router.get("/active", response_model=Optional[ActiveSessionResponse])
async def get_active_session(ctx: EngineContext = Depends()):
    result = await EnforcementQueryUseCase(ctx.uow, ctx.clock).get_active_session()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/blocked", response_model=BlockedResponse)
async def is_blocked(identifier: str, ctx: EngineContext = Depends()):
    result = await EnforcementQueryUseCase(ctx.uow, ctx.clock).is_blocked(identifier)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/decisions", response_model=List[DecisionResponse])
async def current_decisions(ctx: EngineContext = Depends()):
    result = await EnforcementQueryUseCase(ctx.uow, ctx.clock).current_decisions()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tick", response_model=TickResponse)
async def evaluate_tick(ctx: EngineContext = Depends()):
    """
    Evaluate Tick

    Runs one evaluation immediately, outside the periodic schedule.

    Raises:
        - 409 TICK_SKIPPED: engine busy for longer than the tick timeout
    """
    use_case = EvaluateTickUseCase(
        ctx.uow, ctx.clock, ctx.lock, ctx.policy, ctx.publisher, ctx.tracker
    )
    result = await use_case.execute()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/recover", response_model=RecoveryResponse)
async def recover(ctx: EngineContext = Depends()):
    result = await RecoverSessionsUseCase(ctx.uow, ctx.clock, ctx.lock, ctx.tracker).execute()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/clear-expired-locks", response_model=ClearedLocksResponse)
async def clear_expired_locks(ctx: EngineContext = Depends()):
    result = await CommitmentLockUseCase(ctx.uow, ctx.clock, ctx.lock).clear_expired()
    if result.is_err():
        raise to_http_error(result.error)
    return {"cleared": result.value}


@router.post("/bypass-attempts", response_model=BypassResponse)
async def record_bypass_attempt(ctx: EngineContext = Depends()):
    result = await SessionAuditUseCase(ctx.uow, ctx.clock).record_bypass_attempt()
    if result.is_err():
        raise to_http_error(result.error)
    return {"bypass_attempts": result.value}


@router.post("/accesses", response_model=AccessResponse)
async def record_identifier_access(request: AccessRequest, ctx: EngineContext = Depends()):
    result = await SessionAuditUseCase(ctx.uow, ctx.clock).record_identifier_access(
        request.identifier
    )
    if result.is_err():
        raise to_http_error(result.error)
    return {"accessed_identifiers": result.value}
