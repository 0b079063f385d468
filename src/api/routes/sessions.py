from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.api.utils.api_key import verify_api_key
from src.app.use_cases.locks import (
    CommitmentLockUseCase,
    LockSessionCommand,
    SessionLockResponse,
    UnlockSessionCommand,
)
from src.app.use_cases.sessions import (
    ActiveSessionResponse,
    CreateSessionCommand,
    CreateSessionUseCase,
    ManageSessionUseCase,
    SessionAuditUseCase,
    SessionLogResponse,
    SessionResponse,
    SetEnabledCommand,
    StartSessionUseCase,
    UpdateSessionCommand,
)
from src.depends import EngineContext

router = APIRouter(prefix="/sessions", tags=["Sessions"], dependencies=[Depends(verify_api_key)])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SessionResponse)
async def create_session(command: CreateSessionCommand, ctx: EngineContext = Depends()):
    """
    Create Session

    Raises:
        - 422: invalid schedule, window shorter than 5 minutes, empty target,
          invalid challenge parameter
    """
    result = await CreateSessionUseCase(ctx.uow).execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("", response_model=List[SessionResponse])
async def list_sessions(ctx: EngineContext = Depends()):
    result = await ManageSessionUseCase(ctx.uow, ctx.clock, ctx.lock).list_sessions()
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: UUID, ctx: EngineContext = Depends()):
    result = await ManageSessionUseCase(ctx.uow, ctx.clock, ctx.lock).get_session(session_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.patch("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: UUID, command: UpdateSessionCommand, ctx: EngineContext = Depends()
):
    """
    Update Session

    Raises:
        - 409 SESSION_LOCKED: commitment lock in force
        - 409 SESSION_ENFORCED: session is currently enforced
    """
    result = await ManageSessionUseCase(ctx.uow, ctx.clock, ctx.lock).update_session(
        session_id, command
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID, ctx: EngineContext = Depends()):
    result = await ManageSessionUseCase(ctx.uow, ctx.clock, ctx.lock).delete_session(session_id)
    if result.is_err():
        raise to_http_error(result.error)


@router.put("/{session_id}/enabled", response_model=SessionResponse)
async def set_enabled(session_id: UUID, command: SetEnabledCommand, ctx: EngineContext = Depends()):
    result = await ManageSessionUseCase(ctx.uow, ctx.clock, ctx.lock).set_enabled(
        session_id, command.is_enabled
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/{session_id}/start", response_model=ActiveSessionResponse)
async def start_session(session_id: UUID, ctx: EngineContext = Depends()):
    """
    Start Session

    Raises:
        - 409 ALREADY_ACTIVE: a session is already enforced
        - 409 ON_COOLDOWN: session was overridden recently
        - 422 OUTSIDE_WINDOW / SESSION_DISABLED
    """
    use_case = StartSessionUseCase(
        ctx.uow, ctx.clock, ctx.lock, ctx.policy, ctx.publisher, ctx.tracker
    )
    result = await use_case.execute(session_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/{session_id}/lock", response_model=SessionLockResponse)
async def lock_session(
    session_id: UUID, command: LockSessionCommand, ctx: EngineContext = Depends()
):
    use_case = CommitmentLockUseCase(ctx.uow, ctx.clock, ctx.lock)
    result = await use_case.lock_session(session_id, command.duration_days, command.phrase)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/{session_id}/unlock", response_model=SessionLockResponse)
async def unlock_session(
    session_id: UUID, command: UnlockSessionCommand, ctx: EngineContext = Depends()
):
    use_case = CommitmentLockUseCase(ctx.uow, ctx.clock, ctx.lock)
    result = await use_case.unlock_session(session_id, command.phrase)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/{session_id}/logs", response_model=List[SessionLogResponse])
async def list_session_logs(
    session_id: UUID,
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    ctx: EngineContext = Depends(),
):
    result = await SessionAuditUseCase(ctx.uow, ctx.clock).list_session_logs(
        session_id, since, until
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
