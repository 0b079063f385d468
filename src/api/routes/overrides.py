from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.api.utils.api_key import verify_api_key
from src.app.use_cases.overrides import (
    ChallengeStatusResponse,
    EmergencyOverrideUseCase,
    OverrideCommand,
    OverrideResponse,
)
from src.depends import EngineContext

router = APIRouter(
    prefix="/overrides/{session_id}",
    tags=["Emergency Override"],
    dependencies=[Depends(verify_api_key)],
)


def _use_case(ctx: EngineContext) -> EmergencyOverrideUseCase:
    return EmergencyOverrideUseCase(
        ctx.uow, ctx.clock, ctx.lock, ctx.policy, ctx.tracker, ctx.publisher
    )


@router.post("/challenge", response_model=ChallengeStatusResponse)
async def begin_challenge(session_id: UUID, ctx: EngineContext = Depends()):
    result = await _use_case(ctx).begin_challenge(session_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/challenge", response_model=ChallengeStatusResponse)
async def challenge_status(session_id: UUID, ctx: EngineContext = Depends()):
    result = await _use_case(ctx).challenge_status(session_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/challenge/actions", response_model=ChallengeStatusResponse)
async def record_action(session_id: UUID, ctx: EngineContext = Depends()):
    result = await _use_case(ctx).record_action(session_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/challenge", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_challenge(session_id: UUID, ctx: EngineContext = Depends()):
    result = await _use_case(ctx).cancel_challenge(session_id)
    if result.is_err():
        raise to_http_error(result.error)


@router.post("", response_model=OverrideResponse)
async def request_override(
    session_id: UUID, command: OverrideCommand, ctx: EngineContext = Depends()
):
    """
    Request Emergency Override

    Raises:
        - 409 CHALLENGE_INCOMPLETE: wait or actions not finished
        - 409 NOT_ENFORCED: session is not the enforced one
    """
    result = await _use_case(ctx).request_override(session_id, command.reason, command.note)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
