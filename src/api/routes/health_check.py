from fastapi import APIRouter, status

from src.depends import engine_lock

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "ok", "engine_busy": engine_lock.locked}
