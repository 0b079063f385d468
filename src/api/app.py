import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.error(f"Server error: {exc.base_error.code} ({exc.base_error.reason})")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def startup_engine():
    """
    Bring persisted state in line with the clock before serving.

    Order matters: tables, built-in essential apps, then recovery (which also
    clears expired commitment locks).
    """
    from src import depends
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.app.use_cases.essential_apps import EssentialAppsUseCase
    from src.app.use_cases.sessions import RecoverSessionsUseCase

    async with depends.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with depends.AsyncSessionLocal() as session:
        uow = SqlAlchemyUnitOfWork(session)
        seeded = await EssentialAppsUseCase(uow).seed_system_defaults()
        if seeded.is_err():
            logger.error("Seeding essential apps failed: %s", seeded.error.message)

        recovery = await RecoverSessionsUseCase(
            uow, depends.clock, depends.engine_lock, depends.tracker
        ).execute()
        if recovery.is_err():
            logger.error("Startup recovery failed: %s", recovery.error.message)


def build_ticker(interval: float):
    from src import depends
    from src.adapter.services.periodic_ticker import PeriodicTicker
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.app.use_cases.sessions import EvaluateTickUseCase

    async def tick():
        async with depends.AsyncSessionLocal() as session:
            use_case = EvaluateTickUseCase(
                SqlAlchemyUnitOfWork(session),
                depends.clock,
                depends.engine_lock,
                depends.policy,
                depends.publisher,
                depends.tracker,
            )
            return await use_case.execute()

    return PeriodicTicker(tick, interval)


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup_engine()
        ticker = None
        if ApplicationConfig.TICK_ENABLED:
            ticker = build_ticker(ApplicationConfig.TICK_INTERVAL_SECONDS)
            ticker.start()
        yield
        if ticker is not None:
            await ticker.stop()

    app = FastAPI(title="Brick Engine", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        enforcement,
        essential_apps,
        goals,
        health_check,
        overrides,
        sessions,
        unlocks,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(sessions.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(enforcement.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(overrides.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(unlocks.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(essential_apps.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(goals.router, prefix=ApplicationConfig.API_PREFIX)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
