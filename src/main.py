"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.mr_assets.api.router import router as assets_router
from src.mr_common.database import engine
from src.mr_common.errors import AppError
from src.mr_common.response import error_response
from src.mr_engine.api.dependencies import get_staking_engine
from src.mr_engine.application.service import StakingEngine
from src.mr_flat.api.router import router as flat_router
from src.mr_gateway.middleware.request_log import RequestLogMiddleware
from src.mr_schedule.api.router import router as schedule_router
from src.mr_staking.api.router import router as staking_router
from src.mr_treasury.api.router import router as treasury_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB and replay the journal. Shutdown: dispose."""
    if settings.JOURNAL_BACKEND == "postgres":
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    await get_staking_engine().start()
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    if exc.http_status >= 500:
        logger.error("%s %s failed: code=%d %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(schedule_router, prefix="/api/v1")
app.include_router(staking_router, prefix="/api/v1")
app.include_router(flat_router, prefix="/api/v1")
app.include_router(treasury_router, prefix="/api/v1")
app.include_router(assets_router, prefix="/api/v1")


@app.get("/health")
async def health(
    staking: Annotated[StakingEngine, Depends(get_staking_engine)],
) -> dict[str, Any]:
    return {"status": "ok", "version": VERSION, "engine_ready": staking.started}
