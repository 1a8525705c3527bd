from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request

from vidio.infrastructure.config import AppConfig
from vidio.interfaces.app_state import AppState
from vidio.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def build_app(config: AppConfig) -> FastAPI:
    """Build the FastAPI app. Configuration only; resources are created in lifespan()."""
    app = FastAPI(
        title="vidio",
        description="Resolve bilibili video pages into direct stream URLs",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from vidio.interfaces.api.resolve.router import router as resolve_router

    app.include_router(resolve_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
