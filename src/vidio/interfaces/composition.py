"""Composition root: wires config, HTTP client and adapters into the use case."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from vidio.application.use_cases import ResolvePlayUrlUseCase
from vidio.infrastructure.bilibili import (
    BilibiliApi,
    ViewApiClient,
    create_playback_strategy,
    extract_bvid,
)
from vidio.infrastructure.config.schema import AppConfig
from vidio.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """HTTP client shared by both API calls (gzip/deflate/br decoded by httpx)."""
    return httpx.AsyncClient(follow_redirects=True)


def build_resolve_use_case(
    config: AppConfig,
    http_client: httpx.AsyncClient,
) -> ResolvePlayUrlUseCase:
    api = BilibiliApi(
        http_client,
        timeout=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
    )
    return ResolvePlayUrlUseCase(
        extract_identifier=extract_bvid,
        video_info=ViewApiClient(api),
        playback=create_playback_strategy(config.playback_mode, api),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = create_http_client()
    state.resolve_uc = build_resolve_use_case(config, state.http_client)
    log.info(
        "app_started",
        environment=config.environment,
        playback_mode=config.playback_mode,
    )

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("app_stopped")
