"""Play URL resolution endpoint."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Header, Query, Request
from fastapi.responses import JSONResponse

from vidio.domain.entities.errors import ResolveError
from vidio.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["resolve"])


@router.get("/resolve")
async def resolve_play_url(
    request: Request,
    url: str = Query(..., min_length=1, description="bilibili video page URL"),
    x_sessdata: str = Header(default="", description="SESSDATA cookie value"),
) -> JSONResponse:
    """Resolve a video page URL into a direct stream URL.

    The token travels in the ``X-Sessdata`` header so it never shows up
    in access logs.
    """
    state = cast(AppState, request.app.state)

    try:
        play_url = await state.resolve_uc.execute(url, x_sessdata)
    except ResolveError as exc:
        log.info("resolve_request_failed", error_type=type(exc).__name__)
        return JSONResponse(status_code=422, content={"error": str(exc)})

    return JSONResponse(content=play_url.to_dict())
