"""External entry point: two strings in, one success or error string out.

No exception type crosses this boundary; every ``ResolveError`` is
flattened into a message suitable for direct display.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from vidio.domain.entities.errors import ResolveError
from vidio.infrastructure.config.schema import AppConfig
from vidio.interfaces.composition import build_resolve_use_case, create_http_client

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolveResult:
    """Either ``value`` (JSON of the play URL) or ``error`` (message) is set."""

    ok: bool
    value: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: str) -> ResolveResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> ResolveResult:
        return cls(ok=False, error=error)


async def resolve(
    video_url: str,
    sessdata: str = "",
    *,
    config: AppConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ResolveResult:
    """Resolve *video_url* to ``{"url": ..., "format": "DASH"|"MP4"}``.

    A client passed in is reused and left open; otherwise one is created
    for this call and closed afterwards.
    """
    config = config or AppConfig()

    if http_client is not None:
        return await _run(config, http_client, video_url, sessdata)

    async with create_http_client() as client:
        return await _run(config, client, video_url, sessdata)


async def _run(
    config: AppConfig,
    http_client: httpx.AsyncClient,
    video_url: str,
    sessdata: str,
) -> ResolveResult:
    use_case = build_resolve_use_case(config, http_client)
    try:
        play_url = await use_case.execute(video_url, sessdata)
    except ResolveError as exc:
        log.warning("resolve_failed", error_type=type(exc).__name__, error=str(exc))
        return ResolveResult.failure(str(exc))
    return ResolveResult.success(play_url.to_json())
