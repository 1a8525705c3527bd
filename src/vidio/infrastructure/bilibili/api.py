"""Shared GET + envelope handling for the bilibili web API.

Every endpoint answers with ``{"code": int, "message": str?, "data": T?}``.
``code == 0`` with a ``data`` object is success; anything else is mapped
onto the resolution error hierarchy.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from vidio.domain.entities.errors import (
    DecodeError,
    MissingDataError,
    TransportError,
    UpstreamApiError,
)
from vidio.domain.entities.playback import VideoIdentifier
from vidio.infrastructure.bilibili.headers import BROWSER_USER_AGENT, build_headers

log = structlog.get_logger(__name__)

API_BASE = "https://api.bilibili.com"

DEFAULT_TIMEOUT = 15.0


class BilibiliApi:
    """Thin wrapper around an ``httpx.AsyncClient`` for one-shot API calls.

    Holds no per-request state; safe to share between concurrent
    resolutions.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = BROWSER_USER_AGENT,
    ) -> None:
        self._http = http_client
        self._timeout = timeout
        self._user_agent = user_agent

    async def get_data(
        self,
        path: str,
        *,
        params: dict[str, str],
        bvid: VideoIdentifier,
        auth_token: str,
    ) -> dict[str, Any]:
        """GET ``API_BASE + path`` and return the envelope's ``data`` object."""
        url = f"{API_BASE}{path}"
        if not auth_token.isascii():
            raise TransportError("auth token contains non-ASCII characters")
        headers = build_headers(auth_token, bvid.page_url, self._user_agent)

        log.debug(
            "bilibili_api_request",
            path=path,
            bvid=str(bvid),
            authenticated=bool(auth_token),
        )

        try:
            # httpx timeouts apply per network operation; wait_for caps the whole call
            resp = await asyncio.wait_for(
                self._http.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=self._timeout,
                ),
                timeout=self._timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            log.warning("bilibili_api_timeout", path=path, bvid=str(bvid))
            raise TransportError(f"request to {path} timed out") from exc
        except httpx.HTTPError as exc:
            log.warning(
                "bilibili_api_request_failed",
                path=path,
                bvid=str(bvid),
                error=str(exc),
            )
            raise TransportError(f"request to {path} failed: {exc}") from exc

        if resp.status_code != 200:
            log.warning(
                "bilibili_api_http_error",
                path=path,
                status=resp.status_code,
                bvid=str(bvid),
            )
            raise TransportError(
                f"request to {path} failed with HTTP status {resp.status_code}"
            )

        try:
            envelope = resp.json()
        except ValueError as exc:
            log.warning("bilibili_api_invalid_json", path=path, bvid=str(bvid))
            raise DecodeError(f"response from {path} is not valid JSON") from exc

        return _unwrap(envelope, path)


def _unwrap(envelope: Any, path: str) -> dict[str, Any]:
    if not isinstance(envelope, dict):
        raise DecodeError(f"response from {path} is not a JSON object")

    code = envelope.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        raise DecodeError(f"response from {path} has no integer status code")

    if code != 0:
        message = envelope.get("message")
        log.info("bilibili_api_error", path=path, code=code, message=message)
        raise UpstreamApiError(code, str(message) if message else None)

    data = envelope.get("data")
    if data is None:
        raise MissingDataError()
    if not isinstance(data, dict):
        raise DecodeError(f"response from {path} has a malformed data field")
    return data
