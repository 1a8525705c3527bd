"""Playback lookup via ``/x/player/playurl`` with format negotiation.

Two strategies share the endpoint but ask for different representations:

    multi   fnval=16 (DASH + durl); DASH preferred, durl as fallback.
    single  fnval=1 + html5 platform hints; durl only, CDN host rewritten.

A deployment picks one of them through ``playback.mode``.
"""

from __future__ import annotations

from typing import Any

import structlog

from vidio.domain.entities.errors import NoStreamFoundError
from vidio.domain.entities.playback import (
    PlayUrl,
    StreamFormat,
    VideoIdentifier,
    VideoInfo,
)
from vidio.domain.ports.playback_strategy import PlaybackStrategyPort
from vidio.infrastructure.bilibili.api import BilibiliApi
from vidio.infrastructure.bilibili.cdn import rewrite_cdn_host

log = structlog.get_logger(__name__)

_PLAYURL_PATH = "/x/player/playurl"

# 1080P; higher tiers need a logged-in (and for some, premium) cookie
_QUALITY_1080P = "80"

_MULTI_FORMAT_FLAGS: dict[str, str] = {
    "fnval": "16",
    "fourk": "1",
}

_SINGLE_FORMAT_FLAGS: dict[str, str] = {
    "fnval": "1",
    "fnver": "0",
    "fourk": "1",
    "platform": "html5",
    "high_quality": "1",
}


def first_dash_url(data: dict[str, Any]) -> str | None:
    """Base URL of the first DASH video stream, if any.

    The API spells the field either ``baseUrl`` or ``base_url``.
    """
    dash = data.get("dash")
    if not isinstance(dash, dict):
        return None
    videos = dash.get("video")
    if not isinstance(videos, list) or not videos:
        return None
    first = videos[0]
    if not isinstance(first, dict):
        return None
    for key in ("baseUrl", "base_url"):
        url = first.get(key)
        if isinstance(url, str) and url:
            return url
    return None


def first_durl_url(data: dict[str, Any]) -> str | None:
    """URL of the first single-file (durl) segment, if any."""
    durl = data.get("durl")
    if not isinstance(durl, list) or not durl:
        return None
    first = durl[0]
    if not isinstance(first, dict):
        return None
    url = first.get("url")
    return url if isinstance(url, str) and url else None


class _PlayUrlStrategyBase:
    _flags: dict[str, str] = {}

    def __init__(self, api: BilibiliApi) -> None:
        self._api = api

    async def _fetch(
        self,
        bvid: VideoIdentifier,
        info: VideoInfo,
        auth_token: str,
    ) -> dict[str, Any]:
        params = {
            "bvid": bvid.value,
            "cid": str(info.cid),
            "qn": _QUALITY_1080P,
            **self._flags,
        }
        return await self._api.get_data(
            _PLAYURL_PATH,
            params=params,
            bvid=bvid,
            auth_token=auth_token,
        )


class MultiFormatStrategy(_PlayUrlStrategyBase):
    """Prefers the adaptive (DASH) stream, falls back to a single file."""

    _flags = _MULTI_FORMAT_FLAGS

    @property
    def name(self) -> str:
        return "multi"

    async def resolve_play_url(
        self,
        bvid: VideoIdentifier,
        info: VideoInfo,
        auth_token: str,
    ) -> PlayUrl:
        data = await self._fetch(bvid, info, auth_token)

        dash_url = first_dash_url(data)
        if dash_url:
            log.debug("playurl_resolved", bvid=str(bvid), format="DASH")
            return PlayUrl(url=dash_url, format=StreamFormat.DASH)

        durl = first_durl_url(data)
        if durl:
            log.debug("playurl_resolved", bvid=str(bvid), format="MP4")
            return PlayUrl(url=durl, format=StreamFormat.MP4)

        log.info("playurl_no_stream", bvid=str(bvid), strategy=self.name)
        raise NoStreamFoundError("no playable stream found in upstream response")


class SingleFormatStrategy(_PlayUrlStrategyBase):
    """Requests a direct MP4 file only and normalizes its CDN host."""

    _flags = _SINGLE_FORMAT_FLAGS

    @property
    def name(self) -> str:
        return "single"

    async def resolve_play_url(
        self,
        bvid: VideoIdentifier,
        info: VideoInfo,
        auth_token: str,
    ) -> PlayUrl:
        data = await self._fetch(bvid, info, auth_token)

        durl = first_durl_url(data)
        if not durl:
            log.info("playurl_no_stream", bvid=str(bvid), strategy=self.name)
            if first_dash_url(data):
                raise NoStreamFoundError(
                    "no single-file stream found; video is only available "
                    "as adaptive (DASH) streams"
                )
            raise NoStreamFoundError("no single-file stream found in upstream response")

        url = rewrite_cdn_host(durl)
        log.debug(
            "playurl_resolved",
            bvid=str(bvid),
            format="MP4",
            cdn_rewritten=url != durl,
        )
        return PlayUrl(url=url, format=StreamFormat.MP4)


def create_playback_strategy(mode: str, api: BilibiliApi) -> PlaybackStrategyPort:
    """Instantiate the strategy configured by ``playback.mode``."""
    if mode == "multi":
        return MultiFormatStrategy(api)
    if mode == "single":
        return SingleFormatStrategy(api)
    raise ValueError(f"Unknown playback mode: {mode!r}")
