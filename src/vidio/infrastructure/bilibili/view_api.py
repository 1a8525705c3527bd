"""Metadata lookup: BV id -> cid/aid via ``/x/web-interface/view``."""

from __future__ import annotations

from typing import Any

import structlog

from vidio.domain.entities.errors import DecodeError
from vidio.domain.entities.playback import VideoIdentifier, VideoInfo
from vidio.infrastructure.bilibili.api import BilibiliApi

log = structlog.get_logger(__name__)

_VIEW_PATH = "/x/web-interface/view"

_U64_MAX = 2**64 - 1


def _routing_id(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"view response is missing integer field {key!r}")
    if not 0 <= value <= _U64_MAX:
        raise DecodeError(f"view response field {key!r} out of range: {value}")
    return value


class ViewApiClient:
    """Resolves routing identifiers through the view endpoint."""

    def __init__(self, api: BilibiliApi) -> None:
        self._api = api

    async def fetch_info(self, bvid: VideoIdentifier, auth_token: str) -> VideoInfo:
        data = await self._api.get_data(
            _VIEW_PATH,
            params={"bvid": bvid.value},
            bvid=bvid,
            auth_token=auth_token,
        )
        info = VideoInfo(cid=_routing_id(data, "cid"), aid=_routing_id(data, "aid"))
        log.debug("video_info_resolved", bvid=str(bvid), cid=info.cid, aid=info.aid)
        return info
