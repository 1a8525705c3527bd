from __future__ import annotations

from typing import Callable

import structlog

from vidio.domain.entities.playback import PlayUrl, VideoIdentifier
from vidio.domain.ports import PlaybackStrategyPort, VideoInfoPort

log = structlog.get_logger(__name__)


def normalize_auth_token(auth_token: str | None) -> str:
    """Blank or whitespace-only tokens mean "not logged in"."""
    if auth_token is None or not auth_token.strip():
        return ""
    return auth_token


class ResolvePlayUrlUseCase:
    """Page URL -> BV id -> cid/aid -> play URL.

    Stages run strictly in order; the first ``ResolveError`` aborts the
    rest and propagates unchanged.
    """

    def __init__(
        self,
        *,
        extract_identifier: Callable[[str], VideoIdentifier],
        video_info: VideoInfoPort,
        playback: PlaybackStrategyPort,
    ) -> None:
        self._extract_identifier = extract_identifier
        self._video_info = video_info
        self._playback = playback

    async def execute(self, page_url: str, auth_token: str | None = "") -> PlayUrl:
        token = normalize_auth_token(auth_token)

        bvid = self._extract_identifier(page_url)
        log.info(
            "resolve_started",
            bvid=str(bvid),
            strategy=self._playback.name,
            authenticated=bool(token),
        )

        info = await self._video_info.fetch_info(bvid, token)
        play_url = await self._playback.resolve_play_url(bvid, info, token)

        log.info("resolve_finished", bvid=str(bvid), format=play_url.format.value)
        return play_url
