"""Port for looking up routing identifiers of a video."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vidio.domain.entities.playback import VideoIdentifier, VideoInfo


@runtime_checkable
class VideoInfoPort(Protocol):
    async def fetch_info(self, bvid: VideoIdentifier, auth_token: str) -> VideoInfo:
        """Map a BV id to its ``cid``/``aid``.

        Raises a ``ResolveError`` subclass on any failure.
        """
        ...
