"""Port for turning routing identifiers into a playable URL."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vidio.domain.entities.playback import PlayUrl, VideoIdentifier, VideoInfo


@runtime_checkable
class PlaybackStrategyPort(Protocol):
    """Queries the playback API and picks one stream.

    Deployments choose one implementation permanently (multi-format or
    single-format); the orchestrator does not care which.
    """

    @property
    def name(self) -> str:
        """Strategy name (``"multi"`` or ``"single"``)."""
        ...

    async def resolve_play_url(
        self,
        bvid: VideoIdentifier,
        info: VideoInfo,
        auth_token: str,
    ) -> PlayUrl:
        """Return the chosen stream.

        Raises a ``ResolveError`` subclass on any failure.
        """
        ...
