"""Domain entities for play URL resolution.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

_PAGE_URL_BASE = "https://www.bilibili.com/video"


class StreamFormat(str, Enum):
    """Container format of a resolved stream."""

    DASH = "DASH"  # adaptive, video and audio as separate streams
    MP4 = "MP4"  # single direct file


@dataclass(frozen=True)
class VideoIdentifier:
    """Public BV id embedded in a video page URL (e.g. ``BV1xx411c7mD``)."""

    value: str

    @property
    def page_url(self) -> str:
        """Canonical page URL, also used as the API referer."""
        return f"{_PAGE_URL_BASE}/{self.value}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class VideoInfo:
    """Internal routing identifiers returned by the view API."""

    cid: int
    aid: int


@dataclass(frozen=True)
class PlayUrl:
    """Final resolution result handed back to the caller."""

    url: str
    format: StreamFormat

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "format": self.format.value}

    def to_json(self) -> str:
        """Compact JSON, stable key order: ``{"url":...,"format":...}``."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
