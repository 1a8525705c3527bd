"""bilibili web API adapters: identifier parsing, metadata and playback lookup."""

from __future__ import annotations

from .api import BilibiliApi
from .identifier import extract_bvid
from .playurl import MultiFormatStrategy, SingleFormatStrategy, create_playback_strategy
from .view_api import ViewApiClient

__all__ = [
    "BilibiliApi",
    "MultiFormatStrategy",
    "SingleFormatStrategy",
    "ViewApiClient",
    "create_playback_strategy",
    "extract_bvid",
]
