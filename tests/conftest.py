"""Shared test fixtures for the vidio test suite."""

from __future__ import annotations

from typing import AsyncIterator
from unittest.mock import MagicMock

import httpx
import pytest

from vidio.domain.entities.playback import VideoIdentifier, VideoInfo
from vidio.infrastructure.bilibili.api import BilibiliApi
from vidio.infrastructure.config.schema import AppConfig

# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def bvid() -> VideoIdentifier:
    return VideoIdentifier("BV1xx411c7mD")


@pytest.fixture()
def video_info() -> VideoInfo:
    return VideoInfo(cid=111, aid=222)


# ---------------------------------------------------------------------------
# Infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx.AsyncClient for use with respx mocking."""
    client = httpx.AsyncClient()
    yield client
    await client.aclose()


@pytest.fixture()
def api(http_client: httpx.AsyncClient) -> BilibiliApi:
    return BilibiliApi(http_client, timeout=15.0)


@pytest.fixture()
def stub_api() -> MagicMock:
    """BilibiliApi stand-in for tests that never send a request."""
    return MagicMock(spec=BilibiliApi)


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(environment="test")
