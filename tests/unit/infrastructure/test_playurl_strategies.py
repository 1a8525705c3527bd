"""Tests for the multi-format and single-format playback strategies."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import respx

from vidio.domain.entities.errors import (
    MissingDataError,
    NoStreamFoundError,
    UpstreamApiError,
)
from vidio.domain.entities.playback import StreamFormat, VideoIdentifier, VideoInfo
from vidio.domain.ports import PlaybackStrategyPort
from vidio.infrastructure.bilibili.api import BilibiliApi
from vidio.infrastructure.bilibili.playurl import (
    MultiFormatStrategy,
    SingleFormatStrategy,
    create_playback_strategy,
    first_dash_url,
    first_durl_url,
)

_PLAYURL_URL = "https://api.bilibili.com/x/player/playurl"

_DASH_URL = "https://upos-sz-mirrorcos.bilivideo.com/upgcxcode/30080.m4s?e=1"
_DURL_URL = "https://upos-sz-mirrorali.bilivideo.com/upgcxcode/v.mp4?e=2"


def _ok(data: dict[str, Any]) -> dict[str, Any]:
    return {"code": 0, "message": "0", "ttl": 1, "data": data}


class TestFirstDashUrl:
    def test_camel_case_field(self) -> None:
        data = {"dash": {"video": [{"baseUrl": "a"}, {"baseUrl": "b"}]}}
        assert first_dash_url(data) == "a"

    def test_snake_case_field(self) -> None:
        assert first_dash_url({"dash": {"video": [{"base_url": "b"}]}}) == "b"

    def test_camel_case_preferred(self) -> None:
        data = {"dash": {"video": [{"baseUrl": "a", "base_url": "b"}]}}
        assert first_dash_url(data) == "a"

    def test_empty_camel_case_falls_back(self) -> None:
        data = {"dash": {"video": [{"baseUrl": "", "base_url": "b"}]}}
        assert first_dash_url(data) == "b"

    def test_only_first_stream_considered(self) -> None:
        data = {"dash": {"video": [{"id": 80}, {"baseUrl": "b"}]}}
        assert first_dash_url(data) is None

    def test_missing_parts(self) -> None:
        assert first_dash_url({}) is None
        assert first_dash_url({"dash": None}) is None
        assert first_dash_url({"dash": {}}) is None
        assert first_dash_url({"dash": {"video": []}}) is None
        assert first_dash_url({"dash": {"video": None}}) is None


class TestFirstDurlUrl:
    def test_first_entry(self) -> None:
        assert first_durl_url({"durl": [{"url": "a"}, {"url": "b"}]}) == "a"

    def test_missing_parts(self) -> None:
        assert first_durl_url({}) is None
        assert first_durl_url({"durl": []}) is None
        assert first_durl_url({"durl": None}) is None
        assert first_durl_url({"durl": [{"size": 1}]}) is None


class TestCreatePlaybackStrategy:
    def test_multi(self, stub_api: MagicMock) -> None:
        strategy = create_playback_strategy("multi", stub_api)
        assert isinstance(strategy, MultiFormatStrategy)
        assert strategy.name == "multi"

    def test_single(self, stub_api: MagicMock) -> None:
        strategy = create_playback_strategy("single", stub_api)
        assert isinstance(strategy, SingleFormatStrategy)
        assert strategy.name == "single"

    def test_unknown(self, stub_api: MagicMock) -> None:
        with pytest.raises(ValueError, match="Unknown playback mode"):
            create_playback_strategy("hls", stub_api)

    def test_strategies_implement_port(self, stub_api: MagicMock) -> None:
        assert isinstance(MultiFormatStrategy(stub_api), PlaybackStrategyPort)
        assert isinstance(SingleFormatStrategy(stub_api), PlaybackStrategyPort)


class TestMultiFormatStrategy:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_request_parameters(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        route = respx.get(_PLAYURL_URL).respond(
            200, json=_ok({"dash": {"video": [{"baseUrl": _DASH_URL}]}})
        )

        await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "tok")

        request = route.calls.last.request
        assert dict(request.url.params) == {
            "bvid": "BV1xx411c7mD",
            "cid": "111",
            "qn": "80",
            "fnval": "16",
            "fourk": "1",
        }
        assert request.headers["cookie"] == "SESSDATA=tok"
        assert request.headers["referer"] == "https://www.bilibili.com/video/BV1xx411c7mD"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_prefers_dash(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(
            200,
            json=_ok(
                {
                    "dash": {"video": [{"id": 80, "baseUrl": _DASH_URL}], "audio": []},
                    "durl": [{"url": _DURL_URL}],
                }
            ),
        )

        result = await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.format is StreamFormat.DASH
        assert result.url == _DASH_URL

    @respx.mock
    @pytest.mark.asyncio()
    async def test_dash_snake_case_field(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(
            200, json=_ok({"dash": {"video": [{"base_url": _DASH_URL}]}})
        )

        result = await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.format is StreamFormat.DASH
        assert result.url == _DASH_URL

    @respx.mock
    @pytest.mark.asyncio()
    async def test_falls_back_to_mp4(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(
            200, json=_ok({"dash": {"video": []}, "durl": [{"url": _DURL_URL}]})
        )

        result = await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.format is StreamFormat.MP4
        assert result.url == _DURL_URL

    @respx.mock
    @pytest.mark.asyncio()
    async def test_mp4_url_not_rewritten(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        edge_url = "http://x.akamaized.net/v.mp4"
        respx.get(_PLAYURL_URL).respond(200, json=_ok({"durl": [{"url": edge_url}]}))

        result = await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.url == edge_url

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_stream(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(200, json=_ok({"quality": 80}))

        with pytest.raises(NoStreamFoundError):
            await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_api_error(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(200, json={"code": -404, "message": "啥都木有"})

        with pytest.raises(UpstreamApiError, match="啥都木有"):
            await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_missing_data(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(200, json={"code": 0, "data": None})

        with pytest.raises(MissingDataError):
            await MultiFormatStrategy(api).resolve_play_url(bvid, video_info, "")


class TestSingleFormatStrategy:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_request_parameters(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        route = respx.get(_PLAYURL_URL).respond(
            200, json=_ok({"durl": [{"url": _DURL_URL}]})
        )

        await SingleFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert dict(route.calls.last.request.url.params) == {
            "bvid": "BV1xx411c7mD",
            "cid": "111",
            "qn": "80",
            "fnval": "1",
            "fnver": "0",
            "fourk": "1",
            "platform": "html5",
            "high_quality": "1",
        }

    @respx.mock
    @pytest.mark.asyncio()
    async def test_rewrites_edge_host(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(
            200, json=_ok({"durl": [{"url": "http://x.akamaized.net/v.mp4"}]})
        )

        result = await SingleFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.format is StreamFormat.MP4
        assert result.url == "http://upos-sz-mirror08c.bilivideo.com/v.mp4"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_keeps_regular_mirror(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(200, json=_ok({"durl": [{"url": _DURL_URL}]}))

        result = await SingleFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.url == _DURL_URL

    @respx.mock
    @pytest.mark.asyncio()
    async def test_ignores_dash(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(
            200,
            json=_ok(
                {
                    "dash": {"video": [{"baseUrl": _DASH_URL}]},
                    "durl": [{"url": _DURL_URL}],
                }
            ),
        )

        result = await SingleFormatStrategy(api).resolve_play_url(bvid, video_info, "")

        assert result.format is StreamFormat.MP4
        assert result.url == _DURL_URL

    @respx.mock
    @pytest.mark.asyncio()
    async def test_dash_only_video(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(
            200, json=_ok({"dash": {"video": [{"baseUrl": _DASH_URL}]}})
        )

        with pytest.raises(NoStreamFoundError, match="adaptive"):
            await SingleFormatStrategy(api).resolve_play_url(bvid, video_info, "")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_stream(
        self, api: BilibiliApi, bvid: VideoIdentifier, video_info: VideoInfo
    ) -> None:
        respx.get(_PLAYURL_URL).respond(200, json=_ok({"durl": []}))

        with pytest.raises(NoStreamFoundError) as exc_info:
            await SingleFormatStrategy(api).resolve_play_url(bvid, video_info, "")
        assert "adaptive" not in str(exc_info.value)
