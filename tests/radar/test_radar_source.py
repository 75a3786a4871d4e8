"""Tests for radar frame fetching and provider fallback."""

import asyncio

import httpx
import pytest

from maplecast.api.schemas import RainViewerMaps
from maplecast.config import OWM_PRECIP_TILE_URL, MaplecastConfig
from maplecast.errors import MalformedResponseError, NetworkError
from maplecast.radar.models import RadarFetchResult, RadarFrame
from maplecast.radar.source import (
    PRIMARY_FRAME_COUNT,
    PRIMARY_SOURCE,
    SECONDARY_OPACITIES,
    SECONDARY_SOURCE,
    RadarFrameSource,
    frames_from_rainviewer,
    secondary_frames,
)

pytestmark = pytest.mark.integration

NOW_MILLIS = 1_768_478_400_000


def _fetch(make_client, config=None, **handlers) -> RadarFetchResult:
    async def run():
        async with make_client(**handlers) as http:
            source = RadarFrameSource(http, config, clock=lambda: NOW_MILLIS)
            return await source.fetch_frames()

    return asyncio.run(run())


class TestRadarFrame:
    """Tests for RadarFrame validation."""

    def test_rejects_zero_opacity(self):
        with pytest.raises(ValueError):
            RadarFrame("https://a/{z}/{x}/{y}.png", 0, 0.0, "primary")

    def test_rejects_opacity_above_one(self):
        with pytest.raises(ValueError):
            RadarFrame("https://a/{z}/{x}/{y}.png", 0, 1.5, "primary")


class TestFramesFromRainviewer:
    """Tests for mapping the RainViewer payload."""

    def test_keeps_newest_six_oldest_first(self, payloads):
        maps = RainViewerMaps.model_validate(payloads.rainviewer(13))

        frames = frames_from_rainviewer(maps)

        assert len(frames) == PRIMARY_FRAME_COUNT
        times = [f.timestamp_millis for f in frames]
        assert times == sorted(times)
        newest = max(s.time for s in maps.radar.past)
        assert times[-1] == newest * 1000

    def test_builds_tile_template(self, payloads):
        maps = RainViewerMaps.model_validate(payloads.rainviewer(1))
        frame = frames_from_rainviewer(maps)[0]

        snapshot = maps.radar.past[0]
        assert frame.tile_url_template == (
            f"https://tilecache.rainviewer.com{snapshot.path}/256/{{z}}/{{x}}/{{y}}/2/1_1.png"
        )
        assert frame.base_opacity == 0.7
        assert frame.source_name == PRIMARY_SOURCE

    def test_fewer_snapshots_than_six(self, payloads):
        maps = RainViewerMaps.model_validate(payloads.rainviewer(3))
        assert len(frames_from_rainviewer(maps)) == 3

    def test_unsorted_snapshots_are_sorted(self, payloads):
        payload = payloads.rainviewer(8)
        payload["radar"]["past"].reverse()

        frames = frames_from_rainviewer(RainViewerMaps.model_validate(payload))

        times = [f.timestamp_millis for f in frames]
        assert times == sorted(times)
        assert len(frames) == 6

    def test_zero_snapshots_raises(self, payloads):
        maps = RainViewerMaps.model_validate(payloads.rainviewer(0))
        with pytest.raises(MalformedResponseError):
            frames_from_rainviewer(maps)


class TestSecondaryFrames:
    """Tests for the synthesized secondary series."""

    def test_four_frames_five_minutes_apart(self):
        frames = secondary_frames(NOW_MILLIS)

        assert [f.base_opacity for f in frames] == list(SECONDARY_OPACITIES)
        assert [f.timestamp_millis for f in frames] == [
            NOW_MILLIS - 900_000,
            NOW_MILLIS - 600_000,
            NOW_MILLIS - 300_000,
            NOW_MILLIS,
        ]
        assert all(f.source_name == SECONDARY_SOURCE for f in frames)

    def test_api_key_appended(self):
        frames = secondary_frames(NOW_MILLIS, api_key="abc")
        assert frames[0].tile_url_template == f"{OWM_PRECIP_TILE_URL}?appid=abc"

    def test_no_key_uses_bare_template(self):
        assert secondary_frames(NOW_MILLIS)[0].tile_url_template == OWM_PRECIP_TILE_URL


class TestRadarFrameSource:
    """Tests for the primary -> secondary fallback chain."""

    def test_primary_success(self, make_client):
        result = _fetch(make_client)

        assert result.ok
        assert result.source_name == PRIMARY_SOURCE
        assert len(result.frames) == 6
        assert {f.source_name for f in result.frames} == {PRIMARY_SOURCE}

    def test_primary_http_error_falls_back(self, make_client):
        result = _fetch(make_client, rainviewer=lambda r: httpx.Response(503))

        assert result.ok
        assert result.source_name == SECONDARY_SOURCE
        assert len(result.frames) == 4
        assert result.frames[-1].timestamp_millis == NOW_MILLIS

    def test_primary_transport_error_falls_back(self, make_client):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _fetch(make_client, rainviewer=unreachable)
        assert result.source_name == SECONDARY_SOURCE

    def test_primary_zero_snapshots_falls_back(self, make_client, payloads):
        empty = payloads.rainviewer(0)
        result = _fetch(make_client, rainviewer=lambda r: httpx.Response(200, json=empty))

        assert result.source_name == SECONDARY_SOURCE
        assert len(result.frames) == 4

    def test_primary_malformed_payload_falls_back(self, make_client):
        bad = lambda r: httpx.Response(200, json={"radar": {"past": [{"time": "soon"}]}})
        result = _fetch(make_client, rainviewer=bad)
        assert result.source_name == SECONDARY_SOURCE

    def test_primary_invalid_json_falls_back(self, make_client):
        result = _fetch(make_client, rainviewer=lambda r: httpx.Response(200, content=b"<html>"))
        assert result.source_name == SECONDARY_SOURCE

    def test_frames_never_mix_sources(self, make_client):
        for handler in (None, lambda r: httpx.Response(500)):
            handlers = {"rainviewer": handler} if handler else {}
            result = _fetch(make_client, **handlers)
            assert len({f.source_name for f in result.frames}) == 1

    def test_secondary_uses_configured_key(self, make_client):
        config = MaplecastConfig(owm_api_key="k")
        result = _fetch(make_client, config=config, rainviewer=lambda r: httpx.Response(500))
        assert result.frames[0].tile_url_template.endswith("?appid=k")

    def test_fetch_primary_reports_failure(self, make_client):
        async def run():
            async with make_client(rainviewer=lambda r: httpx.Response(404)) as http:
                return await RadarFrameSource(http).fetch_primary()

        result = asyncio.run(run())
        assert not result.ok
        assert isinstance(result.error, NetworkError)
        assert result.frames == []
        assert "FAILED" in str(result)
