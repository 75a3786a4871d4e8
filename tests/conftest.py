"""Shared pytest fixtures for maplecast tests.

Test Tiers:
- unit: Fast tests with fixtures, no network (default)
- integration: Tests with recorded provider payloads served by httpx.MockTransport
- live: Real API tests, slow, requires network and may need credentials

Run live tests with: pytest -m live --run-live
"""

from typing import Callable, Optional

import httpx
import pytest

from maplecast.forecast.models import ForecastSample
from maplecast.radar.models import RadarFrame

# Fixed "now" used throughout: 2026-01-15 12:00:00 UTC
NOW_SECONDS = 1768478400


def pytest_addoption(parser):
    """Add command line options for test configuration."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run live API tests (slow, requires network)",
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests using fixtures")
    config.addinivalue_line("markers", "integration: tests with recorded API responses")
    config.addinivalue_line("markers", "live: real API tests (slow, requires network)")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is specified."""
    if config.getoption("--run-live"):
        return

    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def make_sample(timestamp: int, temperature: float = 10.0, **overrides) -> ForecastSample:
    """ForecastSample with plausible defaults."""
    values = {
        "timestamp_seconds": timestamp,
        "temperature": temperature,
        "feels_like": temperature - 2,
        "pressure": 1013.0,
        "humidity": 70.0,
        "dew_point": 5.0,
        "cloud_cover_percent": 40.0,
        "visibility_meters": 10000.0,
        "wind_speed": 4.0,
        "wind_direction_deg": 180.0,
        "precipitation_probability": 0.2,
        "condition_code": 801,
    }
    values.update(overrides)
    return ForecastSample(**values)


def make_frames(count: int, source_name: str = "primary") -> list[RadarFrame]:
    """count valid frames, 10 minutes apart, oldest first."""
    return [
        RadarFrame(
            tile_url_template=f"https://tilecache.rainviewer.com/v2/radar/{i}/256/{{z}}/{{x}}/{{y}}/2/1_1.png",
            timestamp_millis=(NOW_SECONDS - (count - 1 - i) * 600) * 1000,
            base_opacity=0.7,
            source_name=source_name,
        )
        for i in range(count)
    ]


def rainviewer_payload(snapshot_count: int = 13) -> dict:
    """weather-maps.json with snapshot_count past frames 10 minutes apart."""
    return {
        "version": "2.0",
        "generated": NOW_SECONDS,
        "host": "https://tilecache.rainviewer.com",
        "radar": {
            "past": [
                {
                    "time": NOW_SECONDS - (snapshot_count - 1 - i) * 600,
                    "path": f"/v2/radar/{NOW_SECONDS - (snapshot_count - 1 - i) * 600}",
                }
                for i in range(snapshot_count)
            ],
            "nowcast": [],
        },
    }


def owm_forecast_payload(start: int = NOW_SECONDS - 3600, count: int = 16) -> dict:
    """OpenWeatherMap 5 day forecast with count 3-hourly entries."""
    return {
        "cod": "200",
        "cnt": count,
        "list": [
            {
                "dt": start + i * 10800,
                "main": {
                    "temp": 10.0 + i,
                    "feels_like": 8.0 + i,
                    "pressure": 1010 + i,
                    "humidity": 60 + i,
                },
                "weather": [{"id": 800 + (i % 3), "main": "Clouds", "icon": "03d"}],
                "clouds": {"all": 20 + i},
                "wind": {"speed": 3.0 + i * 0.5, "deg": 200},
                "visibility": 10000,
                "pop": 0.1,
            }
            for i in range(count)
        ],
    }


def open_meteo_wind_payload(speed: float = 12.5, direction: float = 270.0) -> dict:
    return {
        "latitude": 45.0,
        "longitude": -75.0,
        "current_units": {"wind_speed_10m": "km/h", "wind_direction_10m": "°"},
        "current": {
            "time": "2026-01-15T12:00",
            "wind_speed_10m": speed,
            "wind_direction_10m": direction,
        },
    }


def provider_handler(
    rainviewer: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    wind: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    forecast: Optional[Callable[[httpx.Request], httpx.Response]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Route requests to per-provider handlers; unknown hosts get a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host == "api.rainviewer.com":
            if rainviewer is not None:
                return rainviewer(request)
            return httpx.Response(200, json=rainviewer_payload())
        if host == "api.open-meteo.com":
            if wind is not None:
                return wind(request)
            return httpx.Response(200, json=open_meteo_wind_payload())
        if host == "api.openweathermap.org":
            if forecast is not None:
                return forecast(request)
            return httpx.Response(200, json=owm_forecast_payload())
        return httpx.Response(404)

    return handler


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def now_seconds() -> int:
    return NOW_SECONDS


@pytest.fixture
def sparse_samples() -> list[ForecastSample]:
    """3-hourly samples starting one hour before NOW_SECONDS."""
    start = NOW_SECONDS - 3600
    return [make_sample(start + i * 10800, temperature=10.0 + i * 3) for i in range(10)]


@pytest.fixture
def http_client() -> httpx.AsyncClient:
    """Client where every provider answers successfully."""
    return mock_client(provider_handler())


@pytest.fixture
def sample_factory() -> Callable[..., ForecastSample]:
    return make_sample


@pytest.fixture
def frame_factory() -> Callable[..., list[RadarFrame]]:
    return make_frames


@pytest.fixture
def payloads():
    """Builders for recorded provider payloads."""

    class Payloads:
        rainviewer = staticmethod(rainviewer_payload)
        owm_forecast = staticmethod(owm_forecast_payload)
        open_meteo_wind = staticmethod(open_meteo_wind_payload)

    return Payloads


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient answering from per-provider handlers.

    Each keyword is a handler (request -> response) for one provider;
    providers left out answer with the default recorded payload.
    """

    def factory(**handlers) -> httpx.AsyncClient:
        return mock_client(provider_handler(**handlers))

    return factory
