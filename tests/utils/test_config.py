"""Tests for configuration loading."""

import pytest

from maplecast.config import FRAME_INTERVAL_MS, REQUEST_TIMEOUT, MaplecastConfig


pytestmark = pytest.mark.unit


class TestMaplecastConfig:
    """Tests for MaplecastConfig."""

    def test_defaults(self):
        config = MaplecastConfig()

        assert config.frame_interval_ms == FRAME_INTERVAL_MS == 2000
        assert config.frame_interval_seconds == 2.0
        assert config.request_timeout == REQUEST_TIMEOUT
        assert config.owm_api_key == ""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "abc123")
        monkeypatch.setenv("MAPLECAST_FRAME_INTERVAL_MS", "500")
        monkeypatch.setenv("MAPLECAST_DEFAULT_LAT", "45.42")
        monkeypatch.setenv("MAPLECAST_DEFAULT_LON", "-75.69")

        config = MaplecastConfig.from_env()

        assert config.owm_api_key == "abc123"
        assert config.frame_interval_ms == 500
        assert (config.default_lat, config.default_lon) == (45.42, -75.69)

    def test_from_env_falls_back_to_defaults(self, monkeypatch):
        for name in ("OPENWEATHERMAP_API_KEY", "MAPLECAST_REQUEST_TIMEOUT",
                     "MAPLECAST_FRAME_INTERVAL_MS"):
            monkeypatch.delenv(name, raising=False)

        config = MaplecastConfig.from_env()

        assert config.owm_api_key == ""
        assert config.request_timeout == REQUEST_TIMEOUT

    def test_invalid_number_raises(self, monkeypatch):
        monkeypatch.setenv("MAPLECAST_REQUEST_TIMEOUT", "soon")
        with pytest.raises(ValueError):
            MaplecastConfig.from_env()
