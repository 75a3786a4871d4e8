"""Runtime configuration.

Defaults live as module constants. MaplecastConfig.from_env() overrides them
from MAPLECAST_* environment variables (and OPENWEATHERMAP_API_KEY).
"""

import os
from dataclasses import dataclass

# Provider endpoints
RAINVIEWER_MAPS_URL = "https://api.rainviewer.com/public/weather-maps.json"
RAINVIEWER_TILE_HOST = "https://tilecache.rainviewer.com"
OWM_PRECIP_TILE_URL = "https://tile.openweathermap.org/map/precipitation_new/{z}/{x}/{y}.png"
OWM_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# Request timeout in seconds
REQUEST_TIMEOUT = 10.0

# 2 seconds between frames keeps RainViewer from rate limiting us
FRAME_INTERVAL_MS = 2000

# Toronto
DEFAULT_LAT = 43.6532
DEFAULT_LON = -79.3832


@dataclass
class MaplecastConfig:
    """Settings shared by the fetchers, the animator and the API.

    Attributes:
        owm_api_key: OpenWeatherMap API key (forecast + secondary radar tiles)
        request_timeout: Per-request timeout in seconds
        frame_interval_ms: Radar animation tick period in milliseconds
        default_lat: Latitude used when no location is supplied
        default_lon: Longitude used when no location is supplied
    """

    owm_api_key: str = ""
    request_timeout: float = REQUEST_TIMEOUT
    frame_interval_ms: int = FRAME_INTERVAL_MS
    default_lat: float = DEFAULT_LAT
    default_lon: float = DEFAULT_LON

    @property
    def frame_interval_seconds(self) -> float:
        return self.frame_interval_ms / 1000

    @classmethod
    def from_env(cls) -> "MaplecastConfig":
        """Build a config from environment variables, falling back to defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        return cls(
            owm_api_key=os.environ.get("OPENWEATHERMAP_API_KEY", ""),
            request_timeout=float(os.environ.get("MAPLECAST_REQUEST_TIMEOUT", REQUEST_TIMEOUT)),
            frame_interval_ms=int(os.environ.get("MAPLECAST_FRAME_INTERVAL_MS", FRAME_INTERVAL_MS)),
            default_lat=float(os.environ.get("MAPLECAST_DEFAULT_LAT", DEFAULT_LAT)),
            default_lon=float(os.environ.get("MAPLECAST_DEFAULT_LON", DEFAULT_LON)),
        )
