"""Pydantic schemas for provider payloads and API responses.

Provider schemas only declare the fields maplecast reads; everything else in
the upstream payload is ignored.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from maplecast.config import RAINVIEWER_TILE_HOST

# Provider payloads


class RainViewerSnapshot(BaseModel):
    """One past radar snapshot from RainViewer."""

    time: int = Field(..., description="Unix timestamp in seconds")
    path: str = Field(..., min_length=1, description="Tile path fragment")


class RainViewerRadar(BaseModel):
    past: list[RainViewerSnapshot] = Field(default_factory=list)


class RainViewerMaps(BaseModel):
    """RainViewer weather-maps.json."""

    host: str = RAINVIEWER_TILE_HOST
    radar: RainViewerRadar


class OpenMeteoCurrentWind(BaseModel):
    wind_speed_10m: float = Field(..., ge=0)
    wind_direction_10m: float = Field(..., ge=0, le=360)


class OpenMeteoWindResponse(BaseModel):
    """Open-Meteo /v1/forecast response with current wind requested."""

    current: OpenMeteoCurrentWind


class OWMMain(BaseModel):
    temp: float
    feels_like: float
    pressure: float
    humidity: float


class OWMCondition(BaseModel):
    id: int


class OWMClouds(BaseModel):
    all: float = 0.0


class OWMWind(BaseModel):
    speed: float = 0.0
    deg: float = 0.0


class OWMForecastItem(BaseModel):
    """One 3-hourly entry of the OpenWeatherMap 5 day forecast."""

    dt: int
    main: OWMMain
    weather: list[OWMCondition] = Field(..., min_length=1)
    clouds: OWMClouds = Field(default_factory=OWMClouds)
    wind: OWMWind = Field(default_factory=OWMWind)
    visibility: float = 10000.0
    pop: float = Field(default=0.0, ge=0, le=1)


class OWMForecastResponse(BaseModel):
    """OpenWeatherMap /data/2.5/forecast response."""

    items: list[OWMForecastItem] = Field(..., alias="list")

    model_config = {"populate_by_name": True}


# API responses


class HourlyEntry(BaseModel):
    timestamp_seconds: int
    temperature: float
    feels_like: float
    pressure: float
    humidity: float
    dew_point: float
    cloud_cover_percent: float
    visibility_meters: float
    wind_speed: float
    wind_direction_deg: float
    precipitation_probability: float = Field(..., ge=0, le=1)
    condition_code: int


class HourlyForecastResponse(BaseModel):
    """24 clock-aligned hourly entries for a location."""

    lat: float
    lon: float
    hours: list[HourlyEntry] = Field(..., min_length=24, max_length=24)


class RadarFrameInfo(BaseModel):
    tile_url_template: str
    timestamp_millis: int
    base_opacity: float = Field(..., gt=0, le=1)
    source_name: str


class RadarResponse(BaseModel):
    """Ordered radar frames plus playback state.

    Attributes:
        frames: Frames ordered oldest to newest
        frame_index: Index of the visible frame
        is_playing: Whether the animation timer is running
        radar_error: Message when no frames could be produced
    """

    frames: list[RadarFrameInfo]
    frame_index: int = Field(default=0, ge=0)
    is_playing: bool = False
    radar_error: Optional[str] = None


class WindPoint(BaseModel):
    lat: float
    lon: float
    speed_kmh: float = Field(..., ge=0)
    direction_deg: float = Field(..., ge=0, lt=360)
    compass: str
    color: str


class WindResponse(BaseModel):
    """Wind samples for the grid around a location."""

    samples: list[WindPoint]
    wind_unavailable: bool = False


class HealthResponse(BaseModel):
    status: str = Field(default="healthy", description="Service status")
    version: str = Field(default="0.1.0", description="API version")


class ErrorResponse(BaseModel):
    """Error response schema.

    Attributes:
        error: Error type/code
        message: Human-readable error message
        detail: Additional error details
    """

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    detail: Optional[str] = Field(default=None, description="Additional details")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Timestamp of the error response",
    )
