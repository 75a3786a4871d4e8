"""HTTP API for maplecast.

This module provides:

- create_app: Factory function to create the FastAPI application
- Provider payload schemas (RainViewer, Open-Meteo, OpenWeatherMap)
- Response schemas for the forecast, radar and wind endpoints

Note: create_app is lazy-loaded so the fetchers can import the schemas
without pulling in FastAPI.
"""

# Schemas can be imported directly (only depend on pydantic)
from maplecast.api.schemas import (
    ErrorResponse,
    HealthResponse,
    HourlyEntry,
    HourlyForecastResponse,
    OpenMeteoWindResponse,
    OWMForecastResponse,
    RadarFrameInfo,
    RadarResponse,
    RainViewerMaps,
    WindPoint,
    WindResponse,
)


def __getattr__(name):
    """Lazy load FastAPI-dependent components."""
    if name == "create_app":
        from maplecast.api.app import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "create_app",
    "ErrorResponse",
    "HealthResponse",
    "HourlyEntry",
    "HourlyForecastResponse",
    "OpenMeteoWindResponse",
    "OWMForecastResponse",
    "RadarFrameInfo",
    "RadarResponse",
    "RainViewerMaps",
    "WindPoint",
    "WindResponse",
]
