"""Forecast samples, hourly resampling and the forecast provider client."""

from maplecast.forecast.client import ForecastClient, dew_point
from maplecast.forecast.models import ForecastSample, HourlySeries
from maplecast.forecast.resample import current_hour_seconds, resample, resample_now

__all__ = [
    "ForecastClient",
    "ForecastSample",
    "HourlySeries",
    "current_hour_seconds",
    "dew_point",
    "resample",
    "resample_now",
]
