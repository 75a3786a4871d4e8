"""OpenWeatherMap 5 day / 3 hour forecast client.

The free OpenWeatherMap tier only offers the 3-hourly forecast, which is why
the dashboard resamples it to hourly (see maplecast.forecast.resample).
"""

import logging
import math
from typing import Optional

import httpx

from maplecast.api.schemas import OWMForecastItem, OWMForecastResponse
from maplecast.config import OWM_FORECAST_URL, MaplecastConfig
from maplecast.forecast.models import ForecastSample
from maplecast.utils.geo import Coordinates
from maplecast.utils.http import fetch_model

logger = logging.getLogger(__name__)

# Magnus formula coefficients
MAGNUS_A = 17.27
MAGNUS_B = 237.7


def dew_point(temp_c: float, humidity_pct: float) -> float:
    """Approximate dew point (C) from temperature and relative humidity.

    Humidity is clamped to 1-100% so dry readings stay finite.
    """
    humidity = min(max(humidity_pct, 1.0), 100.0)
    alpha = (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c) + math.log(humidity / 100)
    return (MAGNUS_B * alpha) / (MAGNUS_A - alpha)


def sample_from_item(item: OWMForecastItem) -> ForecastSample:
    """Map one OpenWeatherMap forecast entry to a ForecastSample."""
    return ForecastSample(
        timestamp_seconds=item.dt,
        temperature=item.main.temp,
        feels_like=item.main.feels_like,
        pressure=item.main.pressure,
        humidity=item.main.humidity,
        dew_point=round(dew_point(item.main.temp, item.main.humidity), 2),
        cloud_cover_percent=item.clouds.all,
        visibility_meters=item.visibility,
        wind_speed=item.wind.speed,
        wind_direction_deg=item.wind.deg,
        precipitation_probability=item.pop,
        condition_code=item.weather[0].id,
    )


class ForecastClient:
    """Fetches sparse forecast samples for a coordinate.

    Example:
        >>> async with httpx.AsyncClient() as http:
        ...     client = ForecastClient(http, MaplecastConfig.from_env())
        ...     samples = await client.fetch_samples(Coordinates(45.4, -75.7))
    """

    def __init__(self, http: httpx.AsyncClient, config: Optional[MaplecastConfig] = None):
        self.http = http
        self.config = config or MaplecastConfig()

    async def fetch_samples(self, center: Coordinates) -> list[ForecastSample]:
        """Fetch and parse the 3-hourly forecast, sorted by timestamp.

        Raises:
            NetworkError: Provider unreachable or non-2xx
            MalformedResponseError: Unexpected payload shape
        """
        params = {
            "lat": center.lat,
            "lon": center.lon,
            "appid": self.config.owm_api_key,
            "units": "metric",
        }
        payload = await fetch_model(self.http, OWM_FORECAST_URL, OWMForecastResponse, params=params)

        samples = sorted(
            (sample_from_item(item) for item in payload.items),
            key=lambda s: s.timestamp_seconds,
        )
        logger.info(f"Fetched {len(samples)} forecast samples for {center.lat}, {center.lon}")
        return samples
