"""Wind field sampling over a grid around a location.

One Open-Meteo request is made per grid point, all concurrently. Points whose
request fails are dropped; the call as a whole never fails.
"""

import asyncio
import logging
from typing import Optional

import httpx

from maplecast.api.schemas import OpenMeteoWindResponse
from maplecast.config import OPEN_METEO_FORECAST_URL, MaplecastConfig
from maplecast.errors import MaplecastError
from maplecast.utils.geo import BoundingBox, Coordinates, generate_grid
from maplecast.utils.http import fetch_model
from maplecast.wind.models import WindSample

logger = logging.getLogger(__name__)

GRID_SIZE = 5
GRID_SPACING_DEG = 0.5  # ~50km at mid-latitudes


class WindFieldFetcher:
    """Fetches a 5x5 wind grid (0.5 degree spacing) around a center point.

    Example:
        >>> fetcher = WindFieldFetcher(http_client)
        >>> samples = await fetcher.fetch_wind_field(Coordinates(45.4, -75.7))
        >>> len(samples) <= 25
        True
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: Optional[MaplecastConfig] = None,
        grid_size: int = GRID_SIZE,
        spacing: float = GRID_SPACING_DEG,
    ):
        self.http = http
        self.config = config or MaplecastConfig()
        self.grid_size = grid_size
        self.spacing = spacing

    def grid_points(self, center: Coordinates) -> list[Coordinates]:
        return generate_grid(center, size=self.grid_size, spacing=self.spacing)

    def grid_bounds(self, center: Coordinates) -> BoundingBox:
        """Box covering every grid point."""
        return BoundingBox.around(center, (self.grid_size - 1) / 2 * self.spacing)

    async def fetch_point(self, point: Coordinates) -> WindSample:
        """Fetch current wind at one point.

        Raises:
            NetworkError: Provider unreachable or non-2xx
            MalformedResponseError: Unexpected payload shape
        """
        params = {
            "latitude": point.lat,
            "longitude": point.lon,
            "current": "wind_speed_10m,wind_direction_10m",
            "wind_speed_unit": "kmh",
        }
        payload = await fetch_model(
            self.http, OPEN_METEO_FORECAST_URL, OpenMeteoWindResponse, params=params
        )
        return WindSample(
            lat=point.lat,
            lon=point.lon,
            speed_kmh=payload.current.wind_speed_10m,
            # Open-Meteo reports north as 360 at times
            direction_deg=payload.current.wind_direction_10m % 360,
        )

    async def fetch_wind_field(self, center: Coordinates) -> list[WindSample]:
        """Fetch every grid point concurrently and keep the ones that worked.

        Waits for all requests. Failed points are logged and omitted, never
        retried. An empty list means no wind data is available.
        """
        points = self.grid_points(center)
        results = await asyncio.gather(
            *(self.fetch_point(point) for point in points),
            return_exceptions=True,
        )

        samples = []
        for point, result in zip(points, results):
            if isinstance(result, WindSample):
                samples.append(result)
            elif isinstance(result, (MaplecastError, ValueError)):
                logger.warning(f"Failed to fetch wind for {point.lat}, {point.lon}: {result}")
            elif isinstance(result, Exception):
                logger.error(f"Unexpected error fetching wind for {point.lat}, {point.lon}: {result!r}")
            elif isinstance(result, BaseException):
                raise result

        logger.info(f"Loaded wind data for {len(samples)}/{len(points)} points")
        return samples
