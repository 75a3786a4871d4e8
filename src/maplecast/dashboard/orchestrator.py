"""Radar/forecast view orchestration.

RadarOrchestrator wires a location to the radar source, the wind fetcher and
the forecast client, feeds the results to the LayerAnimator and the
resampler, and keeps everything in one RadarViewModel.

Teardown (close) stops the animation timer and cancels in-flight requests.
Anything that completes after teardown is discarded without touching the
view model.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import pydeck as pdk

from maplecast.config import MaplecastConfig
from maplecast.dashboard.view_model import RADAR_UNAVAILABLE, RadarViewModel
from maplecast.errors import MaplecastError
from maplecast.forecast.client import ForecastClient
from maplecast.forecast.models import HourlySeries
from maplecast.forecast.resample import current_hour_seconds, resample
from maplecast.radar.animator import LayerAnimator
from maplecast.radar.layers import MapSurface
from maplecast.radar.source import RadarFrameSource
from maplecast.utils.geo import Coordinates
from maplecast.wind.display import create_wind_layer
from maplecast.wind.fetcher import WindFieldFetcher

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RadarOrchestrator:
    """Owns the view model and the components that fill it.

    Example:
        >>> async with httpx.AsyncClient() as http:
        ...     view = RadarOrchestrator(http, MaplecastConfig.from_env())
        ...     await view.set_location(Coordinates(45.4, -75.7))
        ...     view.animator.play()
        ...     ...
        ...     await view.close()
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: Optional[MaplecastConfig] = None,
        radar_source: Optional[RadarFrameSource] = None,
        wind_fetcher: Optional[WindFieldFetcher] = None,
        forecast_client: Optional[ForecastClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the orchestrator.

        Args:
            http: Shared async client for all providers
            config: Settings. Defaults to MaplecastConfig()
            radar_source: Override the radar source
            wind_fetcher: Override the wind fetcher
            forecast_client: Override the forecast client
            clock: Returns the current Unix time in seconds
        """
        self.config = config or MaplecastConfig()
        self.clock = clock
        self.view = RadarViewModel()
        self.surface = MapSurface()
        self.radar_source = radar_source or RadarFrameSource(
            http, self.config, clock=lambda: int(self.clock() * 1000)
        )
        self.wind_fetcher = wind_fetcher or WindFieldFetcher(http, self.config)
        self.forecast_client = forecast_client or ForecastClient(http, self.config)
        self.animator = LayerAnimator(self.surface, interval_ms=self.config.frame_interval_ms)
        self._wind_layer: Optional[pdk.Layer] = None
        self._tasks: set[asyncio.Task] = set()
        # Bumped by every fetch (and by set_center for wind); a result is
        # only applied if its generation is still the latest.
        self._radar_generation = 0
        self._wind_generation = 0

    @property
    def center(self) -> Coordinates:
        """Current location, or the configured default when none was given."""
        if self.view.center is not None:
            return self.view.center
        return Coordinates(self.config.default_lat, self.config.default_lon)

    def set_center(self, coordinates: Optional[Coordinates]) -> None:
        """Move the view without loading anything. Drops wind for the old center."""
        self.view.center = coordinates
        self.view.wind_samples = []
        self.view.wind_unavailable = False
        # Wind still in flight was sampled around the old center
        self._wind_generation += 1
        self.view.wind_loading = False
        self._sync_wind_layer()

    async def set_location(self, coordinates: Optional[Coordinates]) -> None:
        """Point the view at coordinates and load radar (and wind if shown).

        Wind is refetched for the new location. The forecast is loaded
        separately with load_forecast() since its errors reach the caller.
        """
        self.set_center(coordinates)
        loads = [self.refresh_radar()]
        if self.view.show_wind:
            loads.append(self.refresh_wind())
        await asyncio.gather(*loads)

    async def refresh_radar(self) -> None:
        """Fetch frames and swap them in as a whole.

        The previous frames stay visible until the new list is complete. If a
        newer refresh started meanwhile, this result is dropped.
        """
        self._radar_generation += 1
        generation = self._radar_generation
        self.view.radar_loading = True
        try:
            result = await self._track(self.radar_source.fetch_frames())
        finally:
            if self._is_current(generation, self._radar_generation):
                self.view.radar_loading = False

        if result is None or not self._is_current(generation, self._radar_generation):
            logger.debug("Discarding stale radar frames")
            return

        self.view.frames = list(result.frames)
        self.view.radar_source = result.source_name
        self.view.radar_error = None if result.frames else RADAR_UNAVAILABLE
        self.animator.load_frames(self.view.frames)

    async def refresh_wind(self) -> None:
        """Fetch the wind grid for the current center.

        The result is dropped if the center moved or another wind fetch
        started before it arrived.
        """
        self._wind_generation += 1
        generation = self._wind_generation
        self.view.wind_loading = True
        try:
            samples = await self._track(self.wind_fetcher.fetch_wind_field(self.center))
        finally:
            if self._is_current(generation, self._wind_generation):
                self.view.wind_loading = False

        if samples is None or not self._is_current(generation, self._wind_generation):
            logger.debug("Discarding stale wind samples")
            return

        self.view.wind_samples = samples
        self.view.wind_unavailable = not samples
        self._sync_wind_layer()

    async def load_forecast(self, now_seconds: Optional[int] = None) -> Optional[HourlySeries]:
        """Fetch the forecast and resample it to 24 hourly entries.

        Args:
            now_seconds: Series start. Defaults to the current clock hour.

        Returns:
            The hourly series, or None if the view was closed meanwhile

        Raises:
            InsufficientDataError: The provider returned no samples
            NetworkError: Forecast provider unreachable or non-2xx
            MalformedResponseError: Unexpected forecast payload
        """
        try:
            samples = await self._track(self.forecast_client.fetch_samples(self.center))
            if self.view.closed or samples is None:
                return None
            if now_seconds is None:
                now_seconds = current_hour_seconds(self.clock())
            hourly = resample(samples, now_seconds)
        except MaplecastError as e:
            self.view.forecast_error = str(e)
            logger.error(f"Forecast unavailable: {e}")
            raise

        self.view.hourly = hourly
        self.view.forecast_error = None
        return hourly

    def set_show_precipitation(self, enabled: bool) -> None:
        self.view.show_precipitation = enabled
        self.animator.set_precipitation_enabled(enabled)

    async def set_show_wind(self, enabled: bool) -> None:
        """Toggle the wind overlay, fetching the grid the first time it is shown."""
        self.view.show_wind = enabled
        if enabled and not self.view.wind_samples and not self.view.wind_loading:
            await self.refresh_wind()
        else:
            self._sync_wind_layer()

    def render_deck(self, zoom: float = 8) -> pdk.Deck:
        """Deck with every overlay currently on the map."""
        return self.surface.to_deck(self.center.lat, self.center.lon, zoom=zoom)

    async def close(self) -> None:
        """Tear the view down. Safe to call more than once."""
        if self.view.closed:
            return
        self.view.radar_loading = False
        self.view.wind_loading = False
        self.view.closed = True
        self.animator.close()
        if self._wind_layer is not None:
            self.surface.remove_layer(self._wind_layer)
            self._wind_layer = None

        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.debug(f"Closed radar view, cancelled {len(pending)} requests")

    def _is_current(self, generation: int, latest: int) -> bool:
        return not self.view.closed and generation == latest

    def _sync_wind_layer(self) -> None:
        if self._wind_layer is not None:
            self.surface.remove_layer(self._wind_layer)
            self._wind_layer = None
        if self.view.show_wind and self.view.wind_samples:
            self._wind_layer = create_wind_layer(self.view.wind_samples)
            self.surface.add_layer(self._wind_layer)

    async def _track(self, aw: Awaitable[T]) -> Optional[T]:
        """Await aw as a task that close() can cancel.

        Returns None if the task was cancelled by close().
        """
        task = asyncio.ensure_future(aw)
        self._tasks.add(task)
        try:
            return await task
        except asyncio.CancelledError:
            if self.view.closed and task.cancelled():
                logger.debug("Discarding request abandoned by teardown")
                return None
            raise
        finally:
            self._tasks.discard(task)
