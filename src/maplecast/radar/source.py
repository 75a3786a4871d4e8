"""Radar frame metadata with provider fallback.

The primary provider (RainViewer) publishes a list of recent radar snapshots.
When it cannot be used, a secondary provider (OpenWeatherMap precipitation
tiles) is used instead. The secondary tiles are a static URL, so its frame
list is synthesized locally and cannot fail on the network.
"""

import logging
import time
from typing import Callable, Optional

import httpx

from maplecast.api.schemas import RainViewerMaps
from maplecast.config import (
    OWM_PRECIP_TILE_URL,
    RAINVIEWER_MAPS_URL,
    MaplecastConfig,
)
from maplecast.errors import MalformedResponseError, MaplecastError
from maplecast.radar.models import RadarFetchResult, RadarFrame
from maplecast.utils.http import fetch_model

logger = logging.getLogger(__name__)

PRIMARY_SOURCE = "primary"
SECONDARY_SOURCE = "secondary"

# Most recent snapshots kept from the primary provider
PRIMARY_FRAME_COUNT = 6
PRIMARY_OPACITY = 0.7

# Synthetic secondary series: 4 frames, 5 minutes apart, ending now
SECONDARY_OPACITIES = (0.4, 0.5, 0.6, 0.7)
SECONDARY_SPACING_MS = 5 * 60 * 1000

# RainViewer tile path suffix: 256px tiles, colour scheme 2, smooth + snow
RAINVIEWER_TILE_SUFFIX = "/256/{z}/{x}/{y}/2/1_1.png"


def _now_millis() -> int:
    return int(time.time() * 1000)


def frames_from_rainviewer(maps: RainViewerMaps) -> list[RadarFrame]:
    """Map the newest RainViewer snapshots to frames, oldest first.

    Raises:
        MalformedResponseError: If the payload lists no past snapshots
    """
    past = sorted(maps.radar.past, key=lambda s: s.time)
    if not past:
        raise MalformedResponseError("RainViewer returned zero radar snapshots")

    host = maps.host.rstrip("/")
    return [
        RadarFrame(
            tile_url_template=f"{host}{snapshot.path}{RAINVIEWER_TILE_SUFFIX}",
            timestamp_millis=snapshot.time * 1000,
            base_opacity=PRIMARY_OPACITY,
            source_name=PRIMARY_SOURCE,
        )
        for snapshot in past[-PRIMARY_FRAME_COUNT:]
    ]


def secondary_frames(now_millis: int, api_key: str = "") -> list[RadarFrame]:
    """Synthesize the secondary frame series ending at now_millis."""
    url = OWM_PRECIP_TILE_URL
    if api_key:
        url = f"{url}?appid={api_key}"

    count = len(SECONDARY_OPACITIES)
    return [
        RadarFrame(
            tile_url_template=url,
            timestamp_millis=now_millis - (count - 1 - i) * SECONDARY_SPACING_MS,
            base_opacity=opacity,
            source_name=SECONDARY_SOURCE,
        )
        for i, opacity in enumerate(SECONDARY_OPACITIES)
    ]


class RadarFrameSource:
    """Produces the radar frame list, falling back between providers.

    Example:
        >>> source = RadarFrameSource(http_client)
        >>> result = await source.fetch_frames()
        >>> result.source_name
        'primary'
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: Optional[MaplecastConfig] = None,
        clock: Callable[[], int] = _now_millis,
    ):
        """Initialize the source.

        Args:
            http: Shared async client
            config: Settings (API key for the secondary tiles)
            clock: Returns the current time in Unix milliseconds
        """
        self.http = http
        self.config = config or MaplecastConfig()
        self.clock = clock

    async def fetch_primary(self) -> RadarFetchResult:
        """Ask RainViewer for recent snapshots."""
        try:
            maps = await fetch_model(self.http, RAINVIEWER_MAPS_URL, RainViewerMaps)
            frames = frames_from_rainviewer(maps)
        except MaplecastError as e:
            return RadarFetchResult.failure(e, PRIMARY_SOURCE)
        return RadarFetchResult(frames=frames, source_name=PRIMARY_SOURCE)

    def fetch_secondary(self) -> RadarFetchResult:
        """Build the static-tile series. No network involved."""
        try:
            frames = secondary_frames(self.clock(), self.config.owm_api_key)
        except ValueError as e:
            return RadarFetchResult.failure(e, SECONDARY_SOURCE)
        return RadarFetchResult(frames=frames, source_name=SECONDARY_SOURCE)

    async def fetch_frames(self) -> RadarFetchResult:
        """Fetch frames from the primary provider, else the secondary one.

        Never raises. If both providers fail the result has no frames and
        carries the secondary provider's error.
        """
        result = await self.fetch_primary()
        if result.ok:
            logger.info(f"Loaded {len(result.frames)} {PRIMARY_SOURCE} radar frames")
            return result

        logger.warning(f"Primary radar provider failed ({result.error}), using secondary tiles")
        result = self.fetch_secondary()
        if result.ok:
            logger.info(f"Loaded {len(result.frames)} {SECONDARY_SOURCE} radar frames")
        else:
            logger.error(f"Radar unavailable: {result.error}")
        return result
