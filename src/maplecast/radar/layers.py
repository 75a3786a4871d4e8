"""Map layers for radar frames.

Each radar frame becomes one pydeck TileLayer. Layers live on a MapSurface,
which is the only thing a renderer needs to build a deck.
"""

import logging
from typing import Callable, Optional
from urllib.parse import urlparse

import pydeck as pdk

from maplecast.radar.models import RadarFrame

logger = logging.getLogger(__name__)

TILE_PLACEHOLDERS = ("{z}", "{x}", "{y}")
RADAR_TILE_SIZE = 256
RADAR_MAX_ZOOM = 18

# Signature of a layer factory: (frame, index, initial opacity) -> layer
LayerFactory = Callable[[RadarFrame, int, float], pdk.Layer]


def validate_tile_url(url: str) -> None:
    """Check that url is an absolute http(s) tile template.

    Raises:
        ValueError: If the URL has no http(s) scheme or host, or is missing
            one of the {z}/{x}/{y} placeholders
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Malformed tile URL: {url!r}")

    missing = [p for p in TILE_PLACEHOLDERS if p not in url]
    if missing:
        raise ValueError(f"Tile URL {url!r} is missing placeholders {missing}")


def create_radar_layer(frame: RadarFrame, index: int, opacity: float) -> pdk.Layer:
    """Create a TileLayer for one radar frame.

    Args:
        frame: Frame to render
        index: Position of the frame in its list (used in the layer id)
        opacity: Initial opacity

    Returns:
        PyDeck TileLayer

    Raises:
        ValueError: If the frame's tile URL is malformed
    """
    validate_tile_url(frame.tile_url_template)

    return pdk.Layer(
        "TileLayer",
        data=frame.tile_url_template,
        id=f"radar-{frame.source_name}-{index}-{frame.timestamp_millis}",
        opacity=opacity,
        tile_size=RADAR_TILE_SIZE,
        max_zoom=RADAR_MAX_ZOOM,
        pickable=False,
    )


class MapSurface:
    """The set of overlay layers currently on the map.

    Stands in for the live map widget: layers are added and removed here and
    a renderer turns the surface into a pydeck Deck.
    """

    def __init__(self):
        self.layers: list[pdk.Layer] = []

    def add_layer(self, layer: pdk.Layer) -> None:
        self.layers.append(layer)

    def remove_layer(self, layer: pdk.Layer) -> None:
        """Remove a layer (by identity). Removing an absent layer is a no-op."""
        remaining = [existing for existing in self.layers if existing is not layer]
        if len(remaining) == len(self.layers):
            logger.debug(f"Layer {getattr(layer, 'id', layer)} was not on the map")
        self.layers = remaining

    def __len__(self) -> int:
        return len(self.layers)

    def to_deck(
        self,
        lat: float,
        lon: float,
        zoom: float = 8,
        base_layers: Optional[list[pdk.Layer]] = None,
    ) -> pdk.Deck:
        """Build a Deck with base_layers underneath the overlay layers."""
        layers = list(base_layers or []) + list(self.layers)
        return pdk.Deck(
            layers=layers,
            initial_view_state=pdk.ViewState(latitude=lat, longitude=lon, zoom=zoom),
            map_style=None,
        )
