"""Wind marker styling and the wind vector map layer.

Colour bands (km/h):
    < 10   light       blue
    < 20   moderate    green
    < 40   strong      yellow
    < 60   very strong orange
    >= 60  extreme     red
"""

import math
from typing import Sequence

import pandas as pd
import pydeck as pdk

from maplecast.wind.models import WindSample

WIND_SPEED_BANDS = [
    (10, "#3498db"),
    (20, "#2ecc71"),
    (40, "#f1c40f"),
    (60, "#e67e22"),
]
WIND_EXTREME_COLOR = "#e74c3c"

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

# Arrow length in degrees for a 60 km/h wind; slower winds scale down
ARROW_MAX_LENGTH_DEG = 0.2
ARROW_REFERENCE_SPEED_KMH = 60.0


def wind_color(speed_kmh: float) -> str:
    """Hex colour for a wind speed."""
    for upper, color in WIND_SPEED_BANDS:
        if speed_kmh < upper:
            return color
    return WIND_EXTREME_COLOR


def hex_to_rgb(hex_color: str) -> list[int]:
    """'#3498db' -> [52, 152, 219]."""
    hex_color = hex_color.lstrip("#")
    return [int(hex_color[i:i + 2], 16) for i in (0, 2, 4)]


def compass_direction(degrees: float) -> str:
    """16-point compass label for a direction in degrees."""
    # Half-way values round up (11.25 -> NNE)
    index = math.floor((degrees % 360) / 22.5 + 0.5) % 16
    return COMPASS_POINTS[index]


def arrow_endpoints(sample: WindSample) -> tuple[list[float], list[float]]:
    """[lon, lat] source and target of the arrow drawn for a sample.

    direction_deg is where the wind comes from, so the arrow points the
    opposite way. Length grows with speed, capped at ARROW_MAX_LENGTH_DEG.
    """
    length = ARROW_MAX_LENGTH_DEG * min(sample.speed_kmh / ARROW_REFERENCE_SPEED_KMH, 1.0)
    heading = math.radians((sample.direction_deg + 180) % 360)
    target_lat = sample.lat + length * math.cos(heading)
    target_lon = sample.lon + length * math.sin(heading)
    return [sample.lon, sample.lat], [target_lon, target_lat]


def wind_dataframe(samples: Sequence[WindSample]) -> pd.DataFrame:
    """One row per sample with styling columns for the map layer."""
    rows = []
    for sample in samples:
        source, target = arrow_endpoints(sample)
        rows.append({
            **sample.to_dict(),
            "compass": compass_direction(sample.direction_deg),
            "color": hex_to_rgb(wind_color(sample.speed_kmh)),
            "source_position": source,
            "target_position": target,
        })
    columns = [
        "lat", "lon", "speed_kmh", "direction_deg",
        "compass", "color", "source_position", "target_position",
    ]
    return pd.DataFrame(rows, columns=columns)


def create_wind_layer(samples: Sequence[WindSample], width: int = 3) -> pdk.Layer:
    """LineLayer drawing one arrow shaft per wind sample.

    Args:
        samples: Wind samples (may be empty)
        width: Line width in pixels

    Returns:
        PyDeck LineLayer with a tooltip-ready pickable config
    """
    return pdk.Layer(
        "LineLayer",
        data=wind_dataframe(samples),
        id="wind-vectors",
        get_source_position="source_position",
        get_target_position="target_position",
        get_color="color",
        get_width=width,
        pickable=True,
    )
