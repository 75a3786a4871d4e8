"""Wind grid sampling and wind vector display."""

from maplecast.wind.display import compass_direction, create_wind_layer, wind_color
from maplecast.wind.fetcher import WindFieldFetcher
from maplecast.wind.models import WindSample

__all__ = [
    "WindFieldFetcher",
    "WindSample",
    "compass_direction",
    "create_wind_layer",
    "wind_color",
]
