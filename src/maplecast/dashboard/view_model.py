"""State of the radar/forecast view."""

from dataclasses import dataclass, field
from typing import Optional

from maplecast.forecast.models import HourlySeries
from maplecast.radar.models import RadarFrame
from maplecast.utils.geo import Coordinates
from maplecast.wind.models import WindSample

RADAR_UNAVAILABLE = "Unable to load precipitation data. Please try again later."


@dataclass
class RadarViewModel:
    """Everything the renderer needs, owned by RadarOrchestrator.

    Attributes:
        center: Location the view is showing
        hourly: Resampled 24 hour forecast, once loaded
        frames: Radar frames, oldest first. Only ever replaced as a whole.
        radar_source: Provider tag of the current frames
        wind_samples: Wind grid samples (failed points omitted)
        show_precipitation: Precipitation overlay toggle
        show_wind: Wind overlay toggle
        radar_loading: A radar fetch is in flight
        wind_loading: A wind fetch is in flight
        radar_error: Set when neither radar provider produced frames
        wind_unavailable: Set when a wind fetch returned no samples
        forecast_error: Last forecast failure message
        closed: The view was torn down; late results are discarded
    """

    center: Optional[Coordinates] = None
    hourly: Optional[HourlySeries] = None
    frames: list[RadarFrame] = field(default_factory=list)
    radar_source: str = ""
    wind_samples: list[WindSample] = field(default_factory=list)
    show_precipitation: bool = True
    show_wind: bool = False
    radar_loading: bool = False
    wind_loading: bool = False
    radar_error: Optional[str] = None
    wind_unavailable: bool = False
    forecast_error: Optional[str] = None
    closed: bool = False
