"""maplecast: forecast resampling, radar animation and wind grids for a weather dashboard."""

from maplecast.config import MaplecastConfig
from maplecast.errors import (
    InsufficientDataError,
    MalformedResponseError,
    MaplecastError,
    NetworkError,
)

__version__ = "0.1.0"

__all__ = [
    "InsufficientDataError",
    "MalformedResponseError",
    "MaplecastConfig",
    "MaplecastError",
    "NetworkError",
    "__version__",
]
