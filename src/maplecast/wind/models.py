"""Wind data models."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class WindSample:
    """Current wind at one grid point.

    Attributes:
        lat: Latitude of the grid point
        lon: Longitude of the grid point
        speed_kmh: 10 m wind speed in km/h (>= 0)
        direction_deg: Direction the wind blows from, in [0, 360)
    """

    lat: float
    lon: float
    speed_kmh: float
    direction_deg: float

    def __post_init__(self):
        if self.speed_kmh < 0:
            raise ValueError(f"speed_kmh must be >= 0, got {self.speed_kmh}")
        if not 0 <= self.direction_deg < 360:
            raise ValueError(f"direction_deg must be in [0, 360), got {self.direction_deg}")

    def to_dict(self) -> dict:
        """Return as dictionary."""
        return asdict(self)
