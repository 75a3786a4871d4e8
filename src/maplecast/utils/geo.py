"""Geographic helpers: coordinates, bounding boxes and sampling grids."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float

    def to_tuple(self) -> tuple[float, float]:
        """Return as (lat, lon)."""
        return (self.lat, self.lon)


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box."""

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def around(cls, center: Coordinates, half_span: float) -> "BoundingBox":
        """Square box extending half_span degrees from center on each side."""
        return cls(
            west=center.lon - half_span,
            south=center.lat - half_span,
            east=center.lon + half_span,
            north=center.lat + half_span,
        )

    def contains(self, lat: float, lon: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.south <= lat <= self.north
            and self.west <= lon <= self.east
        )


def generate_grid(
    center: Coordinates,
    size: int = 5,
    spacing: float = 0.5,
) -> list[Coordinates]:
    """Generate a square size x size lattice of points centered on center.

    Points are ordered row by row, south to north and west to east within a
    row. Output depends only on the arguments.

    Args:
        center: Grid center
        size: Points per side (odd sizes put a point exactly on center)
        spacing: Distance between neighbouring points in degrees

    Returns:
        List of size * size Coordinates

    Example:
        >>> grid = generate_grid(Coordinates(45.0, -75.0))
        >>> len(grid)
        25
    """
    if size < 1:
        raise ValueError(f"Grid size must be positive, got {size}")

    half = (size - 1) / 2
    offsets = np.linspace(-half * spacing, half * spacing, size)

    lon_grid, lat_grid = np.meshgrid(center.lon + offsets, center.lat + offsets)

    return [
        Coordinates(lat=round(float(lat), 6), lon=round(float(lon), 6))
        for lat, lon in zip(lat_grid.flatten(), lon_grid.flatten())
    ]
