"""Radar frame data models."""

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RadarFrame:
    """One time-stamped precipitation image, rendered as a tile overlay.

    Attributes:
        tile_url_template: Tile URL containing {z}, {x} and {y} placeholders
        timestamp_millis: Observation time (Unix milliseconds)
        base_opacity: Opacity used while this frame is the visible one
        source_name: Provider tag, uniform within one fetch
    """

    tile_url_template: str
    timestamp_millis: int
    base_opacity: float
    source_name: str

    def __post_init__(self):
        if not 0 < self.base_opacity <= 1:
            raise ValueError(f"base_opacity must be in (0, 1], got {self.base_opacity}")

    def to_dict(self) -> dict:
        """Return as dictionary."""
        return asdict(self)


@dataclass
class RadarFetchResult:
    """Outcome of one radar provider call.

    Either frames were produced (error is None) or the call failed and error
    holds the reason. Providers return this instead of raising so the
    fallback chain stays explicit.
    """

    frames: list[RadarFrame] = field(default_factory=list)
    source_name: str = ""
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: Exception, source_name: str = "") -> "RadarFetchResult":
        return cls(frames=[], source_name=source_name, error=error)

    def __str__(self) -> str:
        status = "OK" if self.ok else f"FAILED: {self.error}"
        return f"RadarFetchResult({self.source_name or 'none'}, frames={len(self.frames)}, {status})"
