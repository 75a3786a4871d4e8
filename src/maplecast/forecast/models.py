"""Forecast data models."""

from dataclasses import asdict, dataclass, fields
from typing import Iterator, Sequence

import pandas as pd

HOURS_PER_SERIES = 24
SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class ForecastSample:
    """One forecast point as produced by the upstream provider.

    Attributes:
        timestamp_seconds: Valid time (Unix seconds)
        temperature: Air temperature (C)
        feels_like: Apparent temperature (C)
        pressure: Sea level pressure (hPa)
        humidity: Relative humidity (%)
        dew_point: Dew point (C)
        cloud_cover_percent: Cloud cover (0-100)
        visibility_meters: Visibility (m)
        wind_speed: Wind speed (m/s)
        wind_direction_deg: Wind direction (degrees)
        precipitation_probability: Probability of precipitation (0-1)
        condition_code: Provider weather condition id (categorical)
    """

    timestamp_seconds: int
    temperature: float
    feels_like: float
    pressure: float
    humidity: float
    dew_point: float
    cloud_cover_percent: float
    visibility_meters: float
    wind_speed: float
    wind_direction_deg: float
    precipitation_probability: float
    condition_code: int

    def to_dict(self) -> dict:
        """Return as dictionary."""
        return asdict(self)


# Fields that are blended when resampling. timestamp_seconds is recomputed and
# condition_code is categorical, so neither is interpolated.
NUMERIC_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(ForecastSample)
    if f.name not in ("timestamp_seconds", "condition_code")
)


class HourlySeries(Sequence[ForecastSample]):
    """Exactly 24 samples, one per hour, spaced exactly 3600 seconds.

    The first entry represents the current clock hour.

    Raises:
        ValueError: If constructed from samples that break the invariant
    """

    def __init__(self, samples: Sequence[ForecastSample]):
        samples = tuple(samples)
        if len(samples) != HOURS_PER_SERIES:
            raise ValueError(
                f"HourlySeries needs {HOURS_PER_SERIES} samples, got {len(samples)}"
            )
        for prev, cur in zip(samples, samples[1:]):
            if cur.timestamp_seconds - prev.timestamp_seconds != SECONDS_PER_HOUR:
                raise ValueError(
                    f"Samples must be spaced {SECONDS_PER_HOUR}s apart: "
                    f"{prev.timestamp_seconds} -> {cur.timestamp_seconds}"
                )
        self._samples = samples

    def __getitem__(self, index):
        return self._samples[index]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[ForecastSample]:
        return iter(self._samples)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HourlySeries):
            return NotImplemented
        return self._samples == other._samples

    def __repr__(self) -> str:
        return f"HourlySeries(start={self.start_seconds}, hours={len(self)})"

    @property
    def start_seconds(self) -> int:
        return self._samples[0].timestamp_seconds

    @property
    def timestamps(self) -> list[int]:
        return [s.timestamp_seconds for s in self._samples]

    def to_dataframe(self) -> pd.DataFrame:
        """Export as a DataFrame with one row per hour and a UTC 'time' column."""
        df = pd.DataFrame([s.to_dict() for s in self._samples])
        df["time"] = pd.to_datetime(df["timestamp_seconds"], unit="s", utc=True)
        return df
