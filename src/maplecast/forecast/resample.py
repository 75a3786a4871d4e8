"""Hourly resampling of sparse forecast series.

Providers such as the OpenWeatherMap 5 day forecast only publish every three
hours, and not on the current hour. resample() turns such a series into 24
clock-aligned hourly samples by linear interpolation between the nearest
samples on either side of each target hour.

Example:
    >>> series = resample(samples, now_seconds=current_hour_seconds())
    >>> len(series)
    24
"""

import dataclasses
import logging
import time
from typing import Callable, Optional, Sequence

from maplecast.errors import InsufficientDataError
from maplecast.forecast.models import (
    HOURS_PER_SERIES,
    NUMERIC_FIELDS,
    SECONDS_PER_HOUR,
    ForecastSample,
    HourlySeries,
)

logger = logging.getLogger(__name__)


def find_closest_before(
    samples: Sequence[ForecastSample], timestamp: int
) -> Optional[ForecastSample]:
    """Sample with the greatest timestamp at or before timestamp."""
    closest = None
    for sample in samples:
        if sample.timestamp_seconds <= timestamp and (
            closest is None or sample.timestamp_seconds > closest.timestamp_seconds
        ):
            closest = sample
    return closest


def find_closest_after(
    samples: Sequence[ForecastSample], timestamp: int
) -> Optional[ForecastSample]:
    """Sample with the smallest timestamp at or after timestamp."""
    closest = None
    for sample in samples:
        if sample.timestamp_seconds >= timestamp and (
            closest is None or sample.timestamp_seconds < closest.timestamp_seconds
        ):
            closest = sample
    return closest


def interpolate(
    before: ForecastSample, after: ForecastSample, timestamp: int
) -> ForecastSample:
    """Linearly blend numeric fields of two samples at timestamp.

    condition_code is categorical and is taken from before.
    """
    span = after.timestamp_seconds - before.timestamp_seconds
    ratio = (timestamp - before.timestamp_seconds) / span

    blended = {
        name: getattr(before, name) + (getattr(after, name) - getattr(before, name)) * ratio
        for name in NUMERIC_FIELDS
    }
    return dataclasses.replace(before, timestamp_seconds=timestamp, **blended)


def resample(samples: Sequence[ForecastSample], now_seconds: int) -> HourlySeries:
    """Convert an irregular sample sequence into 24 hourly samples.

    Entry i is valid at now_seconds + i * 3600. Samples do not need to be
    sorted.

    Args:
        samples: Source samples from the forecast provider
        now_seconds: Start of the series (Unix seconds), normally the
            current clock hour

    Returns:
        HourlySeries of exactly 24 samples

    Raises:
        InsufficientDataError: If samples is empty
    """
    if not samples:
        raise InsufficientDataError("Cannot resample an empty forecast series")

    hourly = []
    for i in range(HOURS_PER_SERIES):
        target = now_seconds + i * SECONDS_PER_HOUR

        before = find_closest_before(samples, target)
        after = find_closest_after(samples, target)

        if before is not None and after is not None and before is not after:
            sample = interpolate(before, after, target)
        else:
            sample = before or after or samples[0]

        # Always clock-aligned, whatever the source timestamp was
        hourly.append(dataclasses.replace(sample, timestamp_seconds=target))

    return HourlySeries(hourly)


def current_hour_seconds(now: Optional[float] = None) -> int:
    """Floor a Unix time (default: the system clock) to the start of its hour."""
    if now is None:
        now = time.time()
    return int(now) // SECONDS_PER_HOUR * SECONDS_PER_HOUR


def resample_now(
    samples: Sequence[ForecastSample],
    clock: Callable[[], float] = time.time,
) -> HourlySeries:
    """resample() starting at the current clock hour."""
    now_seconds = current_hour_seconds(clock())
    logger.debug(f"Resampling {len(samples)} samples from {now_seconds}")
    return resample(samples, now_seconds)
