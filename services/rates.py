"""Rate-of-change computation for counter metrics."""

from __future__ import annotations

from typing import Optional

from models.records import ReadingSet
from models.schema import MetricSpec

STALE_AFTER_SECONDS = 600
RATE_PERIOD_SECONDS = 60


def calc_diff(
    value: float,
    timestamp: int,
    prev_value: Optional[float],
    prev_timestamp: int,
) -> Optional[float]:
    """Return the per-minute rate between two readings of a counter.

    ``None`` means nothing should be emitted this cycle: there is no previous
    reading, it is older than ten minutes, the clock did not advance, or the
    counter went backwards.
    """

    if prev_value is None:
        return None
    if prev_timestamp < timestamp - STALE_AFTER_SECONDS:
        return None
    if timestamp <= prev_timestamp:
        return None
    if prev_value > value:
        return None
    elapsed_periods = (timestamp - prev_timestamp) / RATE_PERIOD_SECONDS
    return (value - prev_value) / elapsed_periods


def resolve_value(
    metric: MetricSpec,
    key: str,
    current: ReadingSet,
    previous: ReadingSet,
) -> Optional[float]:
    value = current.values[key]
    if not metric.diff:
        return value
    return calc_diff(
        value,
        current.timestamp,
        previous.values.get(key),
        previous.timestamp,
    )
