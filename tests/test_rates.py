"""Unit tests for counter rate computation."""

from __future__ import annotations

from models.records import ReadingSet
from models.schema import MetricSpec
from services.rates import calc_diff, resolve_value


def test_calc_diff_normalizes_to_per_minute() -> None:
    assert calc_diff(160.0, 160, 100.0, 100) == 60.0
    assert calc_diff(101.0, 1001, 100.0, 1000) == 60.0
    assert calc_diff(100.0, 1060, 100.0, 1000) == 0.0


def test_calc_diff_without_previous_value() -> None:
    assert calc_diff(160.0, 160, None, 100) is None


def test_calc_diff_rejects_stale_previous() -> None:
    assert calc_diff(200.0, 1000, 100.0, 399) is None
    assert calc_diff(200.0, 1000, 100.0, 400) == 10.0


def test_calc_diff_requires_clock_to_advance() -> None:
    assert calc_diff(200.0, 1000, 100.0, 1000) is None
    assert calc_diff(200.0, 1000, 100.0, 1001) is None


def test_calc_diff_treats_decrease_as_reset() -> None:
    assert calc_diff(50.0, 1060, 100.0, 1000) is None


def test_resolve_value_passes_through_plain_metrics() -> None:
    metric = MetricSpec(name="nodiff", label="nodiff")
    current = ReadingSet(timestamp=1000, values={"foo.nodiff": 7.5})

    assert resolve_value(metric, "foo.nodiff", current, ReadingSet.empty()) == 7.5


def test_resolve_value_uses_previous_reading_of_same_key() -> None:
    metric = MetricSpec(name="diff", label="diff", diff=True)
    current = ReadingSet(timestamp=1060, values={"foo.diff": 130.0, "bar.diff": 10.0})
    previous = ReadingSet(timestamp=1000, values={"foo.diff": 100.0})

    assert resolve_value(metric, "foo.diff", current, previous) == 30.0
    assert resolve_value(metric, "bar.diff", current, previous) is None
    assert resolve_value(metric, "foo.diff", current, ReadingSet.empty()) is None
