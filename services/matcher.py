"""Expansion of wildcarded schema names against the flat metric key space."""

from __future__ import annotations

from typing import Iterable, Iterator

from models.schema import WILDCARDS, is_literal_segment


def effective_name(graph_name: str, metric_name: str) -> str:
    """Join a graph name and a metric name, omitting an empty graph name."""

    if not graph_name:
        return metric_name
    return f"{graph_name}.{metric_name}"


def has_wildcard(name: str) -> bool:
    return any(segment in WILDCARDS for segment in name.split("."))


def segment_matches(pattern_segment: str, key_segment: str) -> bool:
    if pattern_segment in WILDCARDS:
        return is_literal_segment(key_segment)
    return pattern_segment == key_segment


def match_keys(pattern: str, keys: Iterable[str]) -> Iterator[str]:
    """Yield every key in ``keys`` denoted by ``pattern``.

    A pattern without wildcards denotes only itself. A wildcard segment
    matches exactly one non-empty segment of letters, digits, ``-`` or ``_``;
    there is no cross-segment or partial-segment matching. Results follow the
    iteration order of ``keys``.
    """

    if not pattern:
        raise ValueError("Cannot match an empty metric name.")

    if not has_wildcard(pattern):
        if pattern in keys:
            yield pattern
        return

    pattern_segments = pattern.split(".")
    for key in keys:
        key_segments = key.split(".")
        if len(key_segments) != len(pattern_segments):
            continue
        if all(
            segment_matches(expected, actual)
            for expected, actual in zip(pattern_segments, key_segments)
        ):
            yield key
