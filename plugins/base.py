"""Contract implemented by concrete metric plugins."""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable

from models.schema import GraphSpec


@runtime_checkable
class MetricPlugin(Protocol):
    """A source of readings together with the graphs that describe them.

    Implementations may also provide ``metric_key_prefix() -> str``; it is
    used when the run configuration does not set a prefix.
    """

    def fetch_metrics(self) -> Mapping[str, float]:
        """Return the current readings keyed by fully-qualified metric name."""

    def graph_definition(self) -> Sequence[GraphSpec]:
        """Return the graphs, in display order, that the readings belong to."""
