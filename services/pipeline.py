"""Orchestration of a single plugin run."""

from __future__ import annotations

import logging
import math
import sys
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, TextIO

from models.records import EmittedValue, ReadingSet
from models.schema import GraphSpec
from plugins.base import MetricPlugin
from services.formatter import format_definitions, format_value_line
from services.matcher import effective_name, match_keys
from services.rates import resolve_value
from settings import get_settings
from storage.snapshot_store import SnapshotStore, snapshot_path

logger = logging.getLogger(__name__)

StoreFactory = Callable[[str, Optional[str], Optional[str]], SnapshotStore]


@dataclass(frozen=True)
class PluginConfig:
    metric_key_prefix: Optional[str] = None
    workdir: Optional[str] = None
    meta: bool = False
    # Names the snapshot when there is no prefix; defaults to sys.argv[0].
    program: Optional[str] = None


def load_plugin_config(
    metric_key_prefix: Optional[str] = None,
    workdir: Optional[str] = None,
    meta: Optional[bool] = None,
    program: Optional[str] = None,
) -> PluginConfig:
    """Merge explicit overrides with the environment-derived settings."""
    settings = get_settings()
    if metric_key_prefix is None:
        metric_key_prefix = settings.metric_key_prefix
    if meta is None:
        meta = settings.agent_plugin_meta
    return PluginConfig(
        metric_key_prefix=metric_key_prefix,
        workdir=workdir or settings.plugin_workdir,
        meta=meta,
        program=program,
    )


def _default_store_factory(
    prefix: str, workdir: Optional[str], program: Optional[str]
) -> SnapshotStore:
    return SnapshotStore(path=snapshot_path(prefix, workdir, program))


class EmissionPipeline:
    """Turns one plugin's readings into agent output.

    Value mode fetches readings once, loads the previous snapshot only when a
    diff metric exists, writes one line per surviving value and then saves
    the current readings. Definition mode only describes the graphs.
    """

    def __init__(
        self,
        plugin: MetricPlugin,
        config: PluginConfig,
        clock: Callable[[], float] = time.time,
        store_factory: StoreFactory = _default_store_factory,
    ) -> None:
        self.plugin = plugin
        self.config = config
        self._clock = clock
        self._store_factory = store_factory

    def metric_key_prefix(self) -> str:
        if self.config.metric_key_prefix is not None:
            return self.config.metric_key_prefix
        plugin_prefix = getattr(self.plugin, "metric_key_prefix", None)
        if callable(plugin_prefix):
            return plugin_prefix() or ""
        return ""

    def snapshot_store(self, prefix: Optional[str] = None) -> SnapshotStore:
        if prefix is None:
            prefix = self.metric_key_prefix()
        return self._store_factory(prefix, self.config.workdir, self.config.program)

    def collect_values(
        self,
        graphs: Iterable[GraphSpec],
        current: ReadingSet,
        previous: ReadingSet,
        prefix: str = "",
    ) -> Iterator[EmittedValue]:
        for graph in graphs:
            for metric in graph.metrics:
                pattern = effective_name(graph.name, metric.name)
                for key in match_keys(pattern, current.values):
                    value = resolve_value(metric, key, current, previous)
                    if value is None or not math.isfinite(value):
                        continue
                    name = f"{prefix}.{key}" if prefix else key
                    yield EmittedValue(name=name, value=value, timestamp=current.timestamp)

    def output_values(self, out: TextIO) -> None:
        timestamp = int(self._clock())
        current = ReadingSet.capture(timestamp, self.plugin.fetch_metrics())
        prefix = self.metric_key_prefix()
        graphs = list(self.plugin.graph_definition())
        has_diff = any(graph.has_diff for graph in graphs)

        store: Optional[SnapshotStore] = None
        previous = ReadingSet.empty()
        if has_diff:
            store = self.snapshot_store(prefix)
            previous = store.load()

        emitted = 0
        for value in self.collect_values(graphs, current, previous, prefix):
            out.write(format_value_line(value))
            emitted += 1

        if store is not None:
            store.save(current)

        logger.debug(
            "Emitted metric values",
            extra={"prefix": prefix or None, "value_count": emitted},
        )

    def output_definitions(self, out: TextIO) -> None:
        out.write(format_definitions(self.plugin.graph_definition(), self.metric_key_prefix()))

    def run(self, out: Optional[TextIO] = None) -> None:
        stream = out if out is not None else sys.stdout
        if self.config.meta:
            self.output_definitions(stream)
        else:
            self.output_values(stream)
        stream.flush()


def run_plugin(
    plugin: MetricPlugin,
    config: Optional[PluginConfig] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Run ``plugin`` once using the environment when no config is given."""
    pipeline = EmissionPipeline(plugin, config or load_plugin_config())
    pipeline.run(out)
