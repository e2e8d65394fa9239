from __future__ import annotations

import inspect
from importlib import import_module

from plugins.base import MetricPlugin


def load_plugin(reference: str) -> MetricPlugin:
    """Resolve ``package.module:Attribute`` into a plugin instance.

    Classes are instantiated without arguments; any other attribute is used
    as-is.
    """
    module_name, sep, attr_name = reference.partition(":")
    if not sep or not module_name or not attr_name:
        raise ValueError(
            f"Plugin reference {reference!r} must look like 'package.module:Attribute'."
        )

    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import plugin module {module_name!r}: {exc}") from exc

    try:
        target = getattr(module, attr_name)
    except AttributeError as exc:
        raise ValueError(
            f"Module {module_name!r} has no attribute {attr_name!r}."
        ) from exc

    plugin = target() if inspect.isclass(target) else target
    if not isinstance(plugin, MetricPlugin):
        raise ValueError(
            f"{reference!r} does not provide fetch_metrics() and graph_definition()."
        )
    return plugin


def plugin_identity(reference: str) -> str:
    """File-name-safe identity for a plugin run through the shared runner."""
    return reference.strip().replace(":", "-").replace("/", "-")
