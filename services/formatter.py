"""Serialization of emitted values and graph definitions for the agent."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Dict, Iterable

from models.records import EmittedValue
from models.schema import GraphSpec

DEFINITIONS_HEADER = "# mackerel-agent-plugin"


def format_number(value: float) -> str:
    """Render the shortest round-trip decimal, without exponent or trailing ``.0``."""
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_value_line(emitted: EmittedValue) -> str:
    return f"{emitted.name}\t{format_number(emitted.value)}\t{emitted.timestamp}\n"


def graph_key(prefix: str, graph_name: str) -> str:
    if not prefix:
        return graph_name
    if not graph_name:
        return prefix
    return f"{prefix}.{graph_name}"


def definitions_document(graphs: Iterable[GraphSpec], prefix: str = "") -> Dict[str, Any]:
    return {
        "graphs": {
            graph_key(prefix, graph.name): graph.model_dump(mode="json")
            for graph in graphs
        }
    }


def format_definitions(graphs: Iterable[GraphSpec], prefix: str = "") -> str:
    document = definitions_document(graphs, prefix)
    body = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    return f"{DEFINITIONS_HEADER}\n{body}\n"
