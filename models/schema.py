"""Pydantic schemas describing graphs and the metrics drawn on them."""

from __future__ import annotations

import re
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

WILDCARDS = frozenset({"*", "#"})

_LITERAL_SEGMENT = re.compile(r"[A-Za-z0-9_-]+")


def is_literal_segment(segment: str) -> bool:
    """True when ``segment`` is a non-empty run of letters, digits, ``-`` or ``_``."""

    return _LITERAL_SEGMENT.fullmatch(segment) is not None


def validate_dotted_name(value: str, kind: str, allow_empty: bool = False) -> str:
    """Reject names that cannot be matched segment by segment.

    Every dot-separated segment must be a literal segment or exactly one of
    the wildcard tokens, which rules out leading, trailing and doubled dots.
    """

    if not value:
        if allow_empty:
            return value
        raise ValueError(f"invalid {kind} name: name must not be empty")
    for segment in value.split("."):
        if segment in WILDCARDS or is_literal_segment(segment):
            continue
        raise ValueError(f"invalid {kind} name: {value!r}")
    return value


class Unit(str, Enum):
    """Display units understood by the agent."""

    FLOAT = "float"
    INTEGER = "integer"
    PERCENTAGE = "percentage"
    BYTES = "bytes"
    BYTES_PER_SECOND = "bytes/sec"
    IOPS = "iops"


class MetricSpec(BaseModel):
    """A single time series drawn on a graph."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    stacked: bool = False
    diff: bool = Field(
        default=False,
        exclude=True,
        description="Emit the per-minute rate of change instead of the raw value.",
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_dotted_name(value, kind="metric")


class GraphSpec(BaseModel):
    """A named group of metrics sharing one unit.

    The name is the dotted prefix of every contained metric; an empty name
    places the metrics at the root of the key space.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", exclude=True)
    label: str
    unit: Unit
    metrics: Tuple[MetricSpec, ...] = ()

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_dotted_name(value, kind="graph", allow_empty=True)

    @property
    def has_diff(self) -> bool:
        return any(metric.diff for metric in self.metrics)
