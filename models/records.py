"""Domain models shared across services."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ReadingSet(BaseModel):
    """Flat metric readings observed at a single Unix timestamp."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = 0
    values: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ReadingSet":
        return cls()

    @classmethod
    def capture(cls, timestamp: int, readings: Mapping[str, float]) -> "ReadingSet":
        """Build the current reading set, keeping only finite values."""

        values: Dict[str, float] = {}
        for name, raw in readings.items():
            value = float(raw)
            if math.isfinite(value):
                values[name] = value
        dropped = len(readings) - len(values)
        if dropped:
            logger.debug(
                "Dropped non-finite readings",
                extra={"value_count": dropped},
            )
        return cls(timestamp=timestamp, values=values)


@dataclass(slots=True, frozen=True)
class EmittedValue:
    """One output line: fully-qualified name, value and timestamp."""

    name: str
    value: float
    timestamp: int
