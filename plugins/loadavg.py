"""System load average plugin."""

from __future__ import annotations

import os
from typing import Dict, List

from models.schema import GraphSpec, Unit


class LoadAvgPlugin:

    def fetch_metrics(self) -> Dict[str, float]:
        load1, load5, load15 = os.getloadavg()
        return {
            "loadavg.load1": load1,
            "loadavg.load5": load5,
            "loadavg.load15": load15,
        }

    def graph_definition(self) -> List[GraphSpec]:
        return [
            GraphSpec(
                name="loadavg",
                label="Load Average",
                unit=Unit.FLOAT,
                metrics=[
                    {"name": "load1", "label": "load1"},
                    {"name": "load5", "label": "load5"},
                    {"name": "load15", "label": "load15"},
                ],
            )
        ]
