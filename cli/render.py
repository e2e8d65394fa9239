from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import typer

from models.records import ReadingSet
from services.formatter import format_number


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_snapshot(path: Path, snapshot: ReadingSet) -> None:
    echo_heading("Snapshot")
    echo_key_values(
        [
            ("path", path),
            ("timestamp", snapshot.timestamp),
            ("value_count", len(snapshot.values)),
        ]
    )

    typer.echo()
    echo_heading("Values")
    if snapshot.values:
        for name in sorted(snapshot.values):
            typer.echo(f"  - {name}: {format_number(snapshot.values[name])}")
    else:
        typer.echo("No values recorded.")
