from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from cli.render import render_snapshot
from logging_config import configure_logging
from plugins.base import MetricPlugin
from plugins.loader import load_plugin, plugin_identity
from services.pipeline import EmissionPipeline, PluginConfig, load_plugin_config

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Run mackerel-agent plugins and inspect their saved state.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _load_plugin(reference: str) -> MetricPlugin:
    try:
        return load_plugin(reference)
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _build_config(
    reference: str,
    metric_key_prefix: Optional[str],
    workdir: Optional[Path],
    meta: Optional[bool] = None,
) -> PluginConfig:
    return load_plugin_config(
        metric_key_prefix=metric_key_prefix,
        workdir=str(workdir) if workdir is not None else None,
        meta=meta,
        program=plugin_identity(reference),
    )


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level for stderr diagnostics (defaults to LOG_LEVEL env or WARNING).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper() if log_level else None)


@app.command("run")
def run_command(
    plugin: str = typer.Argument(..., help="Plugin reference as 'package.module:Attribute'."),
    metric_key_prefix: Optional[str] = typer.Option(
        None,
        "--metric-key-prefix",
        "-p",
        help="Prefix for metric keys and the snapshot identity.",
    ),
    workdir: Optional[Path] = typer.Option(
        None,
        "--workdir",
        file_okay=False,
        help="Directory holding the snapshot (defaults to MACKEREL_PLUGIN_WORKDIR or the temp dir).",
    ),
    meta: Optional[bool] = typer.Option(
        None,
        "--meta/--no-meta",
        help="Print graph definitions instead of values (defaults to MACKEREL_AGENT_PLUGIN_META).",
    ),
) -> None:
    """Run a plugin once and print its output for the agent."""
    instance = _load_plugin(plugin)
    config = _build_config(plugin, metric_key_prefix, workdir, meta)
    try:
        EmissionPipeline(instance, config).run()
    except Exception as exc:  # noqa: BLE001 - plugin fetch errors are arbitrary
        logger.debug("Plugin run failed", exc_info=True, extra={"plugin": plugin})
        typer.secho(f"Plugin run failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command("snapshot")
def snapshot_command(
    plugin: str = typer.Argument(..., help="Plugin reference as 'package.module:Attribute'."),
    metric_key_prefix: Optional[str] = typer.Option(
        None,
        "--metric-key-prefix",
        "-p",
        help="Prefix used when the plugin was run.",
    ),
    workdir: Optional[Path] = typer.Option(
        None,
        "--workdir",
        file_okay=False,
        help="Directory holding the snapshot.",
    ),
) -> None:
    """Show the readings saved by the plugin's last run."""
    instance = _load_plugin(plugin)
    store = EmissionPipeline(instance, _build_config(plugin, metric_key_prefix, workdir)).snapshot_store()
    render_snapshot(store.path, store.load())
