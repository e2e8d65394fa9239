from __future__ import annotations

import logging
import re
from logging.config import dictConfig
from typing import Any, Iterable, Optional, Tuple, Union

from settings import get_settings

# Context attached through ``extra=`` by the store, pipeline and CLI.
CONTEXT_KEYS: Tuple[str, ...] = ("plugin", "prefix", "path", "reason", "value_count")

_NEEDS_QUOTES = re.compile(r'[\s"=|]')

_configured = False


def _render_context_value(value: Any) -> str:
    text = str(value)
    if text and not _NEEDS_QUOTES.search(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ContextualFormatter(logging.Formatter):
    """Appends ``key=value`` pairs for the context keys a record carries."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        style: str = "%",
        context_keys: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self.context_keys = tuple(context_keys) if context_keys is not None else CONTEXT_KEYS

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = [
            f"{key}={_render_context_value(getattr(record, key))}"
            for key in self.context_keys
            if getattr(record, key, None) is not None
        ]
        if not pairs:
            return message
        return f"{message} | {' '.join(pairs)}"


def configure_logging(level: Union[str, int, None] = None) -> None:
    """Send diagnostics to stderr once per process; stdout carries agent output."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plugin": {
                    "()": ContextualFormatter,
                    "fmt": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y/%m/%d %H:%M:%S",
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "plugin",
                }
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )
    _configured = True
