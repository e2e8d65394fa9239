from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_META_ENV = "MACKEREL_AGENT_PLUGIN_META"
_WORKDIR_ENV = "MACKEREL_PLUGIN_WORKDIR"
_PREFIX_ENV = "MACKEREL_PLUGIN_METRIC_KEY_PREFIX"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    agent_plugin_meta: bool
    plugin_workdir: Optional[str]
    metric_key_prefix: Optional[str]
    log_level: str


def _read_flag_env(name: str) -> bool:
    # The agent only checks that the variable is set to something non-empty.
    value = os.getenv(name)
    return bool(value)


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        agent_plugin_meta=_read_flag_env(_META_ENV),
        plugin_workdir=_read_optional_env(_WORKDIR_ENV, None),
        metric_key_prefix=_read_optional_env(_PREFIX_ENV, None),
        log_level=_read_log_level("WARNING"),
    )
