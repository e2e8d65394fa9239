"""CLI package for running metric plugins."""

from importlib import import_module
from types import ModuleType


# ``cli.app`` stays importable as a module: the ``mackerel-plugin`` console
# script points at ``cli.app:app``.
def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)


__all__ = []
