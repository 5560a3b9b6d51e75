"""CLI package for pushing readings to and inspecting the flood monitor."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# The Typer instance stays in ``cli.app`` so the module path remains
# patchable (tests swap ``cli.app.ApiClient``).

__all__ = []
