"""Resolve which plugin manager observes the current reconciliation.

An explicit ``use_plugin_manager`` block wins. Otherwise the JSON file named by
``ORGDIFF_PLUGIN_CONFIG`` is loaded once and reused until the variable points
somewhere else or the file changes on disk.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Iterator

from orgdiffpack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from orgdiffpack.plugins.loader import load_plugin_manager_from_file
from orgdiffpack.plugins.manager import PluginManager

_SCOPED_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "orgdiffpack_scoped_plugin_manager",
    default=None,
)
_NO_PLUGINS = PluginManager()


@dataclass(frozen=True, slots=True)
class _EnvConfigEntry:
    path: str
    mtime_ns: int
    manager: PluginManager


_env_entry: _EnvConfigEntry | None = None


def get_active_plugin_manager() -> PluginManager:
    scoped = _SCOPED_MANAGER.get()
    if scoped is not None:
        return scoped

    config_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _NO_PLUGINS
    return _manager_from_env_path(config_path)


def _manager_from_env_path(config_path: str) -> PluginManager:
    global _env_entry
    mtime_ns = Path(config_path).stat().st_mtime_ns
    cached = _env_entry
    if cached is not None and cached.path == config_path and cached.mtime_ns == mtime_ns:
        return cached.manager

    manager = load_plugin_manager_from_file(config_path)
    _env_entry = _EnvConfigEntry(path=config_path, mtime_ns=mtime_ns, manager=manager)
    return manager


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    """Route reconciliation events to ``manager`` inside the block."""
    token = _SCOPED_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _SCOPED_MANAGER.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget the manager loaded from ``ORGDIFF_PLUGIN_CONFIG``."""
    global _env_entry
    _env_entry = None
