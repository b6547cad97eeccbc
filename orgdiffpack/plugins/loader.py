"""Build a ``PluginManager`` from a versioned JSON plugin config.

Config shape::

    {
      "config_version": 1,
      "plugins": [
        {"entrypoint": "package.module:Factory", "options": {...}, "enabled": true}
      ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
import importlib
import json
from pathlib import Path
from typing import Any

from orgdiffpack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from orgdiffpack.plugins.exceptions import PluginConfigError, PluginLoadError
from orgdiffpack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})
_SUPPORTED_MAJOR = PLUGIN_API_VERSION.split(".", 1)[0]


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """One validated ``plugins[]`` item."""

    index: int
    module: str
    attribute: str
    options: dict[str, Any] = field(default_factory=dict)
    enabled: bool = True

    @property
    def entrypoint(self) -> str:
        return f"{self.module}:{self.attribute}"


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Read a plugin config file; a missing file raises ``FileNotFoundError``."""
    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({config_path}).")
    return plugin_manager_from_config(raw)


def plugin_manager_from_config(raw: dict[str, Any]) -> PluginManager:
    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {version!r}; expected {PLUGIN_CONFIG_VERSION}."
        )

    raw_entries = raw.get("plugins")
    if not isinstance(raw_entries, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.")

    entries = [parse_plugin_entry(item, index=index) for index, item in enumerate(raw_entries, start=1)]
    return PluginManager(plugins=tuple(instantiate_plugin(entry) for entry in entries if entry.enabled))


def parse_plugin_entry(raw: Any, *, index: int) -> PluginEntry:
    """Validate one config entry without importing anything."""
    label = f"Plugin entry #{index}"
    if not isinstance(raw, dict):
        raise PluginConfigError(f"{label} must be a JSON object.")

    unknown = sorted(set(raw) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(f"{label} contains unsupported keys: {', '.join(unknown)}")

    enabled = raw.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"{label} key 'enabled' must be boolean.")

    entrypoint = raw.get("entrypoint")
    module, _, attribute = entrypoint.partition(":") if isinstance(entrypoint, str) else ("", "", "")
    if not module or not attribute:
        raise PluginConfigError(f"{label} key 'entrypoint' must be 'module:attribute'.")

    options = raw.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"{label} key 'options' must be a JSON object.")

    return PluginEntry(
        index=index,
        module=module,
        attribute=attribute,
        options=dict(options),
        enabled=enabled,
    )


def instantiate_plugin(entry: PluginEntry) -> object:
    """Import, build and version-check the plugin described by ``entry``."""
    label = f"Plugin entry #{entry.index}"
    try:
        module = importlib.import_module(entry.module)
    except Exception as error:
        raise PluginLoadError(
            f"{label} failed to import module '{entry.module}': {error}"
        ) from error

    if not hasattr(module, entry.attribute):
        raise PluginLoadError(
            f"{label} could not find attribute '{entry.attribute}' in '{entry.module}'."
        )
    target = getattr(module, entry.attribute)

    if callable(target):
        try:
            plugin = target(**entry.options)
        except Exception as error:
            raise PluginLoadError(
                f"{label} failed to instantiate plugin "
                f"with options {sorted(entry.options)}: {error}"
            ) from error
    elif entry.options:
        raise PluginLoadError(f"{label} is not callable and cannot accept options.")
    else:
        plugin = target

    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if declared.split(".", 1)[0] != _SUPPORTED_MAJOR:
        raise PluginLoadError(
            f"{label} '{entry.entrypoint}' declares unsupported api_version "
            f"{declared!r}; supported major version is {_SUPPORTED_MAJOR}."
        )
    return plugin
