"""Lifecycle plugins that observe reconciliation runs."""

from orgdiffpack.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    RECONCILE_HOOKS,
    LifecyclePlugin,
    ReconcileEndEvent,
    ReconcileItemEvent,
    ReconcileStartEvent,
)
from orgdiffpack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from orgdiffpack.plugins.loader import (
    PluginEntry,
    instantiate_plugin,
    load_plugin_manager_from_file,
    parse_plugin_entry,
    plugin_manager_from_config,
)
from orgdiffpack.plugins.manager import PluginDiagnostic, PluginManager
from orgdiffpack.plugins.reference import LifecycleTracePlugin
from orgdiffpack.plugins.runtime import (
    get_active_plugin_manager,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "RECONCILE_HOOKS",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "ReconcileStartEvent",
    "ReconcileItemEvent",
    "ReconcileEndEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "PluginEntry",
    "parse_plugin_entry",
    "instantiate_plugin",
    "LifecycleTracePlugin",
    "load_plugin_manager_from_file",
    "plugin_manager_from_config",
    "get_active_plugin_manager",
    "use_plugin_manager",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]
