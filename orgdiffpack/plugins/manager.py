"""Fault-isolated fan-out of reconciliation events to plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
import warnings

from orgdiffpack.plugins.base import (
    RECONCILE_HOOKS,
    ReconcileEndEvent,
    ReconcileItemEvent,
    ReconcileStartEvent,
)


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    """One hook call that raised inside a plugin."""

    plugin_name: str
    hook: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "plugin_name": self.plugin_name,
            "hook": self.hook,
            "error_type": self.error_type,
            "message": self.message,
        }

    def render(self) -> str:
        return (
            f"OrgDiff plugin failure: plugin={self.plugin_name} hook={self.hook} "
            f"error={self.error_type}: {self.message}"
        )


@dataclass(slots=True)
class PluginManager:
    """Calls each plugin's hooks in registration order.

    A plugin that raises never affects the comparison or the other plugins: the
    failure is recorded as a diagnostic and surfaced as a ``RuntimeWarning``.
    """

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.plugins)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def on_reconcile_start(self, event: ReconcileStartEvent) -> None:
        self.emit("on_reconcile_start", event)

    def on_reconcile_item(self, event: ReconcileItemEvent) -> None:
        self.emit("on_reconcile_item", event)

    def on_reconcile_end(self, event: ReconcileEndEvent) -> None:
        self.emit("on_reconcile_end", event)

    def emit(self, hook: str, event: object) -> None:
        if hook not in RECONCILE_HOOKS:
            raise ValueError(f"Unknown reconcile hook: {hook}")

        for plugin in self.plugins:
            callback = getattr(plugin, hook, None)
            if not callable(callback):
                continue
            try:
                callback(event)
            except Exception as error:
                self._record_failure(plugin, hook, error)

    def _record_failure(self, plugin: object, hook: str, error: Exception) -> None:
        diagnostic = PluginDiagnostic(
            plugin_name=str(getattr(plugin, "name", type(plugin).__name__)),
            hook=hook,
            error_type=type(error).__name__,
            message=str(error),
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(diagnostic.render(), RuntimeWarning, stacklevel=3)
