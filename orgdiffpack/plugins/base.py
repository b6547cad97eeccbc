"""Plugin interface and the events emitted around one reconciliation run.

Events are plain frozen records; plugins receive them in this order: one
``ReconcileStartEvent``, one ``ReconcileItemEvent`` per reported name (in name
order), then one ``ReconcileEndEvent``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1
PLUGIN_CONFIG_ENV_VAR = "ORGDIFF_PLUGIN_CONFIG"

RECONCILE_HOOKS: tuple[str, ...] = (
    "on_reconcile_start",
    "on_reconcile_item",
    "on_reconcile_end",
)

RunStatus = Literal["ok", "error"]


@dataclass(frozen=True, slots=True)
class ReconcileStartEvent:
    label_a: str
    label_b: str
    total_a: int
    total_b: int
    max_workers: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ReconcileItemEvent:
    """Outcome for one reported name; counts are absent for failed items."""

    name: str
    status: str
    added: int | None = None
    removed: int | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ReconcileEndEvent:
    label_a: str
    label_b: str
    status: RunStatus
    identical: bool | None = None
    summary: dict[str, int] | None = None
    error_type: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class LifecyclePlugin:
    """No-op base class; override only the hooks you need."""

    api_version = PLUGIN_API_VERSION
    name = "lifecycle-plugin"

    def on_reconcile_start(self, event: ReconcileStartEvent) -> None:
        return None

    def on_reconcile_item(self, event: ReconcileItemEvent) -> None:
        return None

    def on_reconcile_end(self, event: ReconcileEndEvent) -> None:
        return None
