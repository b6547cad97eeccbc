"""NDJSON trace plugin shipped as a working example of the plugin interface."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

from orgdiffpack.plugins.base import (
    LifecyclePlugin,
    ReconcileEndEvent,
    ReconcileItemEvent,
    ReconcileStartEvent,
)


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    """Append one JSON line per hook call to ``output_path``.

    ``include_items=False`` keeps only start and end records, which is enough to
    audit which snapshots were compared without listing every item.
    """

    output_path: str = "runs/plugins/reconcile-trace.ndjson"
    name: str = "reconcile-trace"
    include_items: bool = True
    _sequence: int = field(default=0, init=False, repr=False)

    def on_reconcile_start(self, event: ReconcileStartEvent) -> None:
        self._write("on_reconcile_start", event.to_dict())

    def on_reconcile_item(self, event: ReconcileItemEvent) -> None:
        if self.include_items:
            self._write("on_reconcile_item", event.to_dict())

    def on_reconcile_end(self, event: ReconcileEndEvent) -> None:
        self._write("on_reconcile_end", event.to_dict())

    def _write(self, hook: str, event: dict[str, Any]) -> None:
        self._sequence += 1
        record = {"hook": hook, "plugin": self.name, "seq": self._sequence, "event": event}
        target = Path(self.output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=True, sort_keys=True, separators=(",", ":")) + "\n")
