"""CLI-friendly rendering and filtering for reconciliation results."""

from __future__ import annotations

from dataclasses import dataclass

from orgdiffpack.diff.models import Failed, ReconciliationReport, ReconciliationResult

_STATUS_PREFIX = {
    "added": "[Added in B] ",
    "removed": "[Deleted in B] ",
    "modified": "",
    "failed": "[Failed] ",
}


@dataclass(slots=True)
class ResultFilter:
    """Status toggles plus extension and name filters over a result list."""

    show_modified: bool = True
    show_added: bool = True
    show_deleted: bool = True
    show_failed: bool = True
    ext: str = ""
    text: str = ""

    def matches(self, result: ReconciliationResult) -> bool:
        status_ok = {
            "modified": self.show_modified,
            "added": self.show_added,
            "removed": self.show_deleted,
            "failed": self.show_failed,
        }[result.status]
        if not status_ok:
            return False

        lower = result.name.lower()
        if self.ext:
            ext = self.ext.lower()
            if not ext.startswith("."):
                ext = f".{ext}"
            if not lower.endswith(ext):
                return False
        if self.text and self.text.lower() not in lower:
            return False
        return True

    def apply(self, results: list[ReconciliationResult]) -> list[ReconciliationResult]:
        return [result for result in results if self.matches(result)]

    @classmethod
    def from_statuses(cls, statuses: tuple[str, ...] | list[str], *, ext: str = "", text: str = "") -> "ResultFilter":
        """Build a filter showing only ``statuses``; empty means every status."""
        selected = set(statuses)
        unknown = sorted(selected - {"added", "removed", "modified", "failed"})
        if unknown:
            raise ValueError(
                f"Unsupported status filter: {', '.join(unknown)}. "
                "Supported values: added, removed, modified, failed."
            )
        show_all = not selected
        return cls(
            show_modified=show_all or "modified" in selected,
            show_added=show_all or "added" in selected,
            show_deleted=show_all or "removed" in selected,
            show_failed=show_all or "failed" in selected,
            ext=ext.strip(),
            text=text.strip(),
        )


def render_result_label(result: ReconciliationResult) -> str:
    label = f"{_STATUS_PREFIX[result.status]}{result.name}"
    if isinstance(result, Failed):
        return f"{label}: {result.reason}"
    summary = result.summary
    if summary.added or summary.removed:
        label = f"{label} (+{summary.added}/-{summary.removed})"
    if summary.first_change_line is not None and result.status == "modified":
        label = f"{label} @{summary.first_change_line}"
    return label


def render_report_summary(report: ReconciliationReport) -> str:
    counts = report.summary()
    return (
        f"a={report.label_a} b={report.label_b} "
        f"modified={counts['modified']} added={counts['added']} "
        f"removed={counts['removed']} failed={counts['failed']} equal={counts['equal']}"
    )


def render_report(
    report: ReconciliationReport,
    *,
    result_filter: ResultFilter | None = None,
    limit: int | None = None,
) -> str:
    results = result_filter.apply(report.results) if result_filter else list(report.results)
    if not report.results:
        return "Comparison complete. No differences found."

    lines = [f"Comparison complete. {len(report.results)} file(s) differ."]
    shown = results if limit is None else results[: max(0, limit)]
    for result in shown:
        lines.append(f"  {render_result_label(result)}")

    hidden = len(results) - len(shown)
    if hidden > 0:
        lines.append(f"  ... {hidden} additional result(s) not shown")
    filtered = len(report.results) - len(results)
    if filtered > 0:
        lines.append(f"  ({filtered} result(s) hidden by filters)")
    return "\n".join(lines)
