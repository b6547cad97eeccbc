"""Diff and reconciliation subsystem for OrgDiffKit."""

from orgdiffpack.diff.compare import (
    CompareFn,
    build_compare_fn,
    build_patch,
    prepare_text,
    summarize_one_sided,
)
from orgdiffpack.diff.engine import compare_collections, reconcile
from orgdiffpack.diff.formatting import (
    ResultFilter,
    render_report,
    render_report_summary,
    render_result_label,
)
from orgdiffpack.diff.models import (
    Added,
    Deleted,
    DiffSummary,
    Failed,
    Modified,
    ReconciliationReport,
    ReconciliationResult,
)
from orgdiffpack.diff.summary import compute_diff_patch, summarize_diff

__all__ = [
    "DiffSummary",
    "Added",
    "Deleted",
    "Modified",
    "Failed",
    "ReconciliationResult",
    "ReconciliationReport",
    "CompareFn",
    "build_compare_fn",
    "build_patch",
    "prepare_text",
    "summarize_one_sided",
    "summarize_diff",
    "compute_diff_patch",
    "reconcile",
    "compare_collections",
    "ResultFilter",
    "render_report",
    "render_report_summary",
    "render_result_label",
]
