"""Three-way reconciliation of two labeled snapshot collections."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from orgdiffpack.config import CompareConfig
from orgdiffpack.core.exceptions import ReconciliationFailure
from orgdiffpack.core.models import ItemCollection, ItemHandle
from orgdiffpack.diff.compare import CompareFn, build_compare_fn, summarize_one_sided
from orgdiffpack.diff.models import (
    Added,
    Deleted,
    Failed,
    Modified,
    Presence,
    ReconciliationReport,
    ReconciliationResult,
)
from orgdiffpack.plugins import (
    ReconcileEndEvent,
    ReconcileItemEvent,
    ReconcileStartEvent,
    get_active_plugin_manager,
)


def reconcile(
    collection_a: ItemCollection,
    collection_b: ItemCollection,
    compare_fn: CompareFn,
    *,
    max_workers: int = 1,
) -> list[ReconciliationResult]:
    """Classify every name of both collections, in lexicographic name order.

    Names only in A become ``Deleted``, names only in B become ``Added``, names in
    both become ``Modified`` when ``compare_fn`` reports a difference and are
    omitted when equal. ``compare_fn`` only sees names present on both sides;
    one-sided items are normalized for their line counts but never parsed. A
    failing comparison yields ``Failed`` for that name only, as does a one-sided
    item whose bytes cannot be read. Worker threads never change ordering or
    content of the output.
    """
    names = sorted(collection_a.names() | collection_b.names())

    def classify(name: str) -> ReconciliationResult | None:
        return _reconcile_name(
            name,
            collection_a.get(name),
            collection_b.get(name),
            compare_fn,
        )

    if max_workers <= 1 or len(names) < 2:
        outcomes = [classify(name) for name in names]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(classify, names))

    return [outcome for outcome in outcomes if outcome is not None]


def compare_collections(
    collection_a: ItemCollection,
    collection_b: ItemCollection,
    *,
    config: CompareConfig | None = None,
    compare_fn: CompareFn | None = None,
) -> ReconciliationReport:
    """Reconcile two collections and wrap the results in a report."""
    resolved = config or CompareConfig()
    plugin_manager = get_active_plugin_manager()
    plugin_manager.on_reconcile_start(
        ReconcileStartEvent(
            label_a=collection_a.label,
            label_b=collection_b.label,
            total_a=len(collection_a),
            total_b=len(collection_b),
            max_workers=resolved.max_workers,
        )
    )

    try:
        results = reconcile(
            collection_a,
            collection_b,
            compare_fn or build_compare_fn(resolved),
            max_workers=resolved.max_workers,
        )
    except Exception as error:
        plugin_manager.on_reconcile_end(
            ReconcileEndEvent(
                label_a=collection_a.label,
                label_b=collection_b.label,
                status="error",
                error_type=error.__class__.__name__,
                error_message=str(error),
            )
        )
        raise

    reported = {result.name for result in results}
    shared = collection_a.names() & collection_b.names()
    report = ReconciliationReport(
        label_a=collection_a.label,
        label_b=collection_b.label,
        total_a=len(collection_a),
        total_b=len(collection_b),
        results=results,
        equal=sorted(shared - reported),
    )

    if plugin_manager.active:
        for result in results:
            plugin_manager.on_reconcile_item(_item_event(result))
    plugin_manager.on_reconcile_end(
        ReconcileEndEvent(
            label_a=report.label_a,
            label_b=report.label_b,
            status="ok",
            identical=report.identical,
            summary=report.summary(),
        )
    )
    return report


def _reconcile_name(
    name: str,
    handle_a: ItemHandle | None,
    handle_b: ItemHandle | None,
    compare_fn: CompareFn,
) -> ReconciliationResult | None:
    presence: Presence
    if handle_a is not None and handle_b is not None:
        presence = "both"
    elif handle_a is not None:
        presence = "a_only"
    else:
        presence = "b_only"

    try:
        if handle_a is None:
            summary = summarize_one_sided(handle_b)
            return Added(name=name, b_handle=handle_b, summary=summary)
        if handle_b is None:
            summary = summarize_one_sided(handle_a)
            return Deleted(name=name, a_handle=handle_a, summary=summary)
        summary = compare_fn(handle_a, handle_b)
    except Exception as error:
        failure = ReconciliationFailure(name, error)
        failure.__cause__ = error
        return Failed(
            name=name,
            reason=f"{error.__class__.__name__}: {error}",
            presence=presence,
            a_handle=handle_a,
            b_handle=handle_b,
            error=failure,
        )

    if summary.is_different:
        return Modified(name=name, a_handle=handle_a, b_handle=handle_b, summary=summary)
    return None


def _item_event(result: ReconciliationResult) -> ReconcileItemEvent:
    if isinstance(result, Failed):
        return ReconcileItemEvent(name=result.name, status=result.status, reason=result.reason)
    return ReconcileItemEvent(
        name=result.name,
        status=result.status,
        added=result.summary.added,
        removed=result.summary.removed,
    )
