"""Stable public API surface for OrgDiffKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from orgdiffpack import __version__
from orgdiffpack.config import CompareConfig
from orgdiffpack.core import canonicalize as _canonicalize
from orgdiffpack.core import normalize_text
from orgdiffpack.diff import (
    DiffSummary,
    ReconciliationReport,
    compare_collections,
    compute_diff_patch,
    summarize_diff,
)
from orgdiffpack.sources import collect_tree, collection_from_mapping


def normalize(text: str) -> str:
    """Normalize line endings and trailing whitespace of ``text``."""
    return normalize_text(text)


def canonicalize(document: str, format_hint: str | None = None, *, surface: str = "xml") -> str:
    """Return the order-independent canonical form of an XML or JSON document.

    Args:
        document: Document text.
        format_hint: Optional item name used in error messages.
        surface: ``"xml"`` or ``"json"``.

    Returns:
        Canonical document text.

    Raises:
        ParseError: If the document is not well-formed.
    """
    return _canonicalize(document, format_hint, surface=surface)


def summarize(a: str, b: str) -> DiffSummary:
    """Count added and removed lines between two texts.

    Inputs are expected to be normalized first (see ``normalize``). Lines are
    split on LF only, so ``"x"`` and ``"x\\n"`` differ by one trailing empty line
    until normalization removes it.
    """
    return summarize_diff(a, b)


def patch(
    a: str,
    b: str,
    *,
    from_label: str = "a",
    to_label: str = "b",
    context_lines: int = 3,
) -> str:
    """Unified diff between two texts; empty when they are equal."""
    return compute_diff_patch(
        a,
        b,
        from_label=from_label,
        to_label=to_label,
        context_lines=context_lines,
    )


def compare(
    a: Mapping[str, str | bytes],
    b: Mapping[str, str | bytes],
    *,
    label_a: str = "A",
    label_b: str = "B",
    config: CompareConfig | None = None,
) -> ReconciliationReport:
    """Reconcile two in-memory snapshots given as ``{name: content}`` mappings.

    Args:
        a: Items retrieved from the first org.
        b: Items retrieved from the second org.
        label_a: Display label for ``a``.
        label_b: Display label for ``b``.
        config: Comparison settings; defaults apply when omitted.

    Returns:
        Report with one result per added, removed, modified or failed name.
    """
    resolved = config or CompareConfig()
    return compare_collections(
        collection_from_mapping(a, origin="A", label=label_a, config=resolved),
        collection_from_mapping(b, origin="B", label=label_b, config=resolved),
        config=resolved,
    )


def compare_dirs(
    left: str | Path,
    right: str | Path,
    *,
    label_a: str | None = None,
    label_b: str | None = None,
    config: CompareConfig | None = None,
) -> ReconciliationReport:
    """Reconcile two retrieved snapshot directories.

    Raises:
        SourceError: If either directory does not exist.
    """
    resolved = config or CompareConfig()
    return compare_collections(
        collect_tree(left, origin="A", label=label_a, config=resolved),
        collect_tree(right, origin="B", label=label_b, config=resolved),
        config=resolved,
    )


__all__ = [
    "__version__",
    "DiffSummary",
    "ReconciliationReport",
    "CompareConfig",
    "normalize",
    "canonicalize",
    "summarize",
    "patch",
    "compare",
    "compare_dirs",
]
