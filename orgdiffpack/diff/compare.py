"""Composition of normalization, canonicalization and line summaries per item pair."""

from __future__ import annotations

from collections.abc import Callable

from orgdiffpack.config import CompareConfig
from orgdiffpack.core.canonical import canonicalize
from orgdiffpack.core.hashing import compute_content_digest
from orgdiffpack.core.models import ItemHandle
from orgdiffpack.core.normalize import normalize_text
from orgdiffpack.diff.models import DiffSummary
from orgdiffpack.diff.summary import compute_diff_patch, summarize_diff

CompareFn = Callable[[ItemHandle, ItemHandle], DiffSummary]


def prepare_text(
    handle: ItemHandle,
    *,
    config: CompareConfig | None = None,
    data: bytes | None = None,
) -> str:
    """Return the text that is actually compared for one item.

    Structured items are canonicalized between two normalization passes. Empty
    content has no structure and is never parsed.

    Raises:
        ParseError: If a structured item is not well-formed.
    """
    resolved = config or CompareConfig()
    raw = handle.read_bytes() if data is None else data
    text = normalize_text(handle.decode(raw))
    if not text or not resolved.is_structural(handle.format):
        return text
    canonical = canonicalize(text, handle.name, surface=handle.format)
    return normalize_text(canonical)


def build_compare_fn(config: CompareConfig | None = None) -> CompareFn:
    """Build the per-item compare function used by the reconciler.

    Byte-identical items are equal without being decoded or parsed, so a
    malformed document that is the same on both sides is not reported.
    """
    resolved = config or CompareConfig()

    def compare(handle_a: ItemHandle, handle_b: ItemHandle) -> DiffSummary:
        raw_a = handle_a.read_bytes()
        raw_b = handle_b.read_bytes()
        if compute_content_digest(raw_a) == compute_content_digest(raw_b):
            return DiffSummary.identical()
        return summarize_diff(
            prepare_text(handle_a, config=resolved, data=raw_a),
            prepare_text(handle_b, config=resolved, data=raw_b),
        )

    return compare


def summarize_one_sided(handle: ItemHandle) -> DiffSummary:
    """Line counts of an item present on one side only, against an empty text.

    The item is normalized but never canonicalized, so malformed structured
    content still counts its lines instead of failing.
    """
    text = normalize_text(handle.decode(handle.read_bytes()))
    if handle.origin == "A":
        return summarize_diff(text, "")
    return summarize_diff("", text)


def build_patch(
    handle_a: ItemHandle,
    handle_b: ItemHandle,
    *,
    config: CompareConfig | None = None,
    context_lines: int = 3,
) -> str:
    """Unified diff of the prepared texts of two items."""
    resolved = config or CompareConfig()
    return compute_diff_patch(
        prepare_text(handle_a, config=resolved),
        prepare_text(handle_b, config=resolved),
        from_label=_patch_label(handle_a),
        to_label=_patch_label(handle_b),
        context_lines=context_lines,
    )


def _patch_label(handle: ItemHandle) -> str:
    if handle.placeholder:
        return "/dev/null"
    return f"{handle.origin}/{handle.name}"
