"""Line-level diff summaries and unified patches between normalized texts."""

from __future__ import annotations

import difflib
from typing import Literal

from orgdiffpack.diff.models import DiffSummary

RunKind = Literal["equal", "removed", "added"]
LineRun = tuple[RunKind, int]


def split_lines(text: str) -> list[str]:
    """Split on LF only. Empty text has zero lines."""
    if not text:
        return []
    return text.split("\n")


def compute_line_runs(a_lines: list[str], b_lines: list[str]) -> list[LineRun]:
    """Align two line lists and return equal/removed/added runs in order.

    The alignment is a shortest edit script (Myers), so the equal runs cover a
    longest common subsequence and the removed/added totals are minimal. Each
    change region between equal runs is reported as its removed run followed by
    its added run.
    """
    runs: list[LineRun] = []
    removed = 0
    added = 0
    for kind in _edit_script(a_lines, b_lines):
        if kind == "removed":
            removed += 1
            continue
        if kind == "added":
            added += 1
            continue
        _flush_change(runs, removed, added)
        removed = added = 0
        if runs and runs[-1][0] == "equal":
            runs[-1] = ("equal", runs[-1][1] + 1)
        else:
            runs.append(("equal", 1))
    _flush_change(runs, removed, added)
    return runs


def _flush_change(runs: list[LineRun], removed: int, added: int) -> None:
    if removed:
        runs.append(("removed", removed))
    if added:
        runs.append(("added", added))


def _edit_script(a_lines: list[str], b_lines: list[str]) -> list[RunKind]:
    """One ``equal``/``removed``/``added`` step per line, front to back."""
    n = len(a_lines)
    m = len(b_lines)
    offset = n + m + 1
    frontier = [0] * (2 * offset + 1)
    # trace[depth] holds the frontier for diagonals -depth..depth before round ``depth``.
    trace: list[list[int]] = []

    for depth in range(n + m + 1):
        trace.append(frontier[offset - depth : offset + depth + 1])
        reached_end = False
        for diagonal in range(-depth, depth + 1, 2):
            if diagonal == -depth or (
                diagonal != depth
                and frontier[offset + diagonal - 1] < frontier[offset + diagonal + 1]
            ):
                x = frontier[offset + diagonal + 1]
            else:
                x = frontier[offset + diagonal - 1] + 1
            y = x - diagonal
            while x < n and y < m and a_lines[x] == b_lines[y]:
                x += 1
                y += 1
            frontier[offset + diagonal] = x
            if x >= n and y >= m:
                reached_end = True
                break
        if reached_end:
            break

    steps: list[RunKind] = []
    x = n
    y = m
    for depth in range(len(trace) - 1, 0, -1):
        previous = trace[depth]
        diagonal = x - y
        if diagonal == -depth or (
            diagonal != depth
            and previous[depth + diagonal - 1] < previous[depth + diagonal + 1]
        ):
            prev_diagonal = diagonal + 1
        else:
            prev_diagonal = diagonal - 1
        prev_x = previous[depth + prev_diagonal]
        prev_y = prev_x - prev_diagonal
        while x > prev_x and y > prev_y:
            steps.append("equal")
            x -= 1
            y -= 1
        steps.append("added" if x == prev_x else "removed")
        x = prev_x
        y = prev_y
    while x > 0 and y > 0:
        steps.append("equal")
        x -= 1
        y -= 1
    steps.reverse()
    return steps


def summarize_diff(a: str, b: str) -> DiffSummary:
    """Count added/removed lines and locate the first change (1-based, in A)."""
    if a == b:
        return DiffSummary.identical()

    added = 0
    removed = 0
    line_a = 1
    first_change_line: int | None = None

    for kind, count in compute_line_runs(split_lines(a), split_lines(b)):
        if kind == "removed":
            removed += count
            if first_change_line is None:
                first_change_line = line_a
            line_a += count
        elif kind == "added":
            added += count
            if first_change_line is None:
                first_change_line = line_a
        else:
            line_a += count

    is_different = added > 0 or removed > 0
    return DiffSummary(
        is_different=is_different,
        added=added,
        removed=removed,
        first_change_line=first_change_line if is_different else None,
    )


def compute_diff_patch(
    a: str,
    b: str,
    *,
    from_label: str = "a",
    to_label: str = "b",
    context_lines: int = 3,
) -> str:
    """Render a unified diff. Identical inputs produce an empty string."""
    lines = difflib.unified_diff(
        split_lines(a),
        split_lines(b),
        fromfile=from_label,
        tofile=to_label,
        lineterm="",
        n=max(0, context_lines),
    )
    rendered = "\n".join(lines)
    return f"{rendered}\n" if rendered else ""
