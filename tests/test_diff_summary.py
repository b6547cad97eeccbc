import random

import pytest

from orgdiffpack.core import NormalizationError
from orgdiffpack.diff import DiffSummary, compute_diff_patch, summarize_diff
from orgdiffpack.diff.summary import compute_line_runs, split_lines


def test_identical_inputs_have_no_changes() -> None:
    summary = summarize_diff("a\nb", "a\nb")

    assert summary == DiffSummary(is_different=False, added=0, removed=0, first_change_line=None)
    assert summary == DiffSummary.identical()


def test_single_line_replacement_counts_both_sides() -> None:
    summary = summarize_diff("hello world", "hello brave new world")

    assert summary.is_different is True
    assert summary.added == 1
    assert summary.removed == 1
    assert summary.first_change_line == 1


def test_removed_line_points_at_its_position_in_a() -> None:
    summary = summarize_diff("a\nb\nc", "a\nc")

    assert (summary.added, summary.removed, summary.first_change_line) == (0, 1, 2)


def test_inserted_line_points_at_insertion_position_in_a() -> None:
    summary = summarize_diff("a\nc", "a\nb\nc")

    assert (summary.added, summary.removed, summary.first_change_line) == (1, 0, 2)


def test_replacement_reports_removed_run_position() -> None:
    summary = summarize_diff("keep\nold\ntail", "keep\nnew\ntail")

    assert summary.first_change_line == 2
    assert compute_line_runs(split_lines("keep\nold\ntail"), split_lines("keep\nnew\ntail")) == [
        ("equal", 1),
        ("removed", 1),
        ("added", 1),
        ("equal", 1),
    ]


def test_empty_versus_content_is_a_single_run_at_line_one() -> None:
    added = summarize_diff("", "x\ny")
    removed = summarize_diff("x\ny", "")

    assert (added.added, added.removed, added.first_change_line) == (2, 0, 1)
    assert (removed.added, removed.removed, removed.first_change_line) == (0, 2, 1)


def _lcs_length(a_lines: list[str], b_lines: list[str]) -> int:
    previous = [0] * (len(b_lines) + 1)
    for a_line in a_lines:
        current = [0]
        for index, b_line in enumerate(b_lines):
            if a_line == b_line:
                current.append(previous[index] + 1)
            else:
                current.append(max(previous[index + 1], current[index]))
        previous = current
    return previous[-1]


def test_counts_are_minimal_when_longest_block_is_misleading() -> None:
    summary = summarize_diff("b\nb\na\nb\na\na", "b\na\nb\nb\na")

    assert (summary.removed, summary.added) == (2, 1)


def test_counts_follow_longest_common_subsequence() -> None:
    rng = random.Random(7)

    for _ in range(300):
        a_lines = [rng.choice("abc") for _ in range(rng.randint(1, 12))]
        b_lines = [rng.choice("abc") for _ in range(rng.randint(1, 12))]
        lcs = _lcs_length(a_lines, b_lines)

        summary = summarize_diff("\n".join(a_lines), "\n".join(b_lines))

        assert summary.removed == len(a_lines) - lcs
        assert summary.added == len(b_lines) - lcs


def test_change_regions_list_removed_before_added() -> None:
    runs = compute_line_runs(["x", "a", "y"], ["b", "a", "c", "d"])

    assert runs == [
        ("removed", 1),
        ("added", 1),
        ("equal", 1),
        ("removed", 1),
        ("added", 2),
    ]


def test_split_lines_treats_empty_text_as_no_lines() -> None:
    assert split_lines("") == []
    assert split_lines("a\n") == ["a", ""]


def test_patch_shows_removed_and_added_lines() -> None:
    patch = compute_diff_patch("hello world", "hello brave new world", from_label="A/x", to_label="B/x")

    lines = patch.splitlines()
    assert lines[0] == "--- A/x"
    assert lines[1] == "+++ B/x"
    assert "-hello world" in lines
    assert "+hello brave new world" in lines


def test_patch_is_empty_for_identical_inputs() -> None:
    assert compute_diff_patch("same\ntext", "same\ntext") == ""


def test_patch_context_lines_limit_hunk_size() -> None:
    a = "\n".join(f"line {index}" for index in range(20))
    b = a.replace("line 10", "line ten")

    narrow = compute_diff_patch(a, b, context_lines=0)
    wide = compute_diff_patch(a, b, context_lines=3)

    assert " line 9" not in narrow.splitlines()
    assert " line 9" in wide.splitlines()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"is_different": True, "added": 0, "removed": 0, "first_change_line": 1},
        {"is_different": False, "added": 1, "removed": 0, "first_change_line": None},
        {"is_different": True, "added": 1, "removed": 0, "first_change_line": None},
        {"is_different": False, "added": 0, "removed": 0, "first_change_line": 3},
        {"is_different": True, "added": -1, "removed": 2, "first_change_line": 1},
    ],
)
def test_summary_invariants_are_enforced(kwargs: dict) -> None:
    with pytest.raises(NormalizationError):
        DiffSummary(**kwargs)
