import pytest

from orgdiffpack.diff import ResultFilter, compare_collections, render_report, render_report_summary, render_result_label
from orgdiffpack.sources import collection_from_mapping


def _report():
    return compare_collections(
        collection_from_mapping(
            {
                "classes/Old.cls": "gone",
                "classes/Same.cls": "same",
                "objects/Account.object": "<a>1</a>",
                "broken.xml": "<a>",
            },
            origin="A",
            label="dev",
        ),
        collection_from_mapping(
            {
                "classes/New.cls": "one\ntwo",
                "classes/Same.cls": "same",
                "objects/Account.object": "<a>2</a>",
                "broken.xml": "<a></a>",
            },
            origin="B",
            label="prod",
        ),
    )


def test_result_labels_follow_status() -> None:
    labels = [render_result_label(result) for result in _report().results]

    assert labels[0].startswith("[Failed] broken.xml: ParseError: Invalid xml document")
    assert labels[1:] == [
        "[Added in B] classes/New.cls (+2/-0)",
        "[Deleted in B] classes/Old.cls (+0/-1)",
        "objects/Account.object (+1/-1) @1",
    ]


def test_report_summary_line_counts_every_status() -> None:
    assert render_report_summary(_report()) == (
        "a=dev b=prod modified=1 added=1 removed=1 failed=1 equal=1"
    )


def test_status_filter_selects_results() -> None:
    report = _report()

    added_only = ResultFilter.from_statuses(["added"]).apply(report.results)
    everything = ResultFilter.from_statuses([]).apply(report.results)

    assert [result.name for result in added_only] == ["classes/New.cls"]
    assert len(everything) == 4


def test_extension_and_text_filters_are_case_insensitive() -> None:
    report = _report()

    by_ext = ResultFilter(ext="CLS").apply(report.results)
    by_text = ResultFilter(text="ACCOUNT").apply(report.results)

    assert [result.name for result in by_ext] == ["classes/New.cls", "classes/Old.cls"]
    assert [result.name for result in by_text] == ["objects/Account.object"]


def test_unknown_status_filter_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported status filter: deleted"):
        ResultFilter.from_statuses(["deleted"])


def test_render_report_lists_filtered_and_limited_results() -> None:
    report = _report()

    rendered = render_report(report, result_filter=ResultFilter(show_failed=False), limit=1)

    assert rendered.splitlines() == [
        "Comparison complete. 4 file(s) differ.",
        "  [Added in B] classes/New.cls (+2/-0)",
        "  ... 2 additional result(s) not shown",
        "  (1 result(s) hidden by filters)",
    ]


def test_render_report_for_identical_snapshots() -> None:
    report = compare_collections(
        collection_from_mapping({"a.txt": "x"}, origin="A", label="dev"),
        collection_from_mapping({"a.txt": "x \r\n"}, origin="B", label="prod"),
    )

    assert render_report(report) == "Comparison complete. No differences found."
