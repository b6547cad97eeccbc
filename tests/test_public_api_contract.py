import inspect
from pathlib import Path

import pytest

import orgdiffkit
from orgdiffpack.sources import SourceError


def test_public_api_symbol_list_is_explicit_and_stable() -> None:
    assert orgdiffkit.__all__ == [
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


def test_public_api_function_signatures() -> None:
    expected_parameter_order = {
        "normalize": ("text",),
        "canonicalize": ("document", "format_hint", "surface"),
        "summarize": ("a", "b"),
        "patch": ("a", "b", "from_label", "to_label", "context_lines"),
        "compare": ("a", "b", "label_a", "label_b", "config"),
        "compare_dirs": ("left", "right", "label_a", "label_b", "config"),
    }

    for name, parameters in expected_parameter_order.items():
        signature = inspect.signature(getattr(orgdiffkit, name))
        assert tuple(signature.parameters) == parameters
        assert inspect.getdoc(getattr(orgdiffkit, name))


def test_public_api_scenarios() -> None:
    assert orgdiffkit.normalize("hello \r\n\n") == "hello"
    assert orgdiffkit.canonicalize("<a><y>2</y><x>1</x></a>") == orgdiffkit.canonicalize(
        "<a><x>1</x><y>2</y></a>"
    )

    summary = orgdiffkit.summarize("hello world", "hello brave new world")
    assert isinstance(summary, orgdiffkit.DiffSummary)
    assert summary.is_different is True
    assert summary.added + summary.removed > 0

    patch = orgdiffkit.patch("hello world", "hello brave new world")
    assert "-hello world" in patch.splitlines()
    assert "+hello brave new world" in patch.splitlines()


def test_public_summarize_expects_normalized_inputs() -> None:
    raw = orgdiffkit.summarize("x", "x\n")
    normalized = orgdiffkit.summarize(orgdiffkit.normalize("x"), orgdiffkit.normalize("x\n"))

    assert (raw.added, raw.removed, raw.first_change_line) == (1, 0, 2)
    assert normalized == orgdiffkit.DiffSummary.identical()


def test_public_compare_reconciles_mappings() -> None:
    report = orgdiffkit.compare(
        {"p.cls": "p", "q.cls": "same", "x.cls": "hello\n", "foo.xml": "<a><x>1</x><y>2</y></a>"},
        {"q.cls": "same", "r.cls": "r", "x.cls": "hello \n", "foo.xml": "<a><y>2</y><x>1</x></a>"},
    )

    assert isinstance(report, orgdiffkit.ReconciliationReport)
    assert [(result.status, result.name) for result in report.results] == [
        ("removed", "p.cls"),
        ("added", "r.cls"),
    ]
    assert report.equal == ["foo.xml", "q.cls", "x.cls"]


def test_public_compare_dirs(tmp_path: Path) -> None:
    left = tmp_path / "dev"
    right = tmp_path / "prod"
    left.mkdir()
    right.mkdir()
    (left / "a.txt").write_text("one\n", encoding="utf-8")
    (right / "a.txt").write_text("two\n", encoding="utf-8")

    report = orgdiffkit.compare_dirs(left, right, label_a="dev", label_b="prod")

    assert [result.status for result in report.results] == ["modified"]
    assert (report.label_a, report.label_b) == ("dev", "prod")

    with pytest.raises(SourceError):
        orgdiffkit.compare_dirs(tmp_path / "missing", right)
