from pathlib import Path

from typer.testing import CliRunner

from orgdiffpack.cli.app import app


def test_cli_patch_prints_unified_diff(tmp_path: Path) -> None:
    left = tmp_path / "left.cls"
    right = tmp_path / "right.cls"
    left.write_text("hello world\n", encoding="utf-8")
    right.write_text("hello brave new world\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["patch", str(left), str(right)])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "--- A/left.cls"
    assert lines[1] == "+++ B/right.cls"
    assert "-hello world" in lines
    assert "+hello brave new world" in lines


def test_cli_patch_canonicalizes_structured_files(tmp_path: Path) -> None:
    left = tmp_path / "a.xml"
    right = tmp_path / "b.xml"
    left.write_text("<a><x>1</x><y>2</y></a>", encoding="utf-8")
    right.write_text("<a><y>2</y><x>1</x></a>\r\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["patch", str(left), str(right)])

    assert result.exit_code == 0
    assert result.stdout.strip() == "no differences"


def test_cli_patch_reports_parse_errors(tmp_path: Path) -> None:
    left = tmp_path / "a.json"
    right = tmp_path / "b.json"
    left.write_text("{", encoding="utf-8")
    right.write_text("{}", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["patch", str(left), str(right)])

    assert result.exit_code == 1
    assert "patch failed: Invalid json document" in result.output


def test_cli_patch_missing_file_fails(tmp_path: Path) -> None:
    present = tmp_path / "a.txt"
    present.write_text("x", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["patch", str(present), str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "patch failed:" in result.output


def test_cli_canonicalize_prints_canonical_xml(tmp_path: Path) -> None:
    document = tmp_path / "Account.object-meta.xml"
    document.write_text('<CustomObject b="2" a="1"><z>1</z><y>2</y></CustomObject>', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["canonicalize", str(document)])

    assert result.exit_code == 0
    assert result.stdout == (
        '<CustomObject a="1" b="2">\n'
        "  <y>2</y>\n"
        "  <z>1</z>\n"
        "</CustomObject>\n"
    )


def test_cli_canonicalize_format_override(tmp_path: Path) -> None:
    document = tmp_path / "settings.data"
    document.write_text('{"b": 1, "a": 2}', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["canonicalize", str(document), "--format", "json"])

    assert result.exit_code == 0
    assert result.stdout == '{\n  "a": 2,\n  "b": 1\n}\n'


def test_cli_canonicalize_rejects_unstructured_files(tmp_path: Path) -> None:
    document = tmp_path / "Foo.cls"
    document.write_text("public class Foo {}", encoding="utf-8")
    runner = CliRunner()

    unstructured = runner.invoke(app, ["canonicalize", str(document)])
    unknown = runner.invoke(app, ["canonicalize", str(document), "--format", "yaml"])

    assert unstructured.exit_code == 2
    assert "unsupported document format 'text'" in unstructured.output
    assert unknown.exit_code == 2
    assert "Unsupported item format: yaml" in unknown.output


def test_cli_canonicalize_reports_parse_errors(tmp_path: Path) -> None:
    document = tmp_path / "broken.xml"
    document.write_text("<a><b></a>", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["canonicalize", str(document)])

    assert result.exit_code == 1
    assert "canonicalize failed: Invalid xml document" in result.output
    assert "broken.xml" in result.output
