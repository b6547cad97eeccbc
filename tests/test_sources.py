from pathlib import Path

import pytest

from orgdiffpack.config import CompareConfig
from orgdiffpack.sources import SourceError, collect_tree, collection_from_mapping, detect_format


def _write_snapshot(root: Path) -> Path:
    (root / "classes").mkdir(parents=True)
    (root / "objects" / "Account").mkdir(parents=True)
    (root / "staticresources").mkdir(parents=True)
    (root / "classes" / "Foo.cls").write_text("public class Foo {}\n", encoding="utf-8")
    (root / "objects" / "Account" / "Account.object-meta.xml").write_text(
        "<CustomObject><label>Account</label></CustomObject>\n",
        encoding="utf-8",
    )
    (root / "staticresources" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    (root / "package.json").write_text('{"name": "demo"}', encoding="utf-8")
    return root


def test_collect_tree_names_items_by_posix_relative_path(tmp_path: Path) -> None:
    root = _write_snapshot(tmp_path / "dev")

    collection = collect_tree(root, origin="A", label="dev")

    assert list(collection) == [
        "classes/Foo.cls",
        "objects/Account/Account.object-meta.xml",
        "package.json",
        "staticresources/logo.png",
    ]
    assert collection.label == "dev"
    assert collection.origin == "A"


def test_collect_tree_detects_formats(tmp_path: Path) -> None:
    collection = collect_tree(_write_snapshot(tmp_path / "dev"), origin="B")

    formats = {name: collection.get(name).format for name in collection}
    assert formats == {
        "classes/Foo.cls": "text",
        "objects/Account/Account.object-meta.xml": "xml",
        "package.json": "json",
        "staticresources/logo.png": "binary",
    }


def test_collect_tree_reads_content_lazily(tmp_path: Path) -> None:
    root = _write_snapshot(tmp_path / "dev")
    collection = collect_tree(root, origin="A")
    (root / "classes" / "Foo.cls").write_text("changed\n", encoding="utf-8")

    handle = collection.get("classes/Foo.cls")

    assert handle.read_text() == "changed\n"
    assert handle.path == str(root / "classes" / "Foo.cls")


def test_collect_tree_defaults_label_to_root(tmp_path: Path) -> None:
    root = _write_snapshot(tmp_path / "dev")

    assert collect_tree(root, origin="A").label == str(root)


def test_exclude_patterns_match_paths_and_basenames(tmp_path: Path) -> None:
    root = _write_snapshot(tmp_path / "dev")
    config = CompareConfig(exclude_patterns=("*.png", "objects/*"))

    collection = collect_tree(root, origin="A", config=config)

    assert list(collection) == ["classes/Foo.cls", "package.json"]


def test_format_overrides_apply_by_extension(tmp_path: Path) -> None:
    root = _write_snapshot(tmp_path / "dev")
    config = CompareConfig(format_overrides={"png": "text", ".cls": "binary"})

    collection = collect_tree(root, origin="A", config=config)

    assert collection.get("staticresources/logo.png").format == "text"
    assert collection.get("classes/Foo.cls").format == "binary"


def test_missing_root_raises_source_error(tmp_path: Path) -> None:
    with pytest.raises(SourceError, match="Snapshot root not found"):
        collect_tree(tmp_path / "missing", origin="A")


def test_file_root_raises_source_error(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(SourceError, match="not a directory"):
        collect_tree(target, origin="A")


def test_collection_from_mapping_normalizes_separators() -> None:
    collection = collection_from_mapping(
        {"classes\\Foo.cls": "a", "data.bin": b"\x00\x01"},
        origin="B",
        label="prod",
    )

    assert list(collection) == ["classes/Foo.cls", "data.bin"]
    assert collection.get("classes/Foo.cls").read_bytes() == b"a"
    assert collection.get("data.bin").format == "binary"
    assert "classes/Foo.cls" in collection
    assert len(collection) == 2


def test_collection_from_mapping_rejects_colliding_names() -> None:
    with pytest.raises(ValueError, match="Duplicate item name"):
        collection_from_mapping({"a\\b.txt": "1", "a/b.txt": "2"}, origin="A", label="dev")


@pytest.mark.parametrize(
    ("name", "data", "expected"),
    [
        ("layouts/Account-Account Layout.layout-meta.xml", None, "xml"),
        ("Foo.XML", None, "xml"),
        ("sfdx-project.json", None, "json"),
        ("classes/Foo.cls", b"public class Foo {}", "text"),
        ("classes/Foo.cls", None, "text"),
        ("static/blob", b"abc\x00def", "binary"),
        ("weird.xml", b"\x00\x00", "xml"),
    ],
)
def test_detect_format(name: str, data: bytes | None, expected: str) -> None:
    assert detect_format(name, data) == expected


def test_detect_format_overrides_win() -> None:
    assert detect_format("Foo.cls", b"x", overrides={".cls": "xml"}) == "xml"
    assert detect_format("report.xml", overrides={".xml": "text"}) == "text"
