"""Build item collections from retrieved snapshot trees."""

from __future__ import annotations

from collections.abc import Mapping
from fnmatch import fnmatchcase
from pathlib import Path

from orgdiffpack.config import CompareConfig
from orgdiffpack.core.models import ItemCollection, ItemHandle
from orgdiffpack.sources.exceptions import SourceError
from orgdiffpack.sources.formats import detect_format


def collect_tree(
    root: str | Path,
    *,
    origin: str,
    label: str | None = None,
    config: CompareConfig | None = None,
) -> ItemCollection:
    """Collect every file under ``root`` keyed by its POSIX relative path.

    Full content is read lazily by each handle; only a short prefix is read up
    front to recognize binary files.
    """
    resolved = config or CompareConfig()
    base = Path(root)
    if not base.exists():
        raise SourceError(f"Snapshot root not found: {base}")
    if not base.is_dir():
        raise SourceError(f"Snapshot root is not a directory: {base}")

    handles: list[ItemHandle] = []
    for path in sorted(base.rglob("*")):
        if not path.is_file():
            continue
        name = to_relative_name(path, base)
        if is_excluded(name, resolved.exclude_patterns):
            continue
        handles.append(
            ItemHandle.from_path(
                name,
                path,
                origin=origin,
                format=detect_format(
                    name,
                    _read_prefix(path),
                    overrides=resolved.format_overrides,
                ),
            )
        )

    return ItemCollection.from_handles(handles, label=label or str(base), origin=origin)


def collection_from_mapping(
    contents: Mapping[str, str | bytes],
    *,
    origin: str,
    label: str,
    config: CompareConfig | None = None,
) -> ItemCollection:
    """Build an in-memory collection from ``{name: content}``."""
    resolved = config or CompareConfig()
    handles: list[ItemHandle] = []
    for raw_name, content in contents.items():
        name = raw_name.replace("\\", "/")
        if is_excluded(name, resolved.exclude_patterns):
            continue
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        handles.append(
            ItemHandle.from_bytes(
                name,
                data,
                origin=origin,
                format=detect_format(name, data, overrides=resolved.format_overrides),
            )
        )
    return ItemCollection.from_handles(handles, label=label, origin=origin)


def to_relative_name(path: Path, base: Path) -> str:
    return path.relative_to(base).as_posix().replace("\\", "/")


def is_excluded(name: str, patterns: tuple[str, ...]) -> bool:
    basename = name.rsplit("/", 1)[-1]
    return any(fnmatchcase(name, pattern) or fnmatchcase(basename, pattern) for pattern in patterns)


def _read_prefix(path: Path, size: int = 8192) -> bytes:
    try:
        with path.open("rb") as handle:
            return handle.read(size)
    except OSError as error:
        raise SourceError(f"Unable to read snapshot item {path}: {error}") from error
