"""Declared-format detection for collected snapshot items."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePosixPath

from orgdiffpack.core.types import ItemFormat

_EXTENSION_FORMATS: dict[str, ItemFormat] = {
    ".xml": "xml",
    ".json": "json",
}

_SNIFF_BYTES = 8192


def detect_format(
    name: str,
    data: bytes | None = None,
    *,
    overrides: Mapping[str, str] | None = None,
) -> str:
    """Return the item format for a relative name and, optionally, its content.

    Explicit extension overrides win, then known structured extensions. Anything
    else is ``binary`` when its leading bytes contain NUL, otherwise ``text``.
    """
    suffix = PurePosixPath(name).suffix.lower()
    if overrides and suffix in overrides:
        return overrides[suffix]
    if suffix in _EXTENSION_FORMATS:
        return _EXTENSION_FORMATS[suffix]
    if data is not None and b"\x00" in data[:_SNIFF_BYTES]:
        return "binary"
    return "text"
