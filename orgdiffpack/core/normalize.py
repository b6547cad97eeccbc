"""Line-oriented text normalization applied before every comparison."""

from __future__ import annotations

import re

from orgdiffpack.core.exceptions import NormalizationError

_TRAILING_HORIZONTAL_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)
_TRAILING_NEWLINES_RE = re.compile(r"\n+\Z")


def normalize_text(text: str) -> str:
    """Unify line endings and strip trailing whitespace and trailing blank lines.

    Only CRLF pairs are rewritten; a lone ``\\r`` is content and is kept.
    """
    if not isinstance(text, str):
        raise NormalizationError(f"Expected text, got {type(text).__name__}")

    normalized = text.replace("\r\n", "\n")
    while True:
        # Stripping "\r \n" exposes a new CRLF pair, so run to a fixed point.
        stripped = _TRAILING_HORIZONTAL_WS_RE.sub("", normalized).replace("\r\n", "\n")
        if stripped == normalized:
            break
        normalized = stripped
    return _TRAILING_NEWLINES_RE.sub("", normalized)
