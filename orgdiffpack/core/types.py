"""Type definitions for comparison core models."""

from typing import Literal

ItemFormat = Literal["xml", "json", "text", "binary"]

ITEM_FORMATS: tuple[str, ...] = ("xml", "json", "text", "binary")

Origin = Literal["A", "B"]

ORIGINS: tuple[str, ...] = ("A", "B")

ResultStatus = Literal["added", "removed", "modified", "failed"]

RESULT_STATUSES: tuple[str, ...] = ("added", "removed", "modified", "failed")
