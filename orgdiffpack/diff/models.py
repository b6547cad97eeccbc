"""Data models for line summaries and snapshot reconciliation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

from orgdiffpack.core.exceptions import NormalizationError, ReconciliationFailure
from orgdiffpack.core.models import ItemHandle

Presence = Literal["both", "a_only", "b_only"]


@dataclass(frozen=True, slots=True)
class DiffSummary:
    """Line-level change counts between two normalized texts."""

    is_different: bool
    added: int = 0
    removed: int = 0
    first_change_line: int | None = None

    def __post_init__(self) -> None:
        if self.added < 0 or self.removed < 0:
            raise NormalizationError("Line counts must be non-negative")
        if self.is_different != (self.added > 0 or self.removed > 0):
            raise NormalizationError("is_different must match the added/removed counts")
        if self.is_different and (self.first_change_line is None or self.first_change_line < 1):
            raise NormalizationError("Differing texts need a 1-based first_change_line")
        if not self.is_different and self.first_change_line is not None:
            raise NormalizationError("Equal texts cannot have a first_change_line")

    @classmethod
    def identical(cls) -> "DiffSummary":
        return cls(is_different=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_different": self.is_different,
            "added": self.added,
            "removed": self.removed,
            "first_change_line": self.first_change_line,
        }


@dataclass(frozen=True, slots=True)
class Added:
    """Item present only in snapshot B."""

    status: ClassVar[str] = "added"

    name: str
    b_handle: ItemHandle
    summary: DiffSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "summary": self.summary.to_dict(),
            "left": None,
            "right": self.b_handle.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class Deleted:
    """Item present only in snapshot A."""

    status: ClassVar[str] = "removed"

    name: str
    a_handle: ItemHandle
    summary: DiffSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "summary": self.summary.to_dict(),
            "left": self.a_handle.to_dict(),
            "right": None,
        }


@dataclass(frozen=True, slots=True)
class Modified:
    """Item present in both snapshots whose normalized content differs."""

    status: ClassVar[str] = "modified"

    name: str
    a_handle: ItemHandle
    b_handle: ItemHandle
    summary: DiffSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "summary": self.summary.to_dict(),
            "left": self.a_handle.to_dict(),
            "right": self.b_handle.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class Failed:
    """Item that could not be compared; never to be read as equal."""

    status: ClassVar[str] = "failed"

    name: str
    reason: str
    presence: Presence
    a_handle: ItemHandle | None = None
    b_handle: ItemHandle | None = None
    error: ReconciliationFailure | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "reason": self.reason,
            "presence": self.presence,
            "left": self.a_handle.to_dict() if self.a_handle is not None else None,
            "right": self.b_handle.to_dict() if self.b_handle is not None else None,
        }


ReconciliationResult = Union[Added, Deleted, Modified, Failed]


@dataclass(slots=True)
class ReconciliationReport:
    """Ordered reconciliation results for two labeled snapshots."""

    label_a: str
    label_b: str
    total_a: int
    total_b: int
    results: list[ReconciliationResult]
    equal: list[str] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not self.results

    @property
    def total_names(self) -> int:
        return len(self.results) + len(self.equal)

    def by_status(self, status: str) -> list[ReconciliationResult]:
        return [result for result in self.results if result.status == status]

    def summary(self) -> dict[str, int]:
        counts = {
            "added": 0,
            "removed": 0,
            "modified": 0,
            "failed": 0,
            "equal": len(self.equal),
        }
        for result in self.results:
            counts[result.status] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "label_a": self.label_a,
            "label_b": self.label_b,
            "total_a": self.total_a,
            "total_b": self.total_b,
            "identical": self.identical,
            "summary": self.summary(),
            "results": [result.to_dict() for result in self.results],
            "equal": list(self.equal),
        }
