"""Core comparison exceptions."""

from __future__ import annotations


class OrgDiffError(Exception):
    """Base class for comparison errors."""


class ParseError(OrgDiffError):
    """Structured document is not well-formed."""

    def __init__(self, message: str, *, surface: str) -> None:
        super().__init__(f"Invalid {surface} document: {message}")
        self.surface = surface
        self.detail = message


class NormalizationError(OrgDiffError):
    """Normalization invariant was violated."""


class ReconciliationFailure(OrgDiffError):
    """Comparing one named item failed."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"{name}: {cause.__class__.__name__}: {cause}")
        self.name = name
        self.cause = cause
