"""Snapshot source exceptions."""

from orgdiffpack.core.exceptions import OrgDiffError


class SourceError(OrgDiffError):
    """Snapshot tree could not be collected."""
