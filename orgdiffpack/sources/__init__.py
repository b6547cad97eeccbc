"""Snapshot sources: turn retrieved file trees into item collections."""

from orgdiffpack.sources.exceptions import SourceError
from orgdiffpack.sources.formats import detect_format
from orgdiffpack.sources.tree import collect_tree, collection_from_mapping, is_excluded

__all__ = [
    "SourceError",
    "detect_format",
    "collect_tree",
    "collection_from_mapping",
    "is_excluded",
]
