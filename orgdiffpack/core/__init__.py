"""Core models and deterministic primitives for OrgDiffKit."""

from orgdiffpack.core.canonical import (
    KeyedNode,
    ScalarNode,
    SequenceNode,
    canonicalize,
    canonicalize_json,
    canonicalize_node,
    canonicalize_xml,
    parse_document,
)
from orgdiffpack.core.exceptions import (
    NormalizationError,
    OrgDiffError,
    ParseError,
    ReconciliationFailure,
)
from orgdiffpack.core.hashing import compute_content_digest
from orgdiffpack.core.models import ItemCollection, ItemHandle, empty_placeholder
from orgdiffpack.core.normalize import normalize_text
from orgdiffpack.core.types import ITEM_FORMATS, RESULT_STATUSES, ItemFormat, ResultStatus

__all__ = [
    "ItemHandle",
    "ItemCollection",
    "empty_placeholder",
    "ITEM_FORMATS",
    "ItemFormat",
    "RESULT_STATUSES",
    "ResultStatus",
    "KeyedNode",
    "ScalarNode",
    "SequenceNode",
    "canonicalize",
    "canonicalize_json",
    "canonicalize_node",
    "canonicalize_xml",
    "parse_document",
    "normalize_text",
    "compute_content_digest",
    "OrgDiffError",
    "ParseError",
    "NormalizationError",
    "ReconciliationFailure",
]
