"""OrgDiffKit internals: normalization, canonicalization and snapshot reconciliation."""

__version__ = "0.1.0"
