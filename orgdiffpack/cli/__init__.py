"""Command-line interface for OrgDiffKit."""
