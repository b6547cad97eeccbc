"""Errors raised while configuring or loading reconciliation plugins."""

from orgdiffpack.core.exceptions import OrgDiffError


class PluginError(OrgDiffError):
    """Plugin could not be configured or loaded."""


class PluginConfigError(PluginError):
    """Plugin config document is malformed."""


class PluginLoadError(PluginError):
    """Plugin entrypoint could not be imported, built or accepted."""
