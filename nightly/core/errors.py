"""Error types raised by the nightly build core."""

from __future__ import annotations


class NightlyBuildError(RuntimeError):
    """Base class for failures that abort the whole nightly run."""


class DiscoveryError(NightlyBuildError):
    """Raised when the projects root cannot be scanned."""


class WorkingDirectoryError(NightlyBuildError):
    """Raised when a discovered project directory is no longer usable."""


class SettingsError(NightlyBuildError):
    """Raised when the settings file is unreadable or violates its schema."""
