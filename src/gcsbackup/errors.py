"""Errors that abort a backup run."""


class BackupError(Exception):
    """Base class for fatal setup errors."""


class ConfigError(BackupError):
    """Raised when the configuration file or credential file is unusable."""


class DiscoveryError(BackupError):
    """Raised when walking a source directory fails."""


class StorageSetupError(BackupError):
    """Raised when the destination bucket handle cannot be constructed."""
