"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class DemosManagerError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(DemosManagerError):
    """Raised for issues related to settings loading, validation or saving."""


class InvalidVersionError(DemosManagerError, ValueError):
    """Raised when a version string cannot be parsed."""


class CacheError(DemosManagerError):
    """Base class for failures of the demo cache."""


class CacheExportError(CacheError):
    """Raised when custom data cannot be exported to, or imported from, a backup file."""


class CacheClearError(CacheError):
    """
    Raised when the demo cache could not be cleared. Callers must surface this
    to the user rather than reporting success.
    """


class StartupError(DemosManagerError):
    """Raised when the startup sequence is invoked more than once."""
