"""Custom exceptions for the polling watcher package."""

from typing import Optional


class WatcherError(Exception):
    """Base exception for all watcher errors."""
    pass


class ConfigurationError(WatcherError, ValueError):
    """Watcher configuration is invalid (e.g. non-positive interval)."""
    pass


class ScanError(WatcherError):
    """
    A scan of the watched root failed.

    The scan is discarded as a whole; the previously stored snapshot
    stays authoritative.

    Attributes:
        path: The path being visited when the scan failed, if known
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class PatternError(ScanError):
    """An include or exclude pattern is malformed."""

    def __init__(self, message: str, pattern: str, path: Optional[str] = None):
        super().__init__(message, path)
        self.pattern = pattern


class SourceClosedError(WatcherError):
    """The notification source was closed and has nothing left to deliver."""
    pass
