"""
Polling File Watcher Package

Detects changes to a directory tree, or a single file, by re-scanning it
on a fixed interval and comparing successive snapshots. No platform
change-notification API is used.

Features:
- Include/exclude glob filtering
- Metadata-only or content-digest fingerprinting
- Non-blocking, single-slot change and error notifications
- Idempotent stop that closes both notification sources
"""

from .models import (
    WatcherState,
    FileRecord,
    Snapshot,
    ChangeEvent,
    compute_file_digest,
)

from .config import WatchConfig, DEFAULT_INTERVAL

from .exceptions import (
    WatcherError,
    ConfigurationError,
    ScanError,
    PatternError,
    SourceClosedError,
)

from .filters import PathFilter
from .snapshot import Fingerprinter, Snapshotter
from .differ import has_changed
from .notify import NotificationSource
from .watcher import PollingWatcher


__all__ = [
    # Models
    "WatcherState",
    "FileRecord",
    "Snapshot",
    "ChangeEvent",
    "compute_file_digest",
    # Config
    "WatchConfig",
    "DEFAULT_INTERVAL",
    # Exceptions
    "WatcherError",
    "ConfigurationError",
    "ScanError",
    "PatternError",
    "SourceClosedError",
    # Components
    "PathFilter",
    "Fingerprinter",
    "Snapshotter",
    "has_changed",
    "NotificationSource",
    # Watcher
    "PollingWatcher",
]

__version__ = "0.1.0"
