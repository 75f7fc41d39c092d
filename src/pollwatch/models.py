"""Data models for the polling watcher package."""

import hashlib
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, Optional, Union


CHUNK_SIZE = 65536


class WatcherState(Enum):
    """
    Lifecycle states of a polling watcher.

    CREATED only exists while the constructor runs; a constructed watcher
    is RUNNING until stopped, and STOPPED is terminal.
    """
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class FileRecord:
    """
    Fingerprint of one tracked file at scan time.

    Two records of the same path compare equal when size, modification
    time and (if computed) content digest are all equal.

    Attributes:
        path: Absolute path of the file, unique within a snapshot
        size: Size in bytes
        mtime_ns: Modification time in nanoseconds as reported by os.stat
        content_digest: Hex digest of the file content (content-digest mode only)
    """
    path: str
    size: int
    mtime_ns: int
    content_digest: Optional[str] = None

    @property
    def mtime(self) -> float:
        """Modification time in seconds since the epoch."""
        return self.mtime_ns / 1e9

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "path": self.path,
            "size": self.size,
            "mtime_ns": self.mtime_ns,
            "content_digest": self.content_digest,
        }


class Snapshot(Mapping):
    """
    Read-only mapping of path to FileRecord for one scan.

    A snapshot is built once from a fresh dict and never mutated; a later
    scan produces a new snapshot.
    """

    __slots__ = ("_records", "taken_at")

    def __init__(self, records: Optional[Dict[str, FileRecord]] = None, taken_at: Optional[float] = None):
        self._records: Dict[str, FileRecord] = dict(records) if records else {}
        self.taken_at = time.time() if taken_at is None else taken_at

    def __getitem__(self, path: str) -> FileRecord:
        return self._records[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Snapshot({len(self._records)} files)"

    @property
    def total_size(self) -> int:
        """Sum of the sizes of all records."""
        return sum(r.size for r in self._records.values())


@dataclass(frozen=True)
class ChangeEvent:
    """
    Notification that the watched tree changed since the previous scan.

    Deliberately carries no information about what changed.

    Attributes:
        timestamp: Unix timestamp when the change was detected
    """
    timestamp: float = field(default_factory=time.time)


def compute_file_digest(path: Union[str, Path], algorithm: str = "sha256") -> str:
    """
    Compute the digest of a file's contents.

    I/O errors propagate to the caller.

    Args:
        path: Path to the file
        algorithm: hashlib algorithm name (default: sha256)

    Returns:
        Hex digest of the file content

    Raises:
        OSError: If the file cannot be opened or read
    """
    hasher = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()
