"""Walking the watched root and fingerprinting the files found."""

import logging
import os
import stat
import time
from pathlib import Path
from typing import Dict, Optional, Union

from .config import WatchConfig
from .exceptions import ScanError
from .filters import PathFilter
from .models import FileRecord, Snapshot, compute_file_digest

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


class Fingerprinter:
    """
    Converts a stat result into a comparable FileRecord.

    In content-digest mode the file is read and hashed; otherwise only
    size and modification time are recorded.
    """

    def __init__(self, config: WatchConfig):
        self.config = config

    def fingerprint(self, path: str, st: os.stat_result) -> Optional[FileRecord]:
        """
        Fingerprint one file system entry.

        Args:
            path: Absolute path of the entry
            st: Stat result for the entry

        Returns:
            A FileRecord, or None for directories and non-regular files

        Raises:
            OSError: If content digesting is enabled and the file cannot be read
        """
        if not stat.S_ISREG(st.st_mode):
            return None

        digest = None
        if self.config.content_digest:
            digest = compute_file_digest(path, self.config.hash_algorithm)

        return FileRecord(
            path=path,
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            content_digest=digest,
        )


class Snapshotter:
    """
    Builds a complete Snapshot of the watched root.

    Any error while walking, filtering or fingerprinting aborts the whole
    scan; a partial snapshot is never returned.
    """

    def __init__(self, root: Union[str, Path], config: Optional[WatchConfig] = None):
        """
        Initialize the snapshotter.

        Args:
            root: Directory (or single file) to scan
            config: Watch configuration
        """
        self.root = Path(os.path.abspath(root))
        self.config = config or WatchConfig()
        self.path_filter = PathFilter(self.config.include, self.config.exclude)
        self.fingerprinter = Fingerprinter(self.config)

    def take(self) -> Snapshot:
        """
        Scan the root and return a new snapshot.

        Returns:
            Snapshot of all tracked files

        Raises:
            ScanError: If the scan failed for any reason
        """
        started = time.monotonic()
        try:
            records = self._scan()
        except ScanError:
            raise
        except OSError as e:
            path = e.filename if e.filename is not None else str(self.root)
            raise ScanError(f"scan of {self.root} failed: {e}", os.fsdecode(path)) from e

        snapshot = Snapshot(records)
        logger.debug(
            f"Scanned {self.root}: {len(snapshot)} file(s) in "
            f"{time.monotonic() - started:.3f}s"
        )
        return snapshot

    def _scan(self) -> Dict[str, FileRecord]:
        records: Dict[str, FileRecord] = {}

        root_stat = os.stat(self.root)
        if not stat.S_ISDIR(root_stat.st_mode):
            # A single watched file is always tracked, filters do not apply
            record = self.fingerprinter.fingerprint(str(self.root), root_stat)
            if record is not None:
                records[record.path] = record
            return records

        follow = self.config.follow_symlinks
        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=_raise_walk_error, followlinks=follow
        ):
            dirnames.sort()
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)

                if self.path_filter and not self.path_filter.should_track(path, self.root):
                    continue

                record = self.fingerprinter.fingerprint(path, os.stat(path, follow_symlinks=follow))
                if record is not None:
                    records[path] = record

        return records
