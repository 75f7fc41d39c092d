"""Polling watcher: periodic scan, compare and notify."""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .config import WatchConfig
from .differ import has_changed
from .exceptions import ScanError
from .models import ChangeEvent, Snapshot, WatcherState
from .notify import NotificationSource
from .snapshot import Snapshotter

logger = logging.getLogger(__name__)


class PollingWatcher:
    """
    Watches a directory tree (or a single file) by re-scanning it.

    A background thread starts as soon as the watcher is created. Every
    ``config.interval`` seconds it takes a snapshot, compares it with the
    previous one and publishes a ChangeEvent on ``changes`` when they
    differ. Scan failures are published on ``errors`` and leave the
    previous snapshot in place.

    Both sources hold at most one pending item; anything published while
    an item is pending is dropped. ``stop()`` closes both sources.

    Example:
        >>> with PollingWatcher("config/", WatchConfig(interval=1.0)) as w:
        ...     for _ in w.changes:
        ...         reload()
    """

    def __init__(self, root: Union[str, Path], config: Optional[WatchConfig] = None):
        """
        Create the watcher and start polling.

        Args:
            root: Directory or file to watch
            config: Watch configuration (defaults to WatchConfig())

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config or WatchConfig()
        self._snapshotter = Snapshotter(root, self.config)
        self.root = self._snapshotter.root

        self.changes: NotificationSource[ChangeEvent] = NotificationSource("changes")
        self.errors: NotificationSource[ScanError] = NotificationSource("errors")

        self._snapshot: Optional[Snapshot] = None
        self._state = WatcherState.CREATED
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

        self._scans_completed = 0
        self._scans_failed = 0
        self._changes_detected = 0

        self._thread = threading.Thread(
            target=self._run,
            name=f"PollingWatcher({self.root.name or self.root})",
            daemon=True,
        )
        with self._lock:
            self._state = WatcherState.RUNNING
        self._thread.start()
        logger.info(f"Watching {self.root} every {self.config.interval}s")

    def _run(self) -> None:
        """Worker loop that scans once per interval until stopped."""
        logger.debug(f"Poll loop started for {self.root}")
        while not self._stop_event.wait(timeout=self.config.interval):
            self._tick()
        logger.debug(f"Poll loop exited for {self.root}")

    def _tick(self) -> None:
        """Run one scan-and-compare cycle."""
        try:
            snapshot = self._snapshotter.take()
        except ScanError as e:
            self._on_scan_error(e)
            return
        except Exception as e:
            logger.exception(f"Unexpected error while scanning {self.root}")
            error = ScanError(f"unexpected error while scanning {self.root}: {e}", str(self.root))
            error.__cause__ = e
            self._on_scan_error(error)
            return

        if has_changed(self._snapshot, snapshot):
            self._changes_detected += 1
            if self.changes.publish(ChangeEvent()):
                logger.debug(f"Change detected in {self.root}")
            else:
                logger.debug(f"Change detected in {self.root}, notification already pending")

        # Replace the baseline only after comparing
        self._snapshot = snapshot
        self._scans_completed += 1

    def _on_scan_error(self, error: ScanError) -> None:
        logger.warning(f"Scan of {self.root} failed: {error}")
        self.errors.publish(error)
        self._scans_failed += 1

    def stop(self) -> None:
        """
        Stop polling and close both notification sources.

        A scan already in progress completes first. Calling stop() again
        has no effect.
        """
        with self._lock:
            if self._state is WatcherState.STOPPED:
                return
            self._state = WatcherState.STOPPED

        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join()

        self.changes.close()
        self.errors.close()
        logger.info(f"Stopped watching {self.root}")

    @property
    def state(self) -> WatcherState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the watcher is polling."""
        return self._state is WatcherState.RUNNING

    @property
    def scans_completed(self) -> int:
        """Number of successful scans, including the baseline scan."""
        return self._scans_completed

    @property
    def scans_failed(self) -> int:
        """Number of scans that failed."""
        return self._scans_failed

    @property
    def changes_detected(self) -> int:
        """Number of scans that differed from the previous one, delivered or not."""
        return self._changes_detected

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False

    def __repr__(self) -> str:
        return f"PollingWatcher({str(self.root)!r}, state={self._state.value})"
