"""Single-slot, non-blocking notification delivery."""

import queue
import threading
from typing import Generic, Iterator, Optional, TypeVar

from .exceptions import SourceClosedError

T = TypeVar("T")

_EMPTY = object()


class NotificationSource(Generic[T]):
    """
    A mailbox holding at most one undelivered notification.

    Producers never block: publishing while a notification is still
    pending drops the new one, so repeated events coalesce into the one
    already waiting. Consumers can poll, wait with a timeout, or iterate
    until the source is closed.

    Thread-safe.
    """

    def __init__(self, name: str = "notifications"):
        """
        Initialize the notification source.

        Args:
            name: Name used in repr and log messages
        """
        self.name = name
        self._item = _EMPTY
        self._closed = False
        self._cond = threading.Condition()

    def publish(self, item: T) -> bool:
        """
        Try to hand over a notification without blocking.

        Args:
            item: The notification

        Returns:
            True if stored, False if one is already pending or the source is closed
        """
        with self._cond:
            if self._closed or self._item is not _EMPTY:
                return False
            self._item = item
            self._cond.notify()
            return True

    def get(self, timeout: Optional[float] = None) -> T:
        """
        Wait for the pending notification and take it.

        Args:
            timeout: Maximum seconds to wait (None waits until an item or close)

        Returns:
            The notification

        Raises:
            queue.Empty: If the timeout expired
            SourceClosedError: If the source is closed and drained
        """
        with self._cond:
            if not self._cond.wait_for(
                lambda: self._item is not _EMPTY or self._closed, timeout=timeout
            ):
                raise queue.Empty
            return self._take()

    def poll(self) -> T:
        """
        Take the pending notification without waiting.

        Raises:
            queue.Empty: If nothing is pending
            SourceClosedError: If the source is closed and drained
        """
        with self._cond:
            if self._item is _EMPTY and not self._closed:
                raise queue.Empty
            return self._take()

    def _take(self) -> T:
        if self._item is _EMPTY:
            raise SourceClosedError(f"{self.name} source is closed")
        item, self._item = self._item, _EMPTY
        return item

    def close(self) -> None:
        """Close the source and wake every waiting consumer. Idempotent."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        """Check if the source was closed."""
        return self._closed

    @property
    def pending(self) -> bool:
        """Check if a notification is waiting to be taken."""
        with self._cond:
            return self._item is not _EMPTY

    def __iter__(self) -> Iterator[T]:
        """Yield notifications as they arrive until the source is closed."""
        while True:
            try:
                yield self.get()
            except SourceClosedError:
                return

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"NotificationSource({self.name!r}, {state}, pending={self.pending})"
