"""Change detection between two snapshots."""

from typing import Optional

from .models import Snapshot


def has_changed(old: Optional[Snapshot], new: Snapshot) -> bool:
    """
    Compare two snapshots.

    Neither snapshot is modified. Without a previous snapshot there is
    nothing to compare against, so the first scan never counts as a change.

    Args:
        old: Previously stored snapshot, or None before the first scan
        new: Freshly taken snapshot

    Returns:
        True if files were added, removed or modified
    """
    if old is None:
        return False

    if len(new) != len(old):
        return True

    # New or modified files
    for path, record in new.items():
        existing = old.get(path)
        if existing is None or existing != record:
            return True

    # Deleted files
    for path in old:
        if path not in new:
            return True

    return False
