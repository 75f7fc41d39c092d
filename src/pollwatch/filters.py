"""Include/exclude filtering of scanned paths."""

import fnmatch
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from .exceptions import PatternError


def validate_pattern(pattern: str) -> None:
    """
    Check that a glob pattern is well formed.

    fnmatch accepts any string; a pattern is rejected here if it is empty,
    has an unterminated character class or ends with a lone escape.

    Raises:
        PatternError: If the pattern is malformed
    """
    if not pattern:
        raise PatternError("empty pattern", pattern)

    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "\\":
            if i >= n:
                raise PatternError(f"trailing escape in pattern: {pattern!r}", pattern)
            i += 1
        elif c == "[":
            j = i
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise PatternError(f"unterminated character class in pattern: {pattern!r}", pattern)
            i = j + 1


def matches(pattern: str, path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> bool:
    """
    Check whether a path matches a glob pattern.

    The pattern is tried against the file name and the path relative to
    root (POSIX separators), directly and as a ``*/pattern`` suffix.
    Directories above root never take part in matching; the full path is
    used only for a path outside root or when no root is given.

    Args:
        pattern: Glob pattern
        path: Path to test
        root: Watched root used to compute the relative path

    Returns:
        True if any form of the path matches

    Raises:
        PatternError: If the pattern is malformed
    """
    validate_pattern(pattern)

    path = Path(path)

    if fnmatch.fnmatchcase(path.name, pattern):
        return True

    target = path.as_posix()
    if root is not None:
        try:
            target = path.relative_to(root).as_posix()
        except ValueError:
            pass

    if fnmatch.fnmatchcase(target, pattern):
        return True
    if fnmatch.fnmatchcase(target, f"*/{pattern}"):
        return True

    return False


class PathFilter:
    """
    Decides whether a scanned file is tracked.

    Exclude patterns win over include patterns; with no include patterns
    every file is a candidate.
    """

    def __init__(self, include: Iterable[str] = (), exclude: Iterable[str] = ()):
        self.include: Tuple[str, ...] = tuple(include)
        self.exclude: Tuple[str, ...] = tuple(exclude)

    def _matches_any(self, patterns: Tuple[str, ...], path: Path, root: Optional[Path]) -> bool:
        for pattern in patterns:
            try:
                if matches(pattern, path, root):
                    return True
            except PatternError as e:
                e.path = str(path)
                raise
        return False

    def should_track(self, path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> bool:
        """
        Check if a file should be tracked.

        Args:
            path: Path of the file
            root: Watched root the file was found under

        Returns:
            True if the file passes the include and exclude patterns

        Raises:
            PatternError: If a pattern is malformed
        """
        path = Path(path)
        root = Path(root) if root is not None else None

        if self.include and not self._matches_any(self.include, path, root):
            return False
        if self.exclude and self._matches_any(self.exclude, path, root):
            return False
        return True

    def __bool__(self) -> bool:
        return bool(self.include or self.exclude)
