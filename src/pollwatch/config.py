"""Configuration for the polling watcher package."""

import hashlib
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import ConfigurationError


DEFAULT_INTERVAL = 2.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class WatchConfig:
    """
    Configuration options for a polling watcher.

    The configuration is frozen once constructed; a watcher reads it at
    creation time and never again.

    Attributes:
        interval: Seconds between two scans, must be strictly positive
        include: Glob patterns a file must match to be tracked (empty: all)
        exclude: Glob patterns that exclude a file, even if included
        content_digest: Fingerprint file content in addition to size and
            modification time
        hash_algorithm: hashlib algorithm used for content digests
        follow_symlinks: Whether to follow symbolic links while scanning
    """
    interval: float = DEFAULT_INTERVAL
    include: Tuple[str, ...] = field(default_factory=tuple)
    exclude: Tuple[str, ...] = field(default_factory=tuple)
    content_digest: bool = True
    hash_algorithm: str = "sha256"
    follow_symlinks: bool = False

    def __post_init__(self):
        if isinstance(self.include, str):
            object.__setattr__(self, "include", (self.include,))
        else:
            object.__setattr__(self, "include", tuple(self.include))
        if isinstance(self.exclude, str):
            object.__setattr__(self, "exclude", (self.exclude,))
        else:
            object.__setattr__(self, "exclude", tuple(self.exclude))

        if isinstance(self.interval, bool) or not isinstance(self.interval, (int, float)):
            raise ConfigurationError(f"interval must be a number, got {self.interval!r}")
        if self.interval <= 0:
            raise ConfigurationError(f"non-positive interval for watcher: {self.interval}")

        if self.hash_algorithm not in hashlib.algorithms_available:
            raise ConfigurationError(f"unsupported hash algorithm: {self.hash_algorithm}")
        try:
            hashlib.new(self.hash_algorithm).hexdigest()
        except (TypeError, ValueError) as e:
            # shake_* digests need an explicit length
            raise ConfigurationError(
                f"hash algorithm must have a fixed digest size: {self.hash_algorithm}"
            ) from e

    @classmethod
    def from_env(
        cls,
        prefix: str = "POLLWATCH_",
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "WatchConfig":
        """
        Build a configuration from environment variables.

        Recognized variables (with the default prefix):
        POLLWATCH_INTERVAL, POLLWATCH_INCLUDE, POLLWATCH_EXCLUDE,
        POLLWATCH_CONTENT_DIGEST, POLLWATCH_HASH_ALGORITHM and
        POLLWATCH_FOLLOW_SYMLINKS. Pattern lists are comma separated.

        Args:
            prefix: Prefix of the environment variable names
            environ: Mapping to read from (defaults to os.environ)
            **overrides: Explicit values that take precedence over the environment

        Returns:
            A validated WatchConfig

        Raises:
            ConfigurationError: If a value cannot be parsed or is invalid
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        interval = env.get(f"{prefix}INTERVAL")
        if interval:
            try:
                values["interval"] = float(interval)
            except ValueError as e:
                raise ConfigurationError(f"invalid {prefix}INTERVAL: {interval!r}") from e

        for name in ("include", "exclude"):
            raw = env.get(f"{prefix}{name.upper()}")
            if raw:
                values[name] = tuple(p.strip() for p in raw.split(",") if p.strip())

        for name in ("content_digest", "follow_symlinks"):
            raw = env.get(f"{prefix}{name.upper()}")
            if raw:
                values[name] = raw.strip().lower() in _TRUE_VALUES

        algorithm = env.get(f"{prefix}HASH_ALGORITHM")
        if algorithm:
            values["hash_algorithm"] = algorithm.strip()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
