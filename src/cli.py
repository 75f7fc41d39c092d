#!/usr/bin/env python3
"""
CLI for the polling file watcher.

Usage:
    python -m src.cli watch /path/to/folder --interval 1 --exec "make build"
    python -m src.cli watch config.yaml --metadata-only
    python -m src.cli scan /path/to/folder --include "*.py" --json
"""

import argparse
import json
import logging
import queue
import signal
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from src.pollwatch import (
    ConfigurationError,
    PollingWatcher,
    ScanError,
    Snapshotter,
    SourceClosedError,
    WatchConfig,
)


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("cli")


class GracefulShutdown:
    """Handle graceful shutdown on SIGINT/SIGTERM."""

    def __init__(self):
        self.should_exit = False
        signal.signal(signal.SIGINT, self._handler)
        signal.signal(signal.SIGTERM, self._handler)

    def _handler(self, signum, frame):
        logger.info("Received shutdown signal, stopping...")
        self.should_exit = True


def build_config(args) -> WatchConfig:
    """Build the watch configuration from the environment and CLI arguments."""
    return WatchConfig.from_env(
        interval=args.interval,
        include=args.include,
        exclude=args.exclude,
        content_digest=False if args.metadata_only else None,
        hash_algorithm=args.hash_algorithm,
        follow_symlinks=True if args.follow_symlinks else None,
    )


def run_command(command: str) -> int:
    """Run the change hook through the shell and return its exit code."""
    logger.info(f"Running: {command}")
    result = subprocess.run(command, shell=True)
    if result.returncode != 0:
        logger.warning(f"Command exited with status {result.returncode}")
    return result.returncode


def log_scan_errors(watcher: PollingWatcher) -> None:
    """Log a pending scan failure, if any, without waiting."""
    try:
        error = watcher.errors.poll()
    except (queue.Empty, SourceClosedError):
        return
    logger.error(f"Scan failed: {error}")


def cmd_watch(args) -> int:
    """Watch a root and report (or react to) changes until interrupted."""
    config = build_config(args)
    root = Path(args.root).resolve()

    if not root.exists():
        logger.error(f"Root path does not exist: {root}")
        return 1

    shutdown = GracefulShutdown()

    with PollingWatcher(root, config) as watcher:
        mode = "content digest" if config.content_digest else "metadata only"
        logger.info(f"Watching {root} ({mode}), interval={config.interval}s")
        if config.include:
            logger.info(f"  include: {', '.join(config.include)}")
        if config.exclude:
            logger.info(f"  exclude: {', '.join(config.exclude)}")
        logger.info("Press Ctrl+C to stop")

        while not shutdown.should_exit:
            log_scan_errors(watcher)

            try:
                watcher.changes.get(timeout=0.5)
            except queue.Empty:
                continue
            except SourceClosedError:
                break

            logger.info(f"Change detected in {root}")
            if args.exec:
                run_command(args.exec)
                log_scan_errors(watcher)

    logger.info("Watcher stopped")
    return 0


def cmd_scan(args) -> int:
    """Take a single snapshot and print the tracked files."""
    config = build_config(args)
    snapshotter = Snapshotter(args.root, config)

    try:
        snapshot = snapshotter.take()
    except ScanError as e:
        logger.error(f"Scan failed: {e}")
        return 1

    if args.json:
        print(json.dumps([record.to_dict() for record in snapshot.values()], indent=2))
        return 0

    for record in snapshot.values():
        digest = record.content_digest[:12] if record.content_digest else "-"
        print(f"{record.size:>12}  {record.mtime_ns}  {digest:<12}  {record.path}")
    print(f"\n{len(snapshot)} file(s), {snapshot.total_size} bytes")
    return 0


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", help="Directory or file to watch")
    parser.add_argument(
        "--interval", "-i",
        type=float,
        default=None,
        help="Seconds between scans (default: 2.0 or POLLWATCH_INTERVAL)",
    )
    parser.add_argument(
        "--include",
        nargs="+",
        default=None,
        metavar="PATTERN",
        help="Only track files matching these glob patterns",
    )
    parser.add_argument(
        "--exclude",
        nargs="+",
        default=None,
        metavar="PATTERN",
        help="Ignore files matching these glob patterns",
    )
    parser.add_argument(
        "--metadata-only",
        action="store_true",
        help="Compare size and modification time only, without hashing content",
    )
    parser.add_argument(
        "--hash-algorithm",
        default=None,
        help="hashlib algorithm for content digests (default: sha256)",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links while scanning",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pollwatch",
        description="Detect file changes by polling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    watch_parser = subparsers.add_parser("watch", help="Watch a root for changes")
    _add_config_arguments(watch_parser)
    watch_parser.add_argument(
        "--exec", "-x",
        default=None,
        metavar="COMMAND",
        help="Shell command to run after each detected change",
    )
    watch_parser.set_defaults(func=cmd_watch)

    scan_parser = subparsers.add_parser("scan", help="Scan a root once and list tracked files")
    _add_config_arguments(scan_parser)
    scan_parser.add_argument(
        "--json",
        action="store_true",
        help="Print records as JSON",
    )
    scan_parser.set_defaults(func=cmd_scan)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
