"""Tests for models module."""

import hashlib
import time

import pytest

from src.pollwatch.models import (
    ChangeEvent,
    FileRecord,
    Snapshot,
    WatcherState,
    compute_file_digest,
)


class TestWatcherState:
    """Tests for WatcherState enum."""

    def test_state_values(self):
        assert WatcherState.CREATED.value == "created"
        assert WatcherState.RUNNING.value == "running"
        assert WatcherState.STOPPED.value == "stopped"


class TestFileRecord:
    """Tests for FileRecord dataclass."""

    def test_equal_records(self):
        a = FileRecord(path="/a", size=3, mtime_ns=100, content_digest="abc")
        b = FileRecord(path="/a", size=3, mtime_ns=100, content_digest="abc")
        assert a == b

    def test_size_difference(self):
        a = FileRecord(path="/a", size=3, mtime_ns=100)
        b = FileRecord(path="/a", size=4, mtime_ns=100)
        assert a != b

    def test_mtime_difference(self):
        a = FileRecord(path="/a", size=3, mtime_ns=100)
        b = FileRecord(path="/a", size=3, mtime_ns=101)
        assert a != b

    def test_digest_difference(self):
        a = FileRecord(path="/a", size=3, mtime_ns=100, content_digest="abc")
        b = FileRecord(path="/a", size=3, mtime_ns=100, content_digest="def")
        assert a != b

    def test_record_is_immutable(self):
        record = FileRecord(path="/a", size=3, mtime_ns=100)
        with pytest.raises(AttributeError):
            record.size = 4

    def test_mtime_seconds(self):
        record = FileRecord(path="/a", size=0, mtime_ns=1_500_000_000)
        assert record.mtime == 1.5

    def test_to_dict(self):
        record = FileRecord(path="/a", size=3, mtime_ns=100, content_digest="abc")
        assert record.to_dict() == {
            "path": "/a",
            "size": 3,
            "mtime_ns": 100,
            "content_digest": "abc",
        }


class TestSnapshot:
    """Tests for Snapshot mapping."""

    def test_empty_snapshot(self):
        snapshot = Snapshot()
        assert len(snapshot) == 0
        assert list(snapshot) == []
        assert snapshot.total_size == 0

    def test_mapping_access(self):
        record = FileRecord(path="/a", size=3, mtime_ns=100)
        snapshot = Snapshot({"/a": record})

        assert len(snapshot) == 1
        assert "/a" in snapshot
        assert snapshot["/a"] is record
        assert snapshot.get("/missing") is None

    def test_snapshot_copies_input(self):
        records = {"/a": FileRecord(path="/a", size=3, mtime_ns=100)}
        snapshot = Snapshot(records)

        records["/b"] = FileRecord(path="/b", size=1, mtime_ns=100)

        assert len(snapshot) == 1
        assert "/b" not in snapshot

    def test_snapshot_is_read_only(self):
        snapshot = Snapshot({"/a": FileRecord(path="/a", size=3, mtime_ns=100)})
        with pytest.raises(TypeError):
            snapshot["/b"] = FileRecord(path="/b", size=1, mtime_ns=100)

    def test_total_size(self):
        snapshot = Snapshot({
            "/a": FileRecord(path="/a", size=3, mtime_ns=100),
            "/b": FileRecord(path="/b", size=7, mtime_ns=100),
        })
        assert snapshot.total_size == 10

    def test_taken_at_defaults_to_now(self):
        before = time.time()
        snapshot = Snapshot()
        assert before <= snapshot.taken_at <= time.time()


class TestChangeEvent:
    """Tests for ChangeEvent dataclass."""

    def test_timestamp_default(self):
        before = time.time()
        event = ChangeEvent()
        assert before <= event.timestamp <= time.time()


class TestComputeFileDigest:
    """Tests for compute_file_digest function."""

    def test_digest_matches_hashlib(self, tmp_path):
        test_file = tmp_path / "test.txt"
        test_file.write_bytes(b"hello world")

        assert compute_file_digest(test_file) == hashlib.sha256(b"hello world").hexdigest()

    def test_digest_large_file(self, tmp_path):
        data = b"x" * 200_000
        test_file = tmp_path / "big.bin"
        test_file.write_bytes(data)

        assert compute_file_digest(test_file) == hashlib.sha256(data).hexdigest()

    def test_newlines_are_significant(self, tmp_path):
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_bytes(b"a\nb")
        b.write_bytes(b"ab\n")

        assert compute_file_digest(a) != compute_file_digest(b)

    def test_other_algorithm(self, tmp_path):
        test_file = tmp_path / "test.txt"
        test_file.write_bytes(b"content")

        assert compute_file_digest(test_file, "md5") == hashlib.md5(b"content").hexdigest()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            compute_file_digest(tmp_path / "missing.txt")
