"""Tests for filters module."""

import pytest
from pathlib import Path

from src.pollwatch.filters import PathFilter, matches, validate_pattern
from src.pollwatch.exceptions import PatternError, ScanError


ROOT = Path("/watched")


class TestValidatePattern:
    """Tests for validate_pattern function."""

    def test_valid_patterns(self):
        for pattern in ["*.py", "src/*", "file?.txt", "[abc].txt", "[!a]*", "[]]x", "\\*"]:
            validate_pattern(pattern)

    def test_empty_pattern(self):
        with pytest.raises(PatternError, match="empty pattern"):
            validate_pattern("")

    def test_unterminated_class(self):
        with pytest.raises(PatternError, match="unterminated character class"):
            validate_pattern("[abc")

    def test_unterminated_negated_class(self):
        with pytest.raises(PatternError):
            validate_pattern("[!]")

    def test_trailing_escape(self):
        with pytest.raises(PatternError, match="trailing escape"):
            validate_pattern("abc\\")

    def test_pattern_error_is_scan_error(self):
        with pytest.raises(ScanError) as exc_info:
            validate_pattern("[")
        assert exc_info.value.pattern == "["


class TestMatches:
    """Tests for matches function."""

    def test_matches_file_name(self):
        assert matches("*.py", ROOT / "pkg" / "module.py", ROOT) is True
        assert matches("*.py", ROOT / "pkg" / "module.txt", ROOT) is False

    def test_matches_relative_path(self):
        assert matches("pkg/*.py", ROOT / "pkg" / "module.py", ROOT) is True
        assert matches("other/*.py", ROOT / "pkg" / "module.py", ROOT) is False

    def test_full_path_not_used_inside_root(self):
        assert matches("/watched/pkg/*", ROOT / "pkg" / "module.py", ROOT) is False
        assert matches("/watched/pkg/*", ROOT / "pkg" / "module.py") is True

    def test_directories_above_root_ignored(self):
        root = Path("/home/user/build/project")
        assert matches("build/*", root / "main.py", root) is False
        assert matches("build/*", root / "build" / "out.o", root) is True

    def test_include_ancestor_does_not_match(self):
        root = Path("/srv/docs/project")
        assert matches("docs/*", root / "main.py", root) is False
        assert matches("docs/*", root / "docs" / "index.md", root) is True

    def test_matches_nested_directory_suffix(self):
        assert matches("build/*", ROOT / "a" / "build" / "out.o", ROOT) is True

    def test_case_sensitive(self):
        assert matches("*.PY", ROOT / "module.py", ROOT) is False

    def test_without_root(self):
        assert matches("*.txt", "/elsewhere/notes.txt") is True

    def test_path_outside_root(self):
        assert matches("notes.txt", "/elsewhere/notes.txt", ROOT) is True
        assert matches("sub/*", "/elsewhere/x", ROOT) is False

    def test_malformed_pattern_raises(self):
        with pytest.raises(PatternError):
            matches("[a-", ROOT / "a.txt", ROOT)


class TestPathFilter:
    """Tests for PathFilter class."""

    def test_no_patterns_tracks_everything(self):
        path_filter = PathFilter()
        assert not path_filter
        assert path_filter.should_track(ROOT / "anything.bin", ROOT) is True

    def test_include_only(self):
        path_filter = PathFilter(include=["*.py", "*.toml"])
        assert path_filter.should_track(ROOT / "a.py", ROOT) is True
        assert path_filter.should_track(ROOT / "pyproject.toml", ROOT) is True
        assert path_filter.should_track(ROOT / "README.md", ROOT) is False

    def test_exclude_only(self):
        path_filter = PathFilter(exclude=["*.tmp", ".git/*"])
        assert path_filter.should_track(ROOT / "a.py", ROOT) is True
        assert path_filter.should_track(ROOT / "x.tmp", ROOT) is False
        assert path_filter.should_track(ROOT / ".git" / "HEAD", ROOT) is False

    def test_exclude_wins_over_include(self):
        path_filter = PathFilter(include=["*.py"], exclude=["test_*"])
        assert path_filter.should_track(ROOT / "module.py", ROOT) is True
        assert path_filter.should_track(ROOT / "test_module.py", ROOT) is False

    def test_same_pattern_included_and_excluded(self):
        path_filter = PathFilter(include=["*.py"], exclude=["*.py"])
        assert path_filter.should_track(ROOT / "module.py", ROOT) is False

    def test_accepts_string_paths(self):
        path_filter = PathFilter(include=["*.py"])
        assert path_filter.should_track("/watched/a.py", "/watched") is True

    def test_malformed_include_raises_with_path(self):
        path_filter = PathFilter(include=["[oops"])
        with pytest.raises(PatternError) as exc_info:
            path_filter.should_track(ROOT / "a.py", ROOT)
        assert exc_info.value.pattern == "[oops"
        assert exc_info.value.path == str(ROOT / "a.py")

    def test_malformed_exclude_raises(self):
        path_filter = PathFilter(exclude=[""])
        with pytest.raises(PatternError):
            path_filter.should_track(ROOT / "a.py", ROOT)

    def test_exclude_not_evaluated_when_not_included(self):
        path_filter = PathFilter(include=["*.py"], exclude=["[bad"])
        assert path_filter.should_track(ROOT / "a.txt", ROOT) is False
