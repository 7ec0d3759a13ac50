"""Tests for path helpers."""

from storagefs.paths import (
    collapse_separators,
    eat_dots,
    join_path,
    natural_sorted,
    normalize_directory_path,
    remove_dot_segments,
    sanitize_url,
    split_segments,
    strip_unsafe_prefix,
)


class TestEatDots:
    """Tests for parent-segment elimination."""

    def test_removes_segment_before_dotdot(self):
        assert eat_dots(["a", "b", "..", "c"]) == ["a", "c"]

    def test_repeated_dotdots(self):
        assert eat_dots(["a", "b", "..", "..", "c"]) == ["c"]

    def test_leading_dotdot_survives(self):
        assert eat_dots(["..", "a"]) == ["..", "a"]

    def test_leading_dotdot_shields_later_ones(self):
        """Elimination stops once the first '..' is at index 0."""
        assert eat_dots(["a", "..", "..", "b", ".."]) == ["..", "b", ".."]

    def test_no_dots(self):
        assert eat_dots(["a", "b"]) == ["a", "b"]


class TestNormalizeDirectoryPath:
    """Tests for cache-key normalization."""

    def test_adds_trailing_slash(self):
        assert normalize_directory_path("/data/scenarioA") == "/data/scenarioA/"

    def test_collapses_duplicate_separators(self):
        assert normalize_directory_path("//data///scenarioA//") == "/data/scenarioA/"

    def test_removes_dot_segments(self):
        assert normalize_directory_path("/data/./././x/") == "/data/x/"

    def test_root(self):
        assert normalize_directory_path("/") == "/"
        assert normalize_directory_path("") == "/"

    def test_idempotent(self):
        once = normalize_directory_path("a//b/./c")
        assert normalize_directory_path(once) == once


class TestSanitizeUrl:
    """Tests for URL building from user-supplied paths."""

    def test_resolves_parent_segments(self):
        url = sanitize_url("https://svn.example.org/public/", "data/../x.csv")
        assert url == "https://svn.example.org/public/x.csv"

    def test_repairs_scheme_after_collapse(self):
        url = sanitize_url("https://svn.example.org/public/", "/data/run.csv")
        assert url == "https://svn.example.org/public/data/run.csv"

    def test_http_scheme(self):
        url = sanitize_url("http://localhost:8000/", "//a//b.txt")
        assert url == "http://localhost:8000/a/b.txt"

    def test_strips_unsafe_prefix(self):
        url = sanitize_url("https://svn.example.org/public/", "\r\n?x=1data/a.csv")
        assert url == "https://svn.example.org/public/x=1data/a.csv"

    def test_cannot_climb_above_host(self):
        url = sanitize_url("https://svn.example.org/public/", "../../../etc/passwd")
        assert url == "https://svn.example.org/etc/passwd"


class TestSmallHelpers:
    """Tests for the remaining helpers."""

    def test_strip_unsafe_prefix(self):
        assert strip_unsafe_prefix("..//a") == "//a"
        assert strip_unsafe_prefix("  data") == "data"
        assert strip_unsafe_prefix("data") == "data"

    def test_collapse_separators(self):
        assert collapse_separators("a////b//c") == "a/b/c"

    def test_remove_dot_segments(self):
        assert remove_dot_segments("a/./b/../c.csv") == "/a/c.csv"
        assert remove_dot_segments("/../x") == "/x"

    def test_join_path(self):
        assert join_path("/root/", "simwrapper") == "/root/simwrapper"
        assert join_path("/root", "a.yaml") == "/root/a.yaml"

    def test_split_segments(self):
        assert split_segments("/a//b/c/") == ["a", "b", "c"]


class TestNaturalSort:
    """Tests for human-friendly ordering."""

    def test_numbers_compare_numerically(self):
        assert natural_sorted(["img10", "img2", "img1"]) == ["img1", "img2", "img10"]

    def test_case_insensitive(self):
        assert natural_sorted(["beta", "Alpha", "alpha2"]) == ["Alpha", "alpha2", "beta"]

    def test_mixed_text_and_numbers(self):
        names = ["run10.csv", "run9.csv", "output", "run100.csv"]
        assert natural_sorted(names) == ["output", "run9.csv", "run10.csv", "run100.csv"]
