"""Unit tests for staging pattern matching."""

import pytest

from gitstage.repository._staging import _compile_pattern, _matches, _matches_dir


class TestCompilePattern:
    @pytest.mark.parametrize("pattern", ["", ".", "*", "**", ":/", "/", "./", " . "])
    def test_match_all_patterns(self, pattern: str) -> None:
        assert _compile_pattern(pattern) is None

    def test_strips_leading_dot_slash(self) -> None:
        spec = _compile_pattern("./a/d")

        assert _matches(spec, "a/d/f1.txt")


class TestMatches:
    def test_none_matches_everything(self) -> None:
        assert _matches(None, "any/path.txt")

    @pytest.mark.parametrize(
        ("pattern", "path", "expected"),
        [
            ("a/d", "a/d/f1.txt", True),
            ("a/d", "a/d/nested/f2.txt", True),
            ("a/d", "a/f3.txt", False),
            ("a/d", "b/a/d/f.txt", False),
            ("docs", "docs/index.md", True),
            ("docs", "src/docs/api.md", False),
            ("/docs", "docs/index.md", True),
            (":/docs", "docs/index.md", True),
            ("f3.txt", "f3.txt", True),
            ("f3.txt", "a/f3.txt", False),
            ("*.txt", "notes.txt", True),
            ("*.txt", "deep/dir/notes.txt", False),
            ("**/*.txt", "deep/dir/notes.txt", True),
            ("**/*.txt", "notes.txt", True),
            ("*.txt", "notes.md", False),
            ("src/*.py", "src/main.py", True),
            ("src/*.py", "src/pkg/mod.py", False),
            ("src/**/*.py", "src/pkg/mod.py", True),
            ("file.txt", "file.txt", True),
        ],
    )
    def test_patterns_anchored_at_root(
        self, pattern: str, path: str, expected: bool
    ) -> None:
        assert _matches(_compile_pattern(pattern), path) is expected


class TestMatchesDir:
    def test_directory_only_pattern(self) -> None:
        spec = _compile_pattern("vendor/")

        assert _matches_dir(spec, "vendor")
        assert not _matches(spec, "vendor")

    def test_prefix_pattern_selects_directory(self) -> None:
        assert _matches_dir(_compile_pattern("sub"), "sub/subgit")

    def test_unrelated_directory(self) -> None:
        assert not _matches_dir(_compile_pattern("a"), "sub/subgit")
