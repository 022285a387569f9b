"""Tests for glob resolution and copying."""

import logging

import pytest

from quickpackage.api.exceptions import CopyError, GlobError, PathError
from quickpackage.core.path_resolver import PathResolver, check_pattern


@pytest.fixture
def base(tmp_path):
    root = tmp_path / "base"
    (root / "bin").mkdir(parents=True)
    (root / "bin" / "app").write_text("app")
    (root / "lib" / "nested").mkdir(parents=True)
    (root / "lib" / "a.so").write_text("a")
    (root / "lib" / "nested" / "b.so").write_text("b")
    return root


class TestCheckPattern:
    @pytest.mark.parametrize("pattern", ["*.txt", "lib/**", "file[ab].txt", "[!x]*", "a]b", "[]]x"])
    def test_valid(self, pattern):
        check_pattern(pattern)

    @pytest.mark.parametrize("pattern", ["", "src/[abc", "[!"])
    def test_invalid(self, pattern):
        with pytest.raises(GlobError):
            check_pattern(pattern)


class TestResolve:
    def test_structure_preserved(self, base, tmp_path):
        dest = tmp_path / "dest"
        pairs = PathResolver(base).resolve("bin/app", dest)

        assert pairs == [(base.resolve() / "bin" / "app", dest / "bin" / "app")]
        assert (dest / "bin").is_dir()

    def test_recursive_glob(self, base, tmp_path):
        dest = tmp_path / "dest"
        pairs = PathResolver(base).resolve("lib/**/*.so", dest)
        assert [dst for _, dst in pairs] == [dest / "lib" / "a.so", dest / "lib" / "nested" / "b.so"]

    def test_no_match_warns_and_returns_empty(self, base, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            pairs = PathResolver(base).resolve("missing/*", tmp_path / "dest")

        assert pairs == []
        assert "matched no files" in caplog.text

    def test_wildcard_matches_dotfiles(self, base, tmp_path):
        (base / "conf").mkdir()
        (base / "conf" / ".env").write_text("KEY=1")
        (base / "conf" / "app.ini").write_text("[app]")

        pairs = PathResolver(base).resolve("conf/*", tmp_path / "dest")

        assert [dst.name for _, dst in pairs] == [".env", "app.ini"]

    def test_bad_pattern(self, base, tmp_path):
        with pytest.raises(GlobError):
            PathResolver(base).resolve("bin/[app", tmp_path / "dest")

    def test_match_outside_base(self, base, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "f.txt").write_text("x")

        with pytest.raises(PathError, match="outside"):
            PathResolver(base).resolve(str(outside / "*.txt"), tmp_path / "dest")


class TestCopy:
    def test_copies_files(self, base, tmp_path):
        dest = tmp_path / "dest"
        PathResolver(base).copy("lib/*.so", dest)
        assert (dest / "lib" / "a.so").read_text() == "a"
        assert not (dest / "lib" / "nested").exists()

    def test_copies_directory_tree(self, base, tmp_path):
        dest = tmp_path / "dest"
        PathResolver(base).copy("lib", dest)
        assert (dest / "lib" / "nested" / "b.so").read_text() == "b"

    def test_overwrites_existing(self, base, tmp_path):
        dest = tmp_path / "dest"
        (dest / "bin").mkdir(parents=True)
        (dest / "bin" / "app").write_text("old")

        PathResolver(base).copy("bin/app", dest)
        assert (dest / "bin" / "app").read_text() == "app"

    def test_required_without_match(self, base, tmp_path):
        with pytest.raises(CopyError, match="not found"):
            PathResolver(base).copy("bin/other", tmp_path / "dest", required=True)

    def test_optional_without_match(self, base, tmp_path):
        assert PathResolver(base).copy("bin/other", tmp_path / "dest") == []
