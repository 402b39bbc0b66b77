"""Tests for vault path resolution and file enumeration."""

import os

import pytest

from mddb.config import MatchOptions
from mddb.errors import EmptyVaultError, VaultReadError
from mddb.parser.scanner import FileScanner, build_pattern, resolve_base


@pytest.fixture
def vault_path(tmp_path):
    """Create a temp vault with some notes."""
    (tmp_path / "lang.python.md").write_text("# Python")
    (tmp_path / "lang.rust.md").write_text("# Rust")
    (tmp_path / "root.md").write_text("# Root")
    (tmp_path / "notes.txt").write_text("not markdown")
    (tmp_path / ".hidden.md").write_text("# Hidden")
    sub = tmp_path / "daily"
    sub.mkdir()
    (sub / "2024-01-01.md").write_text("# Day")
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "config.md").write_text("config")
    return tmp_path


class TestResolveBase:
    def test_existing_directory(self, tmp_path):
        assert resolve_base(str(tmp_path)) == tmp_path.resolve()
        assert resolve_base(tmp_path).is_absolute()

    def test_missing_path(self, tmp_path):
        with pytest.raises(VaultReadError) as exc_info:
            resolve_base(tmp_path / "nope")
        assert "does not exist" in exc_info.value.message

    def test_file_is_not_a_vault(self, tmp_path):
        file_path = tmp_path / "file.md"
        file_path.write_text("x")
        with pytest.raises(VaultReadError) as exc_info:
            resolve_base(file_path)
        assert "not a directory" in exc_info.value.message

    def test_expands_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MDDB_TEST_VAULT", str(tmp_path))
        assert resolve_base("$MDDB_TEST_VAULT") == tmp_path.resolve()

    def test_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "vault").mkdir()
        assert resolve_base("~/vault") == (tmp_path / "vault").resolve()


class TestBuildPattern:
    def test_joins_with_separator(self, tmp_path):
        assert build_pattern(tmp_path, "*.md") == f"{tmp_path}{os.sep}*.md"

    def test_strips_trailing_separator(self, tmp_path):
        assert build_pattern(f"{tmp_path}{os.sep}", "*.md") == f"{tmp_path}{os.sep}*.md"

    def test_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert build_pattern("~/notes", "*.md") == f"{tmp_path}{os.sep}notes{os.sep}*.md"


class TestFileScanner:
    def test_enumerate_skips_root_and_other_files(self, vault_path):
        scanner = FileScanner(vault_path)
        names = sorted(p.name for p in scanner.enumerate())
        assert names == [".hidden.md", "lang.python.md", "lang.rust.md"]

    def test_enumeration_is_restartable(self, vault_path):
        files = FileScanner(vault_path).enumerate()
        assert sorted(files) == sorted(files)
        assert len(list(files)) == 3

    def test_recursive_pattern_matches_every_folder(self, vault_path):
        scanner = FileScanner(vault_path, pattern="**/*.md")
        names = sorted(p.relative_to(vault_path).as_posix() for p in scanner.enumerate())
        assert names == [
            ".hidden.md",
            ".obsidian/config.md",
            "daily/2024-01-01.md",
            "lang.python.md",
            "lang.rust.md",
        ]

    def test_recursive_pattern_skips_excluded_folders(self, vault_path):
        scanner = FileScanner(
            vault_path, pattern="**/*.md", excluded=frozenset({".obsidian", "daily"})
        )
        names = sorted(p.name for p in scanner.enumerate())
        assert names == [".hidden.md", "lang.python.md", "lang.rust.md"]

    def test_skip_hidden(self, vault_path):
        scanner = FileScanner(
            vault_path, pattern="**/*.md", options=MatchOptions(include_hidden=False)
        )
        names = sorted(p.name for p in scanner.enumerate())
        assert names == ["2024-01-01.md", "lang.python.md", "lang.rust.md"]

    def test_case_sensitive_match(self, vault_path):
        (vault_path / "UPPER.MD").write_text("# Upper")
        sensitive = FileScanner(vault_path, options=MatchOptions(case_sensitive=True))
        insensitive = FileScanner(vault_path, options=MatchOptions(case_sensitive=False))

        assert "UPPER.MD" not in [p.name for p in sensitive.enumerate()]
        assert "UPPER.MD" in [p.name for p in insensitive.enumerate()]

    def test_root_detection(self, vault_path, tmp_path_factory):
        assert FileScanner(vault_path).has_root() is True
        empty = tmp_path_factory.mktemp("empty")
        assert FileScanner(empty).has_root() is False

    def test_no_matches_is_empty_not_error(self, tmp_path):
        assert list(FileScanner(tmp_path).enumerate()) == []

    @pytest.mark.parametrize("pattern", ["", "/abs/*.md"])
    def test_invalid_pattern_is_empty_vault(self, tmp_path, pattern):
        with pytest.raises(EmptyVaultError) as exc_info:
            FileScanner(tmp_path, pattern=pattern).enumerate()
        assert exc_info.value.path == str(tmp_path)
