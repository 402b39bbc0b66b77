"""Vault base path resolution and file enumeration."""

import logging
import os
from pathlib import Path
from typing import Iterator

from ..config import DEFAULT_MATCH_OPTIONS, DEFAULT_VAULT_CONFIG, MatchOptions
from ..errors import EmptyVaultError, VaultReadError

log = logging.getLogger(__name__)


def expand_path(raw_path: str | Path) -> str:
    """Expand ``~`` and environment references in a path."""
    return os.path.expandvars(os.path.expanduser(str(raw_path)))


def resolve_base(raw_path: str | Path) -> Path:
    """Resolve the vault base directory to an absolute path.

    Raises:
        VaultReadError: If the path does not exist, is not a directory or
            cannot be accessed.
    """
    path = Path(expand_path(raw_path))
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError) as e:
        raise VaultReadError(path, "path does not exist") from e
    except OSError as e:
        raise VaultReadError(path, f"path cannot be accessed: {e.strerror or e}") from e

    if not path.is_dir():
        raise VaultReadError(path, "path is not a directory")
    if not os.access(path, os.R_OK | os.X_OK):
        raise VaultReadError(path, "path cannot be accessed: permission denied")
    return path.resolve()


def build_pattern(base: str | Path, pattern: str = DEFAULT_VAULT_CONFIG.pattern) -> str:
    """Join the expanded base path and the glob pattern into one string."""
    return expand_path(base).rstrip(os.sep) + os.sep + pattern


class VaultFiles:
    """Restartable view over the files matching a vault's glob.

    Each iteration re-evaluates the glob, so the order follows the
    filesystem and is not guaranteed to be stable between runs.
    """

    def __init__(self, scanner: "FileScanner"):
        self._scanner = scanner

    def __iter__(self) -> Iterator[Path]:
        return self._scanner.iter_files()

    def __repr__(self) -> str:
        return f"VaultFiles({self._scanner.glob_pattern!r})"


class FileScanner:
    """Finds candidate documents inside a vault directory."""

    def __init__(
        self,
        base: Path,
        pattern: str = DEFAULT_VAULT_CONFIG.pattern,
        options: MatchOptions = DEFAULT_MATCH_OPTIONS,
        root_filename: str = DEFAULT_VAULT_CONFIG.root_filename,
        excluded: frozenset[str] = DEFAULT_VAULT_CONFIG.excluded,
    ):
        self.base = Path(base)
        self.pattern = pattern
        self.options = options
        self.root_filename = root_filename
        self.excluded = excluded

    @property
    def glob_pattern(self) -> str:
        return build_pattern(self.base, self.pattern)

    @property
    def root_path(self) -> Path:
        return self.base / self.root_filename

    def has_root(self) -> bool:
        """Whether the vault has a reserved root file."""
        return self.root_path.is_file()

    def enumerate(self) -> VaultFiles:
        """Return the candidate files, excluding the root file.

        Raises:
            EmptyVaultError: If the glob pattern cannot be evaluated.
        """
        try:
            # Pattern errors only surface once the glob starts producing.
            next(self._glob(), None)
        except (ValueError, NotImplementedError) as e:
            log.warning(f"Invalid glob pattern {self.glob_pattern!r}: {e}")
            raise EmptyVaultError(self.base) from e
        return VaultFiles(self)

    def iter_files(self) -> Iterator[Path]:
        """Yield every matching file except the root and any opted-out paths."""
        for path in self._glob():
            if path.name == self.root_filename:
                continue
            if not path.is_file():
                continue
            parts = path.relative_to(self.base).parts
            if any(part in self.excluded for part in parts[:-1]):
                continue
            if not self.options.include_hidden and any(
                part.startswith(".") for part in parts
            ):
                continue
            yield path

    def _glob(self) -> Iterator[Path]:
        return self.base.glob(self.pattern, case_sensitive=self.options.case_sensitive)
