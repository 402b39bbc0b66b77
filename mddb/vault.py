"""Vault connection: scan, parse and index a directory of markdown files."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from .config import (
    DEFAULT_MATCH_OPTIONS,
    DEFAULT_VAULT_CONFIG,
    MatchOptions,
    VaultConfig,
)
from .errors import EmptyVaultError, VaultFileExistsError
from .parser.markdown import DocumentParser
from .parser.scanner import FileScanner, VaultFiles, resolve_base
from .tree.builder import DocumentTree, LoadFailure, LoadReport, TreeBuilder, TreeNode
from .tree.ids import IdAllocator

log = logging.getLogger(__name__)


@dataclass
class VaultStats:
    """Statistics about a loaded vault."""

    documents: int = 0
    headings: int = 0
    checkboxes: int = 0
    open_tasks: int = 0
    skipped: int = 0
    unique_tags: set[str] = field(default_factory=set)

    def __str__(self) -> str:
        return (
            f"Vault Stats:\n"
            f"  Documents: {self.documents}\n"
            f"  Headings: {self.headings}\n"
            f"  Checkboxes: {self.checkboxes} ({self.open_tasks} open)\n"
            f"  Tags: {len(self.unique_tags)} unique\n"
            f"  Skipped: {self.skipped}"
        )


class Vault:
    """A directory of markdown files indexed into a DocumentTree.

    Use :meth:`connect` to open one; it runs the whole load synchronously.
    """

    def __init__(
        self,
        base: Path,
        name: str,
        config: VaultConfig = DEFAULT_VAULT_CONFIG,
        options: MatchOptions = DEFAULT_MATCH_OPTIONS,
    ):
        self.base = base
        self.name = name
        self.config = config
        self.options = options
        self.tree = DocumentTree()
        self.scanner = FileScanner(
            base,
            pattern=config.pattern,
            options=options,
            root_filename=config.root_filename,
            excluded=config.excluded,
        )
        self.builder = TreeBuilder(
            self.tree,
            self.scanner,
            DocumentParser(encoding=config.encoding),
            IdAllocator(self.tree, length=config.id_length),
        )
        self.report: LoadReport | None = None

    @classmethod
    def connect(
        cls,
        base: str | Path,
        pattern: str | None = None,
        name: str | None = None,
        options: MatchOptions | None = None,
        config: VaultConfig | None = None,
    ) -> "Vault":
        """Open a vault and load its documents.

        Args:
            base: Vault directory; ``~`` and ``$VARS`` are expanded
            pattern: Glob for candidate files (default ``*.md``)
            name: Display name, derived from the directory name if omitted
            options: Filesystem match options
            config: Remaining loader settings

        Raises:
            ValueError: If the root filename or id length is invalid.
            VaultReadError: If ``base`` is missing or unreadable.
            AstError: If the root node cannot be installed.
            EmptyVaultError: If the pattern cannot be evaluated or no
                document could be attached.
        """
        config = config or DEFAULT_VAULT_CONFIG
        if pattern is not None:
            config = replace(config, pattern=pattern)
        config.validate()

        path = resolve_base(base)
        vault = cls(path, name or path.name, config, options or DEFAULT_MATCH_OPTIONS)
        vault.reload()
        return vault

    def reload(self) -> LoadReport:
        """Rebuild the tree from disk, replacing the previous one."""
        self.report = None
        report = self.builder.load()
        self.report = report
        if report.count == 0:
            raise EmptyVaultError(self.base)
        log.info(f"Vault {self.name!r} loaded: {report.count} documents")
        return report

    @property
    def pattern(self) -> str:
        return self.config.pattern

    @property
    def glob_pattern(self) -> str:
        return self.scanner.glob_pattern

    @property
    def file_count(self) -> int:
        """Documents attached by the last load, the root file included."""
        return self.report.count if self.report else 0

    @property
    def failures(self) -> list[LoadFailure]:
        """Files skipped by the last load and why."""
        return list(self.report.failures) if self.report else []

    def get_files(self) -> VaultFiles:
        """Files matching the vault pattern, the root file excluded."""
        return self.scanner.enumerate()

    def get_tree(self) -> DocumentTree:
        return self.tree

    def get_root(self) -> TreeNode | None:
        return self.tree.root

    def get(self, node_id: str) -> TreeNode | None:
        return self.tree.get(node_id)

    def has_root(self) -> bool:
        return self.scanner.has_root()

    def rel_path(self, path: str | Path) -> Path | None:
        """Path relative to the vault base, or None if outside it."""
        try:
            return Path(path).expanduser().resolve().relative_to(self.base)
        except ValueError:
            return None

    def stats(self) -> VaultStats:
        stats = VaultStats(documents=self.file_count, skipped=len(self.failures))
        for node in self.tree.walk():
            stats.headings += len(node.record.headings)
            stats.checkboxes += len(node.record.checkboxes)
            stats.open_tasks += len(node.record.tasks(checked=False))
            stats.unique_tags.update(node.record.metadata.tags)
        return stats

    def add(self, rel_path: str, content: str | None = None) -> None:
        """Create a document in the vault.

        Not implemented yet; only the existing-file check is in place.
        """
        target = self.base / rel_path
        if target.exists():
            raise VaultFileExistsError(target)
        raise NotImplementedError("Vault.add is not implemented yet")

    def update(self, rel_path: str, content: str) -> None:
        raise NotImplementedError("Vault.update is not implemented yet")

    def remove(self, rel_path: str) -> None:
        raise NotImplementedError("Vault.remove is not implemented yet")

    def __repr__(self) -> str:
        return (
            f"Vault(name={self.name!r}, base={str(self.base)!r}, "
            f"pattern={self.pattern!r})"
        )
