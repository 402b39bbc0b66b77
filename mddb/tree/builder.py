"""Document tree for a vault, stored as a NetworkX graph."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

import networkx as nx

from ..errors import AstError, DataStoreError, DuplicateIdentifierError, VaultParseError
from ..parser.markdown import DocumentParser, scrape_legacy_id
from ..parser.scanner import FileScanner
from ..parser.types import DocumentRecord, FileInfo
from .ids import IdAllocator

log = logging.getLogger(__name__)


@dataclass
class TreeNode:
    """Read-only view of one node in the tree."""

    id: str
    record: DocumentRecord
    info: FileInfo | None
    parent: str | None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def path(self) -> Path | None:
        return self.info.path if self.info else None

    @property
    def title(self) -> str:
        """Front-matter title, falling back to the file name."""
        if self.record.metadata.title:
            return self.record.metadata.title
        return self.info.stem if self.info else ""


class DocumentTree:
    """Arena of document nodes keyed by identifier.

    Edges run parent -> child. The root is the only node without a parent,
    and children keep the order in which they were attached.
    """

    def __init__(self):
        self.graph = nx.DiGraph()
        self._root: str | None = None
        self._by_path: dict[Path, str] = {}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def root_id(self) -> str | None:
        return self._root

    @property
    def root(self) -> TreeNode | None:
        return self.get(self._root) if self._root is not None else None

    def ids(self) -> list[str]:
        return list(self.graph.nodes)

    def set_root(
        self, node_id: str, record: DocumentRecord, info: FileInfo | None = None
    ) -> None:
        """Install the root node of an empty tree."""
        if self._root is not None or len(self):
            raise AstError("Tree already has nodes; clear it before installing a root")
        if not node_id:
            raise AstError("Root identifier must not be empty")
        self._add(node_id, record, info)
        self._root = node_id

    def add_child(
        self,
        parent_id: str,
        node_id: str,
        record: DocumentRecord,
        info: FileInfo | None = None,
    ) -> None:
        """Attach a new node under ``parent_id``.

        Raises:
            DuplicateIdentifierError: If ``node_id`` is already in the tree.
            AstError: If the parent does not exist.
        """
        if parent_id not in self.graph:
            raise AstError(f"Parent node {parent_id!r} does not exist")
        if node_id in self.graph:
            raise DuplicateIdentifierError(node_id, info.path if info else None)
        self._add(node_id, record, info)
        self.graph.add_edge(parent_id, node_id)

    def _add(self, node_id: str, record: DocumentRecord, info: FileInfo | None) -> None:
        self.graph.add_node(node_id, record=record, info=info)
        if info is not None:
            self._by_path[info.path] = node_id

    def get(self, node_id: str) -> TreeNode | None:
        if node_id not in self.graph:
            return None
        data = self.graph.nodes[node_id]
        return TreeNode(
            id=node_id,
            record=data["record"],
            info=data["info"],
            parent=self.parent(node_id),
        )

    def parent(self, node_id: str) -> str | None:
        return next(iter(self.graph.predecessors(node_id)), None)

    def children(self, node_id: str) -> list[str]:
        """Child identifiers in attachment order."""
        return list(self.graph.successors(node_id))

    def find_by_path(self, path: str | Path) -> TreeNode | None:
        node_id = self._by_path.get(Path(path))
        return self.get(node_id) if node_id is not None else None

    def walk(self) -> Iterator[TreeNode]:
        """Yield nodes in pre-order starting from the root."""
        if self._root is None:
            return
        for node_id in nx.dfs_preorder_nodes(self.graph, self._root):
            yield self.get(node_id)

    def remove(self, node_id: str) -> int:
        """Remove a node together with all of its descendants.

        Returns:
            Number of nodes removed
        """
        if node_id not in self.graph:
            raise AstError(f"Node {node_id!r} does not exist")
        doomed = nx.descendants(self.graph, node_id) | {node_id}
        for removed in doomed:
            info = self.graph.nodes[removed]["info"]
            if info is not None:
                self._by_path.pop(info.path, None)
        self.graph.remove_nodes_from(doomed)
        if self._root in doomed:
            self._root = None
        return len(doomed)

    def clear(self) -> None:
        self.graph.clear()
        self._by_path.clear()
        self._root = None


@dataclass
class LoadFailure:
    """A file that was skipped during population."""

    path: Path
    error: DataStoreError

    def __str__(self) -> str:
        return f"{self.path.name}: {self.error}"


@dataclass
class LoadReport:
    """Outcome of one load cycle."""

    root_id: str
    id_source: str  # "frontmatter", "legacy" or "generated"
    synthetic_root: bool = False
    count: int = 0
    failures: list[LoadFailure] = field(default_factory=list)

    def __str__(self) -> str:
        kind = "synthetic" if self.synthetic_root else self.id_source
        return (
            f"Load Report:\n"
            f"  Root: {self.root_id} ({kind})\n"
            f"  Documents: {self.count}\n"
            f"  Skipped: {len(self.failures)}"
        )


class TreeBuilder:
    """Rebuilds a DocumentTree from the files of a vault."""

    def __init__(
        self,
        tree: DocumentTree,
        scanner: FileScanner,
        parser: DocumentParser,
        allocator: IdAllocator,
    ):
        self.tree = tree
        self.scanner = scanner
        self.parser = parser
        self.allocator = allocator

    def init_tree(self) -> LoadReport:
        """Discard any previous tree and install a fresh root.

        A parsed root file counts as one document; a synthetic root does not.

        Raises:
            AstError: If the old tree cannot be torn down or the root file
                cannot be parsed or installed.
        """
        if len(self.tree):
            log.info(f"Discarding existing tree of {len(self.tree)} nodes")
            self.tree.clear()
            if len(self.tree):
                raise AstError("Could not tear down the previous tree")

        if not self.scanner.has_root():
            root_id = self.allocator.generate()
            self.tree.set_root(root_id, DocumentRecord())
            log.info(
                f"No {self.scanner.root_filename}; installed synthetic root {root_id}"
            )
            return LoadReport(
                root_id=root_id, id_source="generated", synthetic_root=True
            )

        root_path = self.scanner.root_path
        try:
            parsed = self.parser.parse_file(root_path)
        except VaultParseError as e:
            raise AstError(f"Malformed root file {root_path}: {e.message}") from e

        legacy_id = scrape_legacy_id(parsed.content)
        if parsed.record.declared_id:
            root_id, source = parsed.record.declared_id, "frontmatter"
        elif legacy_id:
            root_id, source = legacy_id, "legacy"
        else:
            root_id, source = self.allocator.generate(), "generated"

        self.tree.set_root(root_id, parsed.record, parsed.info)
        log.info(f"Installed root {root_id} from {root_path} (id source: {source})")
        return LoadReport(root_id=root_id, id_source=source, count=1)

    def load(self) -> LoadReport:
        """Run the init phase, then attach every scanned file under the root.

        Per-file parse and insertion errors are recorded and skipped.

        Raises:
            AstError: If the init phase fails.
            EmptyVaultError: If the glob pattern cannot be evaluated.
        """
        report = self.init_tree()
        root_id = report.root_id

        log.info(f"Starting vault scan at {self.scanner.glob_pattern}")

        for path in self.scanner.enumerate():
            try:
                parsed = self.parser.parse_file(path)
                node_id = self.allocator.resolve(parsed.record.declared_id)
                self.tree.add_child(root_id, node_id, parsed.record, parsed.info)
            except (VaultParseError, AstError) as e:
                log.warning(f"Skipping {path}: {e}")
                report.failures.append(LoadFailure(path=path, error=e))
                continue
            log.debug(f"Attached {path.name} as {node_id}")
            report.count += 1

        log.info(
            f"Scan complete. {report.count} documents, {len(report.failures)} skipped"
        )
        return report
