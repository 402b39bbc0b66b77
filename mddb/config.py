"""Configuration for opening a vault."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MatchOptions:
    """Options handed to the filesystem glob.

    ``case_sensitive=None`` keeps the platform default. Dot-prefixed files
    and folders match like any other; set ``include_hidden=False`` to skip
    them.
    """

    case_sensitive: bool | None = None
    include_hidden: bool = True


@dataclass(frozen=True)
class VaultConfig:
    """Constants controlling how a vault is scanned and indexed.

    ``excluded`` names folders to skip during a recursive scan, e.g.
    ``frozenset({".obsidian", ".trash"})``. Nothing is skipped by default.
    """

    pattern: str = "*.md"
    root_filename: str = "root.md"
    id_length: int = 23
    encoding: str = "utf-8"
    excluded: frozenset[str] = field(default_factory=frozenset)

    def validate(self) -> None:
        """Reject settings the loader cannot work with.

        The glob pattern is not checked here; one that cannot be evaluated
        surfaces as EmptyVaultError when files are enumerated.
        """
        if not self.root_filename or "/" in self.root_filename:
            raise ValueError(f"Invalid root filename: {self.root_filename!r}")
        if not 8 <= self.id_length <= 32:
            raise ValueError(
                f"id_length must be between 8 and 32, got {self.id_length}"
            )


DEFAULT_VAULT_CONFIG = VaultConfig()
DEFAULT_MATCH_OPTIONS = MatchOptions()
