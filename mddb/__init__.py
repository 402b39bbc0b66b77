"""Index a directory of markdown files into an in-memory document tree."""

from .config import DEFAULT_VAULT_CONFIG, MatchOptions, VaultConfig
from .errors import (
    AstError,
    DataStoreError,
    DuplicateIdentifierError,
    EmptyVaultError,
    VaultFileExistsError,
    VaultParseError,
    VaultReadError,
)
from .vault import Vault

__all__ = [
    "Vault",
    "VaultConfig",
    "MatchOptions",
    "DEFAULT_VAULT_CONFIG",
    "DataStoreError",
    "VaultReadError",
    "EmptyVaultError",
    "VaultParseError",
    "AstError",
    "DuplicateIdentifierError",
    "VaultFileExistsError",
]
