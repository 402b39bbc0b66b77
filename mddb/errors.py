"""Error types raised while opening and loading a vault."""

from pathlib import Path


class DataStoreError(Exception):
    """Base class for every error the vault pipeline raises."""


class VaultReadError(DataStoreError):
    """Raised when the vault base path is missing or unreadable."""

    def __init__(self, path: str | Path, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"Cannot read vault at {self.path}: {message}")


class EmptyVaultError(DataStoreError):
    """Raised when the glob fails or no document could be attached."""

    def __init__(self, path: str | Path):
        self.path = str(path)
        super().__init__(f"No parsable documents found in vault {self.path}")


class VaultParseError(DataStoreError):
    """Raised when one file cannot be read, tokenized or decoded."""

    def __init__(self, file: str | Path, message: str):
        self.file = str(file)
        self.message = message
        super().__init__(f"Error parsing file {self.file}: {message}")


class AstError(DataStoreError):
    """Raised when the document tree cannot be initialized or mutated."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DuplicateIdentifierError(AstError):
    """Raised when a declared identifier is already present in the tree."""

    def __init__(self, identifier: str, file: str | Path | None = None):
        self.identifier = identifier
        self.file = str(file) if file is not None else None
        where = f" (declared in {self.file})" if self.file else ""
        super().__init__(f"Duplicate identifier {identifier!r}{where}")


class VaultFileExistsError(DataStoreError, FileExistsError):
    """Raised when creating a vault file that already exists."""

    def __init__(self, file: str | Path):
        self.file = str(file)
        super().__init__(f"File already exists: {self.file}")
