"""Identifier allocation for tree nodes."""

from typing import Callable, Container
from uuid import uuid4

from ..config import DEFAULT_VAULT_CONFIG
from ..errors import AstError


def random_token(length: int) -> str:
    return uuid4().hex[:length]


class IdAllocator:
    """Hands out identifiers that are not yet used in a tree.

    Args:
        taken: Anything supporting ``in`` for identifiers already assigned
            (normally the tree itself).
        length: Number of characters in generated identifiers.
        token_factory: Source of candidate identifiers.
    """

    def __init__(
        self,
        taken: Container[str],
        length: int = DEFAULT_VAULT_CONFIG.id_length,
        token_factory: Callable[[int], str] = random_token,
        max_attempts: int = 100,
    ):
        self.taken = taken
        self.length = length
        self.token_factory = token_factory
        self.max_attempts = max_attempts

    def generate(self) -> str:
        """Generate an identifier not present in ``taken``.

        Raises:
            AstError: If no free identifier turns up within ``max_attempts``.
        """
        for _ in range(self.max_attempts):
            candidate = self.token_factory(self.length)
            if candidate and candidate.isprintable() and candidate not in self.taken:
                return candidate
        raise AstError(
            f"Could not generate a unique identifier after {self.max_attempts} attempts"
        )

    def resolve(self, declared: str | None) -> str:
        """Return a declared identifier verbatim, or a fresh one if empty."""
        if declared:
            return declared
        return self.generate()
