"""Tests for IdAllocator."""

import pytest

from mddb.errors import AstError
from mddb.tree.ids import IdAllocator, random_token


def test_random_token_length():
    token = random_token(23)
    assert len(token) == 23
    assert token.isalnum()


def test_generate_is_unique_against_taken():
    taken = {"dup"}
    tokens = iter(["dup", "dup", "fresh"])
    allocator = IdAllocator(taken, token_factory=lambda length: next(tokens))

    assert allocator.generate() == "fresh"


def test_generate_gives_up_after_max_attempts():
    allocator = IdAllocator({"same"}, token_factory=lambda length: "same", max_attempts=3)
    with pytest.raises(AstError):
        allocator.generate()


def test_generate_rejects_unprintable_candidates():
    tokens = iter(["bad\n", "good"])
    allocator = IdAllocator(set(), token_factory=lambda length: next(tokens))
    assert allocator.generate() == "good"


def test_generate_uses_configured_length():
    allocator = IdAllocator(set(), length=12)
    assert len(allocator.generate()) == 12


def test_resolve_keeps_declared_id():
    allocator = IdAllocator({"declared"})
    # Declared identifiers are returned verbatim, even if already taken.
    assert allocator.resolve("declared") == "declared"


@pytest.mark.parametrize("declared", [None, ""])
def test_resolve_generates_when_missing(declared):
    allocator = IdAllocator(set(), token_factory=lambda length: "generated")
    assert allocator.resolve(declared) == "generated"


def test_generated_ids_differ_between_calls():
    taken: set[str] = set()
    allocator = IdAllocator(taken)
    for _ in range(50):
        taken.add(allocator.generate())
    assert len(taken) == 50
