"""Deterministic pattern identity.

A pattern key is ``pattern:{memory_type}:{category}:{digest}`` where the digest
is the SHA-256 of the content reduced modulo a fixed range. The range is
bounded, so different contents can share a digest; the store resolves that by
probing :func:`candidate_keys` in order.
"""

import hashlib
from collections.abc import Iterator

from brain_memory.domain.models.base import Category, MemoryType

KEY_PREFIX = "pattern"


def content_digest(content: str, modulus: int = 100_000_000) -> int:
    """Stable non-negative digest of ``content`` in ``[0, modulus)``."""
    digest = hashlib.sha256(content.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") % modulus


def pattern_key(memory_type: MemoryType, category: Category, digest: int, disambiguator: int = 0) -> str:
    """Build the store key for a pattern."""
    key = f"{KEY_PREFIX}:{memory_type.value}:{category.value}:{digest}"
    if disambiguator:
        key = f"{key}-{disambiguator}"
    return key


def candidate_keys(
    memory_type: MemoryType,
    category: Category,
    content: str,
    modulus: int = 100_000_000,
    max_disambiguation: int = 16,
) -> Iterator[str]:
    """Yield the base key followed by widened keys, in probe order."""
    digest = content_digest(content, modulus)
    for disambiguator in range(max_disambiguation + 1):
        yield pattern_key(memory_type, category, digest, disambiguator)
