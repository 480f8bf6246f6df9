"""Commit identifier generation."""

from __future__ import annotations

import hashlib

from ..config.types import DEFAULT_HASH_ALGORITHM, DEFAULT_ID_LENGTH


def generate(
    content: bytes,
    length: int = DEFAULT_ID_LENGTH,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
) -> str:
    """Derive a short lowercase hex identifier from content.

    The digest algorithm is named explicitly so ids are stable across
    processes and platforms. Truncation means collisions are possible.
    """
    return hashlib.new(algorithm, content).hexdigest()[:length]


class IdentifierGenerator:
    """Identifier generator bound to a configured algorithm and width."""

    def __init__(self, length: int = DEFAULT_ID_LENGTH, algorithm: str = DEFAULT_HASH_ALGORITHM):
        self.length = length
        self.algorithm = algorithm

    def generate(self, content: bytes) -> str:
        return generate(content, length=self.length, algorithm=self.algorithm)
