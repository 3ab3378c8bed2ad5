"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content digests with pluggable hash algorithms.

DigestComputerImpl streams a file object through the configured algorithm in
fixed-size chunks, so memory use does not depend on file size.
"""

import hashlib
from typing import BinaryIO, Tuple

import xxhash

from coll.core.interfaces import HashAlgorithm, HashState
from coll.core.models import HashAlgorithmName, DEFAULT_CHUNK_SIZE


# Use the same way to implement and use any other hashing algorithm
class HashlibAlgorithmImpl(HashAlgorithm):
    def __init__(self, name: str = "sha256"):
        # Fail early on names hashlib does not know
        hashlib.new(name)
        self.name = name

    def new(self) -> HashState:
        return hashlib.new(self.name)


class XXHashAlgorithmImpl(HashAlgorithm):
    def __init__(self, name: str = "xxh64"):
        self._factory = getattr(xxhash, name)
        self.name = name

    def new(self) -> HashState:
        return self._factory()


def algorithm_for(name: HashAlgorithmName) -> HashAlgorithm:
    """Maps an algorithm choice to its implementation."""
    if name in (HashAlgorithmName.XXH64, HashAlgorithmName.XXH3_128):
        return XXHashAlgorithmImpl(name.value)
    return HashlibAlgorithmImpl(name.value)


class DigestComputerImpl:
    """
    A digest computer that supports any algorithm via the HashAlgorithm interface.
    Stateless between calls: safe to share across worker threads.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or HashlibAlgorithmImpl("sha256")
        self.chunk_size = chunk_size

    def compute(self, stream: BinaryIO) -> Tuple[str, int]:
        """Digests the stream from its current position to EOF."""
        state = self.algorithm.new()
        total = 0
        for chunk in iter(lambda: stream.read(self.chunk_size), b''):
            state.update(chunk)
            total += len(chunk)
        return state.hexdigest(), total

    def hash_file(self, path: str) -> Tuple[str, int]:
        """Opens, digests and closes a file. OSError propagates to the caller."""
        with open(path, 'rb') as f:
            return self.compute(f)
