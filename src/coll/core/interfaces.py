"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the scan engine.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-256, BLAKE2b, xxHash...).
- DigestComputer: Streams a binary file object through a hash algorithm.
- DigestRecorder: The single mutating operation of the shared digest table.
- FileScanner: Interface for the traversal coordinator that produces a report.
"""

from typing import Protocol, BinaryIO, Tuple, Optional, Callable
from coll.core.models import ScanReport, ScanStats


# ===== Interfaces =====

class HashState(Protocol):
    """Running hash object as returned by hashlib / xxhash constructors."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the scan logic.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh incremental hash object."""
        ...


class DigestComputer(Protocol):
    """Interface for digesting a whole byte stream."""
    def compute(self, stream: BinaryIO) -> Tuple[str, int]:
        """
        Reads the stream to the end.

        Returns:
            (lowercase hex digest, number of bytes read)
        """
        ...


class DigestRecorder(Protocol):
    """Interface for the shared table that collects digests from workers."""
    def record(self, path: str, digest: str, size: int) -> None: ...


class FileScanner(Protocol):
    """
    Interface for traversing root directories and producing the final report.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> Tuple[ScanReport, ScanStats]:
        """
        Scan every configured root and block until all work has completed.

        Args:
            stopped_flag: Function that returns True if traversal should stop early.
            progress_callback: Optional callback (files processed, collisions, current path).

        Returns:
            The report derived from the final table state and the run statistics.
        """
        ...
