"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for the duplicate scan: digest groups, report rows, run statistics
and the validated scan parameters.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os
from enum import Enum


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Hash function used to digest file content.
    """
    SHA256 = "sha256"
    SHA1 = "sha1"
    MD5 = "md5"
    BLAKE2B = "blake2b"
    XXH64 = "xxh64"
    XXH3_128 = "xxh3_128"

    @property
    def display_name(self) -> str:
        """Human-readable name for help output."""
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.SHA1: "SHA-1",
            HashAlgorithmName.MD5: "MD5",
            HashAlgorithmName.BLAKE2B: "BLAKE2b",
            HashAlgorithmName.XXH64: "xxHash64",
            HashAlgorithmName.XXH3_128: "XXH3-128",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            HashAlgorithmName.SHA256: "Cryptographic, 256-bit (default)",
            HashAlgorithmName.SHA1: "Cryptographic, 160-bit (legacy)",
            HashAlgorithmName.MD5: "128-bit (legacy, fast)",
            HashAlgorithmName.BLAKE2B: "Cryptographic, 512-bit, fast on 64-bit CPUs",
            HashAlgorithmName.XXH64: "Non-cryptographic, 64-bit (fastest)",
            HashAlgorithmName.XXH3_128: "Non-cryptographic, 128-bit",
        }
        return mapping.get(self, self.value)

    @property
    def is_cryptographic(self) -> bool:
        return self in (HashAlgorithmName.SHA256, HashAlgorithmName.SHA1, HashAlgorithmName.BLAKE2B)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass
class DigestGroup:
    """
    Every file seen so far with one particular digest.
    Paths are kept in the order the files were recorded.
    """
    digest: str
    size: int  # in bytes, per file
    paths: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        """How many files share this digest."""
        return len(self.paths)

    def add_path(self, path: str) -> None:
        self.paths.append(path)

    def is_collision(self) -> bool:
        """True if this group contains at least two files."""
        return self.count >= 2

    @property
    def reclaimable(self) -> int:
        """Space freed by keeping a single copy."""
        return self.size * max(0, self.count - 1)

    def __repr__(self):
        return f"<DigestGroup digest={self.digest[:12]}, size={self.size}, count={self.count}>"


@dataclass(frozen=True)
class CollisionGroup:
    """
    Read-only report row for a digest shared by two or more files.
    """
    digest: str
    size: int
    paths: tuple

    @property
    def count(self) -> int:
        return len(self.paths)

    @property
    def reclaimable(self) -> int:
        return self.size * (self.count - 1)

    def __repr__(self):
        return f"<CollisionGroup digest={self.digest[:12]}, size={self.size}, count={self.count}>"


@dataclass(frozen=True)
class ScanReport:
    """
    Final state of a scan, derived once the worker pool has drained.
    """
    files_processed: int
    groups: tuple = ()

    @property
    def has_duplicates(self) -> bool:
        return bool(self.groups)

    @property
    def collision_count(self) -> int:
        return len(self.groups)

    @property
    def total_reclaimable(self) -> int:
        return sum(group.reclaimable for group in self.groups)


class ScanStats:
    """
    Statistics collected while the scan runs.
    Written by the coordinator only; worker failures are merged in after the join barrier.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.directories_expanded: int = 0
        self.files_dispatched: int = 0
        self.files_skipped: int = 0
        self.records_rejected: int = 0
        self.stopped: bool = False

    def print_summary(self) -> str:
        lines = [
            "Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Directories expanded: {self.directories_expanded}",
            f"Files dispatched: {self.files_dispatched}",
            f"Entries skipped: {self.files_skipped}",
        ]
        if self.records_rejected:
            lines.append(f"Records rejected: {self.records_rejected}")
        if self.stopped:
            lines.append("Scan was stopped before completion")
        return "\n".join(lines)

    def __repr__(self):
        return (f"<ScanStats dirs={self.directories_expanded}, dispatched={self.files_dispatched}, "
                f"skipped={self.files_skipped}, rejected={self.records_rejected}>")


"""
DTO for scan parameters with built-in validation.
"""

DEFAULT_CHUNK_SIZE = 1024 * 1024


def normalize_dir(path: str) -> str:
    """Absolute, normalised form used for root and exclusion matching."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))


@dataclass
class ScanParams:
    """Parameters for a duplicate scan with validation."""
    root_dirs: List[str]
    excluded_dirs: List[str] = field(default_factory=list)
    workers: Optional[int] = None
    max_pending: Optional[int] = None
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA256
    chunk_size: int = DEFAULT_CHUNK_SIZE
    follow_symlinks: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dirs:
            raise ValueError("At least one root directory is required")

        if any(not root for root in self.root_dirs):
            raise ValueError("Root directory cannot be empty")

        if self.workers is not None and self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.max_pending is not None and self.max_pending < 1:
            raise ValueError("Pending queue bound must be at least 1")

        if self.chunk_size < 1:
            raise ValueError("Chunk size must be positive")

        # Keep first occurrence order, drop repeats
        roots = []
        for root in self.root_dirs:
            root = normalize_dir(root)
            if root not in roots:
                roots.append(root)
        self.root_dirs = roots
        self.excluded_dirs = [normalize_dir(d) for d in self.excluded_dirs if d]
