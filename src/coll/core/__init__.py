"""
Core scan engine — traversal frontier, hashing worker pool, digest table and models.

This package contains the concurrent foundation of coll:
- FrontierScannerImpl: breadth-first traversal run by a single coordinating thread
- HashWorkerPool: bounded pool of threads that open, digest and record files
- DigestComputerImpl + hash algorithms: chunked SHA-256 (default), BLAKE2b, xxHash...
- DigestTable: lock-guarded digest -> group table with live collision tracking
- Models: DigestGroup, CollisionGroup, ScanReport, ScanStats, ScanParams

All components are pure Python with no terminal dependencies — suitable for CLI and library usage.
"""

from .scanner import FrontierScannerImpl
from .pool import HashWorkerPool
from .hasher import DigestComputerImpl, HashlibAlgorithmImpl, XXHashAlgorithmImpl, algorithm_for
from .table import DigestTable
from .models import (
    DigestGroup, CollisionGroup, ScanReport, ScanStats, ScanParams, HashAlgorithmName)

__all__ = [
    "FrontierScannerImpl",
    "HashWorkerPool",
    "DigestComputerImpl",
    "HashlibAlgorithmImpl",
    "XXHashAlgorithmImpl",
    "algorithm_for",
    "DigestTable",
    "DigestGroup",
    "CollisionGroup",
    "ScanReport",
    "ScanStats",
    "ScanParams",
    "HashAlgorithmName",
]
