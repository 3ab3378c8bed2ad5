"""
coll — finds duplicate files in directories by content.

Core features:
- Concurrent hashing: one traversal thread feeds a bounded pool of hashing workers
- Cryptographic digests by default (SHA-256), xxHash available for speed
- Exact-path directory exclusions, symlink-cycle safe traversal
- CLI interface with a live progress line and a reclaimable-space report
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("coll")
except Exception:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from coll.commands import ScanCommand
from coll.core import (
    ScanParams, ScanReport, ScanStats, CollisionGroup, DigestGroup, HashAlgorithmName)
from coll.utils.convert_utils import ConvertUtils

__all__ = [
    "ScanCommand",
    "ScanParams",
    "ScanReport",
    "ScanStats",
    "CollisionGroup",
    "DigestGroup",
    "HashAlgorithmName",
    "ConvertUtils",
    "__version__",
]
