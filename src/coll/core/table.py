"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/table.py
Shared digest table filled concurrently by the hashing workers.

All mutation goes through `record()`, which runs the whole
lookup / insert-or-append / collision bookkeeping / counter update sequence
under a single lock. Readers either take a consistent snapshot under the same
lock (`progress()`) or read the full state after the pool has been joined
(`groups()`, `build_report()`).
"""

import threading
import logging
from typing import Dict, List, Tuple

from coll.core.interfaces import DigestRecorder
from coll.core.models import DigestGroup, CollisionGroup, ScanReport

logger = logging.getLogger(__name__)


class DigestTable(DigestRecorder):
    """
    Maps digest -> DigestGroup and keeps the set of colliding digests in step
    with every insert.

    Invariants after each completed record:
        files_processed == sum of group counts
        collisions == {d : groups[d].count > 1}
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._groups: Dict[str, DigestGroup] = {}
        # dict used as an insertion-ordered set
        self._collisions: Dict[str, None] = {}
        self._files_processed = 0
        self._rejected = 0

    def record(self, path: str, digest: str, size: int) -> None:
        """
        Adds one hashed file. Degenerate input is logged and dropped.
        """
        if not path or not digest or size is None or size < 0:
            logger.error(f"Internal error: rejected record (path={path!r}, digest={digest!r}, size={size!r})")
            with self._lock:
                self._rejected += 1
            return

        with self._lock:
            group = self._groups.get(digest)
            if group is None:
                self._groups[digest] = DigestGroup(digest=digest, size=size, paths=[path])
            elif group.size != size:
                self._rejected += 1
                logger.error(
                    f"Internal error: digest {digest} recorded with size {size} "
                    f"but group holds size {group.size}; dropping {path}"
                )
                return
            else:
                group.add_path(path)
                if group.count == 2:
                    self._collisions[digest] = None
            self._files_processed += 1

    # =============================
    # Readers
    # =============================

    def progress(self) -> Tuple[int, int]:
        """Consistent (files processed, collision groups) pair."""
        with self._lock:
            return self._files_processed, len(self._collisions)

    @property
    def files_processed(self) -> int:
        with self._lock:
            return self._files_processed

    @property
    def collision_count(self) -> int:
        with self._lock:
            return len(self._collisions)

    @property
    def rejected(self) -> int:
        with self._lock:
            return self._rejected

    def groups(self) -> List[DigestGroup]:
        """Copies of every group, in first-seen order. Meant for use after the join barrier."""
        with self._lock:
            return [DigestGroup(digest=g.digest, size=g.size, paths=list(g.paths))
                    for g in self._groups.values()]

    def collisions(self) -> List[str]:
        """Colliding digests in the order they first collided."""
        with self._lock:
            return list(self._collisions)

    def build_report(self) -> ScanReport:
        """
        Derives the report from the current state.
        Called once the pool has drained, so nothing changes underneath it.
        """
        with self._lock:
            rows = tuple(
                CollisionGroup(
                    digest=digest,
                    size=self._groups[digest].size,
                    paths=tuple(self._groups[digest].paths),
                )
                for digest in self._collisions
            )
            return ScanReport(files_processed=self._files_processed, groups=rows)

    def __len__(self) -> int:
        with self._lock:
            return len(self._groups)

    def __repr__(self):
        processed, collisions = self.progress()
        return f"<DigestTable files={processed}, collisions={collisions}>"
