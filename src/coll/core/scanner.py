"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Traversal frontier: the coordinating loop of a duplicate scan.
Features:
- FIFO frontier seeded with the root directories, owned by the calling thread only
- Classifies each entry with lstat: regular files go to the worker pool,
  directories are expanded one level at a time
- Exclusions are exact path matches against every entry met during expansion
- Symbolic links to files are never hashed; symbolic links to directories are
  skipped unless `follow_symlinks` is set, and every directory is expanded at most
  once (by real path) so link cycles and overlapping roots terminate
- Returns only after the worker pool has drained
"""

import os
import stat
import time
import logging
from collections import deque
from typing import Deque, List, Optional, Callable, Set, Tuple

logger = logging.getLogger(__name__)

# Local imports
from coll.core.interfaces import FileScanner, DigestComputer
from coll.core.models import ScanReport, ScanStats, normalize_dir
from coll.core.pool import HashWorkerPool
from coll.core.table import DigestTable


class FrontierScannerImpl(FileScanner):
    """
    Walks the root directories breadth-first and feeds regular files to a HashWorkerPool.

    Attributes:
        root_dirs: Directories to scan, in order
        excluded_dirs: Directories (exact paths) never entered or hashed
        workers: Number of hashing threads (None = pool default)
        max_pending: Bound on in-flight hashing units (None = pool default)
        computer: Digest computer shared by the workers
        follow_symlinks: Expand symbolic links that point at directories
    """

    def __init__(
        self,
        root_dirs: List[str],
        excluded_dirs: Optional[List[str]] = None,
        workers: Optional[int] = None,
        max_pending: Optional[int] = None,
        computer: Optional[DigestComputer] = None,
        follow_symlinks: bool = False
    ):
        self.root_dirs = [normalize_dir(d) for d in root_dirs]
        self.excluded_dirs = {normalize_dir(d) for d in excluded_dirs} if excluded_dirs else set()
        self.workers = workers
        self.max_pending = max_pending
        self.computer = computer
        self.follow_symlinks = follow_symlinks
        self.table: Optional[DigestTable] = None  # table of the last scan

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[int, int, str], None]] = None) -> Tuple[ScanReport, ScanStats]:
        """
        Drains the frontier, waits for every dispatched file and returns the final report.
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Root directories: {self.root_dirs}")
        logger.debug(f"Excluded directories: {sorted(self.excluded_dirs)}")

        for root in self.root_dirs:
            if not os.path.exists(root):
                error_msg = f"Directory does not exist: {root}"
                logger.error(error_msg)
                raise RuntimeError(error_msg)
            if not os.path.isdir(root):
                error_msg = f"Not a directory: {root}"
                logger.error(error_msg)
                raise RuntimeError(error_msg)

        stats = ScanStats()
        table = self.table = DigestTable()
        start_time = time.time()

        frontier: Deque[str] = deque(r for r in self.root_dirs if r not in self.excluded_dirs)
        visited: Set[str] = set()

        pool = HashWorkerPool(
            table,
            computer=self.computer,
            workers=self.workers,
            max_pending=self.max_pending,
            progress_callback=progress_callback
        )
        try:
            while frontier:
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted: no further entries will be dispatched")
                    stats.stopped = True
                    break
                entry = frontier.popleft()
                self._classify(entry, frontier, visited, pool, stats)
        finally:
            # Join barrier: nothing is reported before in-flight work completes
            pool.join()

        stats.files_dispatched = pool.dispatched
        stats.files_skipped += pool.failures
        stats.records_rejected = table.rejected
        stats.total_time = time.time() - start_time

        report = table.build_report()
        logger.debug(f"Total scan time: {stats.total_time:.2f} seconds")
        logger.debug(f"Scan completed. {report.files_processed} files hashed, "
                     f"{report.collision_count} duplicate groups.")
        return report, stats

    def _classify(self, entry: str, frontier: Deque[str], visited: Set[str],
                  pool: HashWorkerPool, stats: ScanStats) -> None:
        """Decides what to do with one frontier entry."""
        is_root = entry in self.root_dirs
        try:
            # Roots were named explicitly, so a symlinked root is followed
            st = os.stat(entry) if is_root else os.lstat(entry)
        except OSError as e:
            stats.files_skipped += 1
            logger.warning(f"Entry '{entry}' is inaccessible: {e.strerror or e}")
            return

        mode = st.st_mode
        if stat.S_ISREG(mode):
            pool.dispatch(entry)
            return

        if stat.S_ISDIR(mode):
            self._expand(entry, frontier, visited, stats)
            return

        if stat.S_ISLNK(mode):
            try:
                target_mode = os.stat(entry).st_mode
            except OSError as e:
                stats.files_skipped += 1
                logger.warning(f"Broken symbolic link '{entry}': {e.strerror or e}")
                return
            if stat.S_ISDIR(target_mode) and self.follow_symlinks:
                self._expand(entry, frontier, visited, stats)
                return
            logger.debug(f"Skipping symbolic link: {entry}")
            return

        stats.files_skipped += 1
        logger.warning(f"Entry '{entry}' is neither a regular file nor a directory")

    def _expand(self, directory: str, frontier: Deque[str], visited: Set[str], stats: ScanStats) -> None:
        """Pushes the immediate children of `directory`, minus exclusions."""
        real_path = os.path.realpath(directory)
        if real_path in visited:
            logger.debug(f"Skipping already visited directory: {directory} -> {real_path}")
            return
        visited.add(real_path)

        try:
            with os.scandir(directory) as it:
                children = sorted(child.path for child in it)
        except OSError as e:
            stats.files_skipped += 1
            logger.warning(f"Directory '{directory}' failed to open: {e.strerror or e}")
            return

        stats.directories_expanded += 1
        for child in children:
            if child in self.excluded_dirs:
                logger.debug(f"Skipping excluded directory: {child}")
                continue
            frontier.append(child)
