"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pool.py
Bounded pool of hashing workers.

The coordinator hands over file paths with `dispatch()` (fire-and-forget) and
waits for all of them with `join()`. Each unit of work opens one file, digests
it, records the digest in the shared table and closes the file. A failing unit
is logged and never affects the table or any other unit.

Backpressure: at most `max_pending` units may be dispatched and unfinished at
once; `dispatch()` blocks while that bound is reached.
"""

import os
import threading
import logging
from concurrent.futures import ThreadPoolExecutor, Future
from typing import Optional, Callable

from coll.core.interfaces import DigestComputer
from coll.core.hasher import DigestComputerImpl
from coll.core.table import DigestTable

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def default_worker_count() -> int:
    """Same default as ThreadPoolExecutor: I/O bound work."""
    return min(32, (os.cpu_count() or 1) + 4)


class HashWorkerPool:
    """
    Fixed number of worker threads pulling file paths and recording their digests.

    Attributes:
        table: Shared digest table receiving the results
        computer: Digest computer shared by all workers (stateless)
        workers: Number of worker threads
        max_pending: Bound on dispatched but unfinished units
    """

    def __init__(
        self,
        table: DigestTable,
        computer: Optional[DigestComputer] = None,
        workers: Optional[int] = None,
        max_pending: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.table = table
        self.computer = computer or DigestComputerImpl()
        self.workers = workers or default_worker_count()
        self.max_pending = max_pending or self.workers * 4
        self.progress_callback = progress_callback

        self._executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="coll-hash")
        self._slots = threading.BoundedSemaphore(self.max_pending)
        self._state_lock = threading.Lock()
        self._dispatched = 0
        self._failures = 0
        self._closed = False

    def __enter__(self) -> "HashWorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.join()

    # =============================
    # Coordinator side
    # =============================

    def dispatch(self, path: str) -> None:
        """
        Queues one file for hashing. Blocks only while `max_pending` units are in flight.
        """
        if self._closed:
            raise RuntimeError("Cannot dispatch to a pool that has been joined")

        self._slots.acquire()
        try:
            future = self._executor.submit(self._process_file, path)
        except Exception:
            self._slots.release()
            raise
        future.add_done_callback(self._release_slot)

        with self._state_lock:
            self._dispatched += 1

    def join(self) -> None:
        """Join barrier: returns once every dispatched unit has finished."""
        self._closed = True
        self._executor.shutdown(wait=True)
        logger.debug(f"Worker pool drained: {self.dispatched} dispatched, {self.failures} failed")

    @property
    def dispatched(self) -> int:
        with self._state_lock:
            return self._dispatched

    @property
    def failures(self) -> int:
        with self._state_lock:
            return self._failures

    # =============================
    # Worker side
    # =============================

    def _release_slot(self, _future: Future) -> None:
        self._slots.release()

    def _add_failure(self) -> None:
        with self._state_lock:
            self._failures += 1

    def _process_file(self, path: str) -> None:
        """One unit of work. Never raises: every failure stays inside this unit."""
        try:
            self._hash_and_record(path)
        except Exception:
            self._add_failure()
            logger.exception(f"Unexpected error while processing '{path}'")

    def _hash_and_record(self, path: str) -> None:
        try:
            f = open(path, 'rb')
        except OSError as e:
            self._add_failure()
            logger.warning(f"File '{path}' failed to open: {e.strerror or e}")
            return

        try:
            self._notify_progress(path)
            try:
                digest, size = self.computer.compute(f)
            except OSError as e:
                self._add_failure()
                logger.warning(f"File '{path}' failed to read: {e.strerror or e}")
                return
            self.table.record(path, digest, size)
        finally:
            try:
                f.close()
            except OSError as e:
                # The digest, if any, is already recorded and stays valid
                logger.warning(f"File '{path}' failed to close: {e.strerror or e}")

    def _notify_progress(self, path: str) -> None:
        if not self.progress_callback:
            return
        processed, collisions = self.table.progress()
        try:
            self.progress_callback(processed, collisions, path)
        except Exception as e:
            logger.error(f"Error in progress callback: {e}")
