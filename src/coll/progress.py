"""
Console progress line for a running scan.

ProgressReporter owns the transient status line: it is the only writer of that
line and keeps the previous line length so a shorter line fully overwrites a
longer one. Workers call it concurrently; updates are serialised and throttled.

ProgressAwareHandler is a logging handler for the same stream that wipes the
status line before writing a record, so warnings never land in the middle of it.
"""
import os
import sys
import time
import logging
import threading
from typing import Optional, TextIO


class ProgressReporter:
    """Renders `processed: N  duplicates: M   <file name>` on a carriage-returned line."""

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True, min_interval: float = 0.05):
        self.stream = stream or sys.stderr
        self.enabled = enabled
        self.min_interval = min_interval
        self.lock = threading.RLock()
        self._prev_len = 0
        self._last_update: Optional[float] = None

    def __call__(self, processed: int, collisions: int, path: str) -> None:
        self.update(processed, collisions, path)

    def update(self, processed: int, collisions: int, path: str) -> None:
        if not self.enabled:
            return

        with self.lock:
            now = time.monotonic()
            if self._last_update is not None and now - self._last_update < self.min_interval:
                return
            self._last_update = now

            line = f"processed: {processed}  duplicates: {collisions}   {os.path.basename(path)}"
            padding = max(0, self._prev_len - len(line))
            self.stream.write(line + " " * padding + "\r")
            self.stream.flush()
            self._prev_len = len(line)

    def clear(self) -> None:
        """Wipes the status line and returns the cursor to column 0."""
        with self.lock:
            if not self._prev_len:
                return
            self.stream.write("\r" + " " * self._prev_len + "\r")
            self.stream.flush()
            self._prev_len = 0

    @property
    def line_length(self) -> int:
        with self.lock:
            return self._prev_len


class ProgressAwareHandler(logging.StreamHandler):
    """Stream handler that clears the progress line before each record."""

    def __init__(self, progress: ProgressReporter, stream: Optional[TextIO] = None):
        super().__init__(stream or progress.stream)
        self.progress = progress

    def emit(self, record: logging.LogRecord) -> None:
        with self.progress.lock:
            self.progress.clear()
            super().emit(record)
