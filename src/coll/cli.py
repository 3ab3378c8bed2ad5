#!/usr/bin/env python3
"""
coll CLI — Command line interface for duplicate file detection.
Validates the root and exclusion directories, runs the concurrent scan engine
with a live progress line, and prints every group of identical files together
with the space that removing the extra copies would free. Files are never modified.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import signal
import threading
import time
from pathlib import Path
from typing import Optional, NoReturn
import logging

from coll import __version__
from coll.core.models import ScanParams, ScanReport, ScanStats, HashAlgorithmName
from coll.commands import ScanCommand
from coll.progress import ProgressReporter, ProgressAwareHandler
from coll.utils.convert_utils import ConvertUtils
from coll.aliases import ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, EPILOG_TEXT

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.progress: Optional[ProgressReporter] = None
        self._log_handler: Optional[logging.Handler] = None
        self._stop_event = threading.Event()
        self._previous_sigterm = None
        self._previous_level = logging.WARNING

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="coll",
            description="coll — finds duplicate files in directories",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "--input", "-i",
            required=True,
            nargs="+",
            type=str,
            metavar='DIR',
            dest="input_dirs",
            help="Directories (space separated) to scan for duplicates"
        )

        # Filtering options
        parser.add_argument(
            "--excluded-dirs", "-e", "-n",
            nargs="+",
            default=[],
            type=str,
            metavar='DIR',
            dest="excluded_dirs",
            help="Directories (space separated) left out of the scan (exact path match)"
        )
        parser.add_argument(
            "--follow-symlinks",
            action="store_true",
            help="Descend into symbolic links to directories (each directory is still scanned once)"
        )

        # Engine options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-j",
            type=int,
            default=None,
            metavar='N',
            help="Number of hashing threads. Default: min(32, CPUs + 4)"
        )
        parser.add_argument(
            "--max-pending",
            type=int,
            default=None,
            metavar='N',
            help="Maximum number of files queued for hashing at once. Default: 4 x workers"
        )
        parser.add_argument(
            "--chunk-size",
            type=str,
            default="1M",
            metavar='SIZE',
            help="Read buffer per file (e.g., 64K, 1M). Default: 1M"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress the progress line and banner"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging and scan statistics"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before any traversal starts."""
        for root in args.input_dirs:
            root_path = Path(root).expanduser()
            if not root_path.exists():
                self.error_exit(f"Directory '{root}' does not exist")
            if not root_path.is_dir():
                self.error_exit(f"Specified path '{root}' is not a directory")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).expanduser()
            if not excl_path.exists():
                self.error_exit(f"Excluded directory '{excl_dir}' does not exist")
            if not excl_path.is_dir():
                self.error_exit(f"Excluded path '{excl_dir}' is not a directory")

        if args.workers is not None and args.workers < 1:
            self.error_exit("Worker count must be at least 1")

        if args.max_pending is not None and args.max_pending < 1:
            self.error_exit("--max-pending must be at least 1")

        try:
            if ConvertUtils.human_to_bytes(args.chunk_size) < 1:
                self.error_exit("Chunk size must be positive")
        except ValueError as e:
            self.error_exit(f"Invalid chunk size: {e}")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                root_dirs=list(args.input_dirs),
                excluded_dirs=list(args.excluded_dirs),
                workers=args.workers,
                max_pending=args.max_pending,
                algorithm=ALGORITHM_ALIASES.get(args.algorithm, HashAlgorithmName.SHA256),
                chunk_size=ConvertUtils.human_to_bytes(args.chunk_size),
                follow_symlinks=args.follow_symlinks
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        """Route log records to stderr through a handler that respects the progress line."""
        self.progress = ProgressReporter(stream=sys.stderr, enabled=not self.quiet)

        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if isinstance(handler, ProgressAwareHandler):
                root_logger.removeHandler(handler)

        self._log_handler = ProgressAwareHandler(self.progress)
        self._log_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(self._log_handler)
        self._previous_level = root_logger.level
        root_logger.setLevel(logging.DEBUG if self.verbose else logging.WARNING)

    def teardown_logging(self) -> None:
        if self._log_handler is not None:
            root_logger = logging.getLogger()
            root_logger.removeHandler(self._log_handler)
            root_logger.setLevel(self._previous_level)
            self._log_handler = None

    def stopped_flag(self) -> bool:
        """True once a termination signal asked the scan to wind down."""
        return self._stop_event.is_set()

    def _request_stop(self, signum, frame) -> None:
        self._stop_event.set()

    def install_signal_handlers(self) -> None:
        """SIGTERM stops traversal; in-flight files still finish and a partial report is printed."""
        if threading.current_thread() is not threading.main_thread():
            return
        if hasattr(signal, "SIGTERM"):
            self._previous_sigterm = signal.signal(signal.SIGTERM, self._request_stop)

    def restore_signal_handlers(self) -> None:
        if self._previous_sigterm is not None:
            signal.signal(signal.SIGTERM, self._previous_sigterm)
            self._previous_sigterm = None

    def run_scan(self, params: ScanParams) -> tuple[ScanReport, ScanStats]:
        """Execute the scan workflow."""
        command = ScanCommand()
        if self.verbose:
            print(f"Scanning {len(params.root_dirs)} director{'y' if len(params.root_dirs) == 1 else 'ies'} "
                  f"(algorithm: {params.algorithm.display_name})...")

        try:
            report, stats = command.execute(
                params,
                progress_callback=None if self.quiet else self.progress,
                stopped_flag=self.stopped_flag
            )
        except Exception as e:
            self.error_exit(f"Scan failed: {e}")
        finally:
            if self.progress is not None:
                self.progress.clear()

        if self.verbose:
            print("\n" + stats.print_summary())

        return report, stats

    @staticmethod
    def output_results(report: ScanReport, stats: Optional[ScanStats] = None) -> None:
        """Print every collision group, then the totals line."""
        if stats is not None and stats.stopped:
            print("⚠️  Scan was stopped early; results cover only the files hashed so far.", file=sys.stderr)

        if not report.has_duplicates:
            print("No duplicates found")
            return

        for idx, group in enumerate(report.groups, 1):
            print(f"Hash #{idx}: {group.digest} space used: {ConvertUtils.bytes_to_human(group.reclaimable)}")
            for number, path in enumerate(group.paths, 1):
                print(f"\t{number}) '{path}'")
            print()

        print(f"{report.files_processed} files searched. "
              f"{report.collision_count} duplicates found. "
              f"{ConvertUtils.bytes_to_human(report.total_reclaimable)} of storage space used for those duplicates.")

    @staticmethod
    def error_exit(message: str, code: int = 2) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        print("Usage: coll [-q] -i <directory> [<directory> ...] [-e <excluded_directory> ...]", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        params = self.create_params(args)

        self.configure_logging()
        self.install_signal_handlers()
        try:
            if not self.quiet:
                print(f"coll v{__version__} - finds duplicate files in directories")

            report, stats = self.run_scan(params)
            self.output_results(report, stats)
        finally:
            self.restore_signal_handlers()
            self.teardown_logging()

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
