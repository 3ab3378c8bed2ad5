"""
Unified command orchestrator for a duplicate scan.
This is the SINGLE source of truth for business logic — used by the CLI and by library callers.
No terminal dependencies — pure Python.
"""
from typing import Optional, Callable, Tuple
from coll.core.models import ScanParams, ScanReport, ScanStats
from coll.core.hasher import DigestComputerImpl, algorithm_for
from coll.core.scanner import FrontierScannerImpl


class ScanCommand:
    """
    Orchestrates the entire scan workflow:
    1. Build the digest computer for the selected algorithm
    2. Configure the traversal frontier with roots, exclusions and pool sizing
    3. Run the scan with progress/cancellation support and return the final report

    Usage:
        params = ScanParams(root_dirs=["~/Downloads"], excluded_dirs=["~/Downloads/tmp"])
        command = ScanCommand()
        report, stats = command.execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
    """

    def __init__(self):
        self._report: Optional[ScanReport] = None

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[int, int, str], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[ScanReport, ScanStats]:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (files_processed: int, collisions: int, current_path: str) -> None
            stopped_flag: () -> bool (returns True if traversal should stop)

        Returns:
            Tuple of (report, statistics)

        Raises:
            RuntimeError: If a root directory is missing or not a directory
        """
        computer = DigestComputerImpl(
            algorithm=algorithm_for(params.algorithm),
            chunk_size=params.chunk_size
        )

        scanner = FrontierScannerImpl(
            root_dirs=params.root_dirs,
            excluded_dirs=params.excluded_dirs,
            workers=params.workers,
            max_pending=params.max_pending,
            computer=computer,
            follow_symlinks=params.follow_symlinks
        )

        report, stats = scanner.scan(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        self._report = report
        return report, stats

    def get_report(self) -> Optional[ScanReport]:
        """Report of the last execution, if any."""
        return self._report
