"""
Integration tests for ScanCommand — the orchestration layer between the CLI and the core.
Verifies wiring of params -> digest computer -> frontier scanner with progress/cancellation support.
"""
import hashlib
import pytest
from pathlib import Path
from coll import ScanParams, HashAlgorithmName, ScanCommand


class TestScanCommand:
    """Test command orchestration logic."""

    def test_execute_returns_report_and_stats(self, test_files):
        root_dir = str(Path(test_files["dup1_a"]).parent)

        command = ScanCommand()
        report, stats = command.execute(ScanParams(root_dirs=[root_dir], workers=2))

        assert report.files_processed == 7
        assert report.collision_count == 2
        assert stats.total_time >= 0
        assert stats.files_dispatched == 7
        assert command.get_report() is report

    def test_default_digest_is_sha256(self, test_files):
        root_dir = str(Path(test_files["dup1_a"]).parent)
        report, _ = ScanCommand().execute(ScanParams(root_dirs=[root_dir]))

        digests = {g.digest for g in report.groups}
        assert hashlib.sha256(b"A" * 1024).hexdigest() in digests
        assert hashlib.sha256(b"B" * 2048).hexdigest() in digests

    def test_algorithm_selection_changes_digest(self, test_files):
        root_dir = str(Path(test_files["dup1_a"]).parent)
        params = ScanParams(root_dirs=[root_dir], algorithm=HashAlgorithmName.XXH64, chunk_size=100)

        report, _ = ScanCommand().execute(params)

        assert report.collision_count == 2
        assert all(len(g.digest) == 16 for g in report.groups)

    def test_exclusions_are_forwarded(self, test_files):
        root_dir = Path(test_files["dup1_a"]).parent
        params = ScanParams(root_dirs=[str(root_dir)], excluded_dirs=[str(root_dir / "subdir")])

        report, _ = ScanCommand().execute(params)

        assert report.files_processed == 6
        group_a = next(g for g in report.groups if g.size == 1024)
        assert group_a.count == 2

    def test_execute_invokes_progress_callback(self, test_files):
        root_dir = str(Path(test_files["dup1_a"]).parent)
        progress_events = []

        def progress_callback(processed: int, collisions: int, path: str):
            progress_events.append((processed, collisions, path))

        ScanCommand().execute(ScanParams(root_dirs=[root_dir], workers=1), progress_callback=progress_callback)

        assert len(progress_events) == 7
        assert progress_events[0][0] == 0

    def test_execute_respects_stopped_flag(self, test_files):
        root_dir = str(Path(test_files["dup1_a"]).parent)
        report, stats = ScanCommand().execute(ScanParams(root_dirs=[root_dir]), stopped_flag=lambda: True)

        assert stats.stopped
        assert report.files_processed == 0

    def test_execute_raises_on_missing_root(self, temp_dir):
        with pytest.raises(RuntimeError, match="Directory does not exist"):
            ScanCommand().execute(ScanParams(root_dirs=[str(temp_dir / "missing")]))
