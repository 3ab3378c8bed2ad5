"""
Tests for the console progress line and the logging handler that cooperates with it.
"""
import io
import logging
from coll.progress import ProgressReporter, ProgressAwareHandler


class TestProgressReporter:

    def test_renders_counts_and_basename(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream=stream, min_interval=0)

        reporter(3, 1, "/some/dir/photo.jpg")

        assert stream.getvalue() == "processed: 3  duplicates: 1   photo.jpg\r"

    def test_shorter_line_is_padded_over_longer_one(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream=stream, min_interval=0)

        reporter.update(1, 0, "/a/very_long_file_name.bin")
        first_len = reporter.line_length
        stream.truncate(0)
        stream.seek(0)
        reporter.update(2, 0, "/a/b")

        written = stream.getvalue()
        assert written.endswith("\r")
        assert len(written) - 1 == first_len

    def test_clear_wipes_line(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream=stream, min_interval=0)
        reporter.update(1, 0, "/x")
        length = reporter.line_length
        stream.truncate(0)
        stream.seek(0)

        reporter.clear()

        assert stream.getvalue() == "\r" + " " * length + "\r"
        assert reporter.line_length == 0

    def test_clear_without_line_writes_nothing(self):
        stream = io.StringIO()
        ProgressReporter(stream=stream).clear()

        assert stream.getvalue() == ""

    def test_disabled_reporter_is_silent(self):
        stream = io.StringIO()
        ProgressReporter(stream=stream, enabled=False).update(1, 0, "/x")

        assert stream.getvalue() == ""

    def test_updates_are_throttled(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream=stream, min_interval=60)

        reporter.update(1, 0, "/first")
        reporter.update(2, 0, "/second")

        assert "first" in stream.getvalue()
        assert "second" not in stream.getvalue()


class TestProgressAwareHandler:

    def test_log_record_clears_progress_line_first(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream=stream, min_interval=0)
        handler = ProgressAwareHandler(reporter)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))

        logger = logging.getLogger("coll.tests.progress")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            reporter.update(1, 0, "/some/file.txt")
            logger.warning("File 'x' failed to open")
        finally:
            logger.removeHandler(handler)
            logger.propagate = True

        output = stream.getvalue()
        wipe = "\r" + " " * len("processed: 1  duplicates: 0   file.txt") + "\r"
        assert wipe + "WARNING File 'x' failed to open\n" in output
        assert reporter.line_length == 0
