"""Tests for CLI logging setup."""

import io
import logging

import pytest

from frameset.logging_config import FramesetFormatter, log_timing, setup_logging, use_color


def restore_logger():
    return logging.getLogger("frameset.restore")


class TestSetupLogging:
    """Test levels, formats and colors."""

    def test_quiet_by_default(self):
        stream = io.StringIO()
        setup_logging(stream=stream)

        restore_logger().info("hidden")
        restore_logger().warning("Could not delete frame")

        assert stream.getvalue() == "WARNING: Could not delete frame\n"

    def test_verbose_uses_short_names(self):
        stream = io.StringIO()
        setup_logging(verbose=True, stream=stream)

        restore_logger().info("Restoring frameset work")

        assert stream.getvalue() == "INFO restore: Restoring frameset work\n"

    def test_debug_includes_line_numbers(self):
        stream = io.StringIO()
        logger = setup_logging(verbose=True, debug=True, stream=stream)

        restore_logger().debug("Created frame")

        assert logger.level == logging.DEBUG
        assert "DEBUG restore:" in stream.getvalue()

    def test_setup_replaces_handlers(self):
        setup_logging(stream=io.StringIO())
        logger = setup_logging(stream=io.StringIO())

        assert len(logger.handlers) == 1
        assert not logger.propagate

    def test_forced_color(self):
        stream = io.StringIO()
        setup_logging(stream=stream, color=True)

        restore_logger().error("Failed")

        assert stream.getvalue().startswith("\033[31mERROR\033[0m: Failed")

    def test_formatter_leaves_record_unchanged(self):
        record = logging.LogRecord("frameset.filters", logging.WARNING, __file__, 1, "msg", None, None)

        FramesetFormatter("%(levelname)s %(shortname)s", color=True).format(record)

        assert record.levelname == "WARNING"

    def test_no_color_env(self, monkeypatch):
        class Terminal(io.StringIO):
            def isatty(self):
                return True

        monkeypatch.delenv("NO_COLOR", raising=False)
        assert use_color(Terminal())
        monkeypatch.setenv("NO_COLOR", "1")
        assert not use_color(Terminal())
        assert not use_color(io.StringIO())


class TestLogTiming:
    """Test operation timing logs."""

    def test_logs_duration(self):
        stream = io.StringIO()
        logger = setup_logging(verbose=True, stream=stream)

        with log_timing("Simulated restore", logger):
            pass

        assert "Simulated restore took" in stream.getvalue()

    def test_logs_failure_and_reraises(self):
        stream = io.StringIO()
        logger = setup_logging(stream=stream)

        with pytest.raises(RuntimeError):
            with log_timing("Simulated restore", logger):
                raise RuntimeError("boom")

        assert "Simulated restore failed after" in stream.getvalue()
