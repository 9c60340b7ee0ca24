"""
Tests for logging_manager module.

Tests the run and error log files written by ConversionLogger, and the
safe_logger / NullLogger pair used when no logger is passed.
"""
import pytest
from unittest.mock import MagicMock

from pelican2hugo.core.exceptions import EntryParseError, Pelican2HugoError
from pelican2hugo.core.logging_manager import (
    ConversionLogger,
    NullLogger,
    safe_logger,
)


@pytest.fixture
def conversion_logger(tmp_path):
    """ConversionLogger writing into a temporary directory."""
    logger = ConversionLogger(tmp_path / "logs", "convert")
    yield logger
    logger.close()


def _read(logger, name):
    logger.close()
    return (logger.log_dir / name).read_text(encoding="utf-8")


class TestConversionLogger:
    """Tests for ConversionLogger file output."""

    def test_creates_log_files(self, tmp_path):
        """Both log files should exist right after construction."""
        logger = ConversionLogger(tmp_path / "nested" / "logs")
        logger.close()
        assert (tmp_path / "nested" / "logs" / "convert.log").exists()
        assert (tmp_path / "nested" / "logs" / "errors.log").exists()

    def test_info_with_details(self, conversion_logger):
        """log_info should append JSON details to the message."""
        conversion_logger.log_info("Working on 1up-berlin.md", {"mode": "stdout"})
        text = _read(conversion_logger, "convert.log")
        assert 'Working on 1up-berlin.md: {"mode": "stdout"}' in text

    def test_thread_name_recorded(self, conversion_logger):
        """Records should carry the worker thread name."""
        conversion_logger.log_debug("Rewrote 2 youtube token(s)")
        text = _read(conversion_logger, "convert.log")
        assert "[MainThread]" in text
        assert "Rewrote 2 youtube token(s)" in text

    def test_operation_details_serialized(self, conversion_logger):
        """log_operation should JSON-encode details."""
        conversion_logger.log_operation("convert_files_start", {"files": 3})
        text = _read(conversion_logger, "convert.log")
        assert 'OPERATION - convert_files_start: {"files": 3}' in text

    def test_error_goes_to_both_files(self, conversion_logger):
        """log_error should write a headline to the run log and details to errors.log."""
        try:
            raise EntryParseError("Invalid date 'tomorrow'")
        except EntryParseError as e:
            error = e
        conversion_logger.log_error(error, {"file": "broken.md"})

        run_log = _read(conversion_logger, "convert.log")
        error_log = _read(conversion_logger, "errors.log")
        assert "EntryParseError: Invalid date 'tomorrow'" in run_log
        assert "Context: file=broken.md" in error_log
        assert "Traceback" in error_log

    def test_info_not_in_error_log(self, conversion_logger):
        """errors.log should only hold failures."""
        conversion_logger.log_info("Working on obey-giant.md")
        assert "obey-giant" not in _read(conversion_logger, "errors.log")

    def test_report_cli_error(self, conversion_logger):
        """report_cli_error should log and return the terminal line."""
        message = conversion_logger.report_cli_error(
            Pelican2HugoError("Input directory not found")
        )
        assert message == "❌ Pelican2HugoError: Input directory not found"
        assert "source=cli" in _read(conversion_logger, "errors.log")

    def test_reopening_replaces_handlers(self, tmp_path):
        """A second logger for the same component should not duplicate records."""
        ConversionLogger(tmp_path / "a")
        logger = ConversionLogger(tmp_path / "b")
        logger.log_info("only once")
        text = _read(logger, "convert.log")
        assert text.count("only once") == 1
        assert "only once" not in (tmp_path / "a" / "convert.log").read_text(encoding="utf-8")


class TestNullLogger:
    """Tests for NullLogger."""

    def test_calls_are_no_ops(self):
        """Every logging call should be accepted silently."""
        logger = NullLogger()
        logger.log_operation("convert_files_start", {"files": 1})
        logger.log_info("info", {"key": "value"})
        logger.log_debug("debug")
        logger.log_error(ValueError("boom"), {"file": "x.md"})

    def test_report_cli_error_formats(self):
        """NullLogger.report_cli_error should still return the message."""
        result = NullLogger().report_cli_error(ValueError("test error"))
        assert result == "❌ ValueError: test error"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=ConversionLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_returns_shared_null_logger(self):
        assert isinstance(safe_logger(None), NullLogger)
        assert safe_logger(None) is safe_logger(None)

    def test_forwards_calls(self):
        """safe_logger should forward calls to a real logger."""
        mock_logger = MagicMock(spec=ConversionLogger)
        error = ValueError("test")
        context = {"operation": "process_post"}

        safe_logger(mock_logger).log_error(error, context)
        mock_logger.log_error.assert_called_once_with(error, context)
