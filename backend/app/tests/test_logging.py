"""Tests for structured logging."""

import json
import logging
import sys
from io import StringIO
from unittest.mock import patch

from app.core.logging import (
    ConsoleFormatter,
    JSONFormatter,
    LoggerAdapter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Test message", level: int = logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="/app/test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_basic_log_format(self):
        parsed = json.loads(JSONFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test.logger"
        assert parsed["message"] == "Test message"
        assert parsed["line"] == 42
        assert "timestamp" in parsed
        assert "process" in parsed
        assert "extra" not in parsed

    def test_json_formatter_with_extra(self):
        record = _record("Listing served")
        record.cache_key = "advocates:list:abc"
        record.total = 25

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["extra"] == {"cache_key": "advocates:list:abc", "total": 25}

    def test_json_formatter_with_exception(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        parsed = json.loads(
            JSONFormatter().format(_record("Error fetching advocates", logging.ERROR, exc_info))
        )

        assert parsed["exception"]["type"] == "ValueError"
        assert parsed["exception"]["message"] == "Test error"
        assert isinstance(parsed["exception"]["traceback"], list)

    def test_json_formatter_without_extra(self):
        record = _record()
        record.custom_field = "should not appear"

        parsed = json.loads(JSONFormatter(include_extra=False).format(record))

        assert "extra" not in parsed

    def test_json_formatter_handles_non_serializable(self):
        record = _record()
        record.custom_object = object()

        parsed = json.loads(JSONFormatter().format(record))

        assert "object" in parsed["extra"]["custom_object"].lower()


class TestConsoleFormatter:
    """Tests for console log formatter."""

    def test_basic_console_format(self):
        output = ConsoleFormatter().format(_record())

        assert "INFO" in output
        assert "test.logger" in output
        assert "Test message" in output

    def test_console_formatter_with_colors(self):
        formatter = ConsoleFormatter()

        for level, color in ConsoleFormatter.COLORS.items():
            output = formatter.format(_record(level=getattr(logging, level)))
            assert color in output, f"Color code missing for {level}"


class TestLoggerAdapter:
    """Tests for LoggerAdapter context injection."""

    def test_adapter_merges_context_and_extra(self):
        base_logger = logging.getLogger("test.adapter")
        base_logger.setLevel(logging.DEBUG)
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JSONFormatter())
        base_logger.addHandler(handler)

        try:
            adapter = LoggerAdapter(base_logger, {"request_id": "abc-123"})
            adapter.info("Test message", extra={"cache": "hit"})
            handler.flush()
            parsed = json.loads(stream.getvalue())
        finally:
            base_logger.removeHandler(handler)

        assert parsed["extra"]["request_id"] == "abc-123"
        assert parsed["extra"]["cache"] == "hit"


class TestSetupLogging:
    """Tests for logging setup function."""

    def test_get_logger_returns_logger(self):
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_setup_logging_json_override(self):
        root_logger = logging.getLogger()
        saved = root_logger.handlers[:]
        try:
            with patch("app.core.logging.settings.log_format", "json"):
                setup_logging()
            assert len(root_logger.handlers) == 1
            assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
            for handler in saved:
                root_logger.addHandler(handler)

    def test_setup_logging_console_in_development(self):
        root_logger = logging.getLogger()
        saved = root_logger.handlers[:]
        try:
            with (
                patch("app.core.logging.settings.log_format", None),
                patch("app.core.logging.settings.environment", "development"),
            ):
                setup_logging()
            assert isinstance(root_logger.handlers[0].formatter, ConsoleFormatter)
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        finally:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)
            for handler in saved:
                root_logger.addHandler(handler)
