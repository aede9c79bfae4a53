"""Tests for logging setup."""

import json
import logging

from freeflow.core.logging import ConsoleFormatter, JSONFormatter, get_logger, setup_logging


def _record(message: str, **context) -> logging.LogRecord:
    record = logging.LogRecord("freeflow.engine", logging.INFO, __file__, 1, message, None, None)
    if context:
        record.context = context
    return record


class TestLogging:
    """Test logging configuration."""

    def test_get_logger_returns_logger(self):
        logger = get_logger(__name__)
        assert isinstance(logger, logging.Logger)

    def test_get_logger_same_name_returns_same_logger(self):
        assert get_logger("test.module") is get_logger("test.module")

    def test_get_logger_nests_under_root(self):
        assert get_logger("main").name == "freeflow.main"

    def test_get_logger_keeps_package_names(self):
        assert get_logger("freeflow.engine.session").name == "freeflow.engine.session"

    def test_setup_logging_creates_handlers(self, tmp_path, clean_logging):
        setup_logging(log_dir=tmp_path / "logs")
        root_logger = logging.getLogger("freeflow")
        assert len(root_logger.handlers) >= 2
        assert (tmp_path / "logs" / "freeflow.log").exists()

    def test_setup_logging_is_idempotent(self, tmp_path, clean_logging):
        setup_logging(log_dir=tmp_path / "logs")
        count = len(logging.getLogger("freeflow").handlers)
        setup_logging(log_dir=tmp_path / "logs")
        assert len(logging.getLogger("freeflow").handlers) == count


class TestFormatters:
    def test_json_formatter_includes_context(self):
        data = json.loads(JSONFormatter().format(_record("Bubble spawned", event_id="ab12")))
        assert data["message"] == "Bubble spawned"
        assert data["level"] == "INFO"
        assert data["module"] == "freeflow.engine"
        assert data["context"] == {"event_id": "ab12"}
        assert data["timestamp"].endswith("Z")

    def test_json_formatter_without_context(self):
        data = json.loads(JSONFormatter().format(_record("plain")))
        assert "context" not in data

    def test_console_formatter_appends_context(self):
        line = ConsoleFormatter().format(_record("Dive ended", taps=3))
        assert "Dive ended [taps=3]" in line
        assert "INFO" in line
