"""Tests for logging setup and formatters."""

import json
import logging
from pathlib import Path

import pytest

from cmd_box.engine import Interpreter
from cmd_box.utils.logging import (
    ColorFormatter,
    JSONFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)


def _record(message: str = "Executed incr", **context: object) -> logging.LogRecord:
    record = logging.LogRecord("cmd_box.engine", logging.INFO, __file__, 1, message, (), None)
    if context:
        record.context = context
    return record


class TestFormatters:
    """Tests for the JSON and colour formatters."""

    def test_json_includes_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(command="incr", args=["x", 2])))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "cmd_box.engine"
        assert entry["message"] == "Executed incr"
        assert entry["context"] == {"command": "incr", "args": ["x", 2]}

    def test_json_without_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))
        assert "context" not in entry

    def test_color_plain_line(self) -> None:
        line = ColorFormatter(use_color=False).format(_record(command="incr", args=["x", 2]))
        assert line == 'INFO     cmd_box.engine: Executed incr command=incr args=["x",2]'

    def test_color_codes(self) -> None:
        line = ColorFormatter(use_color=True).format(_record())
        assert line.startswith("\033[32m")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_and_handlers(self) -> None:
        logger = setup_logging(level="debug", use_color=False)

        assert logger.name == "cmd_box"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert setup_logging(level="chatty").level == logging.INFO

    def test_log_file_is_json(self, temp_dir: Path) -> None:
        log_file = temp_dir / "logs" / "cmd-box.log"
        setup_logging(level="INFO", log_file=log_file)

        get_logger("cmd_box.test").info("hello")
        for handler in logging.getLogger("cmd_box").handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "hello"


class TestLogWithContext:
    """Tests for log_with_context."""

    def test_attaches_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("cmd_box.test")
        with caplog.at_level(logging.DEBUG, logger="cmd_box"):
            log_with_context(logger, logging.DEBUG, "Executed set", command="set")

        (record,) = caplog.records
        assert record.context == {"command": "set"}

    def test_disabled_level_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("cmd_box.test")
        with caplog.at_level(logging.WARNING, logger="cmd_box"):
            log_with_context(logger, logging.DEBUG, "quiet")
        assert caplog.records == []

    def test_dispatch_logs(self, interp: Interpreter, caplog: pytest.LogCaptureFixture) -> None:
        """Test the interpreter logs executions, boundaries and rejections."""
        with caplog.at_level(logging.DEBUG, logger="cmd_box"):
            interp.dispatch(["add_to_x", 1])
            interp.dispatch(["redo"])
            interp.dispatch(["nope"])

        messages = [record.getMessage() for record in caplog.records]
        assert "Executed add_to_x" in messages
        assert "Can not redo anymore" in messages
        assert any(
            record.levelno == logging.ERROR and "nope" in record.getMessage()
            for record in caplog.records
        )
