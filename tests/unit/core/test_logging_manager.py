"""
Tests for logging_manager module.

Tests RlistLogger file output, the safe_logger function and NullLogger
class that provide null-safe logging, and CLI error handling.
"""
import pytest
from unittest.mock import MagicMock

import click

from rlist.core.logging_manager import (
    NullLogger,
    RlistLogger,
    handle_cli_error,
    safe_logger,
    setup_logger,
)


def _flush(logger):
    for handler in logger.main_logger.handlers + logger.error_logger.handlers:
        handler.flush()


class TestRlistLogger:
    """Tests for RlistLogger file output."""

    def test_creates_log_files(self, tmp_dir):
        RlistLogger(tmp_dir / "logs", component_name="database")

        assert (tmp_dir / "logs" / "database.log").exists()
        assert (tmp_dir / "logs" / "errors.log").exists()

    def test_log_operation_writes_details(self, tmp_dir):
        logger = RlistLogger(tmp_dir, component_name="ops")

        logger.log_operation("entry_added", {"name": "foo"})
        _flush(logger)

        content = (tmp_dir / "ops.log").read_text(encoding="utf-8")
        assert "OPERATION - entry_added" in content
        assert '"name": "foo"' in content

    def test_levels_share_detail_format(self, tmp_dir):
        logger = RlistLogger(tmp_dir, component_name="levels")

        logger.log_debug("looked up", {"topic": "python"})
        logger.log_info("plain message")
        _flush(logger)

        content = (tmp_dir / "levels.log").read_text(encoding="utf-8")
        assert 'DEBUG - looked up: {"topic": "python"}' in content
        assert content.rstrip().endswith("INFO - plain message")

    def test_log_error_goes_to_error_log(self, tmp_dir):
        logger = RlistLogger(tmp_dir, component_name="errs")

        logger.log_error(ValueError("broken"), {"operation": "add"})
        _flush(logger)

        content = (tmp_dir / "errors.log").read_text(encoding="utf-8")
        assert "ValueError: broken" in content
        assert "operation=add" in content

    def test_log_cli_error_format(self, tmp_dir):
        logger = RlistLogger(tmp_dir, component_name="cli")

        message = logger.log_cli_error(KeyError("x"))

        assert message.startswith("❌ KeyError")

    def test_setup_logger(self, tmp_dir):
        logger = setup_logger(tmp_dir, "cli")

        assert isinstance(logger, RlistLogger)
        assert logger.component_name == "cli"


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_all_methods_are_no_ops(self):
        logger = NullLogger()

        logger.log_operation("test_op", {"key": "value"})
        logger.log_error(ValueError("test error"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_info("info message")
        logger.log_warning("warning message")

    def test_log_cli_error_returns_formatted(self):
        result = NullLogger().log_cli_error(ValueError("test error"))

        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=RlistLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_returns_null_logger_for_none(self):
        assert isinstance(safe_logger(None), NullLogger)


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_prints_message_and_exits(self, capsys):
        ctx = click.Context(click.Command("add"), obj={"verbose": False})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ValueError("bad input"), "add")

        assert exc_info.value.code == 1
        assert "❌ ValueError: bad input" in capsys.readouterr().err

    def test_logs_through_context_logger(self):
        mock_logger = MagicMock(spec=RlistLogger)
        mock_logger.log_cli_error.return_value = "❌ ValueError: bad"
        ctx = click.Context(
            click.Command("add"), obj={"logger": mock_logger, "verbose": True}
        )

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("bad"), "add", {"name": "foo"}, exit_code=2)

        args, kwargs = mock_logger.log_cli_error.call_args
        assert args[1] == {"operation": "add", "name": "foo"}
        assert kwargs["show_traceback"] is True
