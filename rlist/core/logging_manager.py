#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for rlist.

Every component ('database', 'cli') gets its own rotating log file in the
log directory; errors from all components also land in errors.log.
Warnings are echoed to the console.

Library code takes an Optional[RlistLogger] and calls it through
safe_logger(), so a missing logger is never an error.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
)


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message}: {json.dumps(details, default=str)}"


def format_cli_error(error: Exception) -> str:
    """One-line terminal rendering of an error."""
    return f"❌ {type(error).__name__}: {error}"


class RlistLogger:
    """
    Per-component logger writing to rotating files.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component using this logger; names its log file
        main_logger: Operations logger (<component>.log and console)
        error_logger: Error logger (errors.log)
    """

    def __init__(self, log_dir: Path, component_name: str = "rlist") -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._build_logger(
            "operations", f"{component_name}.log", logging.DEBUG
        )
        self.error_logger = self._build_logger("errors", "errors.log", logging.ERROR)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        self.main_logger.addHandler(console)

    def _build_logger(self, kind: str, file_name: str, level: int) -> logging.Logger:
        logger = logging.getLogger(f"rlist.{self.component_name}.{kind}")
        logger.setLevel(level)
        # Only this logger's handlers are reset, never global logging state
        logger.handlers = []
        logger.propagate = False

        handler = RotatingFileHandler(
            self.log_dir / file_name,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def _emit(
        self, level: int, message: str, details: Optional[Dict[str, Any]]
    ) -> None:
        self.main_logger.log(level, _with_details(message, details))

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed reading list operation and its details."""
        self._emit(logging.INFO, f"OPERATION - {operation}", details or {})

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, f"DEBUG - {message}", details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.INFO, f"INFO - {message}", details)

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self._emit(logging.WARNING, message, details)

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an error, its context and the current traceback to errors.log.

        Args:
            error: Exception that occurred
            context: Key/value pairs describing where it happened
        """
        lines = [f"ERROR - {type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        lines.append(f"Traceback:\n{traceback.format_exc()}")
        for line in lines:
            self.error_logger.error(line)

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error raised by a command and return its terminal message.

        Examples:
            >>> logger.log_cli_error(NotFoundError("entry", "foo"))
            "❌ NotFoundError: Could not find any entry with name 'foo' in your reading list"
        """
        self.log_error(error, context or {"source": "cli"})
        message = format_cli_error(error)
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


class NullLogger:
    """RlistLogger stand-in that records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[RlistLogger]) -> RlistLogger:
    """Return logger, or a NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def setup_logger(log_dir: Path, component_name: str) -> RlistLogger:
    """Create the logger for one component under log_dir ('~' is expanded)."""
    return RlistLogger(Path(log_dir).expanduser(), component_name=component_name)


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    The full error goes to the log of the logger in ctx.obj; the terminal
    gets one line, plus the traceback with --verbose.

    Args:
        ctx: Click context whose obj may carry 'logger' and 'verbose'
        error: Exception that occurred
        operation: Command that failed (e.g. 'add', 'edit')
        additional_context: Extra context such as the entry name or file
        exit_code: Process exit status

    Note:
        Never returns; always calls sys.exit()
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}

    error_msg = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(error_msg, err=True)
    sys.exit(exit_code)
