#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Run logs for post conversions.

A conversion run writes two rotating files into its log directory:

    <log_dir>/
    ├── convert.log     every post worked on, skipped, written or failed
    └── errors.log      failures only, with the post path and a traceback

Posts are converted on worker threads, so each record carries the thread
name. Nothing is logged to the terminal; the CLI prints its own summary
and error lines.

Pipeline functions take an optional logger and call it through
``safe_logger(logger)``, which substitutes a no-op NullLogger for None.
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
from typing import Any, Dict, NoReturn, Optional

# --- Third party imports ---
import click


_FILE_FORMAT = "%(asctime)s - %(levelname)s - [%(threadName)s] - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConversionLogger:
    """
    Rotating file logger shared by all tasks of one conversion run.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Base name of the run log (``<component_name>.log``)
        run_logger: Receives every record
        error_logger: Receives failures only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "convert",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.run_logger = self._file_logger(
            f"pelican2hugo.{component_name}",
            self.log_dir / f"{component_name}.log",
            logging.DEBUG,
            max_bytes,
            backup_count,
        )
        self.error_logger = self._file_logger(
            f"pelican2hugo.{component_name}.errors",
            self.log_dir / "errors.log",
            logging.ERROR,
            max_bytes,
            backup_count,
        )

    @staticmethod
    def _file_logger(
        name: str, path: Path, level: int, max_bytes: int, backup_count: int
    ) -> logging.Logger:
        """Return logger ``name`` writing only to ``path``."""
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        # A second run in the same process replaces the previous handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Flush and detach both file handlers."""
        for logger in (self.run_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # ---- Records ----
    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Batch milestone, e.g. ``convert_files_start`` with the file count."""
        self.run_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.run_logger.info(_with_details(message, details))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.run_logger.debug(_with_details(message, details))

    def log_error(
        self, error: BaseException, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Record a failure in both files.

        The run log gets one line; errors.log also gets the context (usually
        the post path) and the traceback. Worker threads call this after
        their except block has ended, so the traceback is taken from the
        exception itself.
        """
        headline = f"{type(error).__name__}: {error}"
        self.run_logger.error(headline)

        lines = [headline]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        lines.append(
            "".join(traceback.format_exception(type(error), error, error.__traceback__))
        )
        self.error_logger.error("\n".join(lines))

    def report_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """Log ``error`` and return the line the CLI prints for it."""
        self.log_error(error, context or {"source": "cli"})
        return _cli_message(error, show_traceback)


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message}: {json.dumps(details, default=str)}"


def _cli_message(error: BaseException, show_traceback: bool) -> str:
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        message += f"\n\n{tb}"
    return message


def handle_cli_error(
    ctx: "click.Context",
    error: BaseException,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> NoReturn:
    """
    Log a command failure, print a one-line message and exit.

    Args:
        ctx: Click context; ``ctx.obj`` holds ``logger`` and ``verbose``
        error: The exception that ended the command
        operation: Command name, recorded as context
        additional_context: Extra context such as the input path
        exit_code: Process exit status
    """
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).report_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Stand-in for ConversionLogger when the caller passed no logger."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(
        self, error: BaseException, context: Optional[Dict[str, Any]] = None
    ) -> None:
        pass

    def report_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _cli_message(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[ConversionLogger]) -> ConversionLogger:
    """
    Return ``logger``, or the shared NullLogger when it is None.

    Examples:
        >>> safe_logger(None).log_info("Working on 1up-berlin.md")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
