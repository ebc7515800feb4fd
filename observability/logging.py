"""Logging for the CLI and research tools.

Console output always goes to stderr, so stdout carries only reports and
JSON tool output. A rotating dossier.log in LOG_DIR receives DEBUG and up;
if LOG_DIR cannot be created, logging stays console-only.

Every record carries `report_id`: the ID of the report being generated when
the record was emitted, or '-' outside report generation. Section calls run
as asyncio tasks, which copy the context on creation, so their records carry
the ID of the report that dispatched them.

Usage:
    >>> setup_logging(config)
    >>> token = set_report_context("3f2a9c1b")
    >>> logger.info("Dispatching sections")  # [3f2a9c1b] in the output
    >>> clear_report_context(token)
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Any

LOG_FILE = "dossier.log"

report_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("report_id", default="-")

# Standard LogRecord attributes; anything else on a record came from `extra=`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message", "asctime", "report_id", "taskName",
}

_QUIET_LIBRARIES = ("aiohttp", "asyncio", "httpx", "httpcore", "openai")


def set_report_context(report_id: str) -> contextvars.Token:
    """Tag records logged from here on with `report_id`.

    Returns:
        Token for clear_report_context()
    """
    return report_id_var.set(report_id)


def clear_report_context(token: contextvars.Token | None = None) -> None:
    """Undo set_report_context(); without a token, fall back to '-'."""
    if token is None:
        report_id_var.set("-")
    else:
        report_id_var.reset(token)


class ContextFilter(logging.Filter):
    """Copies the current report ID onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.report_id = report_id_var.get()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: timestamp, level, logger, message, report_id; `source` for
    WARNING and above; `exception` when there is one; plus any `extra=`
    fields (stringified if not JSON-serializable).
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "report_id": getattr(record, "report_id", "-"),
        }
        if record.levelno >= logging.WARNING:
            entry["source"] = f"{record.filename}:{record.lineno} ({record.funcName})"
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extras = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        entry.update(json.loads(json.dumps(extras, default=str)))
        return json.dumps(entry, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """`TIME [LEVEL] [report_id] logger: message`; file output adds the date."""

    def __init__(self, include_date: bool = False):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] [%(report_id)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S" if include_date else "%H:%M:%S",
        )


def _formatter(log_format: str, for_file: bool) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    return TextFormatter(include_date=for_file)


def _file_handler(config: Any) -> logging.Handler:
    """Size-based rotation when LOG_MAX_BYTES > 0, daily otherwise.

    Raises:
        OSError: If LOG_DIR cannot be created or the file cannot be opened
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)
    path = config.log_dir / LOG_FILE
    if config.log_max_bytes > 0:
        return RotatingFileHandler(
            path,
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
            encoding="utf-8",
        )
    return TimedRotatingFileHandler(
        path,
        when="midnight",
        backupCount=config.log_backup_count,
        encoding="utf-8",
    )


def setup_logging(config: Any, verbose: bool = False) -> bool:
    """Replace the root logger's handlers with console (+ file) handlers.

    Safe to call more than once; previous handlers are closed and removed.

    Args:
        config: Config with the log_* settings
        verbose: Force DEBUG on the console regardless of LOG_LEVEL

    Returns:
        Whether file logging is active
    """
    context_filter = ContextFilter()
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO))
    console.setFormatter(_formatter(config.log_format, for_file=False))
    console.addFilter(context_filter)
    root.addHandler(console)

    try:
        file_handler = _file_handler(config)
    except OSError as e:
        print(
            f"Warning: cannot write logs to '{config.log_dir}' ({e}); logging to console only.",
            file=sys.stderr,
        )
        file_logging = False
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_formatter(config.log_format, for_file=True))
        file_handler.addFilter(context_filter)
        root.addHandler(file_handler)
        file_logging = True

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return file_logging
