"""
Logging configuration for applications embedding projcore.

The library only creates module loggers. ``setup_logging()`` installs the
console and file handlers, and ``LogContext`` tags every record emitted
inside a block (a grid being decoded, a CRS being built) with extra fields.
"""

import contextvars
import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from projcore.core.config import settings

_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "projcore_log_context", default={}
)

# Attributes every LogRecord carries; anything else came from extra= or LogContext
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogContext:
    """
    Attach fields to every record logged inside a ``with`` block.

    Contexts nest, inner fields winning, and are local to the current thread
    or task.

    Usage:
        with LogContext(grid="ntv21.gsb"):
            grid = read_ntv2(data)
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "LogContext":
        self._token = _context.set({**_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._token is not None:
            _context.reset(self._token)
            self._token = None


def current_log_context() -> Dict[str, Any]:
    """Fields of the innermost active LogContext."""
    return dict(_context.get())


class ContextFilter(logging.Filter):
    """Copy the active LogContext fields onto records passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record, for log aggregation.

    Fields passed through ``extra=`` or a LogContext (grid names, CRS keys,
    ``duration_ms``) are emitted next to the standard ones.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, _DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_log_level(level_name: str) -> int:
    """
    Convert a level name to its logging constant.

    Unknown names map to INFO.
    """
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_logs: Optional[bool] = None,
    enable_console: bool = True,
) -> None:
    """
    Configure the root logger.

    Unset arguments fall back to ``settings``.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Rotating log file; no file logging when unset
        json_logs: Write the file as JSON lines
        enable_console: Also log to stdout
    """
    if log_level is None:
        log_level = settings.effective_log_level
    if log_file is None:
        log_file = settings.log_file
    if json_logs is None:
        json_logs = settings.json_logs

    level = get_log_level(log_level)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handlers = []
    if enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(
            logging.Formatter("%(levelname)s - %(asctime)s - %(name)s - %(message)s", _DATE_FORMAT)
        )
        handlers.append(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # 10MB per file, 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        if json_logs:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(levelname)s - %(name)s - "
                    "%(module)s:%(funcName)s:%(lineno)d - %(message)s",
                    _DATE_FORMAT,
                )
            )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(ContextFilter())
        root.addHandler(handler)

    root.info(
        "Logging initialized: level=%s environment=%s json_logs=%s console=%s file=%s",
        log_level,
        settings.environment,
        json_logs,
        enable_console,
        log_file is not None,
    )
