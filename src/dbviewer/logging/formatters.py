"""Log formatters for dbviewer logging system.

Classes:
    JSONFormatter: JSON format for structured logging
    TextFormatter: Human-readable text format

Example:
    >>> handler.setFormatter(get_formatter("json"))
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_FIELDS = frozenset({
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message", "exc_info",
    "exc_text", "stack_info", "taskName",
})


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_FIELDS}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured log output.

    Example:
        {"timestamp": "2024-05-01T10:30:45.123456", "level": "INFO",
         "logger": "adapter.postgresql", "message": "Connected"}
    """

    def __init__(self, *, include_location: bool = False) -> None:
        super().__init__()
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_location:
            log_data["module"] = record.module
            log_data["line"] = record.lineno

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        log_data.update(_extra_fields(record))
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter.

    Example:
        2024-05-01 10:30:45 INFO     adapter.sqlite  Connected  tables=3
    """

    def __init__(self, *, datefmt: str = "%Y-%m-%d %H:%M:%S") -> None:
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        line = f"{timestamp} {record.levelname:<8} {record.name}  {record.getMessage()}"

        extras = _extra_fields(record)
        if extras:
            line += "  " + " ".join(f"{k}={v!r}" for k, v in extras.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_formatter(format_type: str) -> logging.Formatter:
    """Get formatter instance by type.

    Args:
        format_type: Formatter type ('json' or 'text')

    Raises:
        ValueError: If format_type is not supported
    """
    format_type = format_type.lower()
    if format_type == "json":
        return JSONFormatter()
    elif format_type == "text":
        return TextFormatter()
    raise ValueError(f"Unsupported formatter type: {format_type}")
