"""Structured logging implementation for dbviewer.

This module provides structured logging with bound context and correlation
IDs on top of structlog.

Classes:
    StructuredLogger: Main structured logging interface
    LogContext: Per-logger context storage

Example:
    >>> logger = StructuredLogger("adapter.postgresql")
    >>> with logger.context(database_type="postgresql"):
    ...     logger.info("Listing tables", table_count=12)
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import structlog

from ..core.exceptions import DBViewerException

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LogContext:
    """Thread-local context for log correlation and metadata.

    Example:
        >>> context = LogContext()
        >>> context.set("session_id", "s-1")
        >>> context.get_all()
        {'session_id': 's-1'}
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _data(self) -> Dict[str, Any]:
        if not hasattr(self._local, "context"):
            self._local.context = {}
        return self._local.context

    def set(self, key: str, value: Any) -> None:
        self._data()[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._data().get(key, default)

    def get_all(self) -> Dict[str, Any]:
        return dict(self._data())

    def update(self, context: Dict[str, Any]) -> None:
        self._data().update(context)

    def clear(self) -> None:
        self._data().clear()


class StructuredLogger:
    """Structured logger with context management and correlation.

    Every event carries the logger's bound context and, when enabled, a
    correlation id shared by loggers derived through ``bind``.

    Example:
        >>> logger = StructuredLogger("session")
        >>> session_logger = logger.bind(session_id="s-1")
        >>> session_logger.info("Connected", database_type="sqlite")
    """

    def __init__(
        self,
        name: str,
        *,
        level: str = "INFO",
        enable_correlation: bool = True,
    ) -> None:
        """Initialize structured logger.

        Args:
            name: Logger name (typically module name)
            level: Initial log level
            enable_correlation: Whether to attach correlation IDs
        """
        self.name = name
        self._enable_correlation = enable_correlation
        self._logger = structlog.get_logger(name)
        self._context = LogContext()
        self._stdlib_logger = logging.getLogger(name)
        self.set_level(level)

        if self._enable_correlation:
            self._context.set("correlation_id", str(uuid.uuid4()))

    def _prepare_event_dict(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        event_dict = {"logger": self.name}
        event_dict.update(self._context.get_all())
        if not self._enable_correlation:
            event_dict.pop("correlation_id", None)
        event_dict.update(kwargs)
        return event_dict

    @contextmanager
    def context(self, **context_data: Any) -> Generator[None, None, None]:
        """Add context data for the duration of a block."""
        old_context = self._context.get_all()
        try:
            self._context.update(context_data)
            yield
        finally:
            self._context.clear()
            self._context.update(old_context)

    def bind(self, **context_data: Any) -> "StructuredLogger":
        """Create new logger instance with bound context.

        The new logger keeps this logger's correlation id.
        """
        bound_logger = StructuredLogger(
            self.name,
            level=self.get_level(),
            enable_correlation=self._enable_correlation,
        )
        bound_logger._context.clear()
        bound_logger._context.update(self._context.get_all())
        bound_logger._context.update(context_data)
        return bound_logger

    def set_level(self, level: str) -> None:
        """Set logging level.

        Raises:
            DBViewerException: If the level name is unknown
        """
        if not isinstance(level, str) or level.upper() not in _LEVELS:
            raise DBViewerException(
                f"Unknown log level: {level}",
                code="INVALID_LOG_LEVEL",
            )
        self._stdlib_logger.setLevel(getattr(logging, level.upper()))

    def get_level(self) -> str:
        return logging.getLevelName(self._stdlib_logger.getEffectiveLevel())

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, **self._prepare_event_dict(kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, **self._prepare_event_dict(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, **self._prepare_event_dict(kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, **self._prepare_event_dict(kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error with the active exception's traceback."""
        self._logger.error(message, exc_info=True, **self._prepare_event_dict(kwargs))

    def get_correlation_id(self) -> Optional[str]:
        if not self._enable_correlation:
            return None
        return self._context.get("correlation_id")

    def set_correlation_id(self, correlation_id: str) -> None:
        if self._enable_correlation:
            self._context.set("correlation_id", correlation_id)

    def get_context(self) -> Dict[str, Any]:
        return self._context.get_all()

    def __repr__(self) -> str:
        return (
            f"StructuredLogger("
            f"name={self.name!r}, "
            f"level={self.get_level()!r}, "
            f"correlation={self._enable_correlation})"
        )
