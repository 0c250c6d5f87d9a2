"""Logger factory and configuration for dbviewer.

This module provides centralized logger creation and configuration of the
stdlib handlers and structlog processors behind them.

Classes:
    LoggerFactory: Logger factory and configuration manager
    LoggerSettings: Settings applied by the factory

Functions:
    get_logger: Convenience function for getting loggers
    get_performance_logger: Convenience function for performance loggers
    configure_logging: Configure logging system globally

Example:
    >>> from dbviewer.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", format="text")
    >>> logger = get_logger(__name__)
    >>> logger.info("Viewer started", page_size=10)
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from ..config.models import LoggingConfig
from .formatters import get_formatter
from .performance import PerformanceLogger
from .structured import StructuredLogger


@dataclass
class LoggerSettings:
    """Settings applied by the logger factory."""
    level: str = "INFO"
    format: str = "json"
    console_output: bool = True
    file_path: Optional[str] = None
    max_file_size: int = 10485760  # 10MB
    backup_count: int = 5
    correlation_ids: bool = True


class LoggerFactory:
    """Factory for creating and configuring dbviewer loggers.

    Loggers are cached by name. Configuration is applied lazily on first
    use unless ``configure`` was called explicitly; the lazy path leaves an
    existing structlog configuration alone.

    Example:
        >>> factory = LoggerFactory()
        >>> factory.configure_from_config(LoggingConfig(level="DEBUG"))
        >>> logger = factory.get_logger("adapter.mysql")
    """

    def __init__(self, settings: Optional[LoggerSettings] = None) -> None:
        self.settings = settings or LoggerSettings()
        self.initialized = False
        self._handlers: List[logging.Handler] = []
        self._loggers: Dict[str, StructuredLogger] = {}
        self._performance_loggers: Dict[str, PerformanceLogger] = {}

    def configure_from_config(self, logging_config: LoggingConfig) -> None:
        """Configure factory from a LoggingConfig instance."""
        self.configure(
            level=logging_config.level,
            format=logging_config.format,
            console_output=logging_config.console_output,
            file_path=str(logging_config.file_path) if logging_config.file_path else None,
            max_file_size=logging_config.max_file_size,
            backup_count=logging_config.backup_count,
        )

    def configure(self, **options: Any) -> None:
        """Apply settings and (re)configure stdlib logging and structlog.

        Unknown option names are ignored.
        """
        for key, value in options.items():
            if hasattr(self.settings, key):
                setattr(self.settings, key, value)

        self._remove_handlers()
        self._configure_stdlib_logging()
        self._configure_structlog()
        self.initialized = True

    def _ensure_configured(self) -> None:
        if self.initialized:
            return
        self._configure_stdlib_logging()
        if not structlog.is_configured():
            self._configure_structlog()
        self.initialized = True

    def _configure_stdlib_logging(self) -> None:
        level = getattr(logging, self.settings.level.upper(), logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        if self.settings.console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            self._add_handler(console_handler, level)

        if self.settings.file_path:
            file_path = Path(self.settings.file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=str(file_path),
                maxBytes=self.settings.max_file_size,
                backupCount=self.settings.backup_count,
                encoding="utf-8",
            )
            self._add_handler(file_handler, level)

    def _add_handler(self, handler: logging.Handler, level: int) -> None:
        handler.setLevel(level)
        handler.setFormatter(get_formatter(self.settings.format))
        logging.getLogger().addHandler(handler)
        self._handlers.append(handler)

    def _remove_handlers(self) -> None:
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()

    def _configure_structlog(self) -> None:
        processors: List[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if self.settings.format.lower() == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @property
    def handlers(self) -> List[logging.Handler]:
        return list(self._handlers)

    def get_logger(self, name: str, *, level: Optional[str] = None) -> StructuredLogger:
        """Get or create a structured logger.

        Args:
            name: Logger name (typically module name)
            level: Override default log level

        Returns:
            StructuredLogger instance
        """
        self._ensure_configured()

        cache_key = f"{name}_{level}"
        if cache_key not in self._loggers:
            self._loggers[cache_key] = StructuredLogger(
                name=name,
                level=level or self.settings.level,
                enable_correlation=self.settings.correlation_ids,
            )
        return self._loggers[cache_key]

    def get_performance_logger(self, name: str, *, auto_log: bool = True) -> PerformanceLogger:
        """Get or create a performance logger.

        Args:
            name: Logger name
            auto_log: Whether to log each timing result

        Returns:
            PerformanceLogger instance
        """
        cache_key = f"{name}_{auto_log}"
        if cache_key not in self._performance_loggers:
            self._performance_loggers[cache_key] = PerformanceLogger(
                name=name,
                auto_log=auto_log,
                logger=self.get_logger(f"perf.{name}"),
            )
        return self._performance_loggers[cache_key]

    def shutdown(self) -> None:
        """Remove installed handlers and forget cached loggers."""
        self._remove_handlers()
        self._loggers.clear()
        self._performance_loggers.clear()
        self.initialized = False

    def __repr__(self) -> str:
        return (
            f"LoggerFactory(level={self.settings.level!r}, "
            f"format={self.settings.format!r}, "
            f"initialized={self.initialized})"
        )


# Global logger factory instance
_global_factory = LoggerFactory()


def configure_logging(
    *,
    level: str = "INFO",
    format: str = "json",
    console_output: bool = True,
    file_path: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Configure dbviewer logging system globally.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (json, text)
        console_output: Enable console output
        file_path: Optional rotating log file
        **kwargs: Additional LoggerSettings fields
    """
    _global_factory.configure(
        level=level,
        format=format,
        console_output=console_output,
        file_path=file_path,
        **kwargs,
    )


def get_logger(name: str, *, level: Optional[str] = None) -> StructuredLogger:
    """Get or create a structured logger using the global factory."""
    return _global_factory.get_logger(name, level=level)


def get_performance_logger(name: str, *, auto_log: bool = True) -> PerformanceLogger:
    """Get or create a performance logger using the global factory.

    Example:
        >>> perf_logger = get_performance_logger("adapter.postgresql")
        >>> with perf_logger.measure("execute_query"):
        ...     await run()
    """
    return _global_factory.get_performance_logger(name, auto_log=auto_log)


def get_factory() -> LoggerFactory:
    return _global_factory


def shutdown_logging() -> None:
    """Shutdown the global logging system and clean up resources."""
    _global_factory.shutdown()
