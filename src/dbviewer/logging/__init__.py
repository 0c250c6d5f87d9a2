"""dbviewer structured logging framework.

Classes:
    StructuredLogger: Main structured logging interface
    PerformanceLogger: Operation timing and aggregates
    LoggerFactory: Logger creation and configuration

Example:
    >>> from dbviewer.logging import get_logger, get_performance_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Query finished", row_count=10)
    >>>
    >>> perf_logger = get_performance_logger("adapter.sqlite")
    >>> with perf_logger.measure("execute_query"):
    ...     pass
"""

from .factory import (
    LoggerFactory,
    LoggerSettings,
    configure_logging,
    get_factory,
    get_logger,
    get_performance_logger,
    shutdown_logging,
)
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .performance import OperationMetrics, PerformanceLogger, TimingContext
from .structured import LogContext, StructuredLogger

__all__ = [
    # Factory and configuration
    "LoggerFactory",
    "LoggerSettings",
    "configure_logging",
    "get_factory",
    "get_logger",
    "get_performance_logger",
    "shutdown_logging",

    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",

    # Performance logging
    "PerformanceLogger",
    "TimingContext",
    "OperationMetrics",

    # Structured logging
    "StructuredLogger",
    "LogContext",
]
