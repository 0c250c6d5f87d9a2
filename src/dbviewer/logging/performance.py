"""Performance logging for dbviewer operations.

This module times adapter operations such as connects, queries and table
listings, logs the outcome and keeps simple per-operation aggregates.

Classes:
    TimingMetrics: A single timing measurement
    OperationMetrics: Aggregated measurements for one operation
    TimingContext: Context manager for operation timing
    PerformanceLogger: Main performance logging interface

Example:
    >>> perf_logger = PerformanceLogger("adapter.sqlite")
    >>> with perf_logger.measure("execute_query") as timer:
    ...     run_statement()
    >>> timer.duration_ms
    1.42
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

from .structured import StructuredLogger


@dataclass
class TimingMetrics:
    """Metrics for a single timing measurement."""
    operation: str
    start_time: float
    end_time: Optional[float] = None
    duration: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error: Optional[str] = None

    def complete(self, success: bool = True, error: Optional[str] = None) -> None:
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time
        self.success = success
        self.error = error

    @property
    def duration_ms(self) -> Optional[float]:
        return self.duration * 1000 if self.duration is not None else None

    @property
    def is_complete(self) -> bool:
        return self.end_time is not None


@dataclass
class OperationMetrics:
    """Aggregated performance metrics for an operation."""
    operation: str
    total_calls: int = 0
    failed_calls: int = 0
    total_duration: float = 0.0
    min_duration: Optional[float] = None
    max_duration: Optional[float] = None

    def add_timing(self, timing: TimingMetrics) -> None:
        if not timing.is_complete or timing.duration is None:
            return
        self.total_calls += 1
        if not timing.success:
            self.failed_calls += 1
        self.total_duration += timing.duration
        if self.min_duration is None or timing.duration < self.min_duration:
            self.min_duration = timing.duration
        if self.max_duration is None or timing.duration > self.max_duration:
            self.max_duration = timing.duration

    @property
    def avg_duration(self) -> Optional[float]:
        if not self.total_calls:
            return None
        return self.total_duration / self.total_calls

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "total_calls": self.total_calls,
            "failed_calls": self.failed_calls,
            "total_duration": self.total_duration,
            "min_duration": self.min_duration,
            "max_duration": self.max_duration,
            "avg_duration": self.avg_duration,
        }


class TimingContext:
    """Context manager for measuring operation timing.

    Example:
        >>> with TimingContext("list_tables") as timer:
        ...     tables = load_tables()
        >>> print(f"Listing took {timer.duration_ms:.2f}ms")
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[StructuredLogger] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.operation = operation
        self.logger = logger
        self.metadata = metadata or {}
        self._timing: Optional[TimingMetrics] = None

    @property
    def timing(self) -> Optional[TimingMetrics]:
        return self._timing

    @property
    def duration(self) -> Optional[float]:
        return self._timing.duration if self._timing else None

    @property
    def duration_ms(self) -> Optional[float]:
        return self._timing.duration_ms if self._timing else None

    def __enter__(self) -> "TimingContext":
        self._timing = TimingMetrics(
            operation=self.operation,
            start_time=time.perf_counter(),
            metadata=self.metadata,
        )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._timing is None:
            return

        success = exc_type is None
        error = str(exc_val) if exc_val else None
        self._timing.complete(success=success, error=error)

        if self.logger is None:
            return
        if success:
            self.logger.debug(
                "Operation completed",
                operation=self.operation,
                duration_ms=self._timing.duration_ms,
                **self.metadata,
            )
        else:
            self.logger.warning(
                "Operation failed",
                operation=self.operation,
                duration_ms=self._timing.duration_ms,
                error=error,
                **self.metadata,
            )


class PerformanceLogger:
    """Performance logger for adapter operations.

    Attributes:
        name: Logger name
        logger: Underlying structured logger
    """

    def __init__(
        self,
        name: str,
        *,
        auto_log: bool = True,
        track_metrics: bool = True,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        """Initialize performance logger.

        Args:
            name: Logger name
            auto_log: Whether to log each timing result
            track_metrics: Whether to keep aggregated metrics
            logger: Custom structured logger instance
        """
        self.name = name
        self.auto_log = auto_log
        self.track_metrics = track_metrics
        self.logger = logger or StructuredLogger(f"perf.{name}")
        self._metrics: Dict[str, OperationMetrics] = {}

    @contextmanager
    def measure(self, operation: str, **metadata: Any) -> Generator[TimingContext, None, None]:
        """Context manager for measuring operation performance.

        Args:
            operation: Operation name
            **metadata: Additional metadata logged with the result

        Yields:
            TimingContext for the operation
        """
        timing_context = TimingContext(
            operation=operation,
            logger=self.logger if self.auto_log else None,
            metadata=metadata,
        )
        try:
            with timing_context as ctx:
                yield ctx
        finally:
            if self.track_metrics and timing_context.timing:
                self._add_timing(timing_context.timing)

    def _add_timing(self, timing: TimingMetrics) -> None:
        if timing.operation not in self._metrics:
            self._metrics[timing.operation] = OperationMetrics(operation=timing.operation)
        self._metrics[timing.operation].add_timing(timing)

    def get_metrics(self, operation: str) -> Optional[OperationMetrics]:
        return self._metrics.get(operation)

    def reset_metrics(self, operation: Optional[str] = None) -> None:
        if operation is None:
            self._metrics.clear()
        else:
            self._metrics.pop(operation, None)

    def get_summary(self) -> Dict[str, Any]:
        """Summarize all tracked operations."""
        return {
            "logger": self.name,
            "operations": {name: m.to_dict() for name, m in self._metrics.items()},
            "total_calls": sum(m.total_calls for m in self._metrics.values()),
            "failed_calls": sum(m.failed_calls for m in self._metrics.values()),
        }

    def __repr__(self) -> str:
        return f"PerformanceLogger(name={self.name!r}, operations={len(self._metrics)})"
