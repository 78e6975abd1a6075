"""
Performance timing utilities for the report generator.

Measures and logs how long the layout and rendering stages of a report take,
so slow payloads (very long detail lists, huge drilldown tables) are easy to
spot in the logs.

Usage:
    from performance_timing import timed_operation, time_layout

    with time_layout("summary", client="Acme") as timer:
        pages = build_pages(payload)
        timer.checkpoint("kpis_done", pages=flow.page_count)

    @timed_function("report_write")
    def write_report(path, data):
        ...

Log Output Format:
    PERF: [layout.summary] completed in 12.3ms {client=Acme}
    PERF: [layout.summary] checkpoint 'kpis_done' at 1.2ms {pages=0}
"""

import time
import logging
import functools
from typing import Any, Callable, Dict, Optional, TypeVar
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime

# Logger for performance timing messages
logger = logging.getLogger(__name__)

# Type variable for decorator
F = TypeVar('F', bound=Callable[..., Any])


@dataclass
class TimingResult:
    """Result of a timed operation with metadata."""
    operation: str
    duration_seconds: float
    start_time: datetime
    end_time: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)
    checkpoints: Dict[str, float] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds."""
        return self.duration_seconds * 1000


class PerformanceTimer:
    """
    Manual timer with named checkpoints.

    Example:
        timer = PerformanceTimer("layout.summary").start()
        draw_kpi_grid(flow, kpis)
        timer.checkpoint("kpis", pages=flow.page_count)
        timer.stop()
    """

    def __init__(self, operation: str, log_level: int = logging.INFO, **metadata: Any):
        """
        Initialize a performance timer.

        Args:
            operation: Name of the operation being timed.
            log_level: Logging level for timing messages (default: INFO).
            **metadata: Additional key-value pairs to include in log output.
        """
        self.operation = operation
        self.log_level = log_level
        self.metadata = metadata
        self._start_time: Optional[float] = None
        self._start_datetime: Optional[datetime] = None
        self._end_time: Optional[float] = None
        self._checkpoints: Dict[str, float] = {}

    def start(self) -> 'PerformanceTimer':
        """Start the timer. Returns self for method chaining."""
        self._start_time = time.perf_counter()
        self._start_datetime = datetime.now()
        logger.debug(f"PERF: [{self.operation}] started")
        return self

    def checkpoint(self, name: str, **checkpoint_metadata: Any) -> float:
        """
        Record a checkpoint with elapsed time from start.

        Returns:
            Elapsed time in seconds since start.

        Raises:
            RuntimeError: If the timer was never started.
        """
        if self._start_time is None:
            raise RuntimeError(f"Timer '{self.operation}' not started")

        elapsed = time.perf_counter() - self._start_time
        self._checkpoints[name] = elapsed
        logger.debug(
            f"PERF: [{self.operation}] checkpoint '{name}' at "
            f"{_format_duration(elapsed)}{_format_metadata(checkpoint_metadata)}"
        )
        return elapsed

    def stop(self) -> TimingResult:
        """
        Stop the timer and log the total duration.

        Raises:
            RuntimeError: If the timer was never started.
        """
        if self._start_time is None:
            raise RuntimeError(f"Timer '{self.operation}' not started")

        self._end_time = time.perf_counter()
        duration = self._end_time - self._start_time
        logger.log(
            self.log_level,
            f"PERF: [{self.operation}] completed in {_format_duration(duration)}{_format_metadata(self.metadata)}"
        )

        return TimingResult(
            operation=self.operation,
            duration_seconds=duration,
            start_time=self._start_datetime,
            end_time=datetime.now(),
            metadata=self.metadata,
            checkpoints=self._checkpoints.copy()
        )


@contextmanager
def timed_operation(operation: str, log_level: int = logging.INFO, **metadata: Any):
    """
    Context manager for timing a block of code.

    Yields:
        The running PerformanceTimer (usable for checkpoints).
    """
    timer = PerformanceTimer(operation, log_level=log_level, **metadata)
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()


def timed_function(operation: Optional[str] = None, log_level: int = logging.INFO) -> Callable[[F], F]:
    """
    Decorator for timing function execution.

    Args:
        operation: Name of the operation. If None, uses function name.
        log_level: Logging level for timing messages.
    """
    def decorator(func: F) -> F:
        op_name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with timed_operation(op_name, log_level=log_level):
                return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def _format_duration(seconds: float) -> str:
    """Format duration for log display."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def _format_metadata(metadata: Dict[str, Any]) -> str:
    """Format metadata dictionary for log display."""
    if not metadata:
        return ""
    items = [f"{k}={v}" for k, v in metadata.items()]
    return " {" + ", ".join(items) + "}"


# Convenience aliases for the report pipeline stages
def time_layout(report_type: str, **metadata: Any):
    """Context manager for laying out the pages of one report."""
    return timed_operation(f"layout.{report_type}", **metadata)


def time_pdf_render(report_type: str, **metadata: Any):
    """Context manager for replaying pages into PDF bytes."""
    return timed_operation(f"pdf_render.{report_type}", **metadata)
