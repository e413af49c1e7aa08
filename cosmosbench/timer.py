"""
Wall-clock timing of store operations.
"""

import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cosmosbench.errors import FailurePolicy
from cosmosbench.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class OperationTiming:
    """Outcome of one timed operation."""

    name: str
    elapsed: float  # seconds
    error: Optional[BaseException] = None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

    @property
    def succeeded(self) -> bool:
        return self.error is None


def format_duration(seconds: float) -> str:
    """Render a duration the way a human reads it (µs, ms or s)."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.1f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


def time_operation(
        operation: Callable[[], Any],
        name: str = "operation",
        policy: FailurePolicy = FailurePolicy.FATAL,
        log: Optional[logging.Logger] = None,
) -> OperationTiming:
    """
    Run a zero-argument operation to completion and measure how long it took.

    Args:
        operation: Deferred unit of work, run synchronously on this thread
        name: Label used in the log line
        policy: FATAL re-raises the operation's exception unmodified,
            RECOVERABLE logs it and records it on the returned timing
        log: Logger to report to, defaults to this module's logger

    Returns:
        OperationTiming with the elapsed wall-clock time
    """
    log = log or logger
    start_time = time.perf_counter()
    try:
        operation()
    except Exception as e:
        elapsed = time.perf_counter() - start_time
        log.error("%s failed after %s: %s", name, format_duration(elapsed), e)
        if policy is FailurePolicy.FATAL:
            raise
        return OperationTiming(name=name, elapsed=elapsed, error=e)

    elapsed = time.perf_counter() - start_time
    log.info("%s took %s", name, format_duration(elapsed))
    return OperationTiming(name=name, elapsed=elapsed)


def timed(name: str, log: Optional[logging.Logger] = None):
    """
    Decorator to log the wall-clock duration of every call.

    Exceptions propagate after the failure and its duration are logged.

    Args:
        name: Description of the operation being timed
        log: Logger instance to use
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            target = log or logger
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start_time
                target.error("%s failed after %s: %s", name, format_duration(duration), e)
                raise
            duration = time.perf_counter() - start_time
            target.info("%s took %s", name, format_duration(duration))
            return result

        return wrapper

    return decorator
