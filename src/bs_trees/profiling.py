"""Operation timing for binary search trees."""

import time
import functools
from collections import defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterator, Optional
import statistics

from bs_trees.base import BSTreeError

# Number of most recent timings kept per operation for the median
SAMPLE_LIMIT = 1024


@dataclass
class OperationMetrics:
    """
    Running timings of one tree operation.

    Count, total, min and max cover every successful call. Only the last
    `sample_limit` timings are retained, so the median describes recent
    calls and memory stays constant however long tracking runs. Calls that
    end in a tree error (duplicate or missing key) are counted separately
    and not timed.
    """
    sample_limit: int = SAMPLE_LIMIT
    call_count: int = 0
    error_count: int = 0
    total_time: float = 0.0
    min_time: float = float('inf')
    max_time: float = 0.0
    recent: Deque[float] = field(init=False)

    def __post_init__(self):
        if self.sample_limit <= 0:
            raise ValueError("sample_limit must be > 0")
        self.recent = deque(maxlen=self.sample_limit)

    def record(self, elapsed: float) -> None:
        self.call_count += 1
        self.total_time += elapsed
        if elapsed < self.min_time:
            self.min_time = elapsed
        if elapsed > self.max_time:
            self.max_time = elapsed
        self.recent.append(elapsed)

    def record_error(self) -> None:
        self.error_count += 1

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count else 0.0

    @property
    def recent_median(self) -> float:
        return statistics.median(self.recent) if self.recent else 0.0


class PerformanceTracker:
    """
    Process-wide collector of tree operation timings; disabled until
    `enable()` is called or a `tracking()` block is entered.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self, sample_limit: int = SAMPLE_LIMIT):
        self.sample_limit = sample_limit
        self.metrics: Dict[str, OperationMetrics] = defaultdict(
            lambda: OperationMetrics(sample_limit=self.sample_limit)
        )
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        self.metrics.clear()

    @contextmanager
    def tracking(self) -> Iterator['PerformanceTracker']:
        """Enable tracking for the duration of a with-block."""
        previous = self.enabled
        self.enabled = True
        try:
            yield self
        finally:
            self.enabled = previous

    def report(self, sort_by: str = 'total_time') -> str:
        """
        One row per operation, sorted descending by an OperationMetrics
        attribute such as 'total_time', 'avg_time' or 'call_count'.
        """
        if not self.metrics:
            return "No performance data collected."

        header = (f"{'Operation':<32} {'Calls':>9} {'Errors':>7} {'Total (s)':>12} "
                  f"{'Avg (us)':>10} {'Median (us)':>12} {'Max (us)':>10}")
        rule = "-" * len(header)
        lines = ["Performance Metrics:", rule, header, rule]
        rows = sorted(self.metrics.items(), key=lambda kv: getattr(kv[1], sort_by), reverse=True)
        for operation, m in rows:
            lines.append(f"{operation:<32} {m.call_count:>9} {m.error_count:>7} {m.total_time:>12.6f} "
                         f"{m.avg_time * 1e6:>10.2f} {m.recent_median * 1e6:>12.2f} {m.max_time * 1e6:>10.2f}")
        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Time each call of the decorated function while tracking is enabled.

    Usable bare or as ``@track_performance(tag="name")``. A BSTreeError
    raised by the call is counted as an error of the operation and
    re-raised.
    """
    def decorator(func):
        operation = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except BSTreeError:
                tracker.metrics[operation].record_error()
                raise
            tracker.metrics[operation].record(time.perf_counter() - start)
            return result
        return wrapper

    if method is None:
        return decorator
    return decorator(method)
