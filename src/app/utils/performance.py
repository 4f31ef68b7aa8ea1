import logging
import time
from typing import Optional

from prometheus_client import Histogram

logger = logging.getLogger(__name__)

# Prometheus Metrics
TASK_DURATION_SECONDS = Histogram(
    "marker_task_duration_seconds",
    "Time spent performing a marker task",
    ["task_name"]
)

TASK_POINT_COUNT = Histogram(
    "marker_task_point_count",
    "Number of points handled by a marker task",
    ["task_name"],
    buckets=(10, 50, 100, 250, 500, 1000, 2500, 5000, 10000),
)


class PerformanceMonitor:
    """Helper to measure wall time of a task and record it."""

    def __init__(self):
        self.start_time = 0.0
        self.end_time = 0.0

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

    def start(self):
        self.start_time = time.perf_counter()

    def stop(self):
        self.end_time = time.perf_counter()

    @property
    def duration(self):
        return self.end_time - self.start_time

    def report(self, label: str, count: Optional[int] = None) -> str:
        count_str = f" (N={count})" if count is not None else ""
        msg = f"[{label}]{count_str} Time: {self.duration:.4f}s"

        TASK_DURATION_SECONDS.labels(task_name=label).observe(self.duration)
        if count is not None:
            TASK_POINT_COUNT.labels(task_name=label).observe(count)

        logger.debug(msg)
        return msg
