"""
Metrics collection and monitoring for ArchGraph.
"""

import time
import threading
from typing import Dict, Any, List, Optional, Union
from collections import defaultdict, deque
from dataclasses import dataclass, field
from functools import wraps

from ...config.settings import get_settings


@dataclass
class Metric:
    """Represents a single metric measurement."""

    name: str
    value: Union[int, float]
    timestamp: float
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def age_seconds(self) -> float:
        """Get age of metric in seconds."""
        return time.time() - self.timestamp


class MetricsCollector:
    """
    Collects request and diagram-generation metrics.

    Thread-safe; keeps a bounded history per metric name.
    """

    def __init__(self, max_history: Optional[int] = None, enabled: Optional[bool] = None):
        """Initialize metrics collector."""
        config = get_settings().monitoring_config
        self.enabled = config['enabled'] if enabled is None else enabled
        self.max_history = max_history or config['max_history']

        self._lock = threading.RLock()
        self._metrics: Dict[str, deque] = defaultdict(lambda: deque(maxlen=self.max_history))
        self._counters: Dict[str, int] = defaultdict(int)
        self._gauges: Dict[str, float] = defaultdict(float)
        self._timers: Dict[str, deque] = defaultdict(lambda: deque(maxlen=self.max_history))

    def counter(self, name: str, value: int = 1, tags: Dict[str, str] = None) -> None:
        """
        Increment a counter metric.

        Args:
            name: Counter name
            value: Increment value
            tags: Optional tags
        """
        if not self.enabled:
            return
        with self._lock:
            self._counters[name] += value
            self._metrics[name].append(Metric(name, self._counters[name], time.time(), tags or {}))

    def gauge(self, name: str, value: float, tags: Dict[str, str] = None) -> None:
        """Set a gauge metric value."""
        if not self.enabled:
            return
        with self._lock:
            self._gauges[name] = value
            self._metrics[name].append(Metric(name, value, time.time(), tags or {}))

    def timer(self, name: str, duration_seconds: float, tags: Dict[str, str] = None) -> None:
        """Record a timing metric."""
        if not self.enabled:
            return
        with self._lock:
            self._timers[name].append(duration_seconds)
            self._metrics[name].append(Metric(name, duration_seconds, time.time(), tags or {}))

    def get_counter(self, name: str) -> int:
        """Get current counter value."""
        return self._counters.get(name, 0)

    def get_gauge(self, name: str) -> float:
        """Get current gauge value."""
        return self._gauges.get(name, 0.0)

    def get_timer_stats(self, name: str) -> Dict[str, float]:
        """Get timer statistics."""
        timings = sorted(self._timers.get(name, []))

        if not timings:
            return {'count': 0, 'mean': 0.0, 'min': 0.0, 'max': 0.0, 'p95': 0.0}

        count = len(timings)
        return {
            'count': count,
            'mean': sum(timings) / count,
            'min': timings[0],
            'max': timings[-1],
            'p95': timings[min(int(0.95 * count), count - 1)],
        }

    def get_metric_history(self, name: str, limit: int = 100) -> List[Metric]:
        """Get recent history for a metric."""
        with self._lock:
            metrics = list(self._metrics.get(name, []))
            return metrics[-limit:] if limit else metrics

    def get_all_metrics(self) -> Dict[str, Any]:
        """Get all current metric values."""
        with self._lock:
            return {
                'counters': dict(self._counters),
                'gauges': dict(self._gauges),
                'timers': {name: self.get_timer_stats(name) for name in self._timers},
            }

    def record_api_request(self,
                           endpoint: str,
                           method: str,
                           duration_seconds: float,
                           status_code: int) -> None:
        """Record API request metrics."""
        tags = {
            'endpoint': endpoint,
            'method': method,
            'status_code': str(status_code)
        }

        self.counter('api_requests_total', tags=tags)
        self.timer('api_request_duration', duration_seconds, tags=tags)

    def record_diagram(self, kind: str, node_count: int, link_count: int, duration_seconds: float) -> None:
        """Record a generated diagram or tree."""
        tags = {'kind': kind}

        self.counter(f'{kind}_generated_total', tags=tags)
        self.gauge(f'{kind}_last_node_count', node_count, tags=tags)
        self.gauge(f'{kind}_last_link_count', link_count, tags=tags)
        self.timer(f'{kind}_duration', duration_seconds, tags=tags)

    def reset(self) -> None:
        """Drop all collected values."""
        with self._lock:
            self._metrics.clear()
            self._counters.clear()
            self._gauges.clear()
            self._timers.clear()


def timed_operation(metric_name: str, tags: Dict[str, str] = None):
    """
    Decorator for timing operations.

    Args:
        metric_name: Name of the timing metric
        tags: Optional tags for the metric
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            metrics = get_metrics()
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
                metrics.timer(metric_name, time.time() - start_time, tags)
                return result

            except Exception as e:
                error_tags = (tags or {}).copy()
                error_tags['error'] = type(e).__name__
                metrics.timer(f"{metric_name}_error", time.time() - start_time, error_tags)
                raise

        return wrapper
    return decorator


# Global instance
_metrics_collector = None
_metrics_lock = threading.Lock()


def get_metrics() -> MetricsCollector:
    """
    Get the global metrics collector instance.

    Returns:
        MetricsCollector singleton instance
    """
    global _metrics_collector

    if _metrics_collector is None:
        with _metrics_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()

    return _metrics_collector
