"""
Shared infrastructure components for ArchGraph.

Provides:
- Record sources (core service HTTP client, in-memory snapshots)
- Logging and metrics collection
"""

from .upstream import RecordSource, CoreServiceClient, InMemoryRecordSource, create_record_source
from .monitoring.logger import get_logger, setup_logging
from .monitoring.metrics import MetricsCollector, get_metrics, timed_operation

__all__ = [
    # Upstream
    "RecordSource",
    "CoreServiceClient",
    "InMemoryRecordSource",
    "create_record_source",

    # Monitoring
    "get_logger",
    "setup_logging",
    "MetricsCollector",
    "get_metrics",
    "timed_operation",
]
