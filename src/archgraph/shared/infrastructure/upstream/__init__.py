"""
Record sources for ArchGraph.
"""

from ...config.settings import get_settings
from .base import RecordSource
from .core_client import CoreServiceClient
from .memory import InMemoryRecordSource


def create_record_source() -> RecordSource:
    """
    Create the configured record source.

    Uses the JSON snapshot when ``ARCHGRAPH_RECORDS_FILE`` is set,
    otherwise the core service HTTP client.
    """
    config = get_settings().upstream_config
    if config['records_file']:
        return InMemoryRecordSource.from_json_file(config['records_file'])
    return CoreServiceClient(base_url=config['base_url'], timeout=config['timeout'])


__all__ = [
    "RecordSource",
    "CoreServiceClient",
    "InMemoryRecordSource",
    "create_record_source",
]
