"""
Shared components for ArchGraph.

Contains common models, utilities, and infrastructure used across all services:

- Record and diagram data models
- Centralized configuration management
- Shared exception hierarchy
- Infrastructure services (record sources, logging, metrics)
"""

from .models import *
from .config import *
from .exceptions import *
from .infrastructure import *

__all__ = [
    # From models
    "BaseModel", "RecordModel",
    "IntegrationFlow", "SolutionDetails", "SolutionOverview", "SystemRecord",
    "BusinessCapability", "CapabilityAssignmentRecord", "CapabilityTuple",
    "PRODUCER_ROLE", "CONSUMER_ROLE", "has_valid_middleware",
    "NodeType", "Criticality", "CapabilityLevel",
    "DiagramNode", "DetailedLink", "SimpleLink", "BasicMetadata", "ExtendedMetadata",
    "SystemDiagram", "PathDiagram", "LandscapeDiagram", "CapabilityNode", "CapabilityTree",

    # From config
    "Settings", "get_settings",

    # From exceptions
    "ArchGraphError", "ConfigurationError", "ValidationError", "NotFoundError",
    "DataIntegrityError", "UpstreamError", "ServiceError",

    # From infrastructure
    "RecordSource", "CoreServiceClient", "InMemoryRecordSource", "create_record_source",
    "get_logger", "setup_logging", "MetricsCollector", "get_metrics", "timed_operation",
]
