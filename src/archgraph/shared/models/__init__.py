"""
Shared data models for ArchGraph.
"""

from .base import BaseModel, RecordModel
from .records import (
    IntegrationFlow, SolutionDetails, SolutionOverview, SystemRecord,
    BusinessCapability, CapabilityAssignmentRecord, CapabilityTuple,
    PRODUCER_ROLE, CONSUMER_ROLE, has_valid_middleware,
)
from .diagram import (
    NodeType, Criticality, CapabilityLevel,
    DiagramNode, DetailedLink, SimpleLink, BasicMetadata, ExtendedMetadata,
    SystemDiagram, PathDiagram, LandscapeDiagram, CapabilityNode, CapabilityTree,
)

__all__ = [
    # Base models
    "BaseModel",
    "RecordModel",
    # Record models
    "IntegrationFlow",
    "SolutionDetails",
    "SolutionOverview",
    "SystemRecord",
    "BusinessCapability",
    "CapabilityAssignmentRecord",
    "CapabilityTuple",
    "PRODUCER_ROLE",
    "CONSUMER_ROLE",
    "has_valid_middleware",
    # Diagram models
    "NodeType",
    "Criticality",
    "CapabilityLevel",
    "DiagramNode",
    "DetailedLink",
    "SimpleLink",
    "BasicMetadata",
    "ExtendedMetadata",
    "SystemDiagram",
    "PathDiagram",
    "LandscapeDiagram",
    "CapabilityNode",
    "CapabilityTree",
]
