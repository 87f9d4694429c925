"""
System Dependency Service for ArchGraph.

Builds the integration graph from system records and derives single-system,
path and landscape diagrams from it.
"""

from .service import SystemDependencyService
from .models import Side, NodeRef, FlowDirection, PathSegment, Path
from .graph import normalize_node_id, normalize_middleware, build_integration_graph, find_paths
from .diagrams import SystemDiagramAssembler, PathDiagramAssembler, LandscapeDiagramAssembler

__all__ = [
    "SystemDependencyService",
    "Side",
    "NodeRef",
    "FlowDirection",
    "PathSegment",
    "Path",
    "normalize_node_id",
    "normalize_middleware",
    "build_integration_graph",
    "find_paths",
    "SystemDiagramAssembler",
    "PathDiagramAssembler",
    "LandscapeDiagramAssembler",
]
