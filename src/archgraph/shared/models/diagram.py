"""
Diagram and tree output models for ArchGraph.

These models are the shapes consumed by the graph-visualization front end:
- SystemDiagram / PathDiagram: nodes, detailed links and extended metadata
- LandscapeDiagram: nodes, count-weighted links and basic metadata
- CapabilityTree: a flat list of parent-linked capability nodes
"""

from datetime import date
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import Field

from .base import BaseModel


class NodeType(str, Enum):
    """Diagram node classification."""
    CORE_SYSTEM = "Core System"
    INCOME_SYSTEM = "IncomeSystem"
    EXTERNAL = "External"
    MIDDLEWARE = "Middleware"


class Criticality(str, Enum):
    """Criticality shown on diagram nodes."""
    MAJOR = "Major"
    STANDARD = "Standard-2"


class CapabilityLevel(str, Enum):
    """Levels of the business capability tree."""
    ROOT = "Root"
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    SYSTEM = "System"


class DiagramNode(BaseModel):
    """A system or middleware node in a diagram."""

    # Landscape diagrams keep a null counterpart code as a node id
    id: Optional[str] = Field(..., description="Node identifier, bare or role-suffixed")
    name: Optional[str] = Field(default=None, description="Display name")
    type: NodeType = Field(..., description="Node classification")
    criticality: Criticality = Field(default=Criticality.MAJOR, description="Node criticality")
    url: Optional[str] = Field(default=None, description="Optional detail link")


class DetailedLink(BaseModel):
    """A directed link carrying integration metadata."""

    source: Optional[str] = Field(..., description="Source node id")
    target: Optional[str] = Field(..., description="Target node id")
    pattern: Optional[str] = Field(default=None, description="Integration method")
    frequency: Optional[str] = Field(default=None, description="Integration frequency")
    role: Optional[str] = Field(default=None, description="PRODUCER or CONSUMER")
    middleware: Optional[str] = Field(default=None, description="Middleware the flow passes through")

    @property
    def signature(self) -> Tuple[Optional[str], ...]:
        """Exact-content identity used for deduplication."""
        return (self.source, self.target, self.pattern, self.frequency, self.role, self.middleware)


class SimpleLink(BaseModel):
    """A count-weighted link between two systems."""

    source: Optional[str] = Field(..., description="Source system code")
    target: Optional[str] = Field(..., description="Target system code")
    count: int = Field(default=1, ge=1, description="Number of flows between the pair")


class BasicMetadata(BaseModel):
    """Basic metadata for diagrams."""

    generated_date: date = Field(..., alias="generatedDate")


class ExtendedMetadata(BaseModel):
    """Extended metadata for detailed diagrams."""

    code: Optional[str] = Field(default=None, description="System code or path label")
    review: Optional[str] = Field(default=None, description="Review code or path count summary")
    integration_middleware: List[str] = Field(default_factory=list, alias="integrationMiddleware")
    generated_date: date = Field(..., alias="generatedDate")


class SystemDiagram(BaseModel):
    """Dependency diagram centred on one system."""

    nodes: List[DiagramNode] = Field(default_factory=list)
    links: List[DetailedLink] = Field(default_factory=list)
    metadata: ExtendedMetadata

    def get_node_by_id(self, node_id: str) -> Optional[DiagramNode]:
        """Get a node by its ID."""
        return next((n for n in self.nodes if n.id == node_id), None)


class PathDiagram(SystemDiagram):
    """Diagram of every simple path between two systems, middleware kept on links."""
    pass


class LandscapeDiagram(BaseModel):
    """Whole-landscape diagram with one link per system pair."""

    nodes: List[DiagramNode] = Field(default_factory=list)
    links: List[SimpleLink] = Field(default_factory=list)
    metadata: BasicMetadata


class CapabilityNode(BaseModel):
    """A node of the business capability tree."""

    id: str = Field(..., description="Path-qualified slug identifier")
    name: Optional[str] = Field(default=None, description="Display name")
    level: CapabilityLevel = Field(..., description="Tree level")
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    system_count: Optional[int] = Field(default=None, alias="systemCount")


class CapabilityTree(BaseModel):
    """Flat, parent-linked capability tree."""

    capabilities: List[CapabilityNode] = Field(default_factory=list)

    def children_of(self, node_id: Optional[str]) -> List[CapabilityNode]:
        """Get direct children of a node (``None`` for top-level nodes)."""
        return [n for n in self.capabilities if n.parent_id == node_id]
