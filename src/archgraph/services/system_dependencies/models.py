"""
Value objects for integration graph construction and path finding.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ...shared.models.records import IntegrationFlow


PRODUCER_SUFFIX = "-P"
CONSUMER_SUFFIX = "-C"


class Side(str, Enum):
    """Which side of a flow a diagram node sits on."""
    PRODUCER = "P"
    CONSUMER = "C"

    @property
    def suffix(self) -> str:
        return PRODUCER_SUFFIX if self is Side.PRODUCER else CONSUMER_SUFFIX


@dataclass(frozen=True)
class NodeRef:
    """
    Diagram node identity: a system code plus the side it appears on.

    The diagram's primary system has no side and renders as its bare code.
    """

    code: Optional[str]
    side: Optional[Side] = None

    @property
    def node_id(self) -> str:
        if self.side is None:
            return self.code
        return f"{self.code}{self.side.suffix}"


@dataclass(frozen=True)
class FlowDirection:
    """Producer and consumer of one flow, seen from a diagram's primary system."""

    producer: NodeRef
    consumer: NodeRef


@dataclass(frozen=True)
class PathSegment:
    """One hop of a path with the flow that created it."""

    source: str
    target: str
    middleware: Optional[str]
    flow: IntegrationFlow


@dataclass(frozen=True)
class Path:
    """A simple path from a start system to an end system."""

    segments: Tuple[PathSegment, ...]

    @property
    def systems(self) -> Tuple[str, ...]:
        """Ordered systems visited, start and end included."""
        if not self.segments:
            return ()
        return (self.segments[0].source,) + tuple(s.target for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)
