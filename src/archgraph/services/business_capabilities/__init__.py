"""
Business Capability Service for ArchGraph.

Aggregates per-system L1/L2/L3 capability placements into a path-qualified
tree with per-node counts, globally or for one system.
"""

from .service import BusinessCapabilityService
from .tree import (
    CapabilityTreeBuilder, slugify, capability_id, system_leaf_id,
    build_capability_tree, build_system_capability_tree,
)

__all__ = [
    "BusinessCapabilityService",
    "CapabilityTreeBuilder",
    "slugify",
    "capability_id",
    "system_leaf_id",
    "build_capability_tree",
    "build_system_capability_tree",
]
