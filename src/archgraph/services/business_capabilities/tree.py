"""
Business capability tree construction.

Node ids are path-qualified: every id carries the ids of all its ancestors,
so the same capability name under two different parents yields two nodes.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from ...shared import (
    get_logger, CapabilityAssignmentRecord, BusinessCapability, CapabilityTuple,
    CapabilityNode, CapabilityTree, CapabilityLevel,
)

logger = get_logger(__name__)

UNDER_SEPARATOR = "-under-"
UNKNOWN_SOLUTION = "Unknown Solution"

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one hyphen, trim hyphens."""
    return _NON_ALPHANUMERIC.sub("-", name.lower()).strip("-")


def capability_id(level: CapabilityLevel, name: str, parent_id: Optional[str] = None) -> str:
    """Id of a capability node, qualified by its parent's id when it has one."""
    base = f"{CapabilityLevel(level).value.lower()}-{slugify(name)}"
    return f"{base}{UNDER_SEPARATOR}{parent_id}" if parent_id else base


def system_leaf_id(system_code: str, l3_id: str) -> str:
    """Id of a system leaf placed under an L3 capability."""
    return f"{slugify(system_code)}{UNDER_SEPARATOR}{l3_id}"


def root_id(system_code: str) -> str:
    """Id of the root node of a per-system tree."""
    return f"{CapabilityLevel.ROOT.value.lower()}-{slugify(system_code)}"


def _complete_levels(l1: Optional[str], l2: Optional[str], l3: Optional[str]) -> bool:
    return all(level is not None and level.strip() for level in (l1, l2, l3))


class CapabilityTreeBuilder:
    """
    Accumulates capability nodes and computes their counts.

    A builder is used for one tree and then discarded.
    """

    def __init__(self):
        self._nodes: Dict[str, CapabilityNode] = {}

    def _ensure(self, node_id: str, name: Optional[str], level: CapabilityLevel,
                parent_id: Optional[str]) -> str:
        if node_id not in self._nodes:
            self._nodes[node_id] = CapabilityNode(
                id=node_id,
                name=name,
                level=level,
                parent_id=parent_id,
            )
        return node_id

    def add_root(self, system_code: str, name: Optional[str]) -> str:
        """Ensure the root node of a per-system tree."""
        return self._ensure(root_id(system_code), name, CapabilityLevel.ROOT, None)

    def add_chain(self, l1: str, l2: str, l3: str, parent_id: Optional[str] = None) -> str:
        """
        Ensure the L1 -> L2 -> L3 chain exists.

        Args:
            l1, l2, l3: Capability names
            parent_id: Optional node the L1 capability hangs from

        Returns:
            Id of the L3 node
        """
        l1_id = self._ensure(capability_id(CapabilityLevel.L1, l1, parent_id), l1, CapabilityLevel.L1, parent_id)
        l2_id = self._ensure(capability_id(CapabilityLevel.L2, l2, l1_id), l2, CapabilityLevel.L2, l1_id)
        return self._ensure(capability_id(CapabilityLevel.L3, l3, l2_id), l3, CapabilityLevel.L3, l2_id)

    def add_catalog_entry(self, entry: CapabilityTuple) -> Optional[str]:
        """Add an L1 -> L2 -> L3 chain from the catalog; incomplete entries are skipped."""
        if not _complete_levels(entry.l1, entry.l2, entry.l3):
            logger.warning(f"Incomplete catalog entry: L1={entry.l1}, L2={entry.l2}, L3={entry.l3}")
            return None
        return self.add_chain(entry.l1, entry.l2, entry.l3)

    def add_assignment(self, record: CapabilityAssignmentRecord, capability: BusinessCapability) -> Optional[str]:
        """
        Add an L1 -> L2 -> L3 -> System chain for one placement of a system.

        Returns:
            Id of the system leaf, or None when the placement is incomplete
        """
        l1, l2, l3 = capability.l1_capability, capability.l2_capability, capability.l3_capability
        if not _complete_levels(l1, l2, l3):
            logger.warning(
                f"Incomplete capability flow for system {record.system_code}: L1={l1}, L2={l2}, L3={l3}"
            )
            return None

        l3_id = self.add_chain(l1, l2, l3)
        return self._ensure(
            system_leaf_id(record.system_code, l3_id),
            record.solution_name_or(UNKNOWN_SOLUTION),
            CapabilityLevel.SYSTEM,
            l3_id,
        )

    def build(self, leaf_counts: Optional[Dict[str, int]] = None) -> CapabilityTree:
        """
        Produce the tree with counts filled in.

        Every non-System node counts its distinct immediate children, unless
        ``leaf_counts`` names it. An overridden count is taken as given even
        when the node has no children in this tree; the per-system tree uses
        this to count its root system once under each L3 without emitting
        a System leaf.
        """
        child_counts: Dict[str, int] = {}
        for node in self._nodes.values():
            if node.parent_id is not None:
                child_counts[node.parent_id] = child_counts.get(node.parent_id, 0) + 1

        overrides = leaf_counts or {}
        for node in self._nodes.values():
            if node.level == CapabilityLevel.SYSTEM:
                node.system_count = None
            else:
                node.system_count = overrides.get(node.id, child_counts.get(node.id, 0))

        return CapabilityTree(capabilities=list(self._nodes.values()))


def build_capability_tree(assignments: Iterable[CapabilityAssignmentRecord],
                          catalog: Iterable[CapabilityTuple] = ()) -> CapabilityTree:
    """
    Build the global capability tree.

    Catalog entries are added first so the whole taxonomy is present even
    where no system is placed; each system placement then adds one leaf.
    """
    builder = CapabilityTreeBuilder()
    for entry in catalog:
        builder.add_catalog_entry(entry)

    for record in assignments:
        for capability in record.business_capabilities:
            builder.add_assignment(record, capability)

    return builder.build()


def build_system_capability_tree(system_code: str,
                                 assignments: Iterable[CapabilityAssignmentRecord]) -> CapabilityTree:
    """
    Build the Root(system) -> L1 -> L2 -> L3 tree for one system.

    The system is already the root, so no System leaves are added and each
    L3 reports a system count of 1. Returns an empty tree when the system
    has no assignment record.
    """
    records = [record for record in assignments if record.system_code == system_code]
    if not records:
        return CapabilityTree()

    builder = CapabilityTreeBuilder()
    root = builder.add_root(system_code, records[0].solution_name_or(system_code))

    l3_ids: List[str] = []
    for record in records:
        for capability in record.business_capabilities:
            levels: Tuple[Optional[str], ...] = (
                capability.l1_capability, capability.l2_capability, capability.l3_capability
            )
            if not _complete_levels(*levels):
                logger.warning(f"Incomplete capability flow for system {system_code}: L1={levels[0]}, "
                               f"L2={levels[1]}, L3={levels[2]}")
                continue
            l3_ids.append(builder.add_chain(*levels, parent_id=root))

    return builder.build(leaf_counts={l3_id: 1 for l3_id in l3_ids})
