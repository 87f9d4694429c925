"""
Integration graph construction and path finding.

The integration graph is a networkx MultiDiGraph keyed by canonical system
id. Every edge runs producer -> consumer and carries the canonical
middleware (or None) and the flow that declared it. Middleware is edge
metadata, not a routing hub.
"""

from typing import Iterable, Iterator, List, Optional, Set, Tuple

import networkx as nx

from ...shared import (
    get_logger, SystemRecord, IntegrationFlow, ValidationError,
    PRODUCER_ROLE, CONSUMER_ROLE, has_valid_middleware,
)
from .models import PathSegment, Path, PRODUCER_SUFFIX, CONSUMER_SUFFIX

logger = get_logger(__name__)


def normalize_node_id(node_id: Optional[str]) -> Optional[str]:
    """Strip a trailing -P/-C role suffix so both sides map to one node."""
    if node_id is not None and (node_id.endswith(PRODUCER_SUFFIX) or node_id.endswith(CONSUMER_SUFFIX)):
        return node_id[:-2]
    return node_id


def normalize_middleware(middleware: Optional[str]) -> Optional[str]:
    """Canonical middleware name, or None when the flow is direct."""
    if not has_valid_middleware(middleware):
        return None
    return normalize_node_id(middleware.strip())


def determine_producer_consumer(current_system: str,
                                flow: IntegrationFlow) -> Optional[Tuple[str, str]]:
    """
    Producer and consumer of a flow as canonical ids.

    Returns None when the counterpart role is neither PRODUCER nor CONSUMER.
    """
    counterpart = normalize_node_id(flow.counterpart_system_code)
    role = flow.counterpart_system_role

    if role == PRODUCER_ROLE:
        return counterpart, current_system
    if role == CONSUMER_ROLE:
        return current_system, counterpart
    return None


def build_integration_graph(records: Iterable[SystemRecord]) -> nx.MultiDiGraph:
    """
    Build the directed integration graph from system records.

    Args:
        records: Full system record set

    Returns:
        MultiDiGraph with one edge per distinct (producer, consumer, middleware, flow)
    """
    graph = nx.MultiDiGraph()
    skipped = 0

    for record in records:
        for flow in record.integration_flows:
            pair = determine_producer_consumer(record.system_code, flow)
            if pair is None:
                skipped += 1
                logger.debug(
                    f"Skipping flow {flow.id} of {record.system_code}: "
                    f"unrecognized role {flow.counterpart_system_role!r}"
                )
                continue

            producer, consumer = pair
            if producer is None or consumer is None:
                skipped += 1
                logger.debug(f"Skipping flow {flow.id} of {record.system_code}: no counterpart system code")
                continue

            middleware = normalize_middleware(flow.middleware)
            key = (middleware, flow)
            if not graph.has_edge(producer, consumer, key=key):
                graph.add_edge(producer, consumer, key=key, middleware=middleware, flow=flow)

    logger.debug(
        f"Integration graph built: {graph.number_of_nodes()} systems, "
        f"{graph.number_of_edges()} edges, {skipped} flows skipped"
    )
    return graph


def find_paths(graph: nx.MultiDiGraph, start: str, end: str) -> List[Path]:
    """
    Find every simple path from start to end.

    Depth-first search with backtracking: a system on the current path is
    never re-entered, and is released again once its branch is exhausted.
    The search keeps its own stack of frames, so path length is bounded by
    the graph rather than the interpreter's recursion limit. The number of
    paths is not capped.
    """
    if start == end:
        return [Path(())]
    if start not in graph:
        return []

    def out_edges(node: str) -> Iterator[Tuple[str, dict]]:
        for target, edges in graph.succ[node].items():
            for data in edges.values():
                yield target, data

    all_paths: List[Path] = []
    current_path: List[PathSegment] = []
    visited: Set[str] = {start}
    stack: List[Tuple[str, Iterator[Tuple[str, dict]]]] = [(start, out_edges(start))]

    while stack:
        current, edges = stack[-1]
        step = next(edges, None)
        if step is None:
            stack.pop()
            visited.remove(current)
            if current_path:
                current_path.pop()
            continue

        target, data = step
        if target in visited:
            continue

        current_path.append(PathSegment(current, target, data['middleware'], data['flow']))
        if target == end:
            all_paths.append(Path(tuple(current_path)))
            current_path.pop()
            continue

        visited.add(target)
        stack.append((target, out_edges(target)))

    return all_paths


def collect_system_codes(records: Iterable[SystemRecord]) -> Set[str]:
    """All record codes plus every counterpart code, raw and normalized."""
    systems: Set[str] = set()
    for record in records:
        systems.add(record.system_code)
        for flow in record.integration_flows:
            systems.add(flow.counterpart_system_code)
            systems.add(normalize_node_id(flow.counterpart_system_code))
    systems.discard(None)
    return systems


def validate_path_request(start: Optional[str], end: Optional[str]) -> None:
    """Reject blank or identical start/end codes."""
    if start is None or not start.strip():
        raise ValidationError("Start system cannot be null or empty")
    if end is None or not end.strip():
        raise ValidationError("End system cannot be null or empty")
    if start == end:
        raise ValidationError("Start and end systems cannot be the same")


def validate_systems_exist(start: str, end: str, records: Iterable[SystemRecord]) -> None:
    """Reject start/end codes that appear nowhere in the record set."""
    systems = collect_system_codes(records)
    if start not in systems:
        raise ValidationError(f"Start system '{start}' not found")
    if end not in systems:
        raise ValidationError(f"End system '{end}' not found")
