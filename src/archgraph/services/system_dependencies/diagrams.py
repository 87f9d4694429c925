"""
Diagram assemblers for system dependency views.

- SystemDiagramAssembler: everything wired to one system, with producer and
  consumer sides split into separate nodes and middleware as nodes
- PathDiagramAssembler: the systems on discovered paths, middleware kept as
  link metadata
- LandscapeDiagramAssembler: one count-weighted link per system pair
"""

from datetime import date
from typing import Dict, FrozenSet, Iterable, List, Optional

from ...shared import (
    get_logger, SystemRecord, IntegrationFlow, ValidationError, NotFoundError,
    DiagramNode, DetailedLink, SimpleLink, ExtendedMetadata, BasicMetadata,
    SystemDiagram, PathDiagram, LandscapeDiagram, NodeType, Criticality,
    PRODUCER_ROLE, CONSUMER_ROLE,
)
from .graph import normalize_node_id
from .models import Side, NodeRef, FlowDirection, Path

logger = get_logger(__name__)

PATH_SEPARATOR = " → "
NO_PATHS_MESSAGE = "No paths found"
JSON_EXTENSION = ".json"


def format_path_count(path_count: int) -> str:
    """Human-readable path count for diagram metadata."""
    if path_count == 0:
        return NO_PATHS_MESSAGE
    if path_count == 1:
        return "1 path found"
    return f"{path_count} paths found"


def determine_flow_direction(primary_system: str,
                             current_system: str,
                             counterpart_system: Optional[str],
                             counterpart_role: Optional[str]) -> Optional[FlowDirection]:
    """
    Producer and consumer of a flow from the primary system's point of view.

    The primary system is never given a side. Returns None for unrecognized roles.
    """
    if counterpart_role not in (PRODUCER_ROLE, CONSUMER_ROLE):
        return None

    primary = NodeRef(primary_system)
    if primary_system == current_system:
        if counterpart_role == CONSUMER_ROLE:
            return FlowDirection(primary, NodeRef(counterpart_system, Side.CONSUMER))
        return FlowDirection(NodeRef(counterpart_system, Side.PRODUCER), primary)

    # Primary system is the counterpart of the current record
    if counterpart_role == CONSUMER_ROLE:
        return FlowDirection(NodeRef(current_system, Side.PRODUCER), primary)
    return FlowDirection(primary, NodeRef(current_system, Side.CONSUMER))


class _DiagramBuild:
    """Node and link accumulator for one diagram build."""

    def __init__(self):
        self.nodes: Dict[str, DiagramNode] = {}
        self.links: List[DetailedLink] = []
        self.middleware_ids: List[str] = []
        self._signatures = set()

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def add_node(self, node: DiagramNode) -> None:
        self.nodes.setdefault(node.id, node)

    def add_link(self, link: DetailedLink) -> None:
        if link.signature in self._signatures:
            return
        self._signatures.add(link.signature)
        self.links.append(link)


class _RecordIndex:
    """Lookup of system records by code; the first record for a code wins."""

    def __init__(self, records: Iterable[SystemRecord]):
        self.records: List[SystemRecord] = list(records)
        self._by_code: Dict[str, SystemRecord] = {}
        for record in self.records:
            self._by_code.setdefault(record.system_code, record)

    def get(self, system_code: Optional[str]) -> Optional[SystemRecord]:
        return self._by_code.get(system_code)

    def __contains__(self, system_code) -> bool:
        return system_code in self._by_code

    def system_type(self, system_code: Optional[str]) -> NodeType:
        """IncomeSystem when the system has its own record, External otherwise."""
        return NodeType.INCOME_SYSTEM if system_code in self._by_code else NodeType.EXTERNAL


class SystemDiagramAssembler:
    """Builds the dependency diagram of a single system."""

    def __init__(self, records: Iterable[SystemRecord]):
        self.index = _RecordIndex(records)

    def generate(self, system_code: str, generated_date: Optional[date] = None) -> SystemDiagram:
        """
        Generate the dependency diagram for one system.

        Core system keeps its bare code; every other system and middleware
        is suffixed -P or -C for the side it appears on.

        Args:
            system_code: Target system code
            generated_date: Date stamped in the metadata, defaults to today

        Returns:
            SystemDiagram with nodes, links and metadata

        Raises:
            ValidationError: blank system code
            NotFoundError: no record for the system code
            DataIntegrityError: a located record lacks solution details
        """
        if system_code is None or not system_code.strip():
            raise ValidationError("System code must not be null or blank")

        primary = self.index.get(system_code)
        if primary is None:
            raise NotFoundError(f"System not found: {system_code}")

        build = _DiagramBuild()
        build.add_node(DiagramNode(
            id=system_code,
            name=primary.solution_name(),
            type=NodeType.CORE_SYSTEM,
            criticality=Criticality.MAJOR,
        ))

        processed_links = set()
        for record in self.index.records:
            for flow in record.integration_flows:
                if system_code in (record.system_code, flow.counterpart_system_code):
                    self._process_flow(build, processed_links, system_code, record.system_code, flow)

        metadata = ExtendedMetadata(
            code=system_code,
            review=primary.review_code(),
            integration_middleware=list(build.middleware_ids),
            generated_date=generated_date or date.today(),
        )
        return SystemDiagram(nodes=list(build.nodes.values()), links=build.links, metadata=metadata)

    def _process_flow(self,
                      build: _DiagramBuild,
                      processed_links: set,
                      primary_system: str,
                      current_system: str,
                      flow: IntegrationFlow) -> None:
        direction = determine_flow_direction(
            primary_system, current_system,
            flow.counterpart_system_code, flow.counterpart_system_role,
        )
        if direction is None:
            logger.debug(
                f"Skipping flow {flow.id} of {current_system}: "
                f"unrecognized role {flow.counterpart_system_role!r}"
            )
            return

        producer_id = direction.producer.node_id
        consumer_id = direction.consumer.node_id

        link_id = f"{current_system}:{producer_id}->{consumer_id}:{flow.integration_method}"
        if link_id in processed_links:
            return
        processed_links.add(link_id)

        self._add_system_node(build, direction.producer, primary_system)
        self._add_system_node(build, direction.consumer, primary_system)

        # Middleware nodes keep the declared name; only path edges are canonical
        if not flow.has_valid_middleware:
            build.add_link(self._link(producer_id, consumer_id, flow, flow.counterpart_system_role))
            return

        middleware = flow.middleware
        # Suffix marks the side of the middleware the primary system sits on
        side = Side.CONSUMER if direction.producer.side is None else Side.PRODUCER
        middleware_id = NodeRef(middleware, side).node_id
        if not build.has_node(middleware_id):
            build.add_node(DiagramNode(
                id=middleware_id,
                name=middleware,
                type=NodeType.MIDDLEWARE,
                criticality=Criticality.STANDARD,
            ))
            build.middleware_ids.append(middleware_id)

        build.add_link(self._link(producer_id, middleware_id, flow, PRODUCER_ROLE, middleware))
        build.add_link(self._link(middleware_id, consumer_id, flow, CONSUMER_ROLE, middleware))

    def _add_system_node(self, build: _DiagramBuild, ref: NodeRef, primary_system: str) -> None:
        if ref.side is None or ref.code == primary_system or build.has_node(ref.node_id):
            return

        record = self.index.get(normalize_node_id(ref.code))
        if record is not None:
            name, node_type = record.solution_name(), NodeType.INCOME_SYSTEM
        else:
            name, node_type = ref.code, NodeType.EXTERNAL

        build.add_node(DiagramNode(
            id=ref.node_id,
            name=name,
            type=node_type,
            criticality=Criticality.MAJOR,
        ))

    @staticmethod
    def _link(source: str, target: str, flow: IntegrationFlow,
              role: Optional[str], middleware: Optional[str] = None) -> DetailedLink:
        return DetailedLink(
            source=source,
            target=target,
            pattern=flow.integration_method,
            frequency=flow.frequency,
            role=role,
            middleware=middleware,
        )


class PathDiagramAssembler:
    """Turns discovered paths into a diagram with direct system-to-system links."""

    def __init__(self, records: Iterable[SystemRecord]):
        self.index = _RecordIndex(records)

    def to_diagram(self,
                   paths: List[Path],
                   start_system: str,
                   end_system: str,
                   generated_date: Optional[date] = None) -> PathDiagram:
        """
        Convert paths to a diagram.

        Args:
            paths: Paths returned by find_paths
            start_system: Source system code
            end_system: Target system code
            generated_date: Date stamped in the metadata, defaults to today

        Returns:
            PathDiagram; empty nodes and links when no path exists
        """
        systems: Dict[str, None] = {}
        middleware_names: Dict[str, None] = {}
        build = _DiagramBuild()

        if not paths:
            logger.warning(f"No paths found from {start_system} to {end_system}")

        for path in paths:
            for segment in path.segments:
                systems.setdefault(segment.source)
                systems.setdefault(segment.target)
                if segment.middleware:
                    middleware_names.setdefault(segment.middleware)

                flow = segment.flow
                role = PRODUCER_ROLE if segment.source == normalize_node_id(flow.counterpart_system_code) else CONSUMER_ROLE
                build.add_link(DetailedLink(
                    source=segment.source,
                    target=segment.target,
                    pattern=flow.integration_method,
                    frequency=flow.frequency,
                    role=role,
                    middleware=segment.middleware,
                ))

        nodes = [self._path_node(system_id) for system_id in systems]
        metadata = ExtendedMetadata(
            code=f"{start_system}{PATH_SEPARATOR}{end_system}",
            review=format_path_count(len(paths)),
            integration_middleware=list(middleware_names),
            generated_date=generated_date or date.today(),
        )
        return PathDiagram(nodes=nodes, links=build.links, metadata=metadata)

    def _path_node(self, system_id: str) -> DiagramNode:
        record = self.index.get(system_id)
        return DiagramNode(
            id=system_id,
            name=record.solution_name_or(system_id) if record is not None else system_id,
            type=self.index.system_type(system_id),
            criticality=Criticality.MAJOR,
            url=f"{system_id}{JSON_EXTENSION}",
        )


class LandscapeDiagramAssembler:
    """Builds the whole-landscape diagram with count-weighted links."""

    def __init__(self, records: Iterable[SystemRecord]):
        self.records = list(records)

    def generate(self, generated_date: Optional[date] = None) -> LandscapeDiagram:
        """
        Generate the landscape diagram.

        A code first seen as a record is a Core System; a code first seen
        as a flow counterpart is External. Flows between the same two
        systems, in either direction, share one link and raise its count.
        """
        nodes: Dict[Optional[str], DiagramNode] = {}
        links: Dict[FrozenSet[Optional[str]], SimpleLink] = {}

        for record in self.records:
            if record.system_code not in nodes:
                nodes[record.system_code] = DiagramNode(
                    id=record.system_code,
                    name=record.solution_name(),
                    type=NodeType.CORE_SYSTEM,
                    criticality=Criticality.MAJOR,
                )

            for flow in record.integration_flows:
                counterpart = flow.counterpart_system_code
                pair_key = frozenset((record.system_code, counterpart))
                if pair_key in links:
                    links[pair_key].count += 1
                else:
                    links[pair_key] = SimpleLink(source=record.system_code, target=counterpart, count=1)

                if counterpart not in nodes:
                    nodes[counterpart] = DiagramNode(
                        id=counterpart,
                        name=counterpart,
                        type=NodeType.EXTERNAL,
                        criticality=Criticality.STANDARD,
                    )

        return LandscapeDiagram(
            nodes=list(nodes.values()),
            links=list(links.values()),
            metadata=BasicMetadata(generated_date=generated_date or date.today()),
        )
