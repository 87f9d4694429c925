"""
System Dependency Service implementation.

Fetches system records from the configured record source and turns them
into single-system, path and landscape diagrams.
"""

import time
from datetime import date
from typing import List, Optional

from ...shared import (
    get_logger, get_metrics, timed_operation, create_record_source,
    RecordSource, SystemRecord, SystemDiagram, PathDiagram, LandscapeDiagram,
    ArchGraphError, ServiceError,
)
from .diagrams import SystemDiagramAssembler, PathDiagramAssembler, LandscapeDiagramAssembler
from .graph import build_integration_graph, find_paths, validate_path_request, validate_systems_exist


class SystemDependencyService:
    """
    Diagram generation over the system integration records.

    Every operation works on a fresh snapshot from the record source; no
    state is kept between calls.
    """

    def __init__(self, source: Optional[RecordSource] = None):
        """
        Initialize the System Dependency service.

        Args:
            source: Record source to read from, defaults to the configured one
        """
        self.logger = get_logger(__name__)
        self.metrics = get_metrics()
        self.source = source or create_record_source()

        self.logger.info(f"System Dependency Service initialized with {type(self.source).__name__}")

    @timed_operation('system_dependencies_fetch')
    def get_system_dependencies(self) -> List[SystemRecord]:
        """Return the raw system records."""
        records = self.source.get_system_dependencies()
        self.logger.debug(f"Fetched {len(records)} system records")
        return records

    def generate_system_diagram(self,
                                system_code: str,
                                generated_date: Optional[date] = None) -> SystemDiagram:
        """
        Generate the dependency diagram of one system.

        Args:
            system_code: Target system code
            generated_date: Date stamped in the metadata, defaults to today

        Returns:
            SystemDiagram centred on the system

        Raises:
            ValidationError: blank system code
            NotFoundError: unknown system code
            DataIntegrityError: incomplete solution overview on a located record
        """
        start_time = time.time()
        try:
            self.logger.info(f"Generating system diagram for {system_code}")
            records = self.get_system_dependencies()
            diagram = SystemDiagramAssembler(records).generate(system_code, generated_date)

            self.metrics.record_diagram('system_diagram', len(diagram.nodes), len(diagram.links),
                                        time.time() - start_time)
            self.logger.info(
                f"System diagram for {system_code}: {len(diagram.nodes)} nodes, {len(diagram.links)} links"
            )
            return diagram

        except ArchGraphError as e:
            self.logger.warning(f"System diagram for {system_code} failed: {e}")
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error generating system diagram for {system_code}: {e}")
            raise ServiceError(f"System diagram generation failed: {e}") from e

    def find_all_paths_diagram(self,
                               start_system: str,
                               end_system: str,
                               generated_date: Optional[date] = None) -> PathDiagram:
        """
        Find every simple path between two systems and return it as a diagram.

        Args:
            start_system: Source system code
            end_system: Target system code
            generated_date: Date stamped in the metadata, defaults to today

        Returns:
            PathDiagram, empty when the systems are not connected

        Raises:
            ValidationError: blank, identical or unknown start/end codes
        """
        start_time = time.time()
        try:
            validate_path_request(start_system, end_system)
            self.logger.info(f"Finding paths from {start_system} to {end_system}")

            records = self.get_system_dependencies()
            validate_systems_exist(start_system, end_system, records)

            graph = build_integration_graph(records)
            paths = find_paths(graph, start_system, end_system)
            diagram = PathDiagramAssembler(records).to_diagram(paths, start_system, end_system, generated_date)

            self.metrics.record_diagram('path_diagram', len(diagram.nodes), len(diagram.links),
                                        time.time() - start_time)
            self.metrics.gauge('path_diagram_last_path_count', len(paths))
            self.logger.info(f"Found {len(paths)} paths from {start_system} to {end_system}")
            return diagram

        except ArchGraphError as e:
            self.logger.warning(f"Path search from {start_system} to {end_system} failed: {e}")
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error finding paths from {start_system} to {end_system}: {e}")
            raise ServiceError(f"Path search failed: {e}") from e

    def generate_landscape_diagram(self, generated_date: Optional[date] = None) -> LandscapeDiagram:
        """
        Generate the landscape diagram of every system.

        Args:
            generated_date: Date stamped in the metadata, defaults to today

        Returns:
            LandscapeDiagram with one link per system pair
        """
        start_time = time.time()
        try:
            records = self.get_system_dependencies()
            diagram = LandscapeDiagramAssembler(records).generate(generated_date)

            self.metrics.record_diagram('landscape_diagram', len(diagram.nodes), len(diagram.links),
                                        time.time() - start_time)
            self.logger.info(
                f"Landscape diagram: {len(diagram.nodes)} nodes, {len(diagram.links)} links "
                f"from {len(records)} records"
            )
            return diagram

        except ArchGraphError as e:
            self.logger.warning(f"Landscape diagram failed: {e}")
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error generating landscape diagram: {e}")
            raise ServiceError(f"Landscape diagram generation failed: {e}") from e
