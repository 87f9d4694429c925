"""
Business Capability Service implementation.

Builds the global and per-system business capability trees from the
capability assignments and the capability catalog.
"""

import time
from typing import List, Optional

from ...shared import (
    get_logger, get_metrics, timed_operation, create_record_source,
    RecordSource, CapabilityAssignmentRecord, CapabilityTree,
    ArchGraphError, ValidationError, ServiceError,
)
from .tree import build_capability_tree, build_system_capability_tree


class BusinessCapabilityService:
    """Capability tree generation over the business capability records."""

    def __init__(self, source: Optional[RecordSource] = None):
        """
        Initialize the Business Capability service.

        Args:
            source: Record source to read from, defaults to the configured one
        """
        self.logger = get_logger(__name__)
        self.metrics = get_metrics()
        self.source = source or create_record_source()

        self.logger.info(f"Business Capability Service initialized with {type(self.source).__name__}")

    @timed_operation('business_capabilities_fetch')
    def get_business_capabilities(self) -> List[CapabilityAssignmentRecord]:
        """Return the raw capability assignment records."""
        records = self.source.get_business_capabilities()
        self.logger.debug(f"Fetched {len(records)} capability assignment records")
        return records

    def get_capability_tree(self) -> CapabilityTree:
        """
        Generate the global capability tree.

        Catalog capabilities nobody is placed under still appear, with a
        count of zero.
        """
        start_time = time.time()
        try:
            assignments = self.get_business_capabilities()
            catalog = self.source.get_capability_catalog()
            tree = build_capability_tree(assignments, catalog)

            self.metrics.record_diagram('capability_tree', len(tree.capabilities), 0, time.time() - start_time)
            self.logger.info(
                f"Generated capability tree with {len(tree.capabilities)} nodes from "
                f"{sum(len(r.business_capabilities) for r in assignments)} capability flows"
            )
            return tree

        except ArchGraphError as e:
            self.logger.warning(f"Capability tree generation failed: {e}")
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error generating capability tree: {e}")
            raise ServiceError(f"Capability tree generation failed: {e}") from e

    def get_system_capability_tree(self, system_code: str) -> CapabilityTree:
        """
        Generate the capability tree of one system.

        Args:
            system_code: System code

        Returns:
            Root -> L1 -> L2 -> L3 tree, empty for an unknown system

        Raises:
            ValidationError: blank system code
        """
        if system_code is None or not system_code.strip():
            raise ValidationError("System code must not be null or blank")

        start_time = time.time()
        try:
            tree = build_system_capability_tree(system_code, self.get_business_capabilities())
            if not tree.capabilities:
                self.logger.warning(f"No business capabilities found for system: {system_code}")

            self.metrics.record_diagram('system_capability_tree', len(tree.capabilities), 0,
                                        time.time() - start_time)
            self.logger.info(f"Generated capability tree for {system_code} with {len(tree.capabilities)} nodes")
            return tree

        except ArchGraphError as e:
            self.logger.warning(f"Capability tree for {system_code} failed: {e}")
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error generating capability tree for {system_code}: {e}")
            raise ServiceError(f"Capability tree generation failed for {system_code}: {e}") from e
