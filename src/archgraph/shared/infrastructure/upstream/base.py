"""
Record source interface.

A record source returns a complete snapshot of the records the diagram
services work on. Sources are synchronous and either return everything
or raise; there is no partial or paginated retrieval.
"""

from abc import ABC, abstractmethod
from typing import List

from ...models.records import SystemRecord, CapabilityAssignmentRecord, CapabilityTuple


class RecordSource(ABC):
    """Abstract base class for record sources."""

    @abstractmethod
    def get_system_dependencies(self) -> List[SystemRecord]:
        """Return every system record with its integration flows."""
        pass

    @abstractmethod
    def get_business_capabilities(self) -> List[CapabilityAssignmentRecord]:
        """Return every system's business capability placements."""
        pass

    @abstractmethod
    def get_capability_catalog(self) -> List[CapabilityTuple]:
        """Return every known L1/L2/L3 capability tuple."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass
