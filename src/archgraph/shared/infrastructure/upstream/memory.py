"""
In-memory record source for development, testing and offline snapshots.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ...exceptions import ConfigurationError
from ...models.records import SystemRecord, CapabilityAssignmentRecord, CapabilityTuple
from .base import RecordSource
from .core_client import parse_records


class InMemoryRecordSource(RecordSource):
    """
    Record source backed by lists held in memory.

    Accepts either validated models or raw dictionaries in the core
    service's camelCase format. Each call returns a fresh list.
    """

    def __init__(self,
                 system_dependencies: Optional[Iterable[Union[SystemRecord, Dict[str, Any]]]] = None,
                 business_capabilities: Optional[Iterable[Union[CapabilityAssignmentRecord, Dict[str, Any]]]] = None,
                 capability_catalog: Optional[Iterable[Union[CapabilityTuple, Dict[str, Any]]]] = None):
        self._system_dependencies = self._coerce(system_dependencies, SystemRecord)
        self._business_capabilities = self._coerce(business_capabilities, CapabilityAssignmentRecord)
        self._capability_catalog = self._coerce(capability_catalog, CapabilityTuple)

    @staticmethod
    def _coerce(items, model) -> list:
        return [
            item if isinstance(item, model) else parse_records([item], model)[0]
            for item in items or []
        ]

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "InMemoryRecordSource":
        """
        Load a snapshot file.

        The file holds an object with ``systemDependencies``,
        ``businessCapabilities`` and ``capabilityCatalog`` lists; missing
        keys are treated as empty.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read records file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Records file {path} must contain a JSON object")

        return cls(
            system_dependencies=data.get("systemDependencies"),
            business_capabilities=data.get("businessCapabilities"),
            capability_catalog=data.get("capabilityCatalog"),
        )

    def get_system_dependencies(self) -> List[SystemRecord]:
        return list(self._system_dependencies)

    def get_business_capabilities(self) -> List[CapabilityAssignmentRecord]:
        return list(self._business_capabilities)

    def get_capability_catalog(self) -> List[CapabilityTuple]:
        return list(self._capability_catalog)
