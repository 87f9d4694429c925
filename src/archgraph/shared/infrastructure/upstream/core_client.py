"""
Core Service API client.

Retrieves solution-review records over HTTP. Each call is a single blocking
GET; failures surface as UpstreamError without retrying.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import ValidationError as PydanticValidationError

from ...config.settings import get_settings
from ...exceptions import UpstreamError
from ...models.base import RecordModel
from ...models.records import SystemRecord, CapabilityAssignmentRecord, CapabilityTuple
from ..monitoring.logger import get_logger
from .base import RecordSource

T = TypeVar('T', bound=RecordModel)

SYSTEM_DEPENDENCIES_PATH = "/api/v1/solution-review/system-dependencies"
BUSINESS_CAPABILITIES_PATH = "/api/v1/solution-review/business-capabilities"
CAPABILITY_CATALOG_PATH = "/api/v1/dropdowns/business-capabilities"


class CoreServiceClient(RecordSource):
    """Client for the core service's solution-review endpoints."""

    def __init__(self,
                 base_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            base_url: Core service base URL, defaults to the configured URL
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        config = get_settings().upstream_config
        self.base_url = (base_url or config['base_url']).rstrip('/')
        self.timeout = timeout or config['timeout']
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        self.logger = get_logger(__name__)

    def get_system_dependencies(self) -> List[SystemRecord]:
        """Retrieve all system dependencies from the core service."""
        return self._get_list(SYSTEM_DEPENDENCIES_PATH, SystemRecord)

    def get_business_capabilities(self) -> List[CapabilityAssignmentRecord]:
        """Retrieve all business capability solution reviews."""
        return self._get_list(BUSINESS_CAPABILITIES_PATH, CapabilityAssignmentRecord)

    def get_capability_catalog(self) -> List[CapabilityTuple]:
        """Retrieve the full business capability dropdown catalog."""
        return self._get_list(CAPABILITY_CATALOG_PATH, CapabilityTuple)

    def _get_list(self, path: str, model: Type[T]) -> List[T]:
        url = f"{self.base_url}{path}"
        self.logger.info(f"Calling core service: GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            self.logger.error(f"Core service call failed for {url}: {e}")
            raise UpstreamError(f"Core service request to {path} failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Core service returned invalid JSON for {path}: {e}") from e

        records = self._parse(payload or [], model, path)
        self.logger.info(f"Retrieved {len(records)} records from {path}")
        return records

    @staticmethod
    def _parse(payload: Any, model: Type[T], path: str) -> List[T]:
        if not isinstance(payload, list):
            raise UpstreamError(f"Core service returned {type(payload).__name__} for {path}, expected a list")
        try:
            return [model.model_validate(item) for item in payload]
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed record from {path}: {e}") from e

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __repr__(self) -> str:
        return f"CoreServiceClient(base_url={self.base_url!r})"


def parse_records(items: List[Dict[str, Any]], model: Type[T], origin: str = "snapshot") -> List[T]:
    """Validate raw dictionaries into record models, raising UpstreamError on bad data."""
    return CoreServiceClient._parse(items, model, origin)
