"""
FastAPI dependency injection for API routes.

Provides:
  - ``get_record_source``: a request-scoped record source, closed after use
  - service dependencies built on top of it

Tests replace ``get_record_source`` through ``app.dependency_overrides``.
"""

from typing import Generator

from fastapi import Depends

from ..shared import RecordSource, create_record_source
from ..services.system_dependencies import SystemDependencyService
from ..services.business_capabilities import BusinessCapabilityService


def get_record_source() -> Generator[RecordSource, None, None]:
    """
    Request-scoped record source dependency.

    Creates the configured source, yields it for the endpoint to use and
    closes it when the request completes, even if the endpoint raises.
    """
    source = create_record_source()
    try:
        yield source
    finally:
        source.close()


def get_system_dependency_service(
    source: RecordSource = Depends(get_record_source),
) -> SystemDependencyService:
    return SystemDependencyService(source)


def get_business_capability_service(
    source: RecordSource = Depends(get_record_source),
) -> BusinessCapabilityService:
    return BusinessCapabilityService(source)
