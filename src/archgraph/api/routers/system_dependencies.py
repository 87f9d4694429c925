"""
System dependency diagram endpoints.

Fixed paths (``/all``, ``/path``) are declared before ``/{system_code}`` so
they are not captured as system codes.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ...services.system_dependencies import SystemDependencyService
from ...shared import SystemRecord, SystemDiagram, PathDiagram, LandscapeDiagram
from ..dependencies import get_system_dependency_service

router = APIRouter(prefix="/system-dependencies")


@router.get("", response_model=List[SystemRecord])
def list_system_dependencies(service: SystemDependencyService = Depends(get_system_dependency_service)):
    """Raw system records as delivered by the core service."""
    return service.get_system_dependencies()


@router.get("/all", response_model=LandscapeDiagram)
def landscape_diagram(service: SystemDependencyService = Depends(get_system_dependency_service)):
    """Landscape diagram of every system with count-weighted links."""
    return service.generate_landscape_diagram()


@router.get("/path", response_model=PathDiagram)
def path_diagram(start: Optional[str] = Query(default=None, description="Source system code"),
                 end: Optional[str] = Query(default=None, description="Target system code"),
                 service: SystemDependencyService = Depends(get_system_dependency_service)):
    """
    Every simple integration path between two systems.

    Blank, identical or unknown codes are rejected with 400.
    """
    return service.find_all_paths_diagram(start, end)


@router.get("/{system_code}", response_model=SystemDiagram)
def system_diagram(system_code: str,
                   service: SystemDependencyService = Depends(get_system_dependency_service)):
    """Dependency diagram of one system."""
    return service.generate_system_diagram(system_code)
