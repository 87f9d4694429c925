"""
Business capability tree endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends

from ...services.business_capabilities import BusinessCapabilityService
from ...shared import CapabilityAssignmentRecord, CapabilityTree
from ..dependencies import get_business_capability_service

router = APIRouter(prefix="/business-capabilities")


@router.get("", response_model=List[CapabilityAssignmentRecord])
def list_business_capabilities(service: BusinessCapabilityService = Depends(get_business_capability_service)):
    """Raw capability assignment records."""
    return service.get_business_capabilities()


@router.get("/all", response_model=CapabilityTree)
def capability_tree(service: BusinessCapabilityService = Depends(get_business_capability_service)):
    """Global capability tree including unreferenced catalog capabilities."""
    return service.get_capability_tree()


@router.get("/{system_code}", response_model=CapabilityTree)
def system_capability_tree(system_code: str,
                           service: BusinessCapabilityService = Depends(get_business_capability_service)):
    """Capability tree of one system; empty for an unknown system."""
    return service.get_system_capability_tree(system_code)
