"""
Record models for data retrieved from the core service.

These models mirror the solution-review payloads:
- SystemRecord: one system with its solution overview and integration flows
- CapabilityAssignmentRecord: one system with its business capability placements
- CapabilityTuple: one entry of the business capability dropdown catalog
"""

from typing import List, Optional
from pydantic import Field, field_validator

from .base import RecordModel
from ..exceptions import DataIntegrityError


PRODUCER_ROLE = "PRODUCER"
CONSUMER_ROLE = "CONSUMER"
NONE_MIDDLEWARE = "NONE"


class IntegrationFlow(RecordModel):
    """
    One directed integration relationship reported by a system record.

    Flows are immutable and hashable so they can key graph edges.
    """

    id: Optional[str] = Field(default=None, description="Flow identifier")
    component_name: Optional[str] = Field(default=None, alias="componentName", description="Component name")
    counterpart_system_code: Optional[str] = Field(
        default=None, alias="counterpartSystemCode", description="Code of the system on the other side"
    )
    counterpart_system_role: Optional[str] = Field(
        default=None, alias="counterpartSystemRole", description="PRODUCER or CONSUMER"
    )
    integration_method: Optional[str] = Field(default=None, alias="integrationMethod", description="Integration pattern")
    frequency: Optional[str] = Field(default=None, description="Integration frequency")
    purpose: Optional[str] = Field(default=None, description="Free-text purpose")
    middleware: Optional[str] = Field(default=None, description="Middleware name, NONE or blank when direct")

    class Config:
        frozen = True

    @property
    def has_valid_middleware(self) -> bool:
        """True when the flow passes through a named middleware."""
        return has_valid_middleware(self.middleware)


class SolutionDetails(RecordModel):
    """Naming and ownership details of a solution review."""

    solution_name: Optional[str] = Field(default=None, alias="solutionName")
    project_name: Optional[str] = Field(default=None, alias="projectName")
    solution_review_code: Optional[str] = Field(default=None, alias="solutionReviewCode")
    solution_architect_name: Optional[str] = Field(default=None, alias="solutionArchitectName")
    delivery_project_manager_name: Optional[str] = Field(default=None, alias="deliveryProjectManagerName")
    it_business_partner: Optional[str] = Field(default=None, alias="itBusinessPartner")


class SolutionOverview(RecordModel):
    """Business metadata of a solution review."""

    id: Optional[str] = None
    solution_details: Optional[SolutionDetails] = Field(default=None, alias="solutionDetails")
    reviewed_by: Optional[str] = Field(default=None, alias="reviewedBy")
    review_type: Optional[str] = Field(default=None, alias="reviewType")
    approval_status: Optional[str] = Field(default=None, alias="approvalStatus")
    review_status: Optional[str] = Field(default=None, alias="reviewStatus")
    conditions: Optional[str] = None
    business_unit: Optional[str] = Field(default=None, alias="businessUnit")
    business_driver: Optional[str] = Field(default=None, alias="businessDriver")
    value_outcome: Optional[str] = Field(default=None, alias="valueOutcome")
    application_users: List[str] = Field(default_factory=list, alias="applicationUsers")

    @field_validator('application_users', mode='before')
    @classmethod
    def validate_application_users(cls, v):
        return v or []


class _SolutionRecord(RecordModel):
    """Shared accessors for records that carry a solution overview."""

    system_code: str = Field(..., alias="systemCode", description="Unique system code")
    solution_overview: Optional[SolutionOverview] = Field(default=None, alias="solutionOverview")

    def _require_details(self) -> SolutionDetails:
        if self.solution_overview is None:
            raise DataIntegrityError(f"System {self.system_code} has no solution overview")
        if self.solution_overview.solution_details is None:
            raise DataIntegrityError(f"System {self.system_code} has no solution details")
        return self.solution_overview.solution_details

    def solution_name(self) -> Optional[str]:
        """Solution name; fails loudly when the overview is incomplete."""
        return self._require_details().solution_name

    def review_code(self) -> Optional[str]:
        """Solution review code; fails loudly when the overview is incomplete."""
        return self._require_details().solution_review_code

    def solution_name_or(self, default: str) -> str:
        """Solution name, or ``default`` when any part of it is missing."""
        overview = self.solution_overview
        if overview is None or overview.solution_details is None:
            return default
        return overview.solution_details.solution_name or default


class SystemRecord(_SolutionRecord):
    """One system's review record with its ordered integration flows."""

    integration_flows: List[IntegrationFlow] = Field(default_factory=list, alias="integrationFlows")

    @field_validator('integration_flows', mode='before')
    @classmethod
    def validate_integration_flows(cls, v):
        """Treat a null flow list as empty."""
        return v or []


class BusinessCapability(RecordModel):
    """One L1/L2/L3 placement of a system."""

    id: Optional[str] = None
    l1_capability: Optional[str] = Field(default=None, alias="l1Capability")
    l2_capability: Optional[str] = Field(default=None, alias="l2Capability")
    l3_capability: Optional[str] = Field(default=None, alias="l3Capability")
    remarks: Optional[str] = None


class CapabilityAssignmentRecord(_SolutionRecord):
    """A system together with its business capability placements."""

    business_capabilities: List[BusinessCapability] = Field(default_factory=list, alias="businessCapabilities")

    @field_validator('business_capabilities', mode='before')
    @classmethod
    def validate_business_capabilities(cls, v):
        return v or []


class CapabilityTuple(RecordModel):
    """An entry of the business capability catalog."""

    l1: Optional[str] = None
    l2: Optional[str] = None
    l3: Optional[str] = None


def has_valid_middleware(middleware: Optional[str]) -> bool:
    """Check if middleware is set (not null, not blank, not NONE)."""
    return (
        middleware is not None
        and middleware.strip() != ""
        and middleware.strip().upper() != NONE_MIDDLEWARE
    )
