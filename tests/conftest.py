"""
Pytest configuration and fixtures for ArchGraph testing.

This module provides:
- Record builders in the core service's camelCase format
- Reusable record sets for the diagram scenarios
- Isolation of the cached settings and the metrics singleton
"""

from datetime import date

import pytest

from archgraph.shared import (
    InMemoryRecordSource, SystemRecord, CapabilityAssignmentRecord, get_settings, get_metrics,
)

GENERATED_DATE = date(2024, 1, 15)


# ============================================================
# RECORD BUILDERS
# ============================================================

def flow(counterpart, role, middleware=None, method="REST", frequency="Daily", flow_id=None):
    """Integration flow dictionary as sent by the core service."""
    return {
        "id": flow_id or f"flow-{counterpart}-{role}-{middleware}-{method}",
        "componentName": "connector",
        "counterpartSystemCode": counterpart,
        "counterpartSystemRole": role,
        "integrationMethod": method,
        "frequency": frequency,
        "purpose": "data sync",
        "middleware": middleware,
    }


def overview(name, review_code=None):
    return {
        "id": f"overview-{name}",
        "solutionDetails": {
            "solutionName": name,
            "projectName": f"{name} project",
            "solutionReviewCode": review_code or f"SR-{name}",
        },
        "reviewStatus": "APPROVED",
    }


def system(code, name=None, flows=(), review_code=None, with_overview=True):
    """System record dictionary; ``with_overview=False`` leaves the overview out."""
    record = {
        "systemCode": code,
        "integrationFlows": list(flows),
    }
    if with_overview:
        record["solutionOverview"] = overview(name or f"{code} Platform", review_code)
    return record


def assignment(code, name=None, capabilities=(), with_overview=True):
    record = {
        "systemCode": code,
        "businessCapabilities": [
            {"id": f"bc-{i}", "l1Capability": l1, "l2Capability": l2, "l3Capability": l3}
            for i, (l1, l2, l3) in enumerate(capabilities)
        ],
    }
    if with_overview:
        record["solutionOverview"] = overview(name or f"{code} Platform")
    return record


def records(*items):
    return [SystemRecord.model_validate(item) for item in items]


def assignments(*items):
    return [CapabilityAssignmentRecord.model_validate(item) for item in items]


# ============================================================
# RECORD SET FIXTURES
# ============================================================

@pytest.fixture
def chain_records():
    """SYS-001 -> SYS-002 -> SYS-003, direct flows only."""
    return records(
        system("SYS-001", "Order Hub", [flow("SYS-002", "CONSUMER")]),
        system("SYS-002", "Billing Engine", [flow("SYS-003", "CONSUMER")]),
        system("SYS-003", "Ledger"),
    )


@pytest.fixture
def landscape_source():
    """A small landscape with middleware, a mirrored flow and an external system."""
    return InMemoryRecordSource(
        system_dependencies=[
            system("SYS-001", "Order Hub", [
                flow("SYS-002", "CONSUMER", middleware="API_GATEWAY"),
                flow("EXT-001", "PRODUCER", method="SFTP"),
            ]),
            system("SYS-002", "Billing Engine", [
                flow("SYS-001", "PRODUCER", middleware="API_GATEWAY"),
                flow("SYS-003", "CONSUMER", middleware="KAFKA", method="Event"),
            ]),
            system("SYS-003", "Ledger"),
        ],
        business_capabilities=[
            assignment("SYS-001", "Order Hub", [
                ("Customer Management", "CRM", "Contact Management"),
                ("Sales", "Orders", "Order Capture"),
            ]),
            assignment("SYS-002", "Billing Engine", [
                ("Finance", "Billing", "Invoicing"),
            ]),
        ],
        capability_catalog=[
            {"l1": "Finance", "l2": "Billing", "l3": "Invoicing"},
            {"l1": "Finance", "l2": "Treasury", "l3": "Cash Management"},
        ],
    )


# ============================================================
# ISOLATION
# ============================================================

@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with empty metrics."""
    get_metrics().reset()
    yield
    get_metrics().reset()


@pytest.fixture
def clean_settings(monkeypatch):
    """Clear cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
