"""
Tests for the HTTP API using FastAPI's TestClient.

The record source dependency is overridden with an in-memory source.
"""

import pytest
from fastapi.testclient import TestClient

from archgraph.api import create_app
from archgraph.api.app import status_code_for
from archgraph.api.dependencies import get_record_source
from archgraph.shared import (
    ValidationError, NotFoundError, UpstreamError, DataIntegrityError, ServiceError, get_metrics, get_settings,
)

DIAGRAM = "/api/v1/diagram"


@pytest.fixture
def app(landscape_source):
    app = create_app()
    app.dependency_overrides[get_record_source] = lambda: landscape_source
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def failing_source(mocker, error):
    source = mocker.Mock()
    source.get_system_dependencies.side_effect = error
    source.get_business_capabilities.side_effect = error
    return source


@pytest.mark.parametrize("error, status", [
    (ValidationError("x"), 400),
    (NotFoundError("x"), 404),
    (UpstreamError("x"), 502),
    (DataIntegrityError("x"), 500),
    (ServiceError("x"), 500),
    (RuntimeError("x"), 500),
])
def test_status_mapping(error, status):
    assert status_code_for(error) == status


class TestSystemDependencyEndpoints:

    def test_raw_records(self, client):
        response = client.get(f"{DIAGRAM}/system-dependencies")

        assert response.status_code == 200
        body = response.json()
        assert [r["systemCode"] for r in body] == ["SYS-001", "SYS-002", "SYS-003"]
        assert body[0]["integrationFlows"][0]["counterpartSystemRole"] == "CONSUMER"

    def test_system_diagram(self, client):
        response = client.get(f"{DIAGRAM}/system-dependencies/SYS-001")

        assert response.status_code == 200
        body = response.json()
        assert body["nodes"][0] == {
            "id": "SYS-001", "name": "Order Hub", "type": "Core System", "criticality": "Major", "url": None,
        }
        assert body["metadata"]["integrationMiddleware"] == ["API_GATEWAY-C"]
        assert "generatedDate" in body["metadata"]

    def test_unknown_system(self, client):
        response = client.get(f"{DIAGRAM}/system-dependencies/SYS-404")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "NotFoundError"
        assert "SYS-404" in body["message"]

    def test_landscape_is_not_a_system_code(self, client):
        response = client.get(f"{DIAGRAM}/system-dependencies/all")

        assert response.status_code == 200
        links = response.json()["links"]
        assert {"source": "SYS-001", "target": "SYS-002", "count": 2} in links

    def test_paths(self, client):
        response = client.get(f"{DIAGRAM}/system-dependencies/path", params={"start": "SYS-001", "end": "SYS-003"})

        assert response.status_code == 200
        body = response.json()
        assert body["metadata"]["review"] == "2 paths found"
        assert body["metadata"]["code"] == "SYS-001 → SYS-003"
        assert {n["url"] for n in body["nodes"]} == {"SYS-001.json", "SYS-002.json", "SYS-003.json"}

    @pytest.mark.parametrize("params, message", [
        ({"start": "SYS-001", "end": "SYS-001"}, "Start and end systems cannot be the same"),
        ({"end": "SYS-001"}, "Start system cannot be null or empty"),
        ({"start": "SYS-001", "end": "NOPE"}, "End system 'NOPE' not found"),
    ])
    def test_rejected_path_requests(self, client, params, message):
        response = client.get(f"{DIAGRAM}/system-dependencies/path", params=params)

        assert response.status_code == 400
        assert response.json()["message"] == message

    def test_upstream_failure(self, app, mocker):
        app.dependency_overrides[get_record_source] = lambda: failing_source(mocker, UpstreamError("core down"))

        with TestClient(app) as client:
            response = client.get(f"{DIAGRAM}/system-dependencies/all")

        assert response.status_code == 502
        assert response.json()["error"] == "UpstreamError"

    def test_incomplete_record(self, app, mocker):
        app.dependency_overrides[get_record_source] = lambda: failing_source(mocker, DataIntegrityError("no details"))

        with TestClient(app) as client:
            response = client.get(f"{DIAGRAM}/system-dependencies/SYS-001")

        assert response.status_code == 500
        assert response.json()["error"] == "DataIntegrityError"


class TestBusinessCapabilityEndpoints:

    def test_raw_records(self, client):
        response = client.get(f"{DIAGRAM}/business-capabilities")

        assert response.status_code == 200
        assert response.json()[0]["businessCapabilities"][0]["l1Capability"] == "Customer Management"

    def test_global_tree(self, client):
        response = client.get(f"{DIAGRAM}/business-capabilities/all")

        assert response.status_code == 200
        nodes = response.json()["capabilities"]
        cash = next(n for n in nodes if n["name"] == "Cash Management")
        assert cash["systemCount"] == 0
        assert cash["parentId"] == "l2-treasury-under-l1-finance"

    def test_system_tree(self, client):
        response = client.get(f"{DIAGRAM}/business-capabilities/SYS-002")

        assert response.status_code == 200
        nodes = response.json()["capabilities"]
        assert nodes[0]["level"] == "Root"
        assert [n["name"] for n in nodes] == ["Billing Engine", "Finance", "Billing", "Invoicing"]

    def test_unknown_system_tree(self, client):
        response = client.get(f"{DIAGRAM}/business-capabilities/SYS-999")

        assert response.status_code == 200
        assert response.json() == {"capabilities": []}


class TestHealthEndpoints:

    def test_root(self, client):
        body = client.get("/").json()
        assert body["success"] is True
        assert body["data"]["health"] == "/api/v1/health"

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.headers["X-Process-Time"]

    def test_health_does_not_load_the_records_file(self, client, clean_settings, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("not json", encoding="utf-8")
        clean_settings.setenv("ARCHGRAPH_RECORDS_FILE", str(path))
        get_settings.cache_clear()

        body = client.get("/api/v1/health").json()

        assert body["status"] == "healthy"
        assert body["services"]["record_source"] == "InMemoryRecordSource"

    def test_health_reports_missing_records_file(self, client, clean_settings, tmp_path):
        clean_settings.setenv("ARCHGRAPH_RECORDS_FILE", str(tmp_path / "missing.json"))
        get_settings.cache_clear()

        body = client.get("/api/v1/health").json()

        assert body["status"] == "unhealthy"
        assert body["services"]["record_source"].startswith("error: records file not found")

    def test_detailed_health_reports_requests(self, client):
        client.get(f"{DIAGRAM}/system-dependencies/all")

        body = client.get("/api/v1/health/detailed").json()

        assert body["health"]["status"] == "healthy"
        assert body["metrics"]["counters"]["api_requests_total"] >= 1
        assert body["metrics"]["counters"]["landscape_diagram_generated_total"] == 1
        assert get_metrics().get_counter("api_requests_total") >= 1
