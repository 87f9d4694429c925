"""
Tests for the diagram services on top of a record source.
"""

import pytest

from archgraph.shared import (
    InMemoryRecordSource, ValidationError, NotFoundError, UpstreamError, ServiceError, get_metrics,
)
from archgraph.services.system_dependencies import SystemDependencyService
from archgraph.services.business_capabilities import BusinessCapabilityService

from conftest import GENERATED_DATE, flow, system


@pytest.fixture
def dependency_service(landscape_source):
    return SystemDependencyService(landscape_source)


@pytest.fixture
def capability_service(landscape_source):
    return BusinessCapabilityService(landscape_source)


class TestSystemDependencyService:

    def test_raw_records(self, dependency_service):
        codes = [r.system_code for r in dependency_service.get_system_dependencies()]
        assert codes == ["SYS-001", "SYS-002", "SYS-003"]

    def test_system_diagram(self, dependency_service):
        diagram = dependency_service.generate_system_diagram("SYS-001", GENERATED_DATE)

        assert {n.id for n in diagram.nodes} == {"SYS-001", "SYS-002-C", "API_GATEWAY-C", "EXT-001-P"}
        assert diagram.metadata.integration_middleware == ["API_GATEWAY-C"]
        assert get_metrics().get_counter("system_diagram_generated_total") == 1
        assert get_metrics().get_gauge("system_diagram_last_node_count") == 4

    def test_unknown_system(self, dependency_service):
        with pytest.raises(NotFoundError):
            dependency_service.generate_system_diagram("SYS-404")

    def test_paths(self, dependency_service):
        diagram = dependency_service.find_all_paths_diagram("SYS-001", "SYS-003", GENERATED_DATE)

        assert diagram.metadata.review == "2 paths found"
        assert diagram.metadata.integration_middleware == ["API_GATEWAY", "KAFKA"]
        assert get_metrics().get_gauge("path_diagram_last_path_count") == 2

    def test_path_through_long_chain(self):
        source = InMemoryRecordSource(system_dependencies=[
            system(f"S{i}", flows=[flow(f"S{i + 1}", "CONSUMER")]) for i in range(1200)
        ])

        diagram = SystemDependencyService(source).find_all_paths_diagram("S0", "S1200", GENERATED_DATE)

        assert diagram.metadata.review == "1 path found"
        assert len(diagram.nodes) == 1201
        assert len(diagram.links) == 1200

    def test_same_start_and_end_never_reads_records(self, mocker):
        source = mocker.Mock()
        service = SystemDependencyService(source)

        with pytest.raises(ValidationError, match="cannot be the same"):
            service.find_all_paths_diagram("SYS-001", "SYS-001")
        source.get_system_dependencies.assert_not_called()

    def test_absent_systems_are_named(self, dependency_service):
        with pytest.raises(ValidationError, match="Start system 'AAA' not found"):
            dependency_service.find_all_paths_diagram("AAA", "SYS-001")
        with pytest.raises(ValidationError, match="End system 'BBB' not found"):
            dependency_service.find_all_paths_diagram("SYS-001", "BBB")

    def test_landscape(self, dependency_service):
        diagram = dependency_service.generate_landscape_diagram(GENERATED_DATE)

        assert [n.id for n in diagram.nodes] == ["SYS-001", "SYS-002", "EXT-001", "SYS-003"]
        counts = {(l.source, l.target): l.count for l in diagram.links}
        assert counts == {("SYS-001", "SYS-002"): 2, ("SYS-001", "EXT-001"): 1, ("SYS-002", "SYS-003"): 1}

    def test_upstream_errors_propagate(self, mocker):
        source = mocker.Mock()
        source.get_system_dependencies.side_effect = UpstreamError("core service down")
        service = SystemDependencyService(source)

        with pytest.raises(UpstreamError, match="core service down"):
            service.generate_landscape_diagram()

    def test_unexpected_errors_are_wrapped(self, mocker):
        source = mocker.Mock()
        source.get_system_dependencies.side_effect = RuntimeError("boom")
        service = SystemDependencyService(source)

        with pytest.raises(ServiceError, match="boom"):
            service.generate_system_diagram("SYS-001")

    def test_each_call_reads_a_fresh_snapshot(self, mocker):
        source = InMemoryRecordSource(system_dependencies=[system("SYS-001", flows=[flow("SYS-002", "CONSUMER")])])
        spy = mocker.spy(source, "get_system_dependencies")
        service = SystemDependencyService(source)

        service.generate_system_diagram("SYS-001")
        service.generate_system_diagram("SYS-001")

        assert spy.call_count == 2


class TestBusinessCapabilityService:

    def test_raw_records(self, capability_service):
        records = capability_service.get_business_capabilities()
        assert [r.system_code for r in records] == ["SYS-001", "SYS-002"]
        assert records[0].business_capabilities[0].l1_capability == "Customer Management"

    def test_global_tree_includes_catalog(self, capability_service):
        tree = capability_service.get_capability_tree()
        names = {n.name for n in tree.capabilities}

        assert {"Customer Management", "Sales", "Finance", "Treasury", "Cash Management"} <= names
        assert len([n for n in tree.capabilities if n.level == "System"]) == 3
        assert get_metrics().get_counter("capability_tree_generated_total") == 1

    def test_system_tree(self, capability_service):
        tree = capability_service.get_system_capability_tree("SYS-002")

        assert [n.name for n in tree.capabilities] == ["Billing Engine", "Finance", "Billing", "Invoicing"]

    def test_unknown_system_tree_is_empty(self, capability_service):
        assert capability_service.get_system_capability_tree("SYS-999").capabilities == []

    @pytest.mark.parametrize("code", ["", "  ", None])
    def test_blank_system_code(self, capability_service, code):
        with pytest.raises(ValidationError):
            capability_service.get_system_capability_tree(code)
