"""
Tests for business capability tree construction.
"""

import pytest

from archgraph.shared import CapabilityTuple
from archgraph.services.business_capabilities import (
    CapabilityTreeBuilder, slugify, capability_id, system_leaf_id, build_capability_tree, build_system_capability_tree,
)

from conftest import assignment, assignments


def catalog(*entries):
    return [CapabilityTuple(l1=l1, l2=l2, l3=l3) for l1, l2, l3 in entries]


def by_id(tree):
    return {node.id: node for node in tree.capabilities}


class TestIds:

    @pytest.mark.parametrize("name, expected", [
        ("Customer Management", "customer-management"),
        ("CRM", "crm"),
        ("  Risk & Compliance  ", "risk-compliance"),
        ("A--B__C", "a-b-c"),
        ("sys-001", "sys-001"),
    ])
    def test_slugify(self, name, expected):
        assert slugify(name) == expected

    def test_ids_carry_their_ancestors(self):
        l1 = capability_id("L1", "Customer Management")
        l2 = capability_id("L2", "CRM", l1)
        l3 = capability_id("L3", "Contact Management", l2)

        assert l1 == "l1-customer-management"
        assert l2 == "l2-crm-under-l1-customer-management"
        assert l3 == "l3-contact-management-under-l2-crm-under-l1-customer-management"
        assert system_leaf_id("SYS 001", l3) == f"sys-001-under-{l3}"


class TestGlobalTree:

    def test_single_assignment(self):
        tree = build_capability_tree(assignments(
            assignment("sys-001", "NextGen Platform", [("Customer Management", "CRM", "Contact Management")]),
        ))

        assert len(tree.capabilities) == 4
        l1, l2, l3, leaf = tree.capabilities
        assert (l1.level, l2.level, l3.level, leaf.level) == ("L1", "L2", "L3", "System")
        assert l1.parent_id is None
        assert l2.parent_id == l1.id
        assert l3.parent_id == l2.id
        assert leaf.parent_id == l3.id
        assert leaf.name == "NextGen Platform"
        assert leaf.system_count is None
        assert [l1.system_count, l2.system_count, l3.system_count] == [1, 1, 1]

    def test_serialized_shape(self):
        tree = build_capability_tree(assignments(
            assignment("sys-001", "NextGen Platform", [("Sales", "Orders", "Order Capture")]),
        ))

        leaf = tree.to_json_dict()["capabilities"][-1]
        assert leaf == {
            "id": "sys-001-under-l3-order-capture-under-l2-orders-under-l1-sales",
            "name": "NextGen Platform",
            "level": "System",
            "parentId": "l3-order-capture-under-l2-orders-under-l1-sales",
            "systemCount": None,
        }

    def test_unreferenced_catalog_entries_have_zero_count(self):
        tree = build_capability_tree(
            assignments(assignment("SYS-001", capabilities=[("Finance", "Billing", "Invoicing")])),
            catalog(("Finance", "Billing", "Invoicing"), ("Finance", "Treasury", "Cash Management")),
        )
        nodes = by_id(tree)

        treasury = nodes["l2-treasury-under-l1-finance"]
        cash = nodes[f"l3-cash-management-under-{treasury.id}"]
        assert treasury.system_count == 1
        assert cash.system_count == 0
        assert nodes["l1-finance"].system_count == 2
        assert nodes["l3-invoicing-under-l2-billing-under-l1-finance"].system_count == 1

    def test_same_name_under_different_parents(self):
        tree = build_capability_tree(assignments(
            assignment("SYS-001", capabilities=[("Sales", "Analytics", "Reporting"),
                                                ("Finance", "Analytics", "Reporting")]),
        ))

        analytics = [n for n in tree.capabilities if n.name == "Analytics"]
        assert len(analytics) == 2
        assert len({n.id for n in analytics}) == 2

    def test_system_in_several_flows_gets_a_leaf_per_flow(self):
        tree = build_capability_tree(assignments(
            assignment("SYS-001", "Order Hub", [("Sales", "Orders", "Order Capture"),
                                                ("Sales", "Orders", "Returns")]),
            assignment("SYS-002", "Shop", [("Sales", "Orders", "Order Capture")]),
        ))
        nodes = by_id(tree)

        leaves = [n for n in tree.capabilities if n.level == "System"]
        assert [n.name for n in leaves] == ["Order Hub", "Order Hub", "Shop"]
        assert nodes["l2-orders-under-l1-sales"].system_count == 2
        assert nodes["l3-order-capture-under-l2-orders-under-l1-sales"].system_count == 2

    def test_duplicate_assignment_is_counted_once(self):
        tree = build_capability_tree(assignments(
            assignment("SYS-001", capabilities=[("Sales", "Orders", "Returns"), ("Sales", "Orders", "Returns")]),
        ))
        assert len(tree.capabilities) == 4
        assert tree.capabilities[2].system_count == 1

    def test_incomplete_assignments_are_skipped(self):
        tree = build_capability_tree(
            assignments(assignment("SYS-001", capabilities=[("Sales", None, "Returns"), ("Sales", "Orders", "")])),
            [CapabilityTuple(l1="Finance", l2="Billing")],
        )
        assert tree.capabilities == []

    def test_missing_overview_names_leaf_unknown(self):
        tree = build_capability_tree(assignments(
            assignment("SYS-001", capabilities=[("Sales", "Orders", "Returns")], with_overview=False),
        ))
        assert tree.capabilities[-1].name == "Unknown Solution"


class TestSystemTree:

    def test_root_chain(self):
        tree = build_system_capability_tree("SYS-001", assignments(
            assignment("SYS-001", "Order Hub", [("Sales", "Orders", "Order Capture"),
                                                ("Sales", "Orders", "Returns"),
                                                ("Finance", "Billing", "Invoicing")]),
            assignment("SYS-002", "Shop", [("Marketing", "Campaigns", "Email")]),
        ))

        root = tree.capabilities[0]
        assert (root.id, root.name, root.level, root.parent_id) == ("root-sys-001", "Order Hub", "Root", None)
        assert root.system_count == 2

        assert [n.name for n in tree.children_of(root.id)] == ["Sales", "Finance"]
        assert all(n.name != "Marketing" for n in tree.capabilities)
        assert all(n.level != "System" for n in tree.capabilities)

        nodes = by_id(tree)
        orders = nodes["l2-orders-under-l1-sales-under-root-sys-001"]
        assert orders.system_count == 2
        assert nodes[f"l3-returns-under-{orders.id}"].system_count == 1

    def test_l3_counts_the_root_system_without_leaves(self):
        tree = build_system_capability_tree("SYS-001", assignments(
            assignment("SYS-001", "Order Hub", [("Sales", "Orders", "Returns")]),
        ))

        l3 = next(n for n in tree.capabilities if n.level == "L3")
        assert tree.children_of(l3.id) == []
        assert l3.system_count == 1

    def test_builder_count_overrides(self):
        builder = CapabilityTreeBuilder()
        l3_id = builder.add_chain("Sales", "Orders", "Returns")

        nodes = by_id(builder.build(leaf_counts={l3_id: 3}))

        assert nodes[l3_id].system_count == 3
        assert nodes["l1-sales"].system_count == 1
        assert nodes["l2-orders-under-l1-sales"].system_count == 1

    def test_unknown_system_gives_empty_tree(self):
        tree = build_system_capability_tree("SYS-999", assignments(
            assignment("SYS-001", capabilities=[("Sales", "Orders", "Returns")]),
        ))
        assert tree.capabilities == []
