"""
Unit tests for the node operations of GraphEngine.
"""

import math

import pytest

from tollgraph import (
    DuplicateNodeError,
    InvalidArgumentError,
    NodeSpec,
    NotFoundError,
)
from tollgraph.graph import GraphEngine


def test_add_node_uses_constant_cost_by_default():
    engine = GraphEngine(constant_node_cost=10)
    engine.add_node("A")

    assert engine.nodes() == ["A"]
    assert engine.node_cost("A") == 10.0
    assert engine.outgoing("A") == {}


def test_add_node_accepts_specs_mappings_and_several_nodes():
    engine = GraphEngine()
    engine.add_node(
        NodeSpec("A", cost=5, protected=True),
        {"name": "B", "cost": 7},
        {"identifier": "C"},
        "D",
    )

    assert engine.node_costs() == {"A": 5.0, "B": 7.0, "C": 0.0, "D": 0.0}
    assert engine.is_protected("A")
    assert not engine.is_protected("B")


def test_numeric_identifiers_are_stored_as_strings():
    engine = GraphEngine()
    engine.add_node(7)

    assert engine.nodes() == ["7"]
    assert engine.has_node(7)
    assert 7 in engine


def test_add_existing_node_fails_and_leaves_graph_unchanged():
    engine = GraphEngine()
    engine.add_node(NodeSpec("A", cost=3))
    version = engine.version

    with pytest.raises(DuplicateNodeError) as excinfo:
        engine.add_node(NodeSpec("A", cost=9))

    assert excinfo.value.identifier == "A"
    assert engine.node_costs() == {"A": 3.0}
    assert engine.version == version


@pytest.mark.parametrize("identifier", [None, ""])
def test_add_node_requires_identifier(identifier):
    engine = GraphEngine()
    with pytest.raises(InvalidArgumentError):
        engine.add_node(identifier)


def test_add_node_rejects_negative_cost():
    engine = GraphEngine()
    with pytest.raises(InvalidArgumentError):
        engine.add_node(NodeSpec("A", cost=-1))
    assert len(engine) == 0


def test_edit_node_renames_every_reference():
    engine = GraphEngine()
    engine.add_node("A", "B")
    engine.add_route("A", "B", 1, bidirectional=True)

    engine.edit_node("A", "C", 100)
    engine.edit_node("B", "D")

    assert set(engine.nodes()) == {"C", "D"}
    assert engine.node_costs() == {"C": 100.0, "D": 0.0}
    assert engine.outgoing("C") == {"D": 1.0}
    assert engine.outgoing("D") == {"C": 1.0}


def test_edit_node_cost_overrides_protected_toll():
    engine = GraphEngine()
    engine.add_node(NodeSpec("A", cost=50, protected=True))

    engine.edit_node("A", new_cost=5)

    assert engine.node_cost("A") == 5.0
    assert engine.is_protected("A")


def test_edit_node_errors():
    engine = GraphEngine()
    engine.add_node("A", "B")

    with pytest.raises(NotFoundError):
        engine.edit_node("Z", "Y")
    with pytest.raises(DuplicateNodeError):
        engine.edit_node("A", "B")
    with pytest.raises(InvalidArgumentError):
        engine.edit_node("A", new_cost=-3)
    with pytest.raises(InvalidArgumentError):
        engine.edit_node("A", "")
    with pytest.raises(InvalidArgumentError):
        engine.edit_node("")

    assert engine.nodes() == ["A", "B"]


def test_delete_node_removes_all_references():
    engine = GraphEngine()
    engine.add_node("A", "B", "C")
    engine.add_route("A", "B", 1, bidirectional=True)
    engine.add_route("C", "A", 4)

    engine.delete_node("A")

    assert engine.nodes() == ["B", "C"]
    assert "A" not in engine.node_costs()
    for neighbours in engine.adjacency().values():
        assert "A" not in neighbours


def test_delete_several_nodes():
    engine = GraphEngine()
    engine.add_node("A", "B", "C")

    engine.delete_node("A", "C")

    assert engine.nodes() == ["B"]


def test_delete_missing_node_fails():
    engine = GraphEngine()
    with pytest.raises(NotFoundError):
        engine.delete_node("E")
    with pytest.raises(InvalidArgumentError):
        engine.delete_node("")


def test_avoid_node_keeps_routes():
    engine = GraphEngine()
    engine.add_node("A", "B")
    engine.add_route("A", "B", 1, bidirectional=True)

    engine.avoid_node("A")

    assert math.isinf(engine.node_cost("A"))
    assert engine.route_weight("B", "A") == 1.0
    assert engine.route_weight("A", "B") == 1.0


def test_constant_node_cost_skips_protected_nodes():
    engine = GraphEngine(constant_node_cost=10)
    engine.add_node(NodeSpec("A", cost=100, protected=True))
    engine.add_node(NodeSpec("B", cost=100))
    engine.add_node("C")
    assert engine.node_costs() == {"A": 100.0, "B": 100.0, "C": 10.0}

    engine.constant_node_cost = 0

    assert engine.node_costs() == {"A": 100.0, "B": 0.0, "C": 0.0}

    engine.constant_node_cost = 55
    engine.add_node("D")

    assert engine.node_costs() == {"A": 100.0, "B": 55.0, "C": 55.0, "D": 55.0}


def test_constant_node_cost_rejects_negative_values():
    engine = GraphEngine(constant_node_cost=1)
    engine.add_node("A")

    with pytest.raises(InvalidArgumentError):
        engine.constant_node_cost = -1

    assert engine.constant_node_cost == 1.0
    assert engine.node_cost("A") == 1.0


def test_every_mutation_bumps_version():
    engine = GraphEngine()
    assert engine.version == 0

    engine.add_node("A", "B")
    after_add = engine.version
    engine.avoid_node("A")

    assert after_add == 2
    assert engine.version == 3


def test_delete_several_nodes_checks_all_before_deleting():
    engine = GraphEngine()
    engine.add_node("A", "B")
    engine.add_route("A", "B", 1)
    version = engine.version

    with pytest.raises(NotFoundError):
        engine.delete_node("A", "Z")

    assert engine.nodes() == ["A", "B"]
    assert engine.route_weight("A", "B") == 1.0
    assert engine.version == version


def test_avoid_several_nodes_checks_all_before_writing():
    engine = GraphEngine(constant_node_cost=3)
    engine.add_node("A", "B")

    with pytest.raises(NotFoundError):
        engine.avoid_node("A", "Z")

    assert engine.node_costs() == {"A": 3.0, "B": 3.0}


def test_add_several_nodes_is_all_or_nothing():
    engine = GraphEngine()
    engine.add_node("A")

    with pytest.raises(DuplicateNodeError):
        engine.add_node("B", "A")
    with pytest.raises(DuplicateNodeError):
        engine.add_node("C", "C")
    with pytest.raises(InvalidArgumentError):
        engine.add_node("D", NodeSpec("E", cost=-1))

    assert engine.nodes() == ["A"]
