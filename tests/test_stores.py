"""
Unit tests for NodeStore and AdjacencyStore.
"""

import math

from tollgraph.graph.stores import AdjacencyStore, NodeStore


def test_node_store_keeps_insertion_order_and_protection():
    store = NodeStore()
    store.add("B", 1.0)
    store.add("A", 2.0, protected=True)

    assert list(store) == ["B", "A"]
    assert store.is_protected("A")
    assert not store.is_protected("B")


def test_node_store_rename_keeps_position_cost_and_protection():
    store = NodeStore()
    store.add("A", 1.0)
    store.add("B", 2.0, protected=True)
    store.add("C", 3.0)

    store.rename("B", "Z")

    assert list(store) == ["A", "Z", "C"]
    assert store.cost("Z") == 2.0
    assert store.is_protected("Z")
    assert "B" not in store


def test_node_store_reset_unprotected_skips_protected():
    store = NodeStore()
    store.add("A", 100.0, protected=True)
    store.add("B", 100.0)

    changed = store.reset_unprotected(5.0)

    assert changed == ["B"]
    assert store.costs() == {"A": 100.0, "B": 5.0}


def test_node_store_scale_leaves_avoided_nodes_infinite():
    store = NodeStore()
    store.add("A", 3.0)
    store.add("B", math.inf)

    store.scale(0.0)

    assert store.cost("A") == 0.0
    assert math.isinf(store.cost("B"))


def test_adjacency_remove_node_scrubs_incoming_routes():
    adj = AdjacencyStore()
    for node in "ABC":
        adj.add_node(node)
    adj.set_route("A", "B", 1.0)
    adj.set_route("C", "B", 2.0)
    adj.set_route("B", "C", 3.0)

    removed = adj.remove_node("B")

    assert removed == 2
    assert adj.snapshot() == {"A": {}, "C": {}}


def test_adjacency_rename_preserves_weights_and_order():
    adj = AdjacencyStore()
    for node in "ABC":
        adj.add_node(node)
    adj.set_route("A", "B", 1.0)
    adj.set_route("A", "C", 4.0)
    adj.set_route("B", "A", 2.0)

    adj.rename_node("B", "X")

    assert list(adj) == ["A", "X", "C"]
    assert list(adj.outgoing("A").items()) == [("X", 1.0), ("C", 4.0)]
    assert adj.outgoing("X") == {"A": 2.0}


def test_adjacency_outgoing_returns_copy():
    adj = AdjacencyStore()
    adj.add_node("A")
    adj.add_node("B")
    adj.set_route("A", "B", 1.0)

    out = adj.outgoing("A")
    out.clear()

    # internal structure must remain intact
    assert adj.outgoing("A") == {"B": 1.0}
