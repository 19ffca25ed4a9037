"""
Unit tests for DijkstraSolver, directly and through WeightedGraph.
"""

import math

import pytest

from tollgraph import InvalidArgumentError, IterationRecord, NotFoundError, WeightedGraph
from tollgraph.adapters.graph import DijkstraSolver
from tollgraph.graph import GraphEngine


def test_dijkstra_finds_cheapest_path(diamond):
    result = diamond.find_path_dijkstra("A", "D")

    assert result.cost == 2
    assert result.path == ("A", "C", "D")
    assert result.formatted_cost is None


def test_dijkstra_includes_toll_costs(toll_diamond):
    result = toll_diamond.find_path_dijkstra("A", "D")

    assert result.cost == 502
    assert result.path == ("A", "B", "D")


def test_dijkstra_with_route_and_node_avoiding(toll_diamond):
    toll_diamond.avoid_route("A", "B")

    result = toll_diamond.find_path_dijkstra("A", "D")
    assert result.cost == 702
    assert result.path == ("A", "C", "D")

    toll_diamond.edit_route("A", "B", 2)
    toll_diamond.avoid_node("C")

    result = toll_diamond.find_path_dijkstra("A", "D")
    assert result.cost == 502
    assert result.path == ("A", "B", "D")


def test_avoided_node_blocks_transit_but_keeps_routes(diamond):
    diamond.delete_route("A", "B")
    diamond.avoid_node("C")

    result = diamond.find_path_dijkstra("A", "D")

    assert math.isinf(result.cost)
    assert result.path == ()
    assert diamond.route_weight("A", "C") == 1.0
    assert diamond.route_weight("C", "D") == 1.0


def test_dijkstra_unreachable_end_returns_infinite_cost():
    engine = GraphEngine()
    engine.add_node("A", "B", "C")
    engine.add_route("A", "B", 2)

    result = DijkstraSolver().find_path(engine, "A", "C")

    assert math.isinf(result.cost)
    assert result.is_empty
    assert not result.is_reachable


def test_dijkstra_same_start_and_end():
    engine = GraphEngine()
    engine.add_node("A", "B")
    engine.add_route("A", "B", 2)

    result = DijkstraSolver().find_path(engine, "A", "A")

    assert result.cost == 0.0
    assert result.path == ("A",)


def test_dijkstra_records_iteration_trace(diamond):
    diamond.find_path_dijkstra("A", "D")
    trace = diamond.table_log

    assert trace[0] == IterationRecord(0, "A", 0.0, None, (("B", 2.0), ("C", 1.0)))
    assert trace[1] == IterationRecord(1, "C", 1.0, "A -> C", (("D", 2.0),))
    # D and B tie at 2; D entered the table first
    assert [record.visited for record in trace] == ["A", "C", "D", "B"]
    assert trace[2].connection == "C -> D"
    assert trace[3].updated_nodes == ()


def test_dijkstra_errors():
    engine = GraphEngine()
    engine.add_node("A", "B", "C")
    engine.add_route("A", "B", 1)
    solver = DijkstraSolver()

    with pytest.raises(NotFoundError):
        solver.find_path(engine, "A", "D")
    with pytest.raises(NotFoundError):
        solver.find_path(engine, "D", "A")
    # C has no outgoing routes
    with pytest.raises(NotFoundError):
        solver.find_path(engine, "C", "A")
    with pytest.raises(InvalidArgumentError):
        solver.find_path(engine, "", "B")
    with pytest.raises(InvalidArgumentError):
        solver.find_path(engine, None, "B")


def test_dijkstra_does_not_mutate_graph(campus):
    before = campus.adjacency()
    costs = campus.node_costs()
    version = campus.version

    campus.find_path_dijkstra("0", 11)

    assert campus.adjacency() == before
    assert campus.node_costs() == costs
    assert campus.version == version


def test_dijkstra_numeric_identifiers(campus, route_cost):
    result = campus.find_path_dijkstra("0", 11)

    assert result.path[0] == "0"
    assert result.path[-1] == "11"
    assert route_cost(campus, result.path) == result.cost


def test_dijkstra_respects_node_tolls_on_larger_graph(campus, route_cost):
    graph = WeightedGraph(name="campus-tolls", auto_create_nodes=True)
    for start, neighbours in campus.adjacency().items():
        for end, weight in neighbours.items():
            graph.add_route(start, end, weight)
    graph.constant_node_cost = 1000
    graph.edit_node("9", new_cost=0)

    result = graph.find_path_dijkstra("0", "11")

    assert route_cost(graph, result.path) == result.cost
