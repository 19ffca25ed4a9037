from __future__ import annotations

import math
from typing import Sequence

import pytest

from tollgraph import WeightedGraph, reset_config

CAMPUS_ROUTES = [
    (7, 3, 15, False),
    (3, 1, 14, True),
    (1, 2, 12, False),
    (2, 6, 22, True),
    (6, 12, 27, True),
    (12, 14, 10, False),
    (15, 14, 11, False),
    (15, 13, 10, True),
    (13, 8, 20, True),
    (7, 8, 11, True),
    (7, 5, 12, True),
    (5, 3, 4, False),
    (1, 5, 9, False),
    (1, 4, 8, True),
    (2, 4, 15, False),
    (4, "0", 13, True),
    ("0", 5, 6, True),
    (5, 8, 17, True),
    (5, 9, 13, True),
    ("0", 9, 12, True),
    (9, 10, 10, False),
    ("0", 10, 23, True),
    (10, 4, 17, False),
    (6, 10, 14, False),
    (10, 12, 8, False),
    (10, 15, 24, True),
    (9, 13, 14, True),
    (9, 8, 5, False),
    (9, 11, 17, True),
    (13, 11, 16, False),
    (11, 15, 9, False),
    (11, 14, 17, True),
]


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def diamond() -> WeightedGraph:
    """A->B(2), A->C(1), B->C(2), C->D(1)."""
    graph = WeightedGraph(name="diamond")
    graph.add_node("A", "B", "C", "D")
    graph.add_route("A", "B", 2).add_route("A", "C", 1)
    graph.add_route("B", "C", 2).add_route("C", "D", 1)
    return graph


@pytest.fixture
def toll_diamond() -> WeightedGraph:
    """Diamond plus B->D(200), constant toll 100 and C toll 500."""
    graph = WeightedGraph(name="tolls", constant_node_cost=100, auto_create_nodes=True)
    graph.add_node({"name": "C", "cost": 500})
    graph.add_route("A", "B", 2).add_route("A", "C", 1)
    graph.add_route("B", "C", 2).add_route("C", "D", 1)
    graph.add_route("B", "D", 200)
    return graph


@pytest.fixture
def campus() -> WeightedGraph:
    graph = WeightedGraph(name="campus", auto_create_nodes=True)
    for start, end, weight, bidirectional in CAMPUS_ROUTES:
        graph.add_route(start, end, weight, bidirectional)
    return graph


def path_cost(graph: WeightedGraph, path: Sequence[str]) -> float:
    """Cost of following a path, tolls included."""
    if len(path) <= 1:
        return 0.0
    total = graph.node_cost(path[0])
    for a, b in zip(path, path[1:]):
        weight = graph.route_weight(a, b)
        if weight is None:
            return math.nan
        total += weight + graph.node_cost(b)
    return total


@pytest.fixture
def route_cost():
    return path_cost
