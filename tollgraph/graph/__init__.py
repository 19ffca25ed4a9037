"""Graph storage and mutation.

This subpackage holds the node and adjacency stores and the engine that
keeps them consistent while the graph is edited.
"""

from .engine import GraphEngine, NodeInput, check_cost, node_key, to_node_spec
from .stores import AdjacencyStore, NodeStore

__all__ = [
    "AdjacencyStore",
    "GraphEngine",
    "NodeInput",
    "NodeStore",
    "check_cost",
    "node_key",
    "to_node_spec",
]
