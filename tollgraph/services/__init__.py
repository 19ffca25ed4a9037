"""Services layer - High-level entry points.

Services wire the engine and the solver adapters together and apply the
error policy configured for each graph.
"""

from .weighted_graph import WeightedGraph, build_config

__all__ = ["WeightedGraph", "build_config"]
