"""Weighted graphs with node tolls and shortest path queries.

The main entry point is :class:`WeightedGraph`, which lets callers build
a graph incrementally, apply bulk cost changes and query cheapest paths
with Dijkstra or with cached Floyd-Warshall matrices.
"""

from .config import AppConfig, GraphConfig, ObservabilityConfig, get_config, reset_config
from .domain import (
    ConfigurationError,
    CostFormat,
    DuplicateNodeError,
    FloydWarshallResult,
    InvalidArgumentError,
    IterationRecord,
    LoggingLevel,
    NodeSpec,
    NotFoundError,
    PathResult,
    PrecomputationRequiredError,
    RouteExistsError,
    SelfLoopError,
    StaleMatricesError,
    TollGraphError,
)
from .logging_setup import configure_logging
from .services import WeightedGraph

__all__ = [
    "WeightedGraph",
    "AppConfig",
    "GraphConfig",
    "ObservabilityConfig",
    "get_config",
    "reset_config",
    "configure_logging",
    "CostFormat",
    "FloydWarshallResult",
    "IterationRecord",
    "LoggingLevel",
    "NodeSpec",
    "PathResult",
    "TollGraphError",
    "InvalidArgumentError",
    "NotFoundError",
    "DuplicateNodeError",
    "RouteExistsError",
    "SelfLoopError",
    "PrecomputationRequiredError",
    "StaleMatricesError",
    "ConfigurationError",
]
