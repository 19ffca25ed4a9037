"""Weighted graph service - Main entry point of the library.

WeightedGraph wires the engine, the solvers and the cost formatter
together and applies the graph's error policy:

- ``ignore_errors=False`` (default): a rejected operation raises its
  TollGraphError.
- ``ignore_errors=True``: the error is logged at MIN verbosity and the call
  returns the graph unchanged (mutations) or an empty PathResult (queries).

Mutations return the graph itself so calls can be chained:

    graph = WeightedGraph(auto_create_nodes=True)
    graph.add_route("A", "B", 2).add_route("B", "C", 3)
    graph.find_path_dijkstra("A", "C")
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from ..adapters.formatting import CostFormatSpec, CostFormatter
from ..adapters.graph import DijkstraSolver, FloydWarshallSolver, PathReconstructor
from ..config import GraphConfig, get_config
from ..domain.errors import ConfigurationError, TollGraphError
from ..domain.models import (
    DistanceMatrix,
    FloydWarshallResult,
    Identifier,
    IterationRecord,
    LoggingLevel,
    PathResult,
    PrecedenceMatrix,
)
from ..graph.engine import GraphEngine, NodeInput
from ..observability import GraphLogger


def build_config(config: Optional[GraphConfig] = None, **overrides: Any) -> GraphConfig:
    """Merge keyword overrides into a graph configuration.

    Raises:
        ConfigurationError: If an override is unknown or invalid.
    """
    base = config or get_config().graph
    if not overrides:
        return base
    try:
        return GraphConfig(**{**base.model_dump(), **overrides})
    except ValidationError as e:
        first = e.errors()[0]
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid graph option {setting!r}: {first.get('msg', '')}",
            cause=e,
            setting_name=setting,
            expected_type=first.get("type"),
        )


class WeightedGraph:
    """Mutable weighted graph with node tolls and shortest path queries.

    Attributes:
        name: Name attached to every log record of this graph
        ignore_errors: Log rejected operations instead of raising
        engine: Underlying GraphEngine holding nodes and routes
    """

    def __init__(
        self,
        config: Optional[GraphConfig] = None,
        *,
        cost_format: Optional[CostFormatSpec] = None,
        **overrides: Any,
    ) -> None:
        settings = build_config(config, **overrides)
        self.name = settings.name or f"Graph [{datetime.now():%Y-%m-%d %H:%M:%S}]"
        self.ignore_errors = settings.ignore_errors
        self._log = GraphLogger(graph_name=self.name, level=settings.logging_level)
        self.engine = GraphEngine(
            auto_create_nodes=settings.auto_create_nodes,
            constant_node_cost=settings.constant_node_cost,
            log=self._log,
        )
        self._dijkstra = DijkstraSolver(log=self._log)
        self._floyd_warshall = FloydWarshallSolver(log=self._log)
        self._reconstructor = PathReconstructor(self._floyd_warshall, self.engine)
        self._formatter = CostFormatter(cost_format, log=self._log)
        self._log.detail(f"Logging level set to: {settings.logging_level.name}")

    # --- Options ------------------------------------------------------------

    @property
    def logging_level(self) -> LoggingLevel:
        return self._log.level

    @logging_level.setter
    def logging_level(self, level: LoggingLevel) -> None:
        self._log.level = LoggingLevel(level)

    @property
    def auto_create_nodes(self) -> bool:
        return self.engine.auto_create_nodes

    @auto_create_nodes.setter
    def auto_create_nodes(self, enabled: bool) -> None:
        self.engine.auto_create_nodes = enabled

    @property
    def constant_node_cost(self) -> float:
        return self.engine.constant_node_cost

    @constant_node_cost.setter
    def constant_node_cost(self, cost: float) -> None:
        self._apply(setattr, self.engine, "constant_node_cost", cost)

    @property
    def cost_format(self) -> Optional[CostFormatSpec]:
        return self._formatter.spec

    @cost_format.setter
    def cost_format(self, spec: Optional[CostFormatSpec]) -> None:
        self._formatter.spec = spec

    # --- Read access --------------------------------------------------------

    @property
    def version(self) -> int:
        return self.engine.version

    def nodes(self) -> List[str]:
        return self.engine.nodes()

    def node_cost(self, node: Identifier) -> float:
        return self.engine.node_cost(node)

    def node_costs(self) -> Dict[str, float]:
        return self.engine.node_costs()

    def outgoing(self, node: Identifier) -> Dict[str, float]:
        return self.engine.outgoing(node)

    def route_weight(self, start: Identifier, end: Identifier) -> Optional[float]:
        return self.engine.route_weight(start, end)

    def adjacency(self) -> Dict[str, Dict[str, float]]:
        return self.engine.adjacency()

    def __contains__(self, node: object) -> bool:
        return node in self.engine

    def __len__(self) -> int:
        return len(self.engine)

    def __repr__(self) -> str:
        return f"WeightedGraph(name={self.name!r}, nodes={len(self.engine)})"

    # --- Node operations ----------------------------------------------------

    def add_node(self, node: NodeInput, *more: NodeInput) -> WeightedGraph:
        """Add nodes; each one is validated and reported on its own."""
        for item in (node, *more):
            self._apply(self.engine.add_node, item)
        return self

    def edit_node(
        self,
        identifier: Identifier,
        new_identifier: Optional[Identifier] = None,
        new_cost: Optional[float] = None,
    ) -> WeightedGraph:
        return self._apply(self.engine.edit_node, identifier, new_identifier, new_cost)

    def delete_node(self, identifier: Identifier, *more: Identifier) -> WeightedGraph:
        for item in (identifier, *more):
            self._apply(self.engine.delete_node, item)
        return self

    def avoid_node(self, identifier: Identifier, *more: Identifier) -> WeightedGraph:
        for item in (identifier, *more):
            self._apply(self.engine.avoid_node, item)
        return self

    # --- Route operations ---------------------------------------------------

    def add_route(
        self,
        start: Identifier,
        end: Identifier,
        weight: float,
        bidirectional: bool = False,
        change_existing: bool = False,
    ) -> WeightedGraph:
        return self._apply(
            self.engine.add_route, start, end, weight, bidirectional, change_existing
        )

    def edit_route(
        self,
        start: Identifier,
        end: Identifier,
        weight: float,
        bidirectional: bool = False,
    ) -> WeightedGraph:
        return self._apply(self.engine.edit_route, start, end, weight, bidirectional)

    def delete_route(
        self,
        start: Identifier,
        end: Identifier,
        bidirectional: bool = False,
        hard_delete: bool = True,
    ) -> WeightedGraph:
        return self._apply(
            self.engine.delete_route, start, end, bidirectional, hard_delete
        )

    def avoid_route(
        self, start: Identifier, end: Identifier, bidirectional: bool = False
    ) -> WeightedGraph:
        return self._apply(self.engine.avoid_route, start, end, bidirectional)

    def scale_route_weights(self, factor: float) -> WeightedGraph:
        return self._apply(self.engine.scale_route_weights, factor)

    def scale_node_costs(self, factor: float) -> WeightedGraph:
        return self._apply(self.engine.scale_node_costs, factor)

    # --- Shortest paths -----------------------------------------------------

    def find_path_dijkstra(self, start: Identifier, end: Identifier) -> PathResult:
        """Cheapest path between two nodes, computed from scratch.

        Returns:
            PathResult; empty with infinite cost if rejected under
            ignore_errors or if end is unreachable.
        """
        return self._query(self._dijkstra.find_path, self.engine, start, end)

    def find_matrices_floyd_warshall(self) -> FloydWarshallResult:
        """Compute and cache the all-pairs distance and precedence matrices."""
        return self._floyd_warshall.compute(self.engine)

    def find_path_floyd_warshall(self, start: Identifier, end: Identifier) -> PathResult:
        """Cheapest path between two nodes, read from the cached matrices.

        Returns:
            PathResult; empty with infinite cost if rejected under
            ignore_errors or if end is unreachable.
        """
        return self._query(self._reconstructor.find_path, start, end)

    @property
    def table_log(self) -> List[IterationRecord]:
        """Iteration trace of the last Dijkstra run."""
        return list(self._dijkstra.last_trace)

    @property
    def distance_matrix(self) -> Optional[DistanceMatrix]:
        result = self._floyd_warshall.result
        return None if result is None else result.distance

    @property
    def precedence_matrix(self) -> Optional[PrecedenceMatrix]:
        result = self._floyd_warshall.result
        return None if result is None else result.precedence

    def formatted_distance_matrix(self) -> Optional[Dict[str, Dict[str, str]]]:
        """Cached distance matrix with every cost rendered for display."""
        result = self._floyd_warshall.result
        return None if result is None else result.formatted_distance(self.format_cost)

    def format_cost(self, cost: float) -> str:
        return self._formatter(cost)

    # --- Error policy -------------------------------------------------------

    def _apply(self, operation: Callable[..., Any], *args: Any) -> WeightedGraph:
        try:
            operation(*args)
        except TollGraphError as e:
            self._report(e)
            if not self.ignore_errors:
                raise
        return self

    def _query(self, operation: Callable[..., PathResult], *args: Any) -> PathResult:
        try:
            result = operation(*args)
        except TollGraphError as e:
            self._report(e)
            if not self.ignore_errors:
                raise
            result = PathResult(cost=math.inf, path=())
        if self._formatter.spec is None:
            return result
        return PathResult(
            cost=result.cost,
            path=result.path,
            formatted_cost=self._formatter(result.cost),
        )

    def _report(self, error: TollGraphError) -> None:
        self._log.error(str(error), error_type=type(error).__name__)
