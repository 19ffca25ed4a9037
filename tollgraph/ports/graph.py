"""Graph ports - Abstractions for reading graphs and computing paths.

These protocols define the contracts between the mutable engine and the
shortest-path solvers. Solvers only ever see a GraphView, so they borrow
read access for the duration of a call and never mutate the graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import FloydWarshallResult, PathResult


class GraphView(Protocol):
    """Read-only view of a weighted graph with node tolls.

    Implementation: graph/engine.py (GraphEngine)
    """

    @property
    def version(self) -> int:
        """Counter bumped by every committed mutation."""
        ...

    def nodes(self) -> Sequence[str]:
        """Return node identifiers in insertion order."""
        ...

    def has_node(self, node: str) -> bool:
        """Check if a node exists."""
        ...

    def node_cost(self, node: str) -> float:
        """Return the toll charged when entering a node."""
        ...

    def outgoing(self, node: str) -> Mapping[str, float]:
        """Return the outgoing neighbours of a node and their edge weights.

        The mapping preserves route insertion order.
        """
        ...

    def route_weight(self, start: str, end: str) -> Optional[float]:
        """Return the weight of a directed route, or None if absent."""
        ...


class PathSolverPort(Protocol):
    """Port for point-to-point shortest path computation.

    Implementation: adapters/graph/dijkstra_solver.py
    """

    def find_path(self, graph: GraphView, start: str, end: str) -> PathResult:
        """Find the cheapest path from start to end.

        Args:
            graph: The graph to search.
            start: Starting node identifier.
            end: Ending node identifier.

        Returns:
            PathResult with total cost and the ordered path.
        """
        ...


class MatrixSolverPort(Protocol):
    """Port for all-pairs shortest path computation.

    Implementation: adapters/graph/floyd_warshall_solver.py
    """

    def compute(self, graph: GraphView) -> FloydWarshallResult:
        """Compute distance and precedence matrices for every node pair.

        Args:
            graph: The graph to analyse.

        Returns:
            FloydWarshallResult holding both matrices.
        """
        ...


class CostFormatterPort(Protocol):
    """Port for rendering costs for display.

    Implementation: adapters/formatting/cost_formatter.py
    """

    def __call__(self, cost: float) -> str:
        """Render a cost as a display string."""
        ...
