"""Floyd-Warshall all-pairs solver and the path reconstructor.

FloydWarshallSolver computes the distance and precedence matrices of the
whole graph in O(V^3) and caches the result, stamped with the graph
version it was computed from. PathReconstructor answers point-to-point
queries from that cache without recomputing, and refuses to answer once
the graph has changed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...domain.errors import (
    NotFoundError,
    PrecomputationRequiredError,
    StaleMatricesError,
)
from ...domain.models import (
    DistanceMatrix,
    FloydWarshallResult,
    PathResult,
    PrecedenceMatrix,
)
from ...graph.engine import node_key
from ...observability import GraphLogger
from ...ports.graph import GraphView


@dataclass
class FloydWarshallSolver:
    """All-pairs shortest path solver.

    This adapter implements MatrixSolverPort.

    Attributes:
        log: Graph-scoped logger receiving the iteration snapshots
    """

    log: GraphLogger = field(default_factory=GraphLogger)
    _result: Optional[FloydWarshallResult] = field(default=None, init=False, repr=False)

    @property
    def result(self) -> Optional[FloydWarshallResult]:
        """Matrices of the last computation, if any."""
        return self._result

    def compute(self, graph: GraphView) -> FloydWarshallResult:
        """Compute the distance and precedence matrices.

        Rows and columns follow the sorted node identifiers. The direct
        cost of a route is its weight plus the toll of its destination;
        the origin's toll is added once at the end to every reachable,
        non-trivial entry of its row.

        Args:
            graph: The graph to analyse.

        Returns:
            FloydWarshallResult, also cached for PathReconstructor.
        """
        nodes = sorted(graph.nodes())
        tolls = {node: graph.node_cost(node) for node in nodes}
        dist: DistanceMatrix = {}
        prec: PrecedenceMatrix = {}
        for i in nodes:
            out = graph.outgoing(i)
            dist[i] = {}
            prec[i] = {}
            for j in nodes:
                prec[i][j] = i
                if i == j:
                    dist[i][j] = 0.0
                elif j in out:
                    dist[i][j] = out[j] + tolls[j]
                else:
                    dist[i][j] = math.inf
        self.log.step("Floyd-Warshall initial distances", iteration=0, matrix=dist)

        for iteration, k in enumerate(nodes, 1):
            row_k = dist[k]
            for i in nodes:
                if i == k:
                    continue
                row_i = dist[i]
                through_k = row_i[k]
                if math.isinf(through_k):
                    continue
                for j in nodes:
                    if j == k or j == i:
                        continue
                    candidate = through_k + row_k[j]
                    if candidate < row_i[j]:
                        row_i[j] = candidate
                        prec[i][j] = k
            self.log.step(
                f"Floyd-Warshall iteration {iteration} (middle node {k})",
                iteration=iteration,
                matrix=dist,
                precedence=prec,
            )

        for i in nodes:
            toll = tolls[i]
            if toll > 0:
                row = dist[i]
                for j in nodes:
                    if 0 < row[j] < math.inf:
                        row[j] += toll

        self._result = FloydWarshallResult(
            distance=dist,
            precedence=prec,
            nodes=tuple(nodes),
            version=graph.version,
        )
        self.log.step(
            "Floyd-Warshall finished", nodes=len(nodes), version=graph.version
        )
        return self._result

    def clear(self) -> None:
        """Drop the cached matrices."""
        self._result = None


@dataclass
class PathReconstructor:
    """Point-to-point queries against cached Floyd-Warshall matrices.

    Attributes:
        solver: Solver owning the cached matrices
        graph: Graph the matrices belong to; used to detect staleness
    """

    solver: FloydWarshallSolver
    graph: Optional[GraphView] = None

    def find_path(self, start: str, end: str) -> PathResult:
        """Return the cheapest path between two nodes from the cache.

        Args:
            start: Starting node identifier.
            end: Ending node identifier.

        Returns:
            PathResult with the cost from the distance matrix and the path
            expanded from the precedence matrix. Unreachable pairs give
            cost ``math.inf`` and an empty path.

        Raises:
            InvalidArgumentError: If start or end is null or empty.
            PrecomputationRequiredError: If no matrices were computed.
            StaleMatricesError: If the graph changed since the computation.
            NotFoundError: If start or end is not in the matrices.
        """
        result = self.solver.result
        if result is None:
            raise PrecomputationRequiredError(
                "Precedence and distance matrices are required to find the "
                "path. Run the Floyd-Warshall computation first"
            )
        if self.graph is not None and self.graph.version != result.version:
            raise StaleMatricesError(
                "The graph changed after the Floyd-Warshall matrices were "
                "computed. Run the computation again",
                computed_version=result.version,
                current_version=self.graph.version,
            )
        start = node_key(start, "start")
        end = node_key(end, "end")
        for node in (start, end):
            if node not in result.distance:
                raise NotFoundError(
                    f"The node {node} is not in the Floyd-Warshall matrices.",
                    identifier=node,
                )

        cost = result.distance[start][end]
        if math.isinf(cost):
            return PathResult(cost=math.inf, path=())
        if start == end:
            return PathResult(cost=cost, path=(start,))
        return PathResult(cost=cost, path=expand_path(result.precedence, start, end))


def expand_path(precedence: PrecedenceMatrix, start: str, end: str) -> Tuple[str, ...]:
    """Expand the intermediate nodes recorded in a precedence matrix.

    ``precedence[i][j] == i`` means j is reached directly from i; any other
    value k splits the hop into ``i -> k`` and ``k -> j``.
    """
    path: List[str] = [start]
    pending: List[Tuple[str, str]] = [(start, end)]
    while pending:
        i, j = pending.pop()
        k = precedence[i][j]
        if k == i:
            path.append(j)
        else:
            pending.append((k, j))
            pending.append((i, k))
    return tuple(path)
