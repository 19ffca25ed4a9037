"""Dijkstra shortest path solver with node tolls.

The classic label-setting algorithm, generalised so that entering a node
charges its toll on top of the edge weight. The start node's own toll is
charged once, when its direct neighbours are seeded.

Each call records an iteration trace (one IterationRecord per settled
node) that is kept on the solver and logged at STEPS verbosity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from ...domain.errors import NotFoundError
from ...domain.models import IterationRecord, PathResult
from ...graph.engine import node_key
from ...observability import GraphLogger
from ...ports.graph import GraphView


@dataclass
class DijkstraSolver:
    """Point-to-point shortest path solver.

    This adapter implements PathSolverPort. It keeps no state between
    calls other than the trace of the last one.

    Attributes:
        log: Graph-scoped logger receiving the iteration events
        last_trace: Iteration records of the most recent call
    """

    log: GraphLogger = field(default_factory=GraphLogger)
    last_trace: Tuple[IterationRecord, ...] = field(default=(), init=False)

    def find_path(self, graph: GraphView, start: str, end: str) -> PathResult:
        """Find the cheapest path between two nodes.

        Args:
            graph: The graph to search.
            start: Starting node identifier.
            end: Ending node identifier.

        Returns:
            PathResult with the total cost (tolls included) and the path.
            If end cannot be reached the cost is ``math.inf`` and the path
            is empty.

        Raises:
            InvalidArgumentError: If start or end is null or empty.
            NotFoundError: If start or end is not in the graph, or start
                has no outgoing routes.
        """
        start = node_key(start, "start")
        end = node_key(end, "end")
        for node in (start, end):
            if not graph.has_node(node):
                raise NotFoundError(
                    f"The node {node} doesn't exist in the graph yet.",
                    identifier=node,
                )
        neighbours = graph.outgoing(start)
        if not neighbours:
            raise NotFoundError(
                f"The starting node {start} doesn't have any connections "
                "to another node.",
                identifier=start,
            )

        self.log.step(
            "Starting Dijkstra algorithm", start=start, end=end
        )
        start_toll = graph.node_cost(start)

        # Insertion order of this table is the tie-break order
        tentative: Dict[str, float] = {end: math.inf}
        parents: Dict[str, str] = {}
        seeded: List[Tuple[str, float]] = []
        for neighbour, weight in neighbours.items():
            cost = weight + start_toll + graph.node_cost(neighbour)
            tentative[neighbour] = cost
            parents[neighbour] = start
            seeded.append((neighbour, cost))
        trace = [IterationRecord(0, start, start_toll, None, tuple(seeded))]

        if start == end:
            self._finish(trace)
            return PathResult(cost=0.0, path=(start,))

        visited = set()
        iteration = 0
        node = self._cheapest(tentative, visited)
        while node is not None:
            iteration += 1
            cost = tentative[node]
            visited.add(node)
            connection = f"{parents[node]} -> {node}" if node in parents else None
            self.log.step(
                f"Visited: {node}, Distance/Cost: {cost}, "
                f"Connection: {connection or 'None'}",
                iteration=iteration,
                node=node,
                cost=cost,
            )

            updated: List[Tuple[str, float]] = []
            for neighbour, weight in graph.outgoing(node).items():
                if neighbour == start or neighbour in visited:
                    continue
                candidate = cost + weight + graph.node_cost(neighbour)
                previous = tentative.get(neighbour)
                if previous is None or candidate < previous:
                    tentative[neighbour] = candidate
                    parents[neighbour] = node
                    updated.append((neighbour, candidate))

            if updated:
                self.log.step(
                    "Updated Nodes: "
                    + ", ".join(f"{n} ({c})" for n, c in updated),
                    iteration=iteration,
                    updated=[n for n, _ in updated],
                )
            trace.append(
                IterationRecord(iteration, node, cost, connection, tuple(updated))
            )
            node = self._cheapest(tentative, visited)

        self._finish(trace)
        total = tentative[end]
        if math.isinf(total):
            self.log.step("No route found", start=start, end=end)
            return PathResult(cost=math.inf, path=())
        return PathResult(cost=total, path=self._walk(parents, start, end))

    @staticmethod
    def _cheapest(tentative: Mapping[str, float], visited: set) -> Optional[str]:
        """Unvisited node with the lowest finite cost; first one wins ties."""
        closest: Optional[str] = None
        for node, cost in tentative.items():
            if node in visited or math.isinf(cost):
                continue
            if closest is None or cost < tentative[closest]:
                closest = node
        return closest

    @staticmethod
    def _walk(parents: Mapping[str, str], start: str, end: str) -> Tuple[str, ...]:
        path = [end]
        while path[-1] != start:
            path.append(parents[path[-1]])
        path.reverse()
        return tuple(path)

    def _finish(self, trace: List[IterationRecord]) -> None:
        self.last_trace = tuple(trace)
        self.log.step("Dijkstra finished", iterations=len(trace))
