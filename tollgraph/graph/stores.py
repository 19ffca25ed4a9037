"""Storage of nodes (with tolls) and directed routes.

Both stores are keyed by node identifier and preserve insertion order,
which decides tie-breaks in the solvers. They perform no validation:
GraphEngine checks every precondition before touching them.
"""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, Optional, Set, Tuple


class NodeStore:
    """Node identifier -> toll cost, plus the set of protected nodes."""

    def __init__(self) -> None:
        self._costs: Dict[str, float] = {}
        self._protected: Set[str] = set()

    def __contains__(self, node: object) -> bool:
        return node in self._costs

    def __iter__(self) -> Iterator[str]:
        return iter(self._costs)

    def __len__(self) -> int:
        return len(self._costs)

    def add(self, node: str, cost: float, protected: bool = False) -> None:
        self._costs[node] = cost
        if protected:
            self._protected.add(node)

    def remove(self, node: str) -> None:
        del self._costs[node]
        self._protected.discard(node)

    def rename(self, old: str, new: str) -> None:
        """Rename a node, keeping its position, toll and protection."""
        self._costs = {
            (new if node == old else node): cost
            for node, cost in self._costs.items()
        }
        if old in self._protected:
            self._protected.discard(old)
            self._protected.add(new)

    def cost(self, node: str) -> float:
        return self._costs[node]

    def set_cost(self, node: str, cost: float) -> None:
        self._costs[node] = cost

    def is_protected(self, node: str) -> bool:
        return node in self._protected

    def costs(self) -> Dict[str, float]:
        return dict(self._costs)

    def reset_unprotected(self, cost: float) -> List[str]:
        """Set the toll of every unprotected node.

        Returns:
            The nodes whose toll was overwritten.
        """
        changed = [node for node in self._costs if node not in self._protected]
        for node in changed:
            self._costs[node] = cost
        return changed

    def scale(self, factor: float) -> None:
        """Multiply every toll by factor; avoided nodes stay avoided."""
        for node, cost in self._costs.items():
            if not math.isinf(cost):
                self._costs[node] = cost * factor


class AdjacencyStore:
    """Node identifier -> (adjacent identifier -> edge weight)."""

    def __init__(self) -> None:
        self._adj: Dict[str, Dict[str, float]] = {}

    def __contains__(self, node: object) -> bool:
        return node in self._adj

    def __iter__(self) -> Iterator[str]:
        return iter(self._adj)

    def add_node(self, node: str) -> None:
        self._adj.setdefault(node, {})

    def remove_node(self, node: str) -> int:
        """Drop a node with its outgoing and incoming routes.

        Returns:
            Number of incoming routes removed.
        """
        del self._adj[node]
        removed = 0
        for neighbours in self._adj.values():
            if neighbours.pop(node, None) is not None:
                removed += 1
        return removed

    def rename_node(self, old: str, new: str) -> None:
        """Rename a node in its own entry and in every incoming route."""
        renamed: Dict[str, Dict[str, float]] = {}
        for node, neighbours in self._adj.items():
            if old in neighbours:
                neighbours = {
                    (new if adj == old else adj): weight
                    for adj, weight in neighbours.items()
                }
            renamed[new if node == old else node] = neighbours
        self._adj = renamed

    def outgoing(self, node: str) -> Dict[str, float]:
        return dict(self._adj.get(node, {}))

    def weight(self, start: str, end: str) -> Optional[float]:
        return self._adj.get(start, {}).get(end)

    def has_route(self, start: str, end: str) -> bool:
        return end in self._adj.get(start, {})

    def set_route(self, start: str, end: str, weight: float) -> None:
        self._adj[start][end] = weight

    def remove_route(self, start: str, end: str) -> None:
        del self._adj[start][end]

    def routes(self) -> Iterator[Tuple[str, str, float]]:
        for start, neighbours in self._adj.items():
            for end, weight in neighbours.items():
                yield start, end, weight

    def scale(self, factor: float) -> None:
        for neighbours in self._adj.values():
            for end in neighbours:
                neighbours[end] *= factor

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        return {node: dict(neighbours) for node, neighbours in self._adj.items()}
