"""Immutable domain models for the weighted graph library.

All models are frozen dataclasses with slots. They carry the inputs and
results of graph operations and have no behaviour beyond convenience
properties.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, Iterator, Optional, Tuple, Union

Identifier = Union[str, int, float]
DistanceMatrix = Dict[str, Dict[str, float]]
PrecedenceMatrix = Dict[str, Dict[str, str]]


class LoggingLevel(IntEnum):
    """Verbosity of a graph's log output.

    NONE silences the graph, MIN reports rejected operations, STEPS adds
    algorithm iterations and ALL adds every mutation.
    """

    NONE = 0
    MIN = 1
    STEPS = 2
    ALL = 3


@dataclass(frozen=True, slots=True)
class NodeSpec:
    """Description of a node to add.

    Attributes:
        identifier: Node identifier; numbers are stored in string form
        cost: Toll charged when the node is entered, or None for the
            graph's constant node cost
        protected: If True, changing the constant node cost leaves this
            node's toll untouched
    """

    identifier: Optional[Identifier]
    cost: Optional[float] = None
    protected: bool = False


@dataclass(frozen=True, slots=True)
class CostFormat:
    """Display format for costs, e.g. ``CostFormat("KM")`` -> ``"1,234 KM"``.

    Attributes:
        unit: Unit or currency label
        prefix: If True the unit goes before the number
    """

    unit: str
    prefix: bool = False


@dataclass(frozen=True, slots=True)
class PathResult:
    """Result of a shortest path query.

    Attributes:
        cost: Total cost of the path, ``math.inf`` when unreachable
        path: Ordered node identifiers from start to end inclusive
        formatted_cost: Display form of the cost, if a formatter is set
    """

    cost: float
    path: Tuple[str, ...]
    formatted_cost: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Check if no path was found."""
        return len(self.path) == 0

    @property
    def is_reachable(self) -> bool:
        """Check if the end node can be reached at a finite cost."""
        return not self.is_empty and not math.isinf(self.cost)


@dataclass(frozen=True, slots=True)
class IterationRecord:
    """One row of the Dijkstra iteration trace.

    Attributes:
        iteration: Iteration number, 0 being the seeding from the start node
        visited: Node settled in this iteration
        cost: Settled cost of the visited node
        connection: Edge used to reach the node (``"A -> B"``), if any
        updated: Neighbours relaxed this iteration with their new costs
    """

    iteration: int
    visited: str
    cost: float
    connection: Optional[str] = None
    updated: Tuple[Tuple[str, float], ...] = field(default_factory=tuple)

    @property
    def updated_nodes(self) -> Tuple[str, ...]:
        """Identifiers of the neighbours relaxed this iteration."""
        return tuple(node for node, _ in self.updated)


@dataclass(frozen=True, slots=True)
class FloydWarshallResult:
    """Distance and precedence matrices computed by Floyd-Warshall.

    Unpacks as ``distance, precedence = result``.

    Attributes:
        distance: Cheapest cost from row node to column node
        precedence: Node preceding the column node on the cheapest path
        nodes: Row/column order of the matrices
        version: Graph version the matrices were computed from
    """

    distance: DistanceMatrix
    precedence: PrecedenceMatrix
    nodes: Tuple[str, ...] = field(default_factory=tuple)
    version: int = 0

    def __iter__(self) -> Iterator[Union[DistanceMatrix, PrecedenceMatrix]]:
        return iter((self.distance, self.precedence))

    def formatted_distance(
        self, formatter: Callable[[float], str]
    ) -> Dict[str, Dict[str, str]]:
        """Return the distance matrix with every cost rendered for display."""
        return {
            row: {col: formatter(cost) for col, cost in cols.items()}
            for row, cols in self.distance.items()
        }
