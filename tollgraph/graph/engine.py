"""Mutation API over the node and adjacency stores.

GraphEngine validates every precondition of an operation before writing
anything, so a rejected call never leaves a partial mutation behind. It
always raises on failure; deciding whether an error reaches the caller is
the job of :class:`~tollgraph.services.WeightedGraph`.

Every committed mutation bumps ``version``, which lets cached
Floyd-Warshall matrices detect that they are stale.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..domain.errors import (
    DuplicateNodeError,
    InvalidArgumentError,
    NotFoundError,
    RouteExistsError,
    SelfLoopError,
)
from ..domain.models import Identifier, LoggingLevel, NodeSpec
from ..observability import GraphLogger
from .stores import AdjacencyStore, NodeStore

NodeInput = Union[Identifier, NodeSpec, Mapping[str, Any]]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def node_key(identifier: Optional[Identifier], argument: str = "identifier") -> str:
    """Return the storage key of an identifier, rejecting null and empty ones."""
    if identifier is None or (isinstance(identifier, str) and identifier == ""):
        raise InvalidArgumentError(
            f"Node {argument} is required", argument=argument
        )
    if isinstance(identifier, bool) or not isinstance(identifier, (str, int, float)):
        raise InvalidArgumentError(
            f"Node {argument} must be a string or a number, got "
            f"{type(identifier).__name__}",
            argument=argument,
        )
    return str(identifier)


def check_cost(cost: Any, argument: str = "cost") -> float:
    """Validate a node toll: a non-negative number, ``math.inf`` allowed."""
    if not _is_number(cost) or math.isnan(cost) or cost < 0:
        raise InvalidArgumentError(
            f"Node {argument} must be a non-negative number, got {cost!r}",
            argument=argument,
        )
    return float(cost)


def to_node_spec(node: NodeInput) -> NodeSpec:
    """Normalise the accepted node descriptions into a NodeSpec."""
    if isinstance(node, NodeSpec):
        return node
    if isinstance(node, Mapping):
        identifier = node.get("identifier", node.get("name"))
        return NodeSpec(
            identifier=identifier,
            cost=node.get("cost"),
            protected=bool(node.get("protected", False)),
        )
    return NodeSpec(identifier=node)


class GraphEngine:
    """Weighted directed graph with per-node tolls.

    Attributes:
        auto_create_nodes: Create unknown endpoints when adding routes
        version: Counter bumped by every committed mutation
    """

    def __init__(
        self,
        auto_create_nodes: bool = False,
        constant_node_cost: float = 0.0,
        log: Optional[GraphLogger] = None,
    ) -> None:
        self.auto_create_nodes = auto_create_nodes
        self._constant_node_cost = check_cost(constant_node_cost, "constant_node_cost")
        self._nodes = NodeStore()
        self._adjacency = AdjacencyStore()
        self._version = 0
        self._log = log or GraphLogger()

    # --- Read API (GraphView) --------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    def nodes(self) -> List[str]:
        return list(self._nodes)

    def has_node(self, node: Identifier) -> bool:
        return str(node) in self._nodes

    def node_cost(self, node: Identifier) -> float:
        return self._nodes.cost(str(node))

    def is_protected(self, node: Identifier) -> bool:
        return self._nodes.is_protected(str(node))

    def node_costs(self) -> Dict[str, float]:
        return self._nodes.costs()

    def outgoing(self, node: Identifier) -> Dict[str, float]:
        return self._adjacency.outgoing(str(node))

    def route_weight(self, start: Identifier, end: Identifier) -> Optional[float]:
        return self._adjacency.weight(str(start), str(end))

    def has_route(self, start: Identifier, end: Identifier) -> bool:
        return self._adjacency.has_route(str(start), str(end))

    def adjacency(self) -> Dict[str, Dict[str, float]]:
        return self._adjacency.snapshot()

    def __contains__(self, node: object) -> bool:
        return isinstance(node, (str, int, float)) and str(node) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    # --- Constant node cost -------------------------------------------------

    @property
    def constant_node_cost(self) -> float:
        return self._constant_node_cost

    @constant_node_cost.setter
    def constant_node_cost(self, cost: float) -> None:
        cost = check_cost(cost, "constant_node_cost")
        self._constant_node_cost = cost
        changed = self._nodes.reset_unprotected(cost)
        self._touch()
        self._log.detail(
            f"Constant node cost set to {cost}",
            cost=cost,
            nodes_changed=len(changed),
        )

    # --- Node operations ----------------------------------------------------

    def add_node(self, node: NodeInput, *more: NodeInput) -> GraphEngine:
        """Add one or more nodes.

        Args:
            node: Identifier, NodeSpec, or mapping with ``name``/``identifier``,
                ``cost`` and ``protected`` keys.
            *more: Further nodes. Every node is validated before any is added.

        Raises:
            InvalidArgumentError: If the identifier is missing or the cost negative.
            DuplicateNodeError: If the node already exists or is listed twice.
        """
        pending: Dict[str, Tuple[float, bool]] = {}
        for item in (node, *more):
            spec = to_node_spec(item)
            key = node_key(spec.identifier)
            if key in self._nodes or key in pending:
                raise DuplicateNodeError(
                    f"Node already exists: {key}", identifier=key
                )
            cost = (
                self._constant_node_cost
                if spec.cost is None
                else check_cost(spec.cost)
            )
            pending[key] = (cost, spec.protected)
        for key, (cost, protected) in pending.items():
            self._insert_node(key, cost, protected)
        return self

    def _insert_node(self, key: str, cost: float, protected: bool = False) -> None:
        self._nodes.add(key, cost, protected)
        self._adjacency.add_node(key)
        self._touch()
        self._log.detail(
            f"Created node {key} with cost {cost}",
            node=key,
            cost=cost,
            protected=protected,
        )

    def edit_node(
        self,
        identifier: Identifier,
        new_identifier: Optional[Identifier] = None,
        new_cost: Optional[float] = None,
    ) -> GraphEngine:
        """Rename a node and/or replace its toll.

        A new cost replaces the toll even on protected nodes.

        Raises:
            InvalidArgumentError: On empty identifiers or a negative cost.
            NotFoundError: If the node does not exist.
            DuplicateNodeError: If the new identifier is taken.
        """
        key = node_key(identifier)
        new_key = (
            None if new_identifier is None else node_key(new_identifier, "new_identifier")
        )
        if key not in self._nodes:
            raise NotFoundError(f"Node doesn't exist: {key}", identifier=key)
        if new_key is not None and new_key in self._nodes:
            raise DuplicateNodeError(
                f"Node already exists: {new_key}", identifier=new_key
            )
        cost = None if new_cost is None else check_cost(new_cost, "new_cost")

        previous_cost = self._nodes.cost(key)
        if new_key is not None:
            self._nodes.rename(key, new_key)
            self._adjacency.rename_node(key, new_key)
        target = new_key or key
        if cost is not None:
            self._nodes.set_cost(target, cost)
        self._touch()
        self._log.detail(
            f"Changed node {key if new_key is None else f'{key} -> {new_key}'}, "
            f"with cost {previous_cost if cost is None else f'{previous_cost} -> {cost}'}",
            node=key,
            new_node=new_key,
            cost=cost,
        )
        return self

    def delete_node(self, identifier: Identifier, *more: Identifier) -> GraphEngine:
        """Delete nodes together with every route that references them.

        Raises:
            InvalidArgumentError: On an empty identifier.
            NotFoundError: If a node does not exist.
        """
        keys = [self._existing(item) for item in (identifier, *more)]
        for key in dict.fromkeys(keys):
            self._nodes.remove(key)
            incoming = self._adjacency.remove_node(key)
            self._touch()
            self._log.detail(
                f"Deleted node {key}", node=key, incoming_removed=incoming
            )
        return self

    def avoid_node(self, identifier: Identifier, *more: Identifier) -> GraphEngine:
        """Set node tolls to infinity, keeping their routes.

        Raises:
            InvalidArgumentError: On an empty identifier.
            NotFoundError: If a node does not exist.
        """
        keys = [self._existing(item) for item in (identifier, *more)]
        for key in dict.fromkeys(keys):
            self._nodes.set_cost(key, math.inf)
            self._touch()
            self._log.detail(f"Avoiding node {key}", node=key)
        return self

    # --- Route operations ---------------------------------------------------

    def add_route(
        self,
        start: Identifier,
        end: Identifier,
        weight: float,
        bidirectional: bool = False,
        change_existing: bool = False,
    ) -> GraphEngine:
        """Add a directed route, or a pair of them if bidirectional.

        Raises:
            InvalidArgumentError: On missing endpoints or a weight that is
                not a finite positive number.
            NotFoundError: If an endpoint is unknown and auto-creation is off.
            SelfLoopError: If start and end are the same node.
            RouteExistsError: If the route exists and change_existing is False.
        """
        problems = []
        if start is None or start == "":
            problems.append("Starting node can't be null or empty.")
        if end is None or end == "":
            problems.append("Ending node can't be null or empty.")
        if not _is_number(weight) or not math.isfinite(weight) or weight <= 0:
            problems.append("Weight in route must be a finite positive number.")
        if problems:
            raise InvalidArgumentError(
                " ".join(f"Error [{i}]: {p}" for i, p in enumerate(problems, 1))
            )
        return self._set_route(
            node_key(start, "start"),
            node_key(end, "end"),
            float(weight),
            bidirectional,
            change_existing,
        )

    def _set_route(
        self,
        start: str,
        end: str,
        weight: float,
        bidirectional: bool,
        change_existing: bool,
    ) -> GraphEngine:
        missing = [node for node in (start, end) if node not in self._nodes]
        if missing and not self.auto_create_nodes:
            raise NotFoundError(
                f"Node {missing[0]} doesn't exist in graph. "
                "Enable auto_create_nodes to create it automatically",
                identifier=missing[0],
            )
        if start == end:
            raise SelfLoopError(
                f"Can't create a route to itself ({start} - {end})", identifier=start
            )
        pairs = [(start, end), (end, start)] if bidirectional else [(start, end)]
        if not change_existing:
            for a, b in pairs:
                if self._adjacency.has_route(a, b):
                    raise RouteExistsError(
                        f"Route already exists [{a} - {b}] with weight "
                        f"{self._adjacency.weight(a, b)}",
                        start=a,
                        end=b,
                    )

        for node in dict.fromkeys(missing):
            self._insert_node(node, self._constant_node_cost)
        for a, b in pairs:
            previous = self._adjacency.weight(a, b)
            self._adjacency.set_route(a, b, weight)
            if previous is None:
                self._log.detail(
                    f"Created route {a} - {b} with weight: {weight}",
                    start=a,
                    end=b,
                    weight=weight,
                )
            else:
                self._log.detail(
                    f"Changed route {a} - {b} weight from {previous} to {weight}",
                    start=a,
                    end=b,
                    weight=weight,
                )
        self._touch()
        return self

    def edit_route(
        self,
        start: Identifier,
        end: Identifier,
        weight: float,
        bidirectional: bool = False,
    ) -> GraphEngine:
        """Add or overwrite a route; same checks as add_route."""
        return self.add_route(start, end, weight, bidirectional, change_existing=True)

    def delete_route(
        self,
        start: Identifier,
        end: Identifier,
        bidirectional: bool = False,
        hard_delete: bool = True,
    ) -> GraphEngine:
        """Remove a route, or set its weight to infinity when not hard_delete.

        Raises:
            InvalidArgumentError: On missing endpoints.
            NotFoundError: If an endpoint or the route itself does not exist.
        """
        problems = []
        if start is None or start == "":
            problems.append("Starting node can't be null or empty.")
        if end is None or end == "":
            problems.append("Ending node can't be null or empty.")
        if problems:
            raise InvalidArgumentError(
                " ".join(f"Error [{i}]: {p}" for i, p in enumerate(problems, 1))
            )
        a_key = self._existing(start, "start")
        b_key = self._existing(end, "end")
        pairs = [(a_key, b_key), (b_key, a_key)] if bidirectional else [(a_key, b_key)]
        for a, b in pairs:
            if not self._adjacency.has_route(a, b):
                raise NotFoundError(
                    f"Route from {a} to {b} doesn't exist.", identifier=f"{a} -> {b}"
                )

        for a, b in pairs:
            previous = self._adjacency.weight(a, b)
            if hard_delete:
                self._adjacency.remove_route(a, b)
                self._log.detail(
                    f"Deleted route {a} - {b} with previous weight: {previous}",
                    start=a,
                    end=b,
                    weight=previous,
                )
            else:
                self._adjacency.set_route(a, b, math.inf)
                self._log.detail(
                    f"Avoiding route {a} - {b} (previous weight: {previous})",
                    start=a,
                    end=b,
                    weight=previous,
                )
        self._touch()
        return self

    def avoid_route(
        self, start: Identifier, end: Identifier, bidirectional: bool = False
    ) -> GraphEngine:
        """Set route weights to infinity without removing them."""
        return self.delete_route(start, end, bidirectional, hard_delete=False)

    # --- Bulk cost operations -----------------------------------------------

    def scale_route_weights(self, factor: float) -> GraphEngine:
        """Multiply every route weight by a finite positive factor.

        Raises:
            InvalidArgumentError: If factor is not finite and positive.
        """
        if not _is_number(factor) or not math.isfinite(factor) or factor <= 0:
            raise InvalidArgumentError(
                f"The factor must be a finite positive number, got {factor!r}",
                argument="factor",
            )
        self._adjacency.scale(float(factor))
        self._touch()
        if self._log.enabled(LoggingLevel.ALL):
            for a, b, weight in self._adjacency.routes():
                self._log.detail(
                    f"Changed route {a} - {b} with new weight: {weight}",
                    start=a,
                    end=b,
                    weight=weight,
                )
        return self

    def scale_node_costs(self, factor: float) -> GraphEngine:
        """Multiply every node toll by a non-negative factor.

        Avoided nodes keep their infinite toll.

        Raises:
            InvalidArgumentError: If factor is negative or not a finite number.
        """
        if not _is_number(factor) or not math.isfinite(factor) or factor < 0:
            raise InvalidArgumentError(
                f"The factor must be a finite non-negative number, got {factor!r}",
                argument="factor",
            )
        self._nodes.scale(float(factor))
        self._touch()
        if self._log.enabled(LoggingLevel.ALL):
            for node, cost in self._nodes.costs().items():
                self._log.detail(
                    f"Changed node {node} with new cost: {cost}", node=node, cost=cost
                )
        return self

    # --- Internals ----------------------------------------------------------

    def _existing(self, identifier: Identifier, argument: str = "identifier") -> str:
        key = node_key(identifier, argument)
        if key not in self._nodes:
            raise NotFoundError(f"Node doesn't exist: {key}", identifier=key)
        return key

    def _touch(self) -> None:
        self._version += 1
