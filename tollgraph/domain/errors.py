"""Typed domain errors for the weighted graph library.

Every rejected mutation or query raises one of these errors. Whether the
error reaches the caller or is only logged is decided by the
``ignore_errors`` policy of :class:`~tollgraph.services.WeightedGraph`;
the engine and the solvers always raise.

All errors inherit from TollGraphError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TollGraphError(Exception):
    """Base error for the graph domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidArgumentError(TollGraphError):
    """Missing or malformed identifier, weight, cost or factor.

    Attributes:
        argument: Name of the offending argument, when a single one is at fault
    """

    argument: str = ""


@dataclass
class NotFoundError(TollGraphError):
    """A referenced node or route does not exist.

    Attributes:
        identifier: The node identifier (or ``"A -> B"`` route label) not found
    """

    identifier: str = ""


@dataclass
class DuplicateNodeError(TollGraphError):
    """A node with the same identifier already exists.

    Attributes:
        identifier: The identifier that is already taken
    """

    identifier: str = ""


@dataclass
class RouteExistsError(TollGraphError):
    """The directed route already exists and overwriting was not requested.

    Attributes:
        start: Origin of the route
        end: Destination of the route
    """

    start: str = ""
    end: str = ""


@dataclass
class SelfLoopError(TollGraphError):
    """A route from a node to itself was requested.

    Attributes:
        identifier: The node at both ends of the rejected route
    """

    identifier: str = ""


@dataclass
class PrecomputationRequiredError(TollGraphError):
    """A Floyd-Warshall path query ran before the matrices were computed."""


@dataclass
class StaleMatricesError(PrecomputationRequiredError):
    """The cached matrices were computed for an older version of the graph.

    Attributes:
        computed_version: Graph version the matrices were computed from
        current_version: Graph version at query time
    """

    computed_version: int = 0
    current_version: int = 0


@dataclass
class ConfigurationError(TollGraphError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
