"""Domain layer - Core graph models and errors.

This module contains immutable domain models and typed errors
used throughout the library. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DuplicateNodeError,
    InvalidArgumentError,
    NotFoundError,
    PrecomputationRequiredError,
    RouteExistsError,
    SelfLoopError,
    StaleMatricesError,
    TollGraphError,
)
from .models import (
    CostFormat,
    DistanceMatrix,
    FloydWarshallResult,
    Identifier,
    IterationRecord,
    LoggingLevel,
    NodeSpec,
    PathResult,
    PrecedenceMatrix,
)

__all__ = [
    # Models
    "CostFormat",
    "DistanceMatrix",
    "FloydWarshallResult",
    "Identifier",
    "IterationRecord",
    "LoggingLevel",
    "NodeSpec",
    "PathResult",
    "PrecedenceMatrix",
    # Errors
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
