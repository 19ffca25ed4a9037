"""Ports layer - Protocol definitions for the graph and its solvers.

Ports define the contracts that adapters must implement.
"""

from .graph import CostFormatterPort, GraphView, MatrixSolverPort, PathSolverPort

__all__ = [
    "CostFormatterPort",
    "GraphView",
    "MatrixSolverPort",
    "PathSolverPort",
]
