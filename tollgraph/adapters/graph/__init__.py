"""Graph adapters - Implementations of the solver ports.

Available implementations:
- DijkstraSolver: Point-to-point shortest paths
- FloydWarshallSolver: All-pairs distance and precedence matrices
- PathReconstructor: Path queries against cached matrices
"""

from .dijkstra_solver import DijkstraSolver
from .floyd_warshall_solver import FloydWarshallSolver, PathReconstructor, expand_path

__all__ = ["DijkstraSolver", "FloydWarshallSolver", "PathReconstructor", "expand_path"]
