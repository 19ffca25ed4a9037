"""Adapters - Concrete implementations of the ports.

Each subpackage implements one or more ports:
- graph: Dijkstra and Floyd-Warshall solvers
- formatting: Cost display formatter
"""
