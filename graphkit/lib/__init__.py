"""Graph storage and conversion utilities for graphkit.

This package holds the arena graph, edge-list I/O and NetworkX interop;
algorithms live in ``graphkit.lib.algorithms``.
"""

from graphkit.lib.graph import Edge, Graph, Node

__all__ = [
    "Edge",
    "Graph",
    "Node",
]
