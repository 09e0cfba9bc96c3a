from __future__ import annotations

from typing import Union

#: Represents a numeric distance or capacity on an edge.
Cost = Union[int, float]

#: Distance assigned to nodes that cannot be reached.
INF = float("inf")


class GraphError(Exception):
    """Base class for errors raised by graphkit algorithms."""


class InvalidArgumentError(GraphError, ValueError):
    """
    A graph, node id or node index supplied by the caller is missing or unknown.
    """


class CycleDetectedError(GraphError):
    """Topological order requested on a graph that contains a directed cycle."""


class NegativeCycleError(GraphError):
    """A negative-weight cycle is reachable from the shortest-path source."""
