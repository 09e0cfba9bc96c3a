from __future__ import annotations

from typing import List, Set

from graphkit.lib.algorithms.base import InvalidArgumentError
from graphkit.lib.graph import Graph, NodeIndex
from graphkit.logging import get_logger

logger = get_logger(__name__)


def _finish_order(graph: Graph) -> List[NodeIndex]:
    """Nodes of the whole graph in increasing DFS finish time."""
    visited = [False] * len(graph)
    order: List[NodeIndex] = []

    for root in range(len(graph)):
        if visited[root]:
            continue
        visited[root] = True
        stack = [(root, iter(graph.neighbors(root)))]
        while stack:
            node, successors = stack[-1]
            for nbr in successors:
                if not visited[nbr]:
                    visited[nbr] = True
                    stack.append((nbr, iter(graph.neighbors(nbr))))
                    break
            else:
                stack.pop()
                order.append(node)

    return order


def strongly_connected_components(graph: Graph) -> List[Set[NodeIndex]]:
    """
    Strongly connected components via Kosaraju's algorithm.

    Pass 1 records finish order with a DFS over the whole graph. Pass 2 walks
    the reversed graph, taking roots by decreasing finish time; the nodes a
    root reaches among those not yet assigned form one component.

    Args:
        graph: The graph to decompose.

    Returns:
        List of components, each a set of node indices. The components
        partition the node indices exactly.
    """
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")

    order = _finish_order(graph)
    reverse = graph.copy_of(reverse=True)
    assigned = [False] * len(graph)
    components: List[Set[NodeIndex]] = []

    while order:
        root = order.pop()
        if assigned[root]:
            continue
        assigned[root] = True
        component = {root}
        stack = [root]
        while stack:
            node = stack.pop()
            for nbr in reverse.neighbors(node):
                if not assigned[nbr]:
                    assigned[nbr] = True
                    component.add(nbr)
                    stack.append(nbr)
        components.append(component)

    logger.debug(
        "Found %d strongly connected components among %d nodes",
        len(components),
        len(graph),
    )
    return components
