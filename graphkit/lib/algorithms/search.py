from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional

import numpy as np

from graphkit.lib.algorithms.base import (
    INF,
    CycleDetectedError,
    InvalidArgumentError,
    NegativeCycleError,
)
from graphkit.lib.algorithms.types import Err, Ok, Result, TimeStamps
from graphkit.lib.graph import EdgeIndex, Graph, NodeIndex
from graphkit.logging import get_logger

logger = get_logger(__name__)

# DFS node colors
_WHITE, _GRAY, _BLACK = 0, 1, 2


def check_node_index(graph: Optional[Graph], index: NodeIndex, role: str) -> None:
    """Raise InvalidArgumentError unless ``index`` addresses a node of ``graph``."""
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")
    if not graph.is_index(index):
        raise InvalidArgumentError(
            f"{role} node index '{index}' is not in the graph."
        )


def bfs_edge_path(
    graph: Graph,
    src_node: NodeIndex,
    dst_node: NodeIndex,
    flow_mode: bool = False,
) -> Optional[List[EdgeIndex]]:
    """
    Breadth-first search returning the edges of a fewest-hops path.

    When ``flow_mode`` is True, an edge is traversable only if its residual
    capacity is positive; otherwise every edge is traversable. The search
    stops as soon as ``dst_node`` is discovered.

    Args:
        graph: The graph to search.
        src_node: Index of the start node.
        dst_node: Index of the target node.
        flow_mode: Restrict traversal to edges with residual capacity.

    Returns:
        The edge indices from src to dst in order (empty if ``src == dst``),
        or None if dst is unreachable.

    Raises:
        InvalidArgumentError: If the graph is None or either index is unknown.
    """
    check_node_index(graph, src_node, "Source")
    check_node_index(graph, dst_node, "Target")

    if src_node == dst_node:
        return []

    parent_edge: Dict[NodeIndex, EdgeIndex] = {}
    explored = {src_node}
    queue: Deque[NodeIndex] = deque([src_node])

    while queue:
        node = queue.popleft()
        for edge in graph.out_edges(node):
            if flow_mode and graph.residual(edge.index) <= 0:
                continue
            if edge.tgt in explored:
                continue
            explored.add(edge.tgt)
            parent_edge[edge.tgt] = edge.index

            if edge.tgt == dst_node:
                path: List[EdgeIndex] = []
                current = dst_node
                while current != src_node:
                    e_idx = parent_edge[current]
                    path.append(e_idx)
                    current = graph.get_edge(e_idx).src
                path.reverse()
                return path

            queue.append(edge.tgt)

    return None


def bfs(
    graph: Graph,
    src_node: NodeIndex,
    dst_node: NodeIndex,
    flow_mode: bool = False,
) -> List[NodeIndex]:
    """
    Unweighted shortest path (by edge count) from ``src_node`` to ``dst_node``.

    Returns:
        The node indices of the path, both ends included, ``[src_node]`` when
        both ends coincide, or an empty list if dst is unreachable under the
        active traversal rule.
    """
    edge_path = bfs_edge_path(graph, src_node, dst_node, flow_mode)
    if edge_path is None:
        return []
    return [src_node] + [graph.get_edge(e_idx).tgt for e_idx in edge_path]


def _dfs_visit(
    graph: Graph,
    root: NodeIndex,
    visited: List[bool],
    stamps: Dict[NodeIndex, TimeStamps],
    counter: int,
) -> int:
    """
    Iterative DFS from ``root`` over unvisited nodes, stamping start and finish.

    Returns the next free counter value.
    """
    visited[root] = True
    stamps[root] = [counter]
    counter += 1
    stack = [(root, iter(graph.neighbors(root)))]

    while stack:
        node, successors = stack[-1]
        for nbr in successors:
            if not visited[nbr]:
                visited[nbr] = True
                stamps[nbr] = [counter]
                counter += 1
                stack.append((nbr, iter(graph.neighbors(nbr))))
                break
        else:
            stamps[node].append(counter)
            counter += 1
            stack.pop()

    return counter


def _next_root(in_degrees: List[int], visited: List[bool]) -> Optional[NodeIndex]:
    """First unvisited node with zero in-degree, else the first unvisited node."""
    fallback = None
    for index, seen in enumerate(visited):
        if seen:
            continue
        if in_degrees[index] == 0:
            return index
        if fallback is None:
            fallback = index
    return fallback


def dfs_tree(graph: Graph, src_node: NodeIndex) -> Dict[NodeIndex, TimeStamps]:
    """
    Depth-first traversal from a single root.

    Every node reachable from ``src_node`` is mapped to ``[start, finish]``
    taken from a counter that increases at each discovery and each finish.
    Nodes outside the reachable set are absent.
    """
    check_node_index(graph, src_node, "Source")
    visited = [False] * len(graph)
    stamps: Dict[NodeIndex, TimeStamps] = {}
    _dfs_visit(graph, src_node, visited, stamps, 1)
    return stamps


def dfs_forest(graph: Graph, src_node: NodeIndex) -> Dict[NodeIndex, TimeStamps]:
    """
    Depth-first traversal covering the whole graph.

    Starts at ``src_node``; whenever a tree is exhausted, restarts from an
    unvisited node with zero in-degree, or any unvisited node if none is left.
    Every node of the graph receives a ``[start, finish]`` pair.
    """
    check_node_index(graph, src_node, "Source")
    visited = [False] * len(graph)
    in_degrees = graph.in_degrees()
    stamps: Dict[NodeIndex, TimeStamps] = {}

    root: Optional[NodeIndex] = src_node
    counter = 1
    while root is not None:
        counter = _dfs_visit(graph, root, visited, stamps, counter)
        root = _next_root(in_degrees, visited)
    return stamps


def detect_cycle(graph: Graph) -> bool:
    """
    Check whether the graph contains a directed cycle.

    Runs an explicit-stack DFS over every component. A node is gray while it
    is on the active path; meeting a gray node again is a back edge.
    """
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")

    color = [_WHITE] * len(graph)
    for root in range(len(graph)):
        if color[root] != _WHITE:
            continue
        color[root] = _GRAY
        stack = [(root, iter(graph.neighbors(root)))]
        while stack:
            node, successors = stack[-1]
            for nbr in successors:
                if color[nbr] == _GRAY:
                    return True
                if color[nbr] == _WHITE:
                    color[nbr] = _GRAY
                    stack.append((nbr, iter(graph.neighbors(nbr))))
                    break
            else:
                color[node] = _BLACK
                stack.pop()
    return False


def top_sort(graph: Graph) -> Result[List[NodeIndex]]:
    """
    Topological order of an acyclic graph.

    Orders nodes by descending DFS finish time. Ties between independent
    nodes are broken arbitrarily; any order in which every edge points forward
    is a valid answer.

    Returns:
        Ok(order), or Err(CycleDetectedError) if the graph has a cycle.
    """
    if detect_cycle(graph):
        return Err(CycleDetectedError("Graph contains a directed cycle."))
    if len(graph) == 0:
        return Ok([])

    in_degrees = graph.in_degrees()
    start = _next_root(in_degrees, [False] * len(graph))
    stamps = dfs_forest(graph, start)
    order = sorted(stamps, key=lambda index: stamps[index][1], reverse=True)
    return Ok(order)


def bellman_ford(graph: Graph, src_node: NodeIndex) -> Result[Dict[NodeIndex, float]]:
    """
    Single-source shortest distances allowing negative edge weights.

    Unreachable nodes keep distance ``inf``.

    Returns:
        Ok(distances by node index), or Err(NegativeCycleError) if a
        negative-weight cycle is reachable from ``src_node``.
    """
    check_node_index(graph, src_node, "Source")

    dist = [INF] * len(graph)
    dist[src_node] = 0.0
    edges = graph.get_edges()

    for rounds in range(1, len(graph)):
        changed = False
        for edge in edges:
            candidate = dist[edge.src] + edge.weight
            if candidate < dist[edge.tgt]:
                dist[edge.tgt] = candidate
                changed = True
        if not changed:
            logger.debug("Bellman-Ford settled after %d rounds", rounds)
            break

    for edge in edges:
        if dist[edge.src] + edge.weight < dist[edge.tgt]:
            return Err(
                NegativeCycleError(
                    "Graph contains a negative-weight cycle reachable from "
                    f"node '{graph.node_id(src_node)}'."
                )
            )

    return Ok(dict(enumerate(dist)))


def floyd_warshall(graph: Graph) -> np.ndarray:
    """
    All-pairs shortest distances.

    Missing edges start at ``inf`` and self-distances at 0. When parallel
    edges join the same pair, the lightest one is used.

    Returns:
        An ``n x n`` array where entry ``[j, k]`` is the distance from node
        index j to node index k.
    """
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")

    n = len(graph)
    dist = np.full((n, n), INF, dtype=np.float64)
    np.fill_diagonal(dist, 0.0)
    for edge in graph.get_edges():
        if edge.weight < dist[edge.src, edge.tgt]:
            dist[edge.src, edge.tgt] = edge.weight

    for i in range(n):
        # dist[j][k] = min(dist[j][k], dist[j][i] + dist[i][k]) for all j, k
        np.minimum(dist, dist[:, i, np.newaxis] + dist[np.newaxis, i, :], out=dist)

    return dist
