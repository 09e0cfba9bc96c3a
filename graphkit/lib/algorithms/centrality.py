from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

import numpy as np

from graphkit.config import PAGERANK_CONFIG, PageRankConfig
from graphkit.lib.algorithms.base import InvalidArgumentError
from graphkit.lib.graph import Graph, NodeIndex
from graphkit.logging import get_logger

logger = get_logger(__name__)


def betweenness_centrality(graph: Graph, undirected: bool = False) -> List[float]:
    """
    Betweenness centrality of every node using Brandes' algorithm.

    For each source ``s`` a BFS computes hop distances, the number of
    shortest paths ``sigma`` and the predecessors of every reachable node.
    Nodes are then popped in reverse BFS order, accumulating
    ``delta[v] += sigma[v] / sigma[w] * (1 + delta[w])`` for each predecessor
    ``v`` of ``w``, and ``delta[w]`` is added to the total for ``w != s``.

    The graph is always directed. An undirected graph modeled as pairs of
    opposite edges counts each unordered pair twice; pass ``undirected=True``
    to halve the totals.

    Args:
        graph: The graph to score.
        undirected: Halve the raw sums.

    Returns:
        Centrality per node index.
    """
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")

    n = len(graph)
    centrality = [0.0] * n
    successors = [graph.neighbors(index) for index in range(n)]

    for source in range(n):
        order: List[NodeIndex] = []
        preds: List[List[NodeIndex]] = [[] for _ in range(n)]
        sigma = [0] * n
        sigma[source] = 1
        dist = [-1] * n
        dist[source] = 0
        queue: Deque[NodeIndex] = deque([source])

        while queue:
            v = queue.popleft()
            order.append(v)
            for w in successors[v]:
                if dist[w] < 0:
                    dist[w] = dist[v] + 1
                    queue.append(w)
                if dist[w] == dist[v] + 1:
                    sigma[w] += sigma[v]
                    preds[w].append(v)

        delta = [0.0] * n
        for w in reversed(order):
            for v in preds[w]:
                delta[v] += sigma[v] / sigma[w] * (1.0 + delta[w])
            if w != source:
                centrality[w] += delta[w]

    if undirected:
        centrality = [value / 2.0 for value in centrality]
    return centrality


def adjacency_matrix(graph: Graph) -> np.ndarray:
    """
    Dense transition matrix with ``A[target, source] = 1 / outDegree(source)``.

    Edge weights are ignored: every outgoing edge carries an equal share, so
    negative or zero weights cannot make an entry negative. Parallel edges
    each add their share. Every column of a node with outgoing edges sums to
    1; columns of sinks are all zero.
    """
    n = len(graph)
    matrix = np.zeros((n, n), dtype=np.float64)
    for src in range(n):
        out_degree = graph.out_degree(src)
        for edge in graph.out_edges(src):
            matrix[edge.tgt, src] += 1.0 / out_degree
    return matrix


def pagerank(
    graph: Graph,
    damping: Optional[float] = None,
    tol: Optional[float] = None,
    max_iter: Optional[int] = None,
) -> np.ndarray:
    """Compute PageRank as the principal eigenvector of the damped matrix.

    Builds ``M = d * A + (1 - d) / n * J`` from the column-stochastic
    adjacency matrix ``A`` (see ``adjacency_matrix``) and the all-ones matrix
    ``J``. ``M`` has eigenvalue 1 as its unique largest eigenvalue. Iteration
    runs on the lazy matrix ``(M + I) / 2``, which has the same eigenvector
    for eigenvalue 1 but no eigenvalue on the unit circle other than 1, so
    it also converges for ``damping=1`` on periodic graphs (for example a
    bipartite graph) where plain power iteration oscillates.

    A sink (node without outgoing edges) breaks column-stochasticity; the
    result is then whatever the iteration settles on and carries no
    uniqueness guarantee.

    Parameters
    ----------
    graph:
        The graph to rank.
    damping:
        Damping factor in [0, 1]. Defaults to ``PAGERANK_CONFIG.damping``.
    tol:
        L1 convergence tolerance. Defaults to ``PAGERANK_CONFIG.tol``.
    max_iter:
        Maximum number of iterations. Defaults to ``PAGERANK_CONFIG.max_iter``.

    Returns
    -------
    ranks: np.ndarray
        Rank per node index, non-negative, sum(ranks) = 1.
    """
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")

    config = PageRankConfig(
        damping=PAGERANK_CONFIG.damping if damping is None else damping,
        tol=PAGERANK_CONFIG.tol if tol is None else tol,
        max_iter=PAGERANK_CONFIG.max_iter if max_iter is None else max_iter,
    )
    config.validate()

    n = len(graph)
    if n == 0:
        return np.array([], dtype=np.float64)

    d = float(config.damping)
    matrix = d * adjacency_matrix(graph) + (1.0 - d) / n * np.ones((n, n))
    lazy = 0.5 * (matrix + np.eye(n))

    ranks = np.full(n, 1.0 / n, dtype=np.float64)
    for iteration in range(1, int(config.max_iter) + 1):
        new = lazy @ ranks
        total = float(new.sum())
        if total > 0:
            new /= total

        if float(np.linalg.norm(new - ranks, ord=1)) <= float(config.tol):
            logger.debug("PageRank converged after %d iterations", iteration)
            return new
        ranks = new

    logger.warning(
        "PageRank did not converge within %d iterations (tol=%g)",
        config.max_iter,
        config.tol,
    )
    return ranks
