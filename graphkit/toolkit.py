"""Id-based entry points to the graphkit algorithms.

Every function accepts a Graph and caller-defined integer node ids, validates
them, delegates to ``graphkit.lib.algorithms`` (which works on node indices)
and translates the result back to ids. No Node or Edge objects are exposed.

Errors:
    InvalidArgumentError: The graph is None or an id is unknown.
    CycleDetectedError: ``top_sort`` on a cyclic graph.
    NegativeCycleError: ``single_source_shortest_path`` reaches a negative cycle.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from graphkit.lib.algorithms import centrality, connectivity, search
from graphkit.lib.algorithms.base import InvalidArgumentError
from graphkit.lib.algorithms.max_flow import calc_max_flow
from graphkit.lib.algorithms.types import TimeStamps
from graphkit.lib.graph import Graph, NodeID, NodeIndex


def _require_graph(graph: Optional[Graph]) -> Graph:
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")
    return graph


def _require_node(graph: Graph, node_id: NodeID) -> NodeIndex:
    if node_id is None:
        raise InvalidArgumentError("Node id must not be None.")
    return graph.get_node_by_id(node_id).index


def _to_ids(graph: Graph, indices: Iterable[NodeIndex]) -> List[NodeID]:
    return [graph.node_id(index) for index in indices]


def _keyed_by_id(graph: Graph, values) -> Dict[NodeID, object]:
    return {graph.node_id(index): value for index, value in enumerate(values)}


def bfs(
    graph: Graph, src_id: NodeID, tgt_id: NodeID, flow_mode: bool = False
) -> List[NodeID]:
    """Fewest-hops path from ``src_id`` to ``tgt_id`` as a list of ids, or []."""
    graph = _require_graph(graph)
    src = _require_node(graph, src_id)
    tgt = _require_node(graph, tgt_id)
    return _to_ids(graph, search.bfs(graph, src, tgt, flow_mode))


def dfs_tree(graph: Graph, src_id: NodeID) -> Dict[NodeID, TimeStamps]:
    """``[start, finish]`` stamps for every id reachable from ``src_id``."""
    graph = _require_graph(graph)
    stamps = search.dfs_tree(graph, _require_node(graph, src_id))
    return {graph.node_id(index): stamp for index, stamp in stamps.items()}


def dfs_forest(graph: Graph, src_id: NodeID) -> Dict[NodeID, TimeStamps]:
    """``[start, finish]`` stamps for every id in the graph."""
    graph = _require_graph(graph)
    stamps = search.dfs_forest(graph, _require_node(graph, src_id))
    return {graph.node_id(index): stamp for index, stamp in stamps.items()}


def top_sort(graph: Graph) -> List[NodeID]:
    """Ids in topological order; raises CycleDetectedError on a cyclic graph."""
    graph = _require_graph(graph)
    return _to_ids(graph, search.top_sort(graph).unwrap())


def single_source_shortest_path(graph: Graph, src_id: NodeID) -> Dict[NodeID, float]:
    """Bellman-Ford distances from ``src_id``; unreachable ids map to ``inf``."""
    graph = _require_graph(graph)
    dist = search.bellman_ford(graph, _require_node(graph, src_id)).unwrap()
    return {graph.node_id(index): value for index, value in dist.items()}


def all_pairs_shortest_path(graph: Graph) -> Dict[NodeID, Dict[NodeID, float]]:
    """Floyd-Warshall distances as ``{src_id: {tgt_id: distance}}``."""
    graph = _require_graph(graph)
    dist = search.floyd_warshall(graph)
    return {
        graph.node_id(j): {
            graph.node_id(k): float(dist[j, k]) for k in range(len(graph))
        }
        for j in range(len(graph))
    }


def max_flow(graph: Graph, src_id: NodeID, tgt_id: NodeID) -> int:
    """Maximum integral flow from ``src_id`` to ``tgt_id``."""
    graph = _require_graph(graph)
    src = _require_node(graph, src_id)
    tgt = _require_node(graph, tgt_id)
    return calc_max_flow(graph, src, tgt)


def betweenness_centrality(graph: Graph, undirected: bool = False) -> Dict[NodeID, float]:
    """
    Brandes betweenness per id.

    Raw directed sums by default. Set ``undirected=True`` when the graph
    encodes each undirected edge as two opposite directed edges, to halve the
    double-counted totals.
    """
    graph = _require_graph(graph)
    return _keyed_by_id(
        graph, centrality.betweenness_centrality(graph, undirected=undirected)
    )


def page_rank(graph: Graph, damping: Optional[float] = None) -> Dict[NodeID, float]:
    """PageRank per id; values sum to 1."""
    graph = _require_graph(graph)
    ranks = centrality.pagerank(graph, damping=damping)
    return _keyed_by_id(graph, (float(value) for value in ranks))


def get_scc(graph: Graph) -> Set[FrozenSet[NodeID]]:
    """Strongly connected components as a set of frozensets of ids."""
    graph = _require_graph(graph)
    return {
        frozenset(_to_ids(graph, component))
        for component in connectivity.strongly_connected_components(graph)
    }
