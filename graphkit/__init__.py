"""graphkit: directed weighted graph algorithms.

graphkit answers reachability, ordering, connectivity, flow and ranking
queries on graphs built from (source, target, weight) triples.

Primary API:
    Graph - Arena-backed directed weighted graph
    toolkit - Id-based functions: bfs, dfs_tree, dfs_forest, top_sort,
        single_source_shortest_path, all_pairs_shortest_path, max_flow,
        betweenness_centrality, page_rank, get_scc
    read_edgelist() / edgelist_to_graph() - Build a Graph from edge-list text

Example:
    from graphkit import Graph, toolkit

    g = Graph()
    g.add_edge(1, 2, 10)
    g.add_edge(2, 3, 5)

    toolkit.bfs(g, 1, 3)       # [1, 2, 3]
    toolkit.max_flow(g, 1, 3)  # 5
"""

from __future__ import annotations

from graphkit import cli, logging, toolkit
from graphkit._version import __version__
from graphkit.config import PAGERANK_CONFIG, PageRankConfig
from graphkit.lib.algorithms.base import (
    CycleDetectedError,
    GraphError,
    InvalidArgumentError,
    NegativeCycleError,
)
from graphkit.lib.algorithms.types import Err, FlowSummary, Ok
from graphkit.lib.graph import Edge, Graph, Node
from graphkit.lib.io import edgelist_to_graph, graph_to_edgelist, read_edgelist
from graphkit.lib.util import from_networkx, to_networkx

__all__ = [
    # Version
    "__version__",
    # Model
    "Graph",
    "Node",
    "Edge",
    # Algorithms (id-based)
    "toolkit",
    # Results and errors
    "Ok",
    "Err",
    "FlowSummary",
    "GraphError",
    "InvalidArgumentError",
    "CycleDetectedError",
    "NegativeCycleError",
    # Configuration
    "PageRankConfig",
    "PAGERANK_CONFIG",
    # I/O and integrations
    "edgelist_to_graph",
    "graph_to_edgelist",
    "read_edgelist",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
