from __future__ import annotations

import networkx as nx

from graphkit.lib.graph import Graph


def to_networkx(graph: Graph, weight_attr: str = "weight") -> nx.MultiDiGraph:
    """
    Convert a Graph to a NetworkX MultiDiGraph.

    Nodes are keyed by their ids; each edge keeps its weight under
    ``weight_attr`` and its arena index under ``"index"``.

    Args:
        graph: The Graph to convert.
        weight_attr: Edge attribute receiving the weight.

    Returns:
        A NetworkX MultiDiGraph with one edge per Graph edge.
    """
    nx_graph = nx.MultiDiGraph()
    nx_graph.add_nodes_from(node.id for node in graph.get_all_nodes())
    for edge in graph.get_edges():
        nx_graph.add_edge(
            graph.node_id(edge.src),
            graph.node_id(edge.tgt),
            **{weight_attr: edge.weight, "index": edge.index},
        )
    return nx_graph


def from_networkx(
    nx_graph: nx.Graph,
    weight_attr: str = "weight",
    default_weight: float = 1.0,
) -> Graph:
    """
    Build a Graph from any NetworkX graph with integer node labels.

    Undirected graphs yield a pair of opposite edges per NetworkX edge.

    Args:
        nx_graph: The NetworkX graph to convert.
        weight_attr: Edge attribute holding the weight.
        default_weight: Weight used when an edge lacks ``weight_attr``.

    Returns:
        A new Graph.
    """
    graph = Graph()
    for node in nx_graph.nodes:
        graph.add_node(node)
    for u, v, data in nx_graph.edges(data=True):
        weight = data.get(weight_attr, default_weight)
        graph.add_edge(u, v, weight)
        if not nx_graph.is_directed():
            graph.add_edge(v, u, weight)
    return graph
