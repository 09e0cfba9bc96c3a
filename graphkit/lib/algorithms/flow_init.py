from __future__ import annotations

from graphkit.lib.algorithms.base import InvalidArgumentError
from graphkit.lib.graph import EdgeIndex, Graph


def init_flow_graph(graph: Graph) -> Graph:
    """
    Build the bidirected working graph used for residual augmentation.

    Input edge ``k`` becomes forward edge ``2k`` with the same capacity and a
    residual twin ``2k + 1`` pointing the opposite way with capacity 0. Node
    ids keep their indices and all flow slots start at zero, so the input
    graph is never mutated.

    Args:
        graph: The flow network; edge weights are capacities.

    Returns:
        A new Graph whose edges come in (forward, twin) pairs.
    """
    if graph is None:
        raise InvalidArgumentError("Graph must not be None.")

    flow_graph = Graph()
    for node in graph.get_all_nodes():
        flow_graph.add_node(node.id)
    for edge in graph.get_edges():
        flow_graph._append_edge(edge.src, edge.tgt, edge.weight)
        flow_graph._append_edge(edge.tgt, edge.src, 0)
    return flow_graph


def twin_edge(edge_index: EdgeIndex) -> EdgeIndex:
    """Index of the residual partner of an edge in a working graph."""
    return edge_index ^ 1


def input_edge(edge_index: EdgeIndex) -> EdgeIndex:
    """Index of the input-graph edge a working-graph edge was built from."""
    return edge_index >> 1
