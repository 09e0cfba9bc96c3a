from __future__ import annotations

from typing import Dict, List, Set, Tuple, Union

from graphkit.lib.algorithms.flow_init import init_flow_graph, input_edge, twin_edge
from graphkit.lib.algorithms.search import check_node_index, bfs_edge_path
from graphkit.lib.algorithms.types import FlowSummary
from graphkit.lib.graph import Graph, NodeIndex
from graphkit.logging import get_logger

logger = get_logger(__name__)


def calc_max_flow(
    graph: Graph,
    src_node: NodeIndex,
    dst_node: NodeIndex,
    *,
    return_summary: bool = False,
    return_graph: bool = False,
) -> Union[int, tuple]:
    """Compute the maximum flow between two nodes with Edmonds-Karp.

    The input graph is left untouched: augmentation runs on a bidirected
    working graph (see ``init_flow_graph``) where every edge has a residual
    twin. Each round finds a fewest-hops path with positive residual capacity
    (``bfs_edge_path`` in flow mode), pushes the bottleneck along it and
    takes the same amount from each twin.

    Capacities are truncated to integers, so the flow is integral.

    Args:
        graph: Flow network; edge weights are capacities.
        src_node: Index of the source node.
        dst_node: Index of the sink node.
        return_summary: If True, also return a FlowSummary.
        return_graph: If True, also return the working graph with its flows.

    Returns:
        Union[int, tuple]:
            - If neither flag: int (total flow)
            - If return_summary only: tuple[int, FlowSummary]
            - If return_graph only: tuple[int, Graph]
            - If both flags: tuple[int, FlowSummary, Graph]

    Examples:
        >>> g = Graph()
        >>> _ = g.add_edge(1, 2, 10)
        >>> _ = g.add_edge(2, 3, 5)
        >>> calc_max_flow(g, g.index_of(1), g.index_of(3))
        5
    """
    check_node_index(graph, src_node, "Source")
    check_node_index(graph, dst_node, "Sink")

    flow_graph = init_flow_graph(graph)

    # Degenerate case (s == t): conservation forces the net surplus to zero.
    if src_node == dst_node:
        return _build_return_value(
            0, flow_graph, src_node, return_summary, return_graph
        )

    rounds = 0
    path = bfs_edge_path(flow_graph, src_node, dst_node, flow_mode=True)
    while path:
        bottleneck = min(flow_graph.residual(e_idx) for e_idx in path)
        for e_idx in path:
            twin = twin_edge(e_idx)
            flow_graph.set_flow(e_idx, flow_graph.get_flow(e_idx) + bottleneck)
            flow_graph.set_flow(twin, flow_graph.get_flow(twin) - bottleneck)
        rounds += 1
        logger.debug(
            "Augmentation %d: pushed %d along %d edges", rounds, bottleneck, len(path)
        )
        path = bfs_edge_path(flow_graph, src_node, dst_node, flow_mode=True)

    total_flow = sum(
        flow_graph.get_flow(edge.index) for edge in flow_graph.out_edges(src_node)
    )
    logger.debug("Max flow %d found after %d augmentations", total_flow, rounds)
    return _build_return_value(
        total_flow, flow_graph, src_node, return_summary, return_graph
    )


def _build_return_value(
    total_flow: int,
    flow_graph: Graph,
    src_node: NodeIndex,
    return_summary: bool,
    return_graph: bool,
) -> Union[int, tuple]:
    """Assemble the return value requested by ``calc_max_flow``."""
    if not (return_summary or return_graph):
        return total_flow

    result: Tuple = (total_flow,)
    if return_summary:
        result += (_build_flow_summary(total_flow, flow_graph, src_node),)
    if return_graph:
        result += (flow_graph,)
    return result


def _build_flow_summary(
    total_flow: int, flow_graph: Graph, src_node: NodeIndex
) -> FlowSummary:
    """Collect per-edge flows, residuals and the min cut from a working graph."""
    edge_flow: Dict[int, int] = {}
    residual_cap: Dict[int, int] = {}
    for edge in flow_graph.get_edges()[::2]:
        orig = input_edge(edge.index)
        edge_flow[orig] = flow_graph.get_flow(edge.index)
        residual_cap[orig] = flow_graph.residual(edge.index)

    # Nodes still reachable from the source through positive residuals
    reachable: Set[NodeIndex] = {src_node}
    stack = [src_node]
    while stack:
        node = stack.pop()
        for edge in flow_graph.out_edges(node):
            if flow_graph.residual(edge.index) > 0 and edge.tgt not in reachable:
                reachable.add(edge.tgt)
                stack.append(edge.tgt)

    min_cut: List[int] = []
    for edge in flow_graph.get_edges()[::2]:
        if edge.src in reachable and edge.tgt not in reachable:
            if flow_graph.residual(edge.index) <= 0:
                min_cut.append(input_edge(edge.index))

    return FlowSummary(
        total_flow=total_flow,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=min_cut,
    )
