from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from graphkit.lib.algorithms.base import InvalidArgumentError

#: Caller-defined integer identifier of a node.
NodeID = int

#: Dense position of a node in a Graph's node arena.
NodeIndex = int

#: Stable position of an edge in a Graph's edge arena.
EdgeIndex = int


@dataclass(frozen=True)
class Node:
    """
    A node identity.

    Attributes:
        id: The caller's identifier, unique within the owning Graph.
        index: Position of the node in the owning Graph's node arena.
    """

    id: NodeID
    index: NodeIndex


@dataclass(frozen=True)
class Edge:
    """
    A directed, weighted edge between two nodes of the same Graph.

    Endpoints are node indices, not node objects, so edges never hold
    references back into the graph.

    Attributes:
        index: Position of the edge in the owning Graph's edge arena.
        src: Index of the source node.
        tgt: Index of the target node.
        weight: Capacity, rating or distance depending on the algorithm.
    """

    index: EdgeIndex
    src: NodeIndex
    tgt: NodeIndex
    weight: float


class Graph:
    """
    A directed weighted graph stored as node and edge arenas.

    Nodes are addressed by a dense index (insertion order) and carry the
    caller's integer id. Edges are addressed by a stable index; each node keeps
    the list of its outgoing edge indices. An integer flow slot is kept per
    edge for the max-flow algorithm; every other algorithm treats the graph as
    read-only.

    This class enforces:
      - Unique node ids.
      - Endpoints of every edge are nodes of this graph (missing ones are
        created by ``add_edge``).
      - ``add_edge`` is idempotent on the exact (src, tgt, weight) triple.
      - Unknown ids raise InvalidArgumentError instead of returning None.
    """

    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._index: Dict[NodeID, NodeIndex] = {}
        self._edges: List[Edge] = []
        self._out: List[List[EdgeIndex]] = []
        self._flow: List[int] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes))

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    #
    # Node management
    #
    def add_node(self, node_id: NodeID) -> Node:
        """
        Add a node if it is not present yet.

        Args:
            node_id: The caller's identifier for the node.

        Returns:
            Node: The newly created node, or the existing one with this id.
        """
        index = self._index.get(node_id)
        if index is not None:
            return self._nodes[index]

        node = Node(node_id, len(self._nodes))
        self._nodes.append(node)
        self._index[node_id] = node.index
        self._out.append([])
        return node

    def has_node(self, node_id: NodeID) -> bool:
        return node_id in self._index

    def get_node_by_id(self, node_id: NodeID) -> Node:
        """
        Look up a node by its id.

        Raises:
            InvalidArgumentError: If no node has this id.
        """
        index = self._index.get(node_id)
        if index is None:
            raise InvalidArgumentError(f"Node '{node_id}' does not exist.")
        return self._nodes[index]

    def get_all_nodes(self) -> List[Node]:
        """
        Return a snapshot of all nodes in index order.

        The returned list is a copy; mutating it does not affect the graph.
        """
        return list(self._nodes)

    def get_size(self) -> int:
        return len(self._nodes)

    def index_of(self, node_id: NodeID) -> NodeIndex:
        return self.get_node_by_id(node_id).index

    def node_id(self, index: NodeIndex) -> NodeID:
        return self._nodes[index].id

    def is_index(self, index: object) -> bool:
        """
        True if ``index`` addresses a node of this graph.

        Any integer type (numpy integers included) is accepted; booleans are not.
        """
        if isinstance(index, bool):
            return False
        try:
            position = operator.index(index)
        except TypeError:
            return False
        return 0 <= position < len(self._nodes)

    #
    # Edge management
    #
    def add_edge(self, src_id: NodeID, tgt_id: NodeID, weight: float = 1.0) -> Edge:
        """
        Add a directed edge, creating missing endpoints.

        Adding a triple that already exists returns the existing edge. Edges
        between the same pair with different weights coexist.

        Args:
            src_id: Id of the source node.
            tgt_id: Id of the target node.
            weight: Edge weight.

        Returns:
            Edge: The new (or already present) edge.
        """
        src = self.add_node(src_id).index
        tgt = self.add_node(tgt_id).index
        for e_idx in self._out[src]:
            edge = self._edges[e_idx]
            if edge.tgt == tgt and edge.weight == weight:
                return edge
        return self._append_edge(src, tgt, weight)

    def _append_edge(self, src: NodeIndex, tgt: NodeIndex, weight: float) -> Edge:
        """Append an edge between two existing node indices unconditionally."""
        edge = Edge(len(self._edges), src, tgt, weight)
        self._edges.append(edge)
        self._out[src].append(edge.index)
        self._flow.append(0)
        return edge

    def contains_edge(self, src_id: NodeID, tgt_id: NodeID) -> bool:
        """Check whether at least one edge leads from ``src_id`` to ``tgt_id``."""
        src = self._index.get(src_id)
        tgt = self._index.get(tgt_id)
        if src is None or tgt is None:
            return False
        return any(self._edges[e_idx].tgt == tgt for e_idx in self._out[src])

    def get_edges(self) -> List[Edge]:
        """Return a snapshot of all edges in index order."""
        return list(self._edges)

    def get_edge(self, edge_index: EdgeIndex) -> Edge:
        return self._edges[edge_index]

    def edge_count(self) -> int:
        return len(self._edges)

    def out_edges(self, index: NodeIndex) -> List[Edge]:
        """Outgoing edges of the node at ``index`` in insertion order."""
        return [self._edges[e_idx] for e_idx in self._out[index]]

    def out_degree(self, index: NodeIndex) -> int:
        return len(self._out[index])

    def neighbors(self, index: NodeIndex) -> List[NodeIndex]:
        """Distinct successor indices of the node at ``index`` in insertion order."""
        seen: Dict[NodeIndex, None] = {}
        for e_idx in self._out[index]:
            seen.setdefault(self._edges[e_idx].tgt, None)
        return list(seen)

    def in_degrees(self) -> List[int]:
        """In-degree of every node, indexed by node index."""
        degrees = [0] * len(self._nodes)
        for edge in self._edges:
            degrees[edge.tgt] += 1
        return degrees

    #
    # Flow slots
    #
    def get_flow(self, edge_index: EdgeIndex) -> int:
        return self._flow[edge_index]

    def set_flow(self, edge_index: EdgeIndex, flow: int) -> None:
        self._flow[edge_index] = flow

    def residual(self, edge_index: EdgeIndex) -> int:
        """
        Remaining capacity of an edge: ``int(weight) - flow``.

        Capacities are truncated to integers so that every augmenting path
        found by a residual search can carry at least one unit of flow.
        """
        return int(self._edges[edge_index].weight) - self._flow[edge_index]

    def reset_flow(self) -> None:
        self._flow = [0] * len(self._edges)

    #
    # Copies
    #
    def copy_of(self, reverse: bool = False, forced_weight: Optional[float] = None) -> Graph:
        """
        Create a structurally independent copy of this graph.

        Node ids keep their indices; every edge is copied (parallel edges
        included) with the same index. Flow slots start at zero.

        Args:
            reverse: If True, every edge points the opposite way in the copy.
            forced_weight: If given, every copied edge gets this weight.

        Returns:
            Graph: The new graph.
        """
        copy = Graph()
        for node in self._nodes:
            copy.add_node(node.id)
        for edge in self._edges:
            src, tgt = (edge.tgt, edge.src) if reverse else (edge.src, edge.tgt)
            weight = edge.weight if forced_weight is None else forced_weight
            copy._append_edge(src, tgt, weight)
        return copy
