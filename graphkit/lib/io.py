from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from graphkit.lib.graph import Graph

DEFAULT_COLUMNS = ("src", "dst", "weight")


def edgelist_to_graph(
    lines: Iterable[str],
    columns: Sequence[str] = DEFAULT_COLUMNS,
    separator: Optional[str] = None,
    graph: Optional[Graph] = None,
    source: str = "src",
    target: str = "dst",
    weight: str = "weight",
    default_weight: float = 1.0,
) -> Graph:
    """
    Builds or updates a Graph from an edge list.

    Each line is split by ``separator`` (any whitespace when None) and its
    tokens are mapped to the names in ``columns``. The ``source`` and
    ``target`` tokens are parsed as integer node ids and the ``weight`` token
    as a float; any other column (for example a rating timestamp) is ignored.
    Blank lines and lines starting with ``#`` are skipped.

    Args:
        lines: An iterable of strings, each representing one edge.
        columns: Column names, e.g. ["src", "dst", "weight", "timestamp"].
        separator: Token separator; None splits on runs of whitespace.
        graph: An existing Graph to update; if None, a new graph is created.
        source: The column name for the source node id.
        target: The column name for the target node id.
        weight: The column name for the edge weight.
        default_weight: Weight used when ``columns`` has no weight column.

    Returns:
        The updated (or newly created) Graph.

    Raises:
        RuntimeError: If a line has a different number of tokens than ``columns``.
        ValueError: If ``columns`` lacks the source or target column, or an
            id or weight cannot be parsed.
    """
    missing = [name for name in (source, target) if name not in columns]
    if missing:
        raise ValueError(
            f"Columns {list(columns)} lack required column(s) {missing}."
        )

    if graph is None:
        graph = Graph()

    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        tokens = line.split(separator)
        if len(tokens) != len(columns):
            raise RuntimeError(
                f"Line '{line}' does not match expected columns {list(columns)} "
                "(token count mismatch)."
            )

        line_dict = dict(zip(columns, tokens))
        edge_weight = (
            float(line_dict[weight]) if weight in line_dict else default_weight
        )
        graph.add_edge(int(line_dict[source]), int(line_dict[target]), edge_weight)

    return graph


def read_edgelist(path: Union[str, Path], **kwargs) -> Graph:
    """
    Read an edge-list file into a Graph.

    Keyword arguments are forwarded to ``edgelist_to_graph``.
    """
    with open(path, "r", encoding="utf-8") as fh:
        return edgelist_to_graph(fh, **kwargs)


def graph_to_edgelist(graph: Graph, separator: str = " ") -> List[str]:
    """
    Converts a Graph into edge-list lines of ``src dst weight``.

    Weights that are whole numbers are written without a fractional part.
    """
    lines: List[str] = []
    for edge in graph.get_edges():
        w = edge.weight
        w_str = str(int(w)) if float(w).is_integer() else repr(float(w))
        tokens = [str(graph.node_id(edge.src)), str(graph.node_id(edge.tgt)), w_str]
        lines.append(separator.join(tokens))
    return lines
