"""Command-line interface for graphkit."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from graphkit import toolkit
from graphkit.lib.algorithms.base import GraphError
from graphkit.lib.graph import Graph
from graphkit.lib.io import DEFAULT_COLUMNS, read_edgelist
from graphkit.logging import get_logger, set_global_log_level

logger = get_logger(__name__)

COMMANDS = (
    "bfs",
    "dfs",
    "topsort",
    "sssp",
    "apsp",
    "maxflow",
    "betweenness",
    "pagerank",
    "scc",
)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _execute(command: str, graph: Graph, args: argparse.Namespace) -> Any:
    """Run one toolkit operation and return a JSON-friendly result."""
    if command == "bfs":
        return toolkit.bfs(graph, args.source, args.target, flow_mode=args.flow)
    if command == "dfs":
        if args.forest:
            return toolkit.dfs_forest(graph, args.source)
        return toolkit.dfs_tree(graph, args.source)
    if command == "topsort":
        return toolkit.top_sort(graph)
    if command == "sssp":
        return toolkit.single_source_shortest_path(graph, args.source)
    if command == "apsp":
        return toolkit.all_pairs_shortest_path(graph)
    if command == "maxflow":
        return toolkit.max_flow(graph, args.source, args.target)
    if command == "betweenness":
        return toolkit.betweenness_centrality(graph, undirected=args.undirected)
    if command == "pagerank":
        return toolkit.page_rank(graph, damping=args.damping)
    if command == "scc":
        return sorted(sorted(component) for component in toolkit.get_scc(graph))
    raise ValueError(f"Unknown command: {command}")


def _run(args: argparse.Namespace) -> None:
    """Load the edge list, run the requested command and print JSON to stdout."""
    _start_time = perf_counter()
    path: Path = args.edgelist
    try:
        graph = read_edgelist(path, columns=args.columns, separator=args.separator)
        logger.info(
            f"Loaded {graph.get_size()} nodes and {graph.edge_count()} edges "
            f"from {path}"
        )
        result = _execute(args.command, graph, args)
    except FileNotFoundError:
        logger.error(f"Edge list not found: {path}")
        sys.exit(1)
    except (GraphError, RuntimeError, ValueError) as e:
        logger.error(f"Failed to run {args.command}: {type(e).__name__}: {e}")
        sys.exit(1)

    print(json.dumps(result, indent=2))
    logger.info(
        f"{args.command} completed in {_format_duration(perf_counter() - _start_time)}"
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``graphkit`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="graphkit",
        description="Run graph algorithms on an edge-list file.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{" + ",".join(COMMANDS) + "}",
        help="Available commands",
    )

    parsers = {
        "bfs": subparsers.add_parser("bfs", help="Fewest-hops path between two nodes"),
        "dfs": subparsers.add_parser("dfs", help="DFS start/finish times"),
        "topsort": subparsers.add_parser("topsort", help="Topological order"),
        "sssp": subparsers.add_parser(
            "sssp", help="Single-source shortest paths (Bellman-Ford)"
        ),
        "apsp": subparsers.add_parser(
            "apsp", help="All-pairs shortest paths (Floyd-Warshall)"
        ),
        "maxflow": subparsers.add_parser(
            "maxflow", help="Maximum flow between two nodes (Edmonds-Karp)"
        ),
        "betweenness": subparsers.add_parser(
            "betweenness", help="Betweenness centrality (Brandes)"
        ),
        "pagerank": subparsers.add_parser("pagerank", help="PageRank"),
        "scc": subparsers.add_parser("scc", help="Strongly connected components"),
    }

    for p in parsers.values():
        p.add_argument("edgelist", type=Path, help="Path to edge-list file")
        p.add_argument(
            "--separator",
            "-s",
            default=None,
            help="Field separator (default: any whitespace)",
        )
        p.add_argument(
            "--columns",
            "-c",
            nargs="+",
            default=list(DEFAULT_COLUMNS),
            help="Column names; 'src' and 'dst' are required, 'weight' is optional",
        )

    for name in ("bfs", "dfs", "sssp", "maxflow"):
        parsers[name].add_argument("source", type=int, help="Source node id")
    for name in ("bfs", "maxflow"):
        parsers[name].add_argument("target", type=int, help="Target node id")

    parsers["bfs"].add_argument(
        "--flow",
        action="store_true",
        help="Only traverse edges with positive residual capacity",
    )
    parsers["dfs"].add_argument(
        "--forest",
        action="store_true",
        help="Restart from unvisited nodes until every node is stamped",
    )
    parsers["betweenness"].add_argument(
        "--undirected",
        action="store_true",
        help="Halve totals for graphs modeling undirected edges as edge pairs",
    )
    parsers["pagerank"].add_argument(
        "--damping", "-d", type=float, default=None, help="Damping factor in [0, 1]"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    _run(args)


if __name__ == "__main__":
    main()
