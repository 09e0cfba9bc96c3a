"""Tests for the id-based entry points in graphkit.toolkit."""

import math

import pytest
from pytest import approx

from graphkit import toolkit
from graphkit.lib.algorithms.base import (
    CycleDetectedError,
    InvalidArgumentError,
    NegativeCycleError,
)
from graphkit.lib.graph import Graph
from tests.lib.algorithms.sample_graphs import build


class TestScenarios:
    def test_bfs_on_tree(self, tree1):
        assert toolkit.bfs(tree1, 1, 4) == [1, 2, 4]

    def test_page_rank(self, pagerank4):
        ranks = toolkit.page_rank(pagerank4)
        assert ranks == {
            1: approx(0.368, abs=1e-3),
            2: approx(0.142, abs=1e-3),
            3: approx(0.288, abs=1e-3),
            4: approx(0.202, abs=1e-3),
        }
        assert sum(ranks.values()) == approx(1.0)
        assert all(isinstance(value, float) for value in ranks.values())

    def test_max_flow(self, square_flow):
        assert toolkit.max_flow(square_flow, 1, 4) == 15

    def test_single_source_shortest_path(self, negative1):
        assert toolkit.single_source_shortest_path(negative1, 1) == {
            1: 0,
            2: 1,
            3: 5,
            4: 0,
            5: 8,
            6: 9,
            7: 5,
            8: 2,
        }

    def test_top_sort_on_cycle(self, cycle1):
        with pytest.raises(CycleDetectedError):
            toolkit.top_sort(cycle1)


class TestTraversal:
    def test_bfs_unreachable(self, tree1):
        assert toolkit.bfs(tree1, 6, 1) == []

    def test_bfs_flow_mode(self):
        g = build([(1, 2, 0), (1, 3, 1), (3, 2, 1)])
        assert toolkit.bfs(g, 1, 2) == [1, 2]
        assert toolkit.bfs(g, 1, 2, flow_mode=True) == [1, 3, 2]

    def test_dfs_tree(self, dfs1):
        assert toolkit.dfs_tree(dfs1, 1) == {
            1: [1, 8],
            2: [2, 5],
            4: [3, 4],
            3: [6, 7],
        }

    def test_dfs_forest(self, dfs1):
        assert toolkit.dfs_forest(dfs1, 1) == {
            1: [1, 8],
            2: [2, 5],
            4: [3, 4],
            3: [6, 7],
            9: [9, 14],
            7: [10, 13],
            8: [11, 12],
        }

    def test_top_sort(self, dag1):
        order = toolkit.top_sort(dag1)
        assert sorted(order) == [10, 20, 30, 40, 50, 60]
        position = {node_id: pos for pos, node_id in enumerate(order)}
        for src, dst in [(10, 20), (10, 30), (20, 40), (30, 40), (40, 50), (60, 50)]:
            assert position[src] < position[dst]


class TestShortestPaths:
    def test_sssp_negative_cycle(self):
        g = build([(1, 2, 1), (2, 3, -2), (3, 1, -1)])
        with pytest.raises(NegativeCycleError):
            toolkit.single_source_shortest_path(g, 1)

    def test_sssp_unreachable(self, tree1):
        dist = toolkit.single_source_shortest_path(tree1, 2)
        assert math.isinf(dist[1])
        assert dist[6] == 3

    def test_apsp(self):
        g = build([(1, 2, 4), (2, 3, -1), (1, 3, 5)])
        dist = toolkit.all_pairs_shortest_path(g)
        assert dist[1] == {1: 0, 2: 4, 3: 3}
        assert dist[2][3] == -1
        assert math.isinf(dist[3][1])

    def test_apsp_agrees_with_sssp(self, negative1):
        dist = toolkit.all_pairs_shortest_path(negative1)
        assert dist[1] == toolkit.single_source_shortest_path(negative1, 1)


class TestCentralityAndComponents:
    def test_betweenness(self):
        g = build([(1, 2, 1), (2, 3, 1), (3, 4, 1)])
        assert toolkit.betweenness_centrality(g) == {1: 0, 2: 2, 3: 2, 4: 0}

    def test_betweenness_undirected(self, undirected_line):
        assert toolkit.betweenness_centrality(undirected_line, undirected=True) == {
            1: 0,
            2: 1,
            3: 0,
        }

    def test_page_rank_custom_damping(self, pagerank4):
        ranks = toolkit.page_rank(pagerank4, damping=1.0)
        assert ranks[1] == approx(12 / 31, abs=1e-6)

    def test_page_rank_negative_weights(self):
        g = build([(1, 2, -1), (1, 3, 2), (2, 1, 1), (3, 1, 1)])
        ranks = toolkit.page_rank(g)
        assert all(value >= 0 for value in ranks.values())
        # r2 = r3 = 0.05 + 0.425 * r1 and r1 = 1 - 2 * r2
        assert ranks == {
            1: approx(0.18 / 0.37, abs=1e-6),
            2: approx(0.095 / 0.37, abs=1e-6),
            3: approx(0.095 / 0.37, abs=1e-6),
        }

    def test_get_scc(self, scc1):
        assert toolkit.get_scc(scc1) == {
            frozenset({1, 2, 5}),
            frozenset({3, 4}),
            frozenset({6, 7}),
            frozenset({8}),
        }


class TestInvalidArguments:
    @pytest.mark.parametrize(
        "call",
        [
            lambda: toolkit.bfs(None, 1, 2),
            lambda: toolkit.dfs_tree(None, 1),
            lambda: toolkit.dfs_forest(None, 1),
            lambda: toolkit.top_sort(None),
            lambda: toolkit.single_source_shortest_path(None, 1),
            lambda: toolkit.all_pairs_shortest_path(None),
            lambda: toolkit.max_flow(None, 1, 2),
            lambda: toolkit.betweenness_centrality(None),
            lambda: toolkit.page_rank(None),
            lambda: toolkit.get_scc(None),
        ],
    )
    def test_none_graph(self, call):
        with pytest.raises(InvalidArgumentError):
            call()

    def test_unknown_ids(self, tree1):
        with pytest.raises(InvalidArgumentError):
            toolkit.bfs(tree1, 1, 99)
        with pytest.raises(InvalidArgumentError):
            toolkit.dfs_tree(tree1, 99)
        with pytest.raises(InvalidArgumentError):
            toolkit.single_source_shortest_path(tree1, 99)
        with pytest.raises(InvalidArgumentError):
            toolkit.max_flow(tree1, 99, 1)

    def test_none_id(self, tree1):
        with pytest.raises(InvalidArgumentError):
            toolkit.bfs(tree1, None, 1)

    def test_invalid_argument_is_value_error(self, tree1):
        with pytest.raises(ValueError):
            toolkit.dfs_forest(tree1, -5)

    def test_empty_graph(self):
        g = Graph()
        assert toolkit.top_sort(g) == []
        assert toolkit.all_pairs_shortest_path(g) == {}
        assert toolkit.page_rank(g) == {}
        assert toolkit.get_scc(g) == set()
