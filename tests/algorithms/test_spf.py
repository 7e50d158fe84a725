import math

import pytest

from pathminer.algorithms.base import UNREACHABLE
from pathminer.algorithms.spf import resolve_path, shortest_path, spf


class TestSPF:
    def test_spf_1(self, ladder):
        """Costs and predecessors from s on 'ladder'; ties settle by handle."""
        costs, pred = spf(ladder, 0)
        assert costs == {0: 0, 1: 1, 2: 2, 3: 2, 4: 3, 5: 3}
        # D (4) is reached at cost 3 via B (2) before C (3) offers the same cost
        assert pred == {1: 0, 2: 0, 3: 1, 4: 2, 5: 3}

    def test_spf_2(self, single_path):
        """Nothing is reachable from the sink."""
        costs, pred = spf(single_path, 2)
        assert costs == {2: 0}
        assert pred == {}

    def test_spf_excluded_edges(self, ladder):
        """Excluding A->C forces the route through B."""
        costs, pred = spf(ladder, 0, excluded_edges={(1, 3)})
        assert costs[3] == 3
        assert costs[5] == 4
        assert resolve_path(0, 5, pred) == (0, 2, 3, 5)

    def test_spf_excluded_nodes(self, ladder):
        """Excluding C leaves only routes through D."""
        costs, pred = spf(ladder, 0, excluded_nodes={3})
        assert 3 not in costs
        assert costs[5] == 4
        assert resolve_path(0, 5, pred) == (0, 2, 4, 5)

    def test_spf_excluded_source_still_expanded(self, single_path):
        costs, _ = spf(single_path, 0, excluded_nodes={0})
        assert costs == {0: 0, 1: 1, 2: 2}

    def test_spf_missing_source(self, ladder):
        with pytest.raises(KeyError):
            spf(ladder, 99)

    def test_spf_does_not_mutate_graph(self, ladder):
        before = sorted(ladder.edges(data=True))
        spf(ladder, 0, excluded_edges={(0, 1)}, excluded_nodes={3})
        assert sorted(ladder.edges(data=True)) == before


class TestShortestPath:
    def test_shortest_path_1(self, ladder):
        path = shortest_path(ladder, 0, 5)
        assert path.nodes_seq == (0, 1, 3, 5)
        assert path.cost == 3
        assert path.deviation == 0

    def test_shortest_path_to_inner_vertex(self, ladder):
        """The search may stop early at the destination."""
        path = shortest_path(ladder, 0, 3)
        assert path.nodes_seq == (0, 1, 3)
        assert path.cost == 2

    def test_shortest_path_unreachable(self, ladder):
        path = shortest_path(ladder, 5, 0)
        assert len(path) == 0
        assert not path
        assert path.cost == UNREACHABLE
        assert math.isinf(path.cost)

    def test_shortest_path_all_routes_excluded(self, two_routes):
        path = shortest_path(two_routes, 0, 3, excluded_nodes={1, 2})
        assert path.cost == UNREACHABLE

    def test_shortest_path_to_itself(self, ladder):
        path = shortest_path(ladder, 2, 2)
        assert path.nodes_seq == (2,)
        assert path.cost == 0

    def test_shortest_path_missing_destination(self, ladder):
        with pytest.raises(KeyError):
            shortest_path(ladder, 0, 42)


def test_resolve_path_unreached():
    assert resolve_path(0, 3, {1: 0}) == ()
