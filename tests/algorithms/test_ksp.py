import pytest

from pathminer.algorithms.ksp import is_acceptable, ksp
from pathminer.path import Path


def _names(graph, path):
    return "".join(graph.vertex_name(v) for v in path)


class TestKSP:
    def test_ksp_single_path(self, single_path):
        """One simple path s->a->t is ranked once with score 2."""
        ranked = list(ksp(single_path, 0, 2, max_k=5))
        assert len(ranked) == 1
        path, accepted = ranked[0]
        assert path.nodes_seq == (0, 1, 2)
        assert path.cost == 2
        # The first-edge heuristic rejects a path costing exactly twice its first edge
        assert accepted is False

    def test_ksp_single_path_without_guard(self, single_path):
        ranked = list(ksp(single_path, 0, 2, max_k=5, degenerate_guard=False))
        assert [(p.nodes_seq, p.cost, ok) for p, ok in ranked] == [((0, 1, 2), 2, True)]

    def test_ksp_two_equal_routes(self, two_routes):
        """Two disjoint routes of score 3 are both returned for K=2."""
        ranked = list(ksp(two_routes, 0, 3, max_k=2))
        assert {p.nodes_seq for p, _ in ranked} == {(0, 1, 3), (0, 2, 3)}
        assert [p.cost for p, _ in ranked] == [3, 3]
        assert all(ok for _, ok in ranked)

    def test_ksp_ladder_order(self, ladder):
        """All six loopless paths in rank order; ties keep discovery order."""
        ranked = list(ksp(ladder, 0, 5, max_k=10, degenerate_guard=False))
        assert [_names(ladder, p) for p, _ in ranked] == [
            "sACt",
            "sBCt",
            "sACDt",
            "sBDt",
            "sADt",
            "sBCDt",
        ]
        assert [p.cost for p, _ in ranked] == [3, 4, 4, 4, 5, 5]
        assert [p.deviation for p, _ in ranked] == [0, 0, 2, 1, 1, 2]

    def test_ksp_more_requested_than_available(self, ladder):
        ranked = list(ksp(ladder, 0, 5, max_k=100, degenerate_guard=False))
        assert len(ranked) == 6

    def test_ksp_stops_at_k(self, ladder):
        ranked = list(ksp(ladder, 0, 5, max_k=2, degenerate_guard=False))
        assert [_names(ladder, p) for p, _ in ranked] == ["sACt", "sBCt"]

    def test_ksp_guard_filters_but_keeps_ranking(self, ladder):
        """Paths failing the heuristic are still ranked and still deviated from."""
        ranked = list(ksp(ladder, 0, 5, max_k=10))
        assert len(ranked) == 6
        accepted = [_names(ladder, p) for p, ok in ranked if ok]
        assert accepted == ["sACt", "sACDt", "sADt", "sBCDt"]

    def test_ksp_guard_counts_only_accepted_towards_k(self, ladder):
        ranked = list(ksp(ladder, 0, 5, max_k=2))
        assert [_names(ladder, p) for p, _ in ranked] == ["sACt", "sBCt", "sACDt"]
        assert [ok for _, ok in ranked] == [True, False, True]

    def test_ksp_min_path_size(self, ladder):
        ranked = list(
            ksp(ladder, 0, 5, max_k=10, min_path_size=2, degenerate_guard=False)
        )
        accepted = [_names(ladder, p) for p, ok in ranked if ok]
        assert accepted == ["sACDt", "sBCDt"]

    def test_ksp_properties(self, ladder):
        """Loopless, non-decreasing and unique."""
        ranked = [p for p, _ in ksp(ladder, 0, 5, max_k=10, degenerate_guard=False)]
        costs = [p.cost for p in ranked]
        assert costs == sorted(costs)
        assert all(p.is_loopless for p in ranked)
        assert len({p.nodes_seq for p in ranked}) == len(ranked)
        for p in ranked:
            assert p.cost == sum(ladder.weight(u, v) for u, v in p.edges_seq)

    def test_ksp_deterministic(self, ladder):
        first = [p.nodes_seq for p, _ in ksp(ladder, 0, 5, max_k=10)]
        second = [p.nodes_seq for p, _ in ksp(ladder, 0, 5, max_k=10)]
        assert first == second

    def test_ksp_no_path(self, ladder):
        assert list(ksp(ladder, 5, 0, max_k=3)) == []

    def test_ksp_zero_k(self, ladder):
        assert list(ksp(ladder, 0, 5, max_k=0)) == []

    def test_ksp_missing_vertex(self, ladder):
        with pytest.raises(KeyError):
            list(ksp(ladder, 0, 99, max_k=3))
        with pytest.raises(KeyError):
            list(ksp(ladder, 99, 5, max_k=3))

    def test_ksp_is_lazy(self, ladder):
        gen = ksp(ladder, 0, 5, max_k=10)
        path, _ = next(gen)
        assert _names(ladder, path) == "sACt"


class TestIsAcceptable:
    def test_direct_edge_has_no_inner_vertices(self, two_routes):
        assert not is_acceptable(two_routes, Path((0, 1), 1.0), degenerate_guard=False)

    def test_guard(self, ladder):
        path = Path((0, 2, 3, 5), 4.0)
        assert not is_acceptable(ladder, path)
        assert is_acceptable(ladder, path, degenerate_guard=False)
