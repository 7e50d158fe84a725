"""Tests for NetworkX conversion utilities."""

import networkx as nx
import pytest

from pathminer.nx import from_networkx, to_networkx
from pathminer.solver.paths import rank_paths
from pathminer.config import RankerConfig


class TestFromNetworkx:
    def test_basic_digraph(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", weight=2.0, label="atp")
        G.add_edge("B", "C")

        graph = from_networkx(G)
        assert graph.is_frozen
        assert graph.vertex_names == ["A", "B", "C"]
        assert graph.weight(0, 1) == 2.0
        assert graph.label(0, 1) == "atp"
        # Missing attributes fall back to defaults
        assert graph.weight(1, 2) == 1.0
        assert graph.label(1, 2) == ""

    def test_custom_attributes(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", cost=4, compound="nadh")
        graph = from_networkx(G, weight_attr="cost", label_attr="compound")
        assert graph.weight(0, 1) == 4.0
        assert graph.label(0, 1) == "nadh"

    def test_renames_terminals(self):
        G = nx.DiGraph()
        G.add_edge("src", "HK1", weight=0.5)
        G.add_edge("HK1", "PFKM", weight=1.2, label="glucose-6P")
        G.add_edge("PFKM", "dst", weight=0.5)

        graph = from_networkx(G, source="src", sink="dst")
        assert graph.vertex_names == ["s", "HK1", "PFKM", "t"]
        assert graph.require_terminals() == (0, 3)

        result = rank_paths(graph, RankerConfig(k=1))
        assert result.paths[0].genes == ("HK1", "PFKM")
        assert result.paths[0].compounds == ("glucose-6P",)

    def test_undirected_graph(self):
        G = nx.Graph()
        G.add_edge("A", "B", weight=3.0)
        graph = from_networkx(G)
        assert graph.weight(0, 1) == 3.0
        assert graph.weight(1, 0) == 3.0

    def test_multigraph_keeps_lightest(self):
        G = nx.MultiDiGraph()
        G.add_edge("A", "B", weight=5.0, label="heavy")
        G.add_edge("A", "B", weight=1.0, label="light")
        graph = from_networkx(G)
        assert graph.number_of_edges() == 1
        assert graph.weight(0, 1) == 1.0
        assert graph.label(0, 1) == "light"

    def test_integer_nodes(self):
        G = nx.DiGraph()
        G.add_edge(1, 2)
        graph = from_networkx(G)
        assert graph.vertex_names == ["1", "2"]

    def test_not_a_graph(self):
        with pytest.raises(TypeError):
            from_networkx({"A": ["B"]})

    def test_empty_graph(self):
        with pytest.raises(ValueError, match="no nodes"):
            from_networkx(nx.DiGraph())

    def test_unknown_terminal(self):
        G = nx.DiGraph()
        G.add_edge("A", "B")
        with pytest.raises(KeyError):
            from_networkx(G, source="X")

    def test_name_collision(self):
        G = nx.DiGraph()
        G.add_edge(1, "1")
        with pytest.raises(ValueError):
            from_networkx(G)

    def test_negative_weight(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", weight=-1.0)
        with pytest.raises(ValueError):
            from_networkx(G)


class TestToNetworkx:
    def test_names_and_attributes(self, ladder):
        G = to_networkx(ladder)
        assert isinstance(G, nx.DiGraph)
        assert list(G.nodes()) == ["s", "A", "B", "C", "D", "t"]
        assert G.number_of_edges() == ladder.number_of_edges()
        assert G["A"]["C"] == {"weight": 1.0, "label": "ac"}

    def test_custom_attribute_names(self, two_routes):
        G = to_networkx(two_routes, weight_attr="cost", label_attr="compound")
        assert G["a"]["t"] == {"cost": 2.0, "compound": "x"}

    def test_round_trip(self, ladder):
        graph = from_networkx(to_networkx(ladder))
        assert graph.vertex_names == ladder.vertex_names
        for u, v in ladder.edge_keys():
            assert graph.weight(u, v) == ladder.weight(u, v)
            assert graph.label(u, v) == ladder.label(u, v)
