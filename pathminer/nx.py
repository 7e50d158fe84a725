"""NetworkX graph conversion utilities.

Converts between plain NetworkX graphs and ``ReactionGraph``.

Example:
    >>> import networkx as nx
    >>> from pathminer.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("src", "HK1", weight=0.5)
    >>> G.add_edge("HK1", "PFKM", weight=1.2, label="glucose-6P")
    >>> G.add_edge("PFKM", "dst", weight=0.5)
    >>>
    >>> graph = from_networkx(G, source="src", sink="dst")
    >>> graph.vertex_names
    ['s', 'HK1', 'PFKM', 't']
    >>>
    >>> G_out = to_networkx(graph)
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Optional, Tuple

import networkx as nx

from pathminer.algorithms.base import SINK_NAME, SOURCE_NAME
from pathminer.graph import ReactionGraph


def from_networkx(
    G: nx.Graph,
    *,
    weight_attr: str = "weight",
    label_attr: str = "label",
    default_weight: float = 1.0,
    source: Optional[Hashable] = None,
    sink: Optional[Hashable] = None,
    freeze: bool = True,
) -> ReactionGraph:
    """Convert a NetworkX graph to a ReactionGraph.

    Nodes keep their insertion order and are named ``str(node)``; the nodes
    given as ``source`` and ``sink`` are renamed to the reserved names
    ``"s"`` and ``"t"``. Undirected edges become two directed edges. For
    multigraphs only the lightest of the parallel edges between a pair is
    kept.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph)
        weight_attr: Edge attribute holding the weight (default: "weight")
        label_attr: Edge attribute holding the label (default: "label")
        default_weight: Weight used when the attribute is missing
        source: Node to rename to ``"s"``
        sink: Node to rename to ``"t"``
        freeze: Return a frozen graph (default: True)

    Returns:
        The converted graph.

    Raises:
        TypeError: If G is not a NetworkX graph
        ValueError: If G has no nodes, two nodes share a name, or a weight is
            negative
        KeyError: If ``source`` or ``sink`` is not a node of G
    """
    if not isinstance(G, nx.Graph):
        raise TypeError(f"Expected a NetworkX graph, got {type(G).__name__}")
    if G.number_of_nodes() == 0:
        raise ValueError("Graph has no nodes")
    for terminal in (source, sink):
        if terminal is not None and terminal not in G:
            raise KeyError(f"Node {terminal!r} is not in the graph.")

    graph = ReactionGraph()
    handles: Dict[Hashable, int] = {}
    for node in G.nodes():
        if node == source:
            name = SOURCE_NAME
        elif node == sink:
            name = SINK_NAME
        else:
            name = str(node)
        handles[node] = graph.add_vertex(name)

    best: Dict[Tuple[int, int], Dict[str, Any]] = {}
    if G.is_multigraph():
        edges_iter = ((u, v, d) for u, v, _, d in G.edges(keys=True, data=True))
    else:
        edges_iter = G.edges(data=True)

    for u, v, data in edges_iter:
        attr = {
            "weight": float(data.get(weight_attr, default_weight)),
            "label": str(data.get(label_attr, "")),
        }
        pairs = [(handles[u], handles[v])]
        if not G.is_directed() and u != v:
            pairs.append((handles[v], handles[u]))
        for pair in pairs:
            if pair not in best or attr["weight"] < best[pair]["weight"]:
                best[pair] = attr

    for (u, v), attr in best.items():
        graph.add_edge(u, v, **attr)

    if freeze:
        graph.freeze()
    return graph


def to_networkx(
    graph: ReactionGraph,
    *,
    weight_attr: str = "weight",
    label_attr: str = "label",
) -> nx.DiGraph:
    """Convert a ReactionGraph back to a NetworkX DiGraph keyed by vertex name.

    Args:
        graph: ReactionGraph to convert
        weight_attr: Edge attribute name for the weight (default: "weight")
        label_attr: Edge attribute name for the label (default: "label")

    Returns:
        nx.DiGraph with one node per vertex name, in handle order
    """
    G = nx.DiGraph()
    names = graph.vertex_names
    G.add_nodes_from(names)
    for u, v in graph.edge_keys():
        G.add_edge(
            names[u],
            names[v],
            **{weight_attr: graph.weight(u, v), label_attr: graph.label(u, v)},
        )
    return G
