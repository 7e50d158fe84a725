from __future__ import annotations

import math
from pickle import dumps, loads
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
)

import networkx as nx
import numpy as np

from pathminer.algorithms.base import (
    MIN_PROB,
    SINK_NAME,
    SOURCE_NAME,
    Cost,
    VertexID,
)

AttrDict = Dict[str, Any]
EdgeKey = Tuple[VertexID, VertexID]


class ReactionGraph(nx.DiGraph):
    """
    A weighted directed graph with named vertices and labelled edges.

    This class enforces:
      - Vertices are dense integer handles 0..n-1 assigned in insertion order;
        each carries a unique ``name`` attribute.
      - At most one edge per ordered vertex pair; each edge carries a
        non-negative ``weight`` and a string ``label``.
      - No automatic creation of missing vertices when adding an edge.
      - No removal of vertices or edges. Algorithms that need to "delete"
        parts of the graph pass exclusion sets instead.

    Source and sink are the vertices named ``"s"`` and ``"t"``. Call
    :meth:`freeze` once construction is complete; a frozen graph rejects every
    structural change and can be shared freely between queries.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        """
        Initialize an empty ReactionGraph.

        Attributes:
            _handles (Dict[str, VertexID]): Maps vertex names to handles.
            _edge_order (List[EdgeKey]): Edges in insertion order.
        """
        self._handles: Dict[str, VertexID] = {}
        self._edge_order: List[EdgeKey] = []
        super().__init__(*args, **kwargs)

    @classmethod
    def from_edge_lists(
        cls,
        vertex_names: Sequence[str],
        from_idx: Sequence[int],
        to_idx: Sequence[int],
        weights: Sequence[float],
        labels: Optional[Sequence[str]] = None,
        *,
        one_based: bool = True,
        freeze: bool = True,
    ) -> ReactionGraph:
        """
        Build a graph from a vertex list and parallel edge arrays.

        Args:
            vertex_names: Unique vertex names; list position becomes the handle.
            from_idx: Origin vertex index of each edge.
            to_idx: Destination vertex index of each edge.
            weights: Non-negative weight of each edge.
            labels: Display label of each edge. Defaults to empty strings.
            one_based: If True, indices count from 1 and are shifted to 0-based.
            freeze: If True, the returned graph is frozen.

        Returns:
            The constructed graph.

        Raises:
            ValueError: If the edge arrays differ in length, an index is out of
                range, a name or edge is duplicated, or a weight is invalid.
        """
        n_edges = len(from_idx)
        if len(to_idx) != n_edges or len(weights) != n_edges:
            raise ValueError(
                f"Edge arrays differ in length: from={n_edges}, "
                f"to={len(to_idx)}, weights={len(weights)}."
            )
        if labels is None:
            labels = [""] * n_edges
        elif len(labels) != n_edges:
            raise ValueError(
                f"Expected {n_edges} edge labels, got {len(labels)}."
            )

        graph = cls()
        for name in vertex_names:
            graph.add_vertex(name)

        shift = 1 if one_based else 0
        n_vertices = len(graph)
        for u_raw, v_raw, weight, label in zip(from_idx, to_idx, weights, labels):
            u, v = int(u_raw) - shift, int(v_raw) - shift
            if not (0 <= u < n_vertices and 0 <= v < n_vertices):
                raise ValueError(
                    f"Edge ({u_raw}, {v_raw}) refers to a vertex outside "
                    f"{shift}..{n_vertices - 1 + shift}."
                )
            graph.add_edge(u, v, weight=float(weight), label=str(label))

        if freeze:
            graph.freeze()
        return graph

    def copy(self, as_view: bool = False, pickle: bool = True) -> ReactionGraph:
        """
        Create a structural copy of this graph.

        By default, uses pickle-based deep copying, which also preserves the
        frozen state. If pickle=False, the parent class's copy is used, which
        supports read-only views and returns an unfrozen copy.

        Args:
            as_view (bool): If True, returns a read-only view; only used if
                pickle=False.
            pickle (bool): If True, perform a pickle-based deep copy.

        Returns:
            ReactionGraph: A new instance (or view) of the graph.
        """
        if not pickle:
            return super().copy(as_view=as_view)
        return loads(dumps(self))

    def freeze(self) -> ReactionGraph:
        """Make the graph immutable in place and return it."""
        return nx.freeze(self)

    @property
    def is_frozen(self) -> bool:
        return nx.is_frozen(self)

    #
    # Vertex management
    #
    def add_vertex(self, name: str) -> VertexID:
        """
        Append a vertex with the given name.

        Args:
            name: Unique vertex name.

        Returns:
            The handle assigned to the new vertex.

        Raises:
            ValueError: If a vertex with this name already exists.
        """
        handle = len(self)
        self.add_node(handle, name=name)
        return handle

    def add_node(self, n: VertexID, **attr: Any) -> None:
        """
        Add a vertex by handle. Prefer :meth:`add_vertex`.

        Args:
            n: Handle of the new vertex; must equal the current vertex count.
            **attr: Vertex attributes; ``name`` defaults to ``str(n)``.

        Raises:
            ValueError: If the handle is not the next dense handle or the name
                is already in use.
        """
        if n in self:
            raise ValueError(f"Vertex {n} already exists in this graph.")
        if n != len(self):
            raise ValueError(
                f"Vertex handles must be dense: expected {len(self)}, got {n}."
            )
        name = str(attr.pop("name", n))
        if name in self._handles:
            raise ValueError(f"Vertex '{name}' already exists in this graph.")
        super().add_node(n, name=name, **attr)
        self._handles[name] = n

    def add_nodes_from(self, nodes_for_adding: Iterable[Any], **attr: Any) -> None:
        """
        Append vertices given as names or as ``(handle, attr_dict)`` pairs.

        The pair form is what networkx uses when copying a graph.
        """
        for item in nodes_for_adding:
            if isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], dict):
                self.add_node(item[0], **{**attr, **item[1]})
            else:
                self.add_node(len(self), name=item, **attr)

    def remove_node(self, n: VertexID) -> None:
        raise ValueError(
            "Vertices cannot be removed from a ReactionGraph; "
            "pass excluded_nodes to the path algorithms instead."
        )

    def handle(self, name: str) -> VertexID:
        """
        Return the handle of the vertex called ``name``.

        Raises:
            KeyError: If no such vertex exists.
        """
        try:
            return self._handles[name]
        except KeyError:
            raise KeyError(f"Vertex '{name}' is not in the graph.") from None

    def vertex_name(self, handle: VertexID) -> str:
        """Return the name of the vertex with the given handle."""
        return self._node[handle]["name"]

    @property
    def vertex_names(self) -> List[str]:
        """Vertex names in handle order."""
        return [self._node[h]["name"] for h in range(len(self))]

    @property
    def source(self) -> Optional[VertexID]:
        """Handle of the vertex named ``"s"``, or None if absent."""
        return self._handles.get(SOURCE_NAME)

    @property
    def sink(self) -> Optional[VertexID]:
        """Handle of the vertex named ``"t"``, or None if absent."""
        return self._handles.get(SINK_NAME)

    def has_terminals(self) -> bool:
        return self.source is not None and self.sink is not None

    def require_terminals(self) -> Tuple[VertexID, VertexID]:
        """
        Return the (source, sink) handles.

        Raises:
            KeyError: If either reserved vertex is missing.
        """
        missing = [
            name
            for name, handle in ((SOURCE_NAME, self.source), (SINK_NAME, self.sink))
            if handle is None
        ]
        if missing:
            raise KeyError(
                f"Reserved vertex {' and '.join(repr(m) for m in missing)} "
                f"not found in the graph."
            )
        return self.source, self.sink

    #
    # Edge management
    #
    def add_edge(
        self,
        u_of_edge: VertexID,
        v_of_edge: VertexID,
        weight: Cost = 1.0,
        label: str = "",
        **attr: Any,
    ) -> None:
        """
        Add a directed edge from u_of_edge to v_of_edge.

        Both vertices must already exist.

        Args:
            u_of_edge: The origin vertex handle.
            v_of_edge: The destination vertex handle.
            weight: Non-negative, finite edge weight.
            label: Display label (a compound name in reaction networks).
            **attr: Additional edge attributes.

        Raises:
            ValueError: If either vertex does not exist, the edge already
                exists, or the weight is negative or not finite.
        """
        if u_of_edge not in self:
            raise ValueError(f"Source vertex '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Target vertex '{v_of_edge}' does not exist.")
        if self.has_edge(u_of_edge, v_of_edge):
            raise ValueError(
                f"Edge from {self.vertex_name(u_of_edge)!r} to "
                f"{self.vertex_name(v_of_edge)!r} already exists."
            )
        weight = float(weight)
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(
                f"Edge weights must be finite and non-negative, got {weight}."
            )
        super().add_edge(u_of_edge, v_of_edge, weight=weight, label=label, **attr)
        self._edge_order.append((u_of_edge, v_of_edge))

    def add_edges_from(self, ebunch_to_add: Iterable[Tuple], **attr: Any) -> None:
        """Add edges given as ``(u, v)`` or ``(u, v, attr_dict)`` tuples."""
        for edge in ebunch_to_add:
            edge_attr = dict(attr)
            if len(edge) == 3:
                edge_attr.update(edge[2])
            self.add_edge(edge[0], edge[1], **edge_attr)

    def remove_edge(self, u: VertexID, v: VertexID) -> None:
        raise ValueError(
            "Edges cannot be removed from a ReactionGraph; "
            "pass excluded_edges to the path algorithms instead."
        )

    def weight(self, u: VertexID, v: VertexID) -> Cost:
        """Return the weight of edge (u, v); raises KeyError if absent."""
        return self._succ[u][v]["weight"]

    def label(self, u: VertexID, v: VertexID) -> str:
        """Return the label of edge (u, v); raises KeyError if absent."""
        return self._succ[u][v]["label"]

    def edge_keys(self) -> List[EdgeKey]:
        """Edges as (u, v) pairs in insertion order."""
        return list(self._edge_order)

    def edge_weights(self) -> np.ndarray:
        """Edge weights in insertion order."""
        return np.fromiter(
            (self._succ[u][v]["weight"] for u, v in self._edge_order),
            dtype=np.float64,
            count=len(self._edge_order),
        )

    def with_weights(self, func: Callable[[float], float]) -> ReactionGraph:
        """
        Return a new frozen graph whose edge weights are mapped through ``func``.

        Vertex handles, names, labels and edge order are preserved.

        Args:
            func: Mapping applied to every edge weight.

        Raises:
            ValueError: If ``func`` yields a negative or non-finite weight.
        """
        graph = type(self)()
        for name in self.vertex_names:
            graph.add_vertex(name)
        for u, v in self._edge_order:
            attr = dict(self._succ[u][v])
            attr["weight"] = func(attr["weight"])
            graph.add_edge(u, v, **attr)
        return graph.freeze()


def prob_to_cost(prob: float, min_prob: float = MIN_PROB) -> float:
    """
    Convert an edge probability to an additive cost, ``-log(p)``.

    Shortest paths under this cost are the most probable paths. Probabilities
    are clipped to ``[min_prob, 1]`` so the cost stays finite and non-negative.
    """
    p = min(max(float(prob), min_prob), 1.0)
    return -math.log(p)
