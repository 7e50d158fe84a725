from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Iterator, Optional, Set, Tuple

from pathminer.algorithms.base import Cost, VertexID, VertexSeq
from pathminer.graph import EdgeKey, ReactionGraph
from pathminer.types import PathRecord


@dataclass
class Path:
    """
    Represents a single path through a ReactionGraph.

    Attributes:
        nodes_seq (VertexSeq):
            Vertex handles in traversal order, first vertex included.
        cost (Cost):
            Sum of the traversed edge weights.
        deviation (int):
            Position in ``nodes_seq`` from which this path was derived from a
            previously ranked path; 0 for an initial shortest path.
        nodes (Set[VertexID]):
            Set of all vertex handles on the path.
    """

    nodes_seq: VertexSeq
    cost: Cost
    deviation: int = 0
    nodes: Set[VertexID] = field(init=False, default_factory=set, repr=False)

    def __post_init__(self) -> None:
        self.nodes_seq = tuple(self.nodes_seq)
        self.nodes.update(self.nodes_seq)

    def __getitem__(self, idx: int) -> VertexID:
        return self.nodes_seq[idx]

    def __iter__(self) -> Iterator[VertexID]:
        return iter(self.nodes_seq)

    def __len__(self) -> int:
        return len(self.nodes_seq)

    @property
    def src_node(self) -> VertexID:
        """Return the first vertex of the path."""
        return self.nodes_seq[0]

    @property
    def dst_node(self) -> VertexID:
        """Return the last vertex of the path."""
        return self.nodes_seq[-1]

    def __eq__(self, other: Any) -> bool:
        """Paths are equal when vertex sequence and cost match; deviation is ignored."""
        if not isinstance(other, Path):
            return NotImplemented
        return (self.nodes_seq == other.nodes_seq) and (self.cost == other.cost)

    def __hash__(self) -> int:
        return hash((self.nodes_seq, self.cost))

    def __repr__(self) -> str:
        return f"Path({self.nodes_seq}, cost={self.cost}, deviation={self.deviation})"

    @cached_property
    def edges_seq(self) -> Tuple[EdgeKey, ...]:
        """
        Return the traversed edges as consecutive (u, v) pairs.

        Returns:
            A tuple of edge keys; empty if the path has 1 or fewer vertices.
        """
        return tuple(zip(self.nodes_seq[:-1], self.nodes_seq[1:]))

    @property
    def is_loopless(self) -> bool:
        """True if no vertex occurs twice."""
        return len(self.nodes) == len(self.nodes_seq)

    def shares_prefix(self, other: Path, length: int) -> bool:
        """True if both paths start with the same ``length`` vertices."""
        return self.nodes_seq[:length] == other.nodes_seq[:length]

    def prepend(self, prefix: VertexSeq, prefix_cost: Cost, deviation: int) -> Path:
        """
        Return a new path formed by ``prefix`` followed by this path.

        Args:
            prefix: Vertices preceding this path's first vertex.
            prefix_cost: Total weight of the edges inside ``prefix`` plus the
                edge joining it to this path.
            deviation: Deviation index of the new path.
        """
        return Path(
            tuple(prefix) + self.nodes_seq,
            self.cost + prefix_cost,
            deviation=deviation,
        )

    def to_record(
        self, graph: ReactionGraph, pvalue: Optional[float] = None
    ) -> PathRecord:
        """
        Convert to the presentation form used by the solvers.

        The source and sink sentinels are stripped from ``genes``;
        ``compounds`` are the labels of the edges between consecutive genes and
        ``weights`` cover every traversed edge, so ``sum(weights)`` equals
        ``distance``.

        Args:
            graph: Graph supplying vertex names and edge labels.
            pvalue: Optional significance of the path.
        """
        genes = list(self.nodes_seq)
        if genes and genes[0] == graph.source:
            genes.pop(0)
        if genes and genes[-1] == graph.sink:
            genes.pop()

        return PathRecord(
            genes=tuple(graph.vertex_name(v) for v in genes),
            compounds=tuple(graph.label(u, v) for u, v in zip(genes[:-1], genes[1:])),
            weights=tuple(graph.weight(u, v) for u, v in self.edges_seq),
            distance=float(self.cost),
            pvalue=pvalue,
        )
