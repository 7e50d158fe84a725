"""Result containers returned by the path solvers.

Defines immutable summaries of ranked and scoped paths. Vertices are referred
to by name here, not by handle, so results stay meaningful after the graph
is discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class PathRecord:
    """One source-to-sink path in presentation form.

    Attributes:
        genes: Vertex names along the path, source and sink sentinels removed.
        compounds: Labels of the edges joining consecutive genes.
        weights: Weights of every traversed edge, sentinel connectors included.
        distance: Total path score; equals ``sum(weights)``.
        pvalue: Empirical significance, or None for ranked paths.
    """

    genes: Tuple[str, ...]
    compounds: Tuple[str, ...]
    weights: Tuple[float, ...]
    distance: float
    pvalue: Optional[float] = None

    @property
    def length(self) -> int:
        """Number of traversed edges."""
        return len(self.weights)


@dataclass(frozen=True)
class RankedPaths:
    """Output of the k-shortest-path ranker.

    Attributes:
        paths: Accepted paths in rank order (at most K).
        ranked: Every path popped by the ranker in rank order, including the
            ones rejected by the acceptance filter.
    """

    paths: Tuple[PathRecord, ...] = field(default_factory=tuple)
    ranked: Tuple[PathRecord, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> RankedPaths:
        return cls()

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[PathRecord]:
        return iter(self.paths)


@dataclass(frozen=True)
class ScopeResult:
    """Output of the scope engine.

    Attributes:
        paths: Significant paths, one per reached target.
        scope: Names of the reached targets, in target handle order.
    """

    paths: Tuple[PathRecord, ...] = field(default_factory=tuple)
    scope: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> ScopeResult:
        return cls()

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[PathRecord]:
        return iter(self.paths)
