"""Null distributions of path scores.

A null table holds, for every path length L (number of edges), a sorted array
of scores of randomly drawn paths with L edges. Two samplers are provided:

* ``metropolis``: loopless random walks weighted so that every loopless path
  of a given length is (asymptotically) equally likely.
* ``random_edge``: sums of L edge weights drawn with replacement, ignoring
  graph structure.

Every length draws from its own random stream derived from a ``SeedManager``
(a ``random.Random`` for Metropolis walks, a ``numpy`` Generator for edge
sums), so a table depends only on the master seed and not on the order in
which lengths are drawn.

``LazyRandomEdgeTable`` is the random-edge table drawn one length at a time,
on first lookup.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from pathminer.algorithms.base import Cost, VertexID
from pathminer.algorithms.significance import empirical_pvalue
from pathminer.config import SAMPLER_CONFIG, SamplerConfig
from pathminer.graph import ReactionGraph
from pathminer.logging import get_logger
from pathminer.seed_manager import SeedManager

logger = get_logger(__name__)


class SamplingError(RuntimeError):
    """Raised when the graph cannot produce a random path of the requested length."""


@dataclass(frozen=True, eq=False)
class NullScoreTable:
    """
    Sorted null score samples per path length.

    Attributes:
        scores: Maps each length 1..max_length to a read-only, ascending array
            of sampled scores. All arrays have the same size.
    """

    scores: Dict[int, np.ndarray]

    def __post_init__(self) -> None:
        if not self.scores:
            raise ValueError("A null score table needs at least one path length.")

        lengths = sorted(self.scores)
        if lengths != list(range(1, len(lengths) + 1)):
            raise ValueError(
                f"Path lengths must run contiguously from 1, got {lengths}."
            )

        frozen: Dict[int, np.ndarray] = {}
        for length in lengths:
            arr = np.sort(np.asarray(self.scores[length], dtype=np.float64))
            if arr.ndim != 1 or arr.size == 0:
                raise ValueError(f"Samples for length {length} must be a non-empty 1-D array.")
            arr.setflags(write=False)
            frozen[length] = arr

        sizes = {arr.size for arr in frozen.values()}
        if len(sizes) != 1:
            raise ValueError(f"Every length needs the same sample count, got {sorted(sizes)}.")
        object.__setattr__(self, "scores", frozen)

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> NullScoreTable:
        """
        Build a table from a ``(sample_count, max_length + 1)`` matrix.

        Column ``L`` holds the samples for length ``L``; column 0 is ignored.
        Columns need not be sorted.

        Raises:
            ValueError: If the matrix is not 2-D or has fewer than two columns.
        """
        arr = np.asarray(matrix, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] < 2 or arr.shape[0] == 0:
            raise ValueError(
                f"Expected a (samples, max_length + 1) matrix, got shape {arr.shape}."
            )
        return cls({length: arr[:, length] for length in range(1, arr.shape[1])})

    def to_matrix(self) -> np.ndarray:
        """Inverse of :meth:`from_matrix`; column 0 is filled with zeros."""
        out = np.zeros((self.sample_count, self.max_length + 1), dtype=np.float64)
        for length, arr in self.scores.items():
            out[:, length] = arr
        return out

    @property
    def sample_count(self) -> int:
        return next(iter(self.scores.values())).size

    @property
    def max_length(self) -> int:
        return len(self.scores)

    def __contains__(self, length: object) -> bool:
        return length in self.scores

    def __getitem__(self, length: int) -> np.ndarray:
        return self.scores[length]

    def __iter__(self) -> Iterator[int]:
        return iter(self.scores)

    def __len__(self) -> int:
        return len(self.scores)

    def pvalue(self, score: Cost, length: int) -> float:
        """
        Empirical p-value of a path score against the samples for ``length``.

        Raises:
            KeyError: If the table has no samples for ``length``.
        """
        return empirical_pvalue(score, self.scores[length])


def _random_walk(
    graph: ReactionGraph,
    length: int,
    rng: random.Random,
    start: Optional[VertexID],
    max_retries: int,
) -> Tuple[Cost, float, int]:
    """
    Draw one loopless walk of exactly ``length`` edges.

    At each step the next vertex is chosen uniformly among the unvisited
    out-neighbours. A walk that runs into a dead end is discarded and
    restarted.

    Returns:
        (score, log_q, failures): the walk's total weight, the log-probability
        of having proposed it, and the number of discarded walks.

    Raises:
        SamplingError: If ``max_retries`` walks in a row hit a dead end.
    """
    adjacency = graph._adj
    n_vertices = len(graph)

    for failures in range(max_retries):
        vertex = start if start is not None else rng.randrange(n_vertices)
        visited = {vertex}
        score = 0.0
        log_q = 0.0

        for _ in range(length):
            options: List[VertexID] = [w for w in adjacency[vertex] if w not in visited]
            if not options:
                break
            nxt = options[rng.randrange(len(options))]
            log_q -= math.log(len(options))
            score += adjacency[vertex][nxt]["weight"]
            visited.add(nxt)
            vertex = nxt
        else:
            return score, log_q, failures

    raise SamplingError(
        f"No loopless path with {length} edges found after {max_retries} attempts."
    )


def _failure_correction(failures: int, recorded: int) -> float:
    """
    Log of the observed walk success rate ``1 - failures / recorded``.

    Returns 0 while failures are not fewer than the recorded samples.
    """
    if failures < recorded:
        return math.log(1.0 - failures / recorded)
    return 0.0


def metropolis_scores(
    graph: ReactionGraph,
    length: int,
    sample_count: int,
    warmup_steps: int,
    rng: random.Random,
    start: Optional[VertexID] = None,
    max_retries: int = SAMPLER_CONFIG.max_retries,
) -> np.ndarray:
    """
    Sample scores of loopless paths with ``length`` edges by Metropolis-Hastings.

    The chain runs ``warmup_steps * sample_count`` iterations. Each iteration
    proposes a fresh random walk and accepts it with probability
    ``min(1, q_current / q_proposal)``, which targets the uniform distribution
    over loopless paths. While fewer walks have failed than samples have been
    recorded, the proposal probability is divided by the observed success
    rate ``1 - failures / recorded``. Every ``warmup_steps`` iterations the
    current score is recorded and the chain is restarted, so the next proposal
    is always accepted.

    Args:
        graph: The graph to walk.
        length: Number of edges per path.
        sample_count: Number of scores to record.
        warmup_steps: Iterations per recorded score.
        rng: Random stream.
        start: Fixed start vertex; a uniformly random vertex if None.
        max_retries: Dead-end walks tolerated for one proposal.

    Returns:
        Sorted array of ``sample_count`` scores.

    Raises:
        SamplingError: If the graph is empty or keeps producing dead ends.
    """
    if len(graph) == 0:
        raise SamplingError("Cannot sample paths from an empty graph.")

    recorded: List[Cost] = []
    failures = 0
    log_current = math.inf
    current_score = 0.0

    for iteration in range(1, warmup_steps * sample_count + 1):
        score, log_q, failed = _random_walk(graph, length, rng, start, max_retries)
        failures += failed
        log_q -= _failure_correction(failures, len(recorded))

        diff = log_current - log_q
        if diff >= 0 or rng.random() < math.exp(diff):
            current_score = score
            log_current = log_q

        if iteration % warmup_steps == 0:
            recorded.append(current_score)
            log_current = math.inf

    logger.debug(
        "Metropolis length %d: %d samples, %d dead-end walks", length, len(recorded), failures
    )
    return np.sort(np.asarray(recorded, dtype=np.float64))


def random_edge_scores(
    graph: ReactionGraph,
    length: int,
    sample_count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Sample scores as sums of ``length`` edge weights drawn with replacement.

    Raises:
        SamplingError: If the graph has no edges.
    """
    weights = graph.edge_weights()
    if weights.size == 0:
        raise SamplingError("Cannot sample edge weights from a graph without edges.")

    idx = rng.integers(0, weights.size, size=(sample_count, length))
    return np.sort(weights[idx].sum(axis=1))


class LazyRandomEdgeTable:
    """
    Random-edge null table whose lengths are sampled on first lookup.

    Lookups behave like :class:`NullScoreTable` for lengths
    ``1..max_length``. Each length uses the same stream as
    :func:`sample_null_scores` with ``method="random_edge"``, so for a given
    seed both produce identical samples.
    """

    def __init__(
        self,
        graph: ReactionGraph,
        max_length: int,
        sample_count: int,
        seed_manager: Optional[SeedManager] = None,
    ) -> None:
        if max_length < 1 or sample_count < 1:
            raise ValueError(
                f"max_length and sample_count must be >= 1, got {max_length}, {sample_count}."
            )
        self._graph = graph
        self._max_length = max_length
        self._sample_count = sample_count
        self._seeds = seed_manager if seed_manager is not None else SeedManager()
        self._scores: Dict[int, np.ndarray] = {}

    @property
    def sample_count(self) -> int:
        return self._sample_count

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def sampled_lengths(self) -> List[int]:
        """Lengths drawn so far, ascending."""
        return sorted(self._scores)

    def __contains__(self, length: object) -> bool:
        return isinstance(length, int) and 1 <= length <= self._max_length

    def __getitem__(self, length: int) -> np.ndarray:
        if length not in self:
            raise KeyError(length)
        if length not in self._scores:
            rng = self._seeds.create_generator("random_edge", length)
            arr = random_edge_scores(self._graph, length, self._sample_count, rng)
            arr.setflags(write=False)
            self._scores[length] = arr
            logger.debug("Sampled random-edge scores for length %d", length)
        return self._scores[length]

    def __len__(self) -> int:
        return self._max_length

    def pvalue(self, score: Cost, length: int) -> float:
        """
        Empirical p-value of a path score against the samples for ``length``.

        Raises:
            KeyError: If ``length`` is outside ``1..max_length``.
            SamplingError: If the graph has no edges.
        """
        return empirical_pvalue(score, self[length])


#: Anything the scope engine can look p-values up in.
ScoreTable = Union[NullScoreTable, LazyRandomEdgeTable]


def sample_null_scores(
    graph: ReactionGraph,
    config: SamplerConfig = SAMPLER_CONFIG,
    seed_manager: Optional[SeedManager] = None,
    start: Optional[VertexID] = None,
) -> NullScoreTable:
    """
    Build a null score table for lengths ``1..config.max_path_length``.

    Args:
        graph: The graph to sample from.
        config: Sampler settings; ``config.method`` selects the sampler.
        seed_manager: Source of per-length random streams. Unseeded if None.
        start: Fixed start vertex for Metropolis walks.

    Returns:
        The sampled table.

    Raises:
        SamplingError: If the graph cannot produce paths of some length.
    """
    seeds = seed_manager if seed_manager is not None else SeedManager()
    scores: Dict[int, np.ndarray] = {}

    for length in range(1, config.max_path_length + 1):
        if config.method == "metropolis":
            scores[length] = metropolis_scores(
                graph,
                length,
                config.sample_count,
                config.warmup_steps,
                seeds.create_random_state("metropolis", length),
                start=start,
                max_retries=config.max_retries,
            )
        else:
            scores[length] = random_edge_scores(
                graph,
                length,
                config.sample_count,
                seeds.create_generator("random_edge", length),
            )

    logger.debug(
        "Sampled %s null table: %d lengths x %d samples",
        config.method,
        config.max_path_length,
        config.sample_count,
    )
    return NullScoreTable(scores)
