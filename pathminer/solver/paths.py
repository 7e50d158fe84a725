"""Path ranking and scope solvers bound to a ReactionGraph.

These wrappers locate the reserved source (``"s"``) and sink (``"t"``)
vertices, run the algorithm modules and return name-based result records.
A graph without both reserved vertices is a precondition failure: it is
logged at ERROR level and an empty result is returned.

Set ``verbose=True`` to have progress narrated at INFO level instead of DEBUG.
"""

from __future__ import annotations

from typing import List, Optional

from pathminer.algorithms.ksp import ksp
from pathminer.algorithms.sampling import (
    LazyRandomEdgeTable,
    NullScoreTable,
    ScoreTable,
    sample_null_scores,
)
from pathminer.algorithms.scope import path_scope as _path_scope
from pathminer.algorithms.scope import scope_targets
from pathminer.config import (
    RANKER_CONFIG,
    SAMPLER_CONFIG,
    SCOPE_CONFIG,
    RankerConfig,
    SamplerConfig,
    ScopeConfig,
)
from pathminer.graph import ReactionGraph
from pathminer.logging import get_logger, narrate
from pathminer.seed_manager import SeedManager
from pathminer.types import PathRecord, RankedPaths, ScopeResult

logger = get_logger(__name__)


def rank_paths(
    graph: ReactionGraph,
    config: RankerConfig = RANKER_CONFIG,
    *,
    verbose: bool = False,
) -> RankedPaths:
    """Rank the K shortest loopless paths from ``"s"`` to ``"t"``.

    Args:
        graph: Graph containing the reserved source and sink vertices.
        config: Ranking settings (``k``, ``min_path_size``, ``degenerate_guard``).
        verbose: Narrate each ranked path at INFO level.

    Returns:
        Accepted paths (at most ``k``) and the full ranked list. Empty if the
        source or sink is missing or no path exists.
    """
    if not graph.has_terminals():
        logger.error("No source ('s') or sink ('t') vertex found; cannot rank paths.")
        return RankedPaths.empty()

    src, sink = graph.require_terminals()
    accepted: List[PathRecord] = []
    ranked: List[PathRecord] = []

    for path, ok in ksp(
        graph,
        src,
        sink,
        config.k,
        min_path_size=config.min_path_size,
        degenerate_guard=config.degenerate_guard,
    ):
        record = path.to_record(graph)
        ranked.append(record)
        if ok:
            accepted.append(record)
        narrate(
            logger,
            verbose,
            "Path %d: %s (distance=%.4f%s)",
            len(ranked),
            " -> ".join(record.genes),
            record.distance,
            "" if ok else ", filtered",
        )

    narrate(logger, verbose, "Found %d of %d requested paths.", len(accepted), config.k)
    return RankedPaths(paths=tuple(accepted), ranked=tuple(ranked))


def sample_paths(
    graph: ReactionGraph,
    config: SamplerConfig = SAMPLER_CONFIG,
    *,
    seed: Optional[int] = None,
    from_source: bool = False,
    verbose: bool = False,
) -> NullScoreTable:
    """Sample the null distribution of path scores.

    Args:
        graph: The graph to sample from.
        config: Sampler settings.
        seed: Master seed for reproducible tables.
        from_source: Start every random walk at ``"s"``.
        verbose: Narrate progress at INFO level.

    Returns:
        Null score table for lengths ``1..config.max_path_length``.

    Raises:
        KeyError: If ``from_source`` is set and the graph has no ``"s"`` vertex.
        SamplingError: If the graph cannot produce paths of some length.
    """
    start = None
    if from_source:
        start = graph.source
        if start is None:
            raise KeyError("Reserved vertex 's' not found in the graph.")

    narrate(
        logger,
        verbose,
        "Sampling %d %s scores for path lengths 1..%d",
        config.sample_count,
        config.method,
        config.max_path_length,
    )
    return sample_null_scores(graph, config, SeedManager(seed), start=start)


def path_scope(
    graph: ReactionGraph,
    table: Optional[ScoreTable] = None,
    config: ScopeConfig = SCOPE_CONFIG,
    *,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> ScopeResult:
    """Find significant paths from ``"s"`` to every vertex feeding ``"t"``.

    If ``table`` is None, a random-edge null table with
    ``config.fallback_sample_count`` samples per length, up to
    ``n_vertices - 1`` edges, is used; each length is sampled only when the
    search first needs it. A graph without edges has an empty scope.

    Args:
        graph: Graph containing the reserved source and sink vertices.
        table: Precomputed null score table.
        config: Scope settings (``alpha``, ``abandon_pvalue``).
        seed: Master seed for the fallback table.
        verbose: Narrate each target at INFO level.

    Returns:
        Significant paths with their p-values and the names of the reached
        targets. Empty if the source or sink is missing.
    """
    if not graph.has_terminals():
        logger.error("No source ('s') or sink ('t') vertex found; cannot compute scope.")
        return ScopeResult.empty()

    src, sink = graph.require_terminals()
    if graph.number_of_edges() == 0:
        narrate(logger, verbose, "Graph has no edges; the scope is empty.")
        return ScopeResult.empty()

    if table is None:
        max_length = max(len(graph) - 1, 1)
        narrate(
            logger,
            verbose,
            "Sampling %d random_edge scores per path length on demand, up to %d",
            config.fallback_sample_count,
            max_length,
        )
        table = LazyRandomEdgeTable(
            graph, max_length, config.fallback_sample_count, SeedManager(seed)
        )

    narrate(
        logger,
        verbose,
        "There are %d vertices in the neighborhood",
        len(scope_targets(graph, sink)),
    )

    records: List[PathRecord] = []
    reached: List[str] = []
    for path, pvalue in _path_scope(
        graph, src, sink, table, config.alpha, config.abandon_pvalue
    ):
        record = path.to_record(graph, pvalue=pvalue)
        records.append(record)
        reached.append(graph.vertex_name(path.dst_node))
        narrate(logger, verbose, "Found a path to %s (p=%.4f)", reached[-1], pvalue)

    return ScopeResult(paths=tuple(records), scope=tuple(reached))
