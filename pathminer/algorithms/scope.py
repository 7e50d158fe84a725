"""Significance-scored reachability ("scope") from a source vertex.

For every vertex with an edge into the sink, the engine looks for the
shortest loopless path from the source with exactly L edges, for increasing
L, and accepts the first one whose score is significant against the null
table entry for L.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from pathminer.algorithms.base import ABANDON_PVALUE, VertexID, VertexSeq
from pathminer.algorithms.sampling import ScoreTable
from pathminer.graph import ReactionGraph
from pathminer.logging import get_logger
from pathminer.path import Path

logger = get_logger(__name__)

#: A significant path paired with its p-value.
ScoredPath = Tuple[Path, float]


def scope_targets(graph: ReactionGraph, sink: VertexID) -> List[VertexID]:
    """Vertices with an edge into ``sink``, in handle order."""
    return sorted(graph._pred[sink])


def _chain(pred: np.ndarray, vertex: VertexID, length: int) -> Set[VertexID]:
    """Vertices on the best path with ``length`` edges ending at ``vertex``."""
    on_path = {vertex}
    while length > 0:
        vertex = int(pred[vertex, length])
        length -= 1
        on_path.add(vertex)
    return on_path


def _reconstruct(pred: np.ndarray, vertex: VertexID, length: int) -> VertexSeq:
    seq = [vertex]
    while length > 0:
        vertex = int(pred[vertex, length])
        length -= 1
        seq.append(vertex)
    seq.reverse()
    return tuple(seq)


def _empty_tables(
    n_vertices: int, src_node: VertexID, max_length: int
) -> Tuple[np.ndarray, np.ndarray]:
    scores = np.full((n_vertices, max_length + 1), np.inf, dtype=np.float64)
    pred = np.full((n_vertices, max_length + 1), -1, dtype=np.intp)
    scores[src_node, 0] = 0.0
    return scores, pred


def _relax_layer(
    graph: ReactionGraph, scores: np.ndarray, pred: np.ndarray, length: int
) -> bool:
    """
    Fill layer ``length + 1`` from layer ``length``.

    Returns:
        True if any vertex was reached with ``length + 1`` edges.
    """
    adjacency = graph._adj
    reached = False
    for u in np.flatnonzero(np.isfinite(scores[:, length])):
        u = int(u)
        base = float(scores[u, length])
        on_path = _chain(pred, u, length)
        for v, edge_attr in adjacency[u].items():
            if v in on_path:
                continue
            cand = base + edge_attr["weight"]
            if cand < scores[v, length + 1]:
                scores[v, length + 1] = cand
                pred[v, length + 1] = u
                reached = True
    return reached


def length_scores(
    graph: ReactionGraph, src_node: VertexID, max_length: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Best loopless path scores from ``src_node`` by exact edge count.

    ``scores[v, l]`` is the lowest score found for a path of ``l`` edges from
    the source to ``v`` and ``pred[v, l]`` the vertex before ``v`` on it. The
    table is filled one length at a time; an edge ``u -> v`` extends the best
    path to ``(u, l)`` only if ``v`` is not already on that path. The result
    is a heuristic for the loopless case: the best loopless path of a given
    length is not always an extension of a best shorter one.

    Args:
        graph: The graph to search.
        src_node: First vertex of every path.
        max_length: Longest path, in edges.

    Returns:
        (scores, pred) arrays of shape ``(n_vertices, max_length + 1)``.
        Unreached entries hold ``inf`` and ``-1``.

    Raises:
        KeyError: If src_node does not exist in graph.
    """
    if src_node not in graph:
        raise KeyError(f"Source vertex '{src_node}' is not in the graph.")

    scores, pred = _empty_tables(len(graph), src_node, max_length)
    for length in range(max_length):
        if not _relax_layer(graph, scores, pred, length):
            break
    return scores, pred


def _judge(
    score: float,
    length: int,
    table: ScoreTable,
    alpha: float,
    abandon_pvalue: float,
) -> Tuple[Optional[bool], float]:
    """
    Verdict on the best path to a target with ``length`` edges.

    Returns:
        (verdict, pvalue): True to accept, False to give up on the target,
        None to try the next length. The p-value is NaN when not computed.
    """
    if not math.isfinite(score) or score <= 0:
        return None, math.nan
    if length not in table:
        return False, math.nan

    pvalue = table.pvalue(score, length)
    if pvalue < alpha:
        return True, pvalue
    if pvalue > abandon_pvalue:
        return False, pvalue
    return None, pvalue


def shortest_pvalue_path(
    scores: np.ndarray,
    pred: np.ndarray,
    dst_node: VertexID,
    table: ScoreTable,
    alpha: float,
    abandon_pvalue: float = ABANDON_PVALUE,
) -> Optional[ScoredPath]:
    """
    Return the first significant path to ``dst_node`` by increasing length.

    Lengths whose best score is not positive are skipped. The search stops
    with no result once a p-value exceeds ``abandon_pvalue`` or the null table
    runs out of lengths.

    Args:
        scores: Score table from :func:`length_scores`.
        pred: Predecessor table from :func:`length_scores`.
        dst_node: Target vertex.
        table: Null score samples.
        alpha: A path is significant when its p-value is below this.
        abandon_pvalue: Give up on the target above this p-value.

    Returns:
        (path, pvalue), or None if the target is out of scope.
    """
    max_length = scores.shape[1] - 1
    for length in range(1, max_length + 1):
        score = float(scores[dst_node, length])
        verdict, pvalue = _judge(score, length, table, alpha, abandon_pvalue)
        if verdict:
            return Path(_reconstruct(pred, dst_node, length), score), pvalue
        if verdict is False:
            logger.debug(
                "Abandoning target %s at length %d (p=%.4f)", dst_node, length, pvalue
            )
            break
    return None


def path_scope(
    graph: ReactionGraph,
    src_node: VertexID,
    sink: VertexID,
    table: ScoreTable,
    alpha: float,
    abandon_pvalue: float = ABANDON_PVALUE,
) -> List[ScoredPath]:
    """
    Find significant paths from ``src_node`` to every vertex feeding ``sink``.

    Targets are visited in handle order and each name is reached at most once.
    Unreachable and non-significant targets are left out. The length DP is
    advanced one layer at a time and stops as soon as every target is decided
    or no vertex can be reached with more edges, so p-values are only looked
    up for the lengths actually needed.

    Args:
        graph: The graph to search.
        src_node: First vertex of every path.
        sink: Vertex whose in-neighbours are the targets.
        table: Null score samples; its longest length bounds the search.
        alpha: Significance threshold.
        abandon_pvalue: Give up on a target above this p-value.

    Returns:
        (path, pvalue) pairs in target handle order.

    Raises:
        KeyError: If src_node or sink does not exist in graph.
    """
    if src_node not in graph:
        raise KeyError(f"Source vertex '{src_node}' is not in the graph.")
    if sink not in graph:
        raise KeyError(f"Sink vertex '{sink}' is not in the graph.")

    targets: Dict[str, VertexID] = {}
    for target in scope_targets(graph, sink):
        targets.setdefault(graph.vertex_name(target), target)
    pending = dict(targets)
    accepted: Dict[str, ScoredPath] = {}

    scores, pred = _empty_tables(len(graph), src_node, table.max_length)
    for length in range(1, table.max_length + 1):
        if not pending or not _relax_layer(graph, scores, pred, length - 1):
            break
        for name, target in list(pending.items()):
            score = float(scores[target, length])
            verdict, pvalue = _judge(score, length, table, alpha, abandon_pvalue)
            if verdict is None:
                continue
            del pending[name]
            if verdict:
                path = Path(_reconstruct(pred, target, length), score)
                accepted[name] = (path, pvalue)
                logger.debug("Target %s reached (p=%.4f)", name, pvalue)
            else:
                logger.debug("Target %s out of scope at length %d", name, length)

    return [accepted[name] for name in targets if name in accepted]
