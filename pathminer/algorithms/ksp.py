"""K shortest loopless paths (Yen's algorithm with Lawler's deviation index).

Paths are produced lazily in non-decreasing cost order. Each produced path is
paired with a flag telling whether it passes the acceptance filter; rejected
paths still take part in the ranking so that their deviations are explored.
"""

from __future__ import annotations

from typing import Iterator, List, Set, Tuple

from pathminer.algorithms.base import UNREACHABLE, VertexID, VertexSeq
from pathminer.algorithms.spf import shortest_path
from pathminer.graph import EdgeKey, ReactionGraph
from pathminer.logging import get_logger
from pathminer.path import Path

logger = get_logger(__name__)


def is_acceptable(
    graph: ReactionGraph,
    path: Path,
    min_path_size: int = 0,
    degenerate_guard: bool = True,
) -> bool:
    """
    Decide whether a ranked path is reported to the caller.

    A path qualifies when it has more than ``min_path_size`` inner vertices
    (source and sink excluded). With ``degenerate_guard`` it must also cost
    more than twice its first edge, which drops paths dominated by a single
    connector edge out of the source.
    """
    if len(path) - 2 <= min_path_size:
        return False
    if degenerate_guard:
        return path.cost > 2 * graph.weight(path[0], path[1])
    return True


def ksp(
    graph: ReactionGraph,
    src_node: VertexID,
    dst_node: VertexID,
    max_k: int,
    min_path_size: int = 0,
    degenerate_guard: bool = True,
) -> Iterator[Tuple[Path, bool]]:
    """
    Generator of ranked loopless paths from src_node to dst_node.

    The candidate pool starts with the shortest path. Each round sorts the
    pool by cost (stable), trims it to ``max_k - accepted + 1`` entries and
    pops the cheapest candidate. For every position ``i`` at or after the
    popped path's deviation index, the edge leaving ``i`` on every ranked path
    sharing the first ``i + 1`` vertices is excluded, as are the vertices
    before ``i``; the shortest path from vertex ``i`` to the sink under those
    exclusions, prefixed by the popped path's head, becomes a new candidate.

    Args:
        graph: The graph to search.
        src_node: First vertex of every path.
        dst_node: Last vertex of every path.
        max_k: Stop after this many accepted paths.
        min_path_size: Acceptance requires more inner vertices than this.
        degenerate_guard: Apply the first-edge acceptance heuristic.

    Yields:
        (path, accepted) for each ranked path in non-decreasing cost order.
        Stops early if the pool runs dry.

    Raises:
        KeyError: If src_node or dst_node does not exist in graph.
    """
    if src_node not in graph:
        raise KeyError(f"Source vertex '{src_node}' is not in the graph.")
    if dst_node not in graph:
        raise KeyError(f"Destination vertex '{dst_node}' is not in the graph.")
    if max_k < 1:
        return

    first = shortest_path(graph, src_node, dst_node)
    if not first:
        logger.debug("No path from %s to %s", src_node, dst_node)
        return

    candidates: List[Path] = [first]
    results: List[Path] = []
    ranked_seqs: Set[VertexSeq] = set()
    accepted = 0

    while candidates and accepted < max_k:
        candidates.sort(key=lambda p: p.cost)
        del candidates[max_k - accepted + 1 :]

        path = candidates.pop(0)
        if path.cost == UNREACHABLE:
            break

        results.append(path)
        ranked_seqs.add(path.nodes_seq)
        ok = is_acceptable(graph, path, min_path_size, degenerate_guard)
        if ok:
            accepted += 1
        logger.debug(
            "Ranked path %d (cost=%s, accepted=%s, pool=%d)",
            len(results),
            path.cost,
            ok,
            len(candidates),
        )
        yield path, ok

        if accepted >= max_k:
            return

        pool_seqs = {c.nodes_seq for c in candidates}
        prefix_cost = 0.0
        for i in range(len(path) - 1):
            if i >= path.deviation:
                excl_e: Set[EdgeKey] = {
                    (r[i], r[i + 1])
                    for r in results
                    if len(r) > i + 1 and r.shares_prefix(path, i + 1)
                }
                excl_n: Set[VertexID] = set(path.nodes_seq[:i])

                spur = shortest_path(graph, path[i], dst_node, excl_e, excl_n)
                if spur:
                    cand = spur.prepend(path.nodes_seq[:i], prefix_cost, i)
                    if (
                        cand.nodes_seq not in ranked_seqs
                        and cand.nodes_seq not in pool_seqs
                    ):
                        candidates.append(cand)
                        pool_seqs.add(cand.nodes_seq)

            prefix_cost += graph.weight(path[i], path[i + 1])
