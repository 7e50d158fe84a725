from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, List, Optional, Set, Tuple

from pathminer.algorithms.base import UNREACHABLE, Cost, VertexID
from pathminer.graph import EdgeKey, ReactionGraph
from pathminer.path import Path


def spf(
    graph: ReactionGraph,
    src_node: VertexID,
    dst_node: Optional[VertexID] = None,
    excluded_edges: Optional[Set[EdgeKey]] = None,
    excluded_nodes: Optional[Set[VertexID]] = None,
) -> Tuple[Dict[VertexID, Cost], Dict[VertexID, VertexID]]:
    """
    Compute shortest paths (cost-based) from a source vertex using Dijkstra.

    The heap holds ``(cost, handle)`` entries, so equal-cost vertices are
    settled in handle order and the predecessor map is deterministic. Stale
    heap entries are skipped on pop instead of being updated in place.
    Excluded vertices and edges are treated as absent; the graph itself is
    never modified.

    Args:
        graph: The graph to search.
        src_node: The vertex from which to compute shortest paths.
        dst_node: If given, the search stops once this vertex is settled.
        excluded_edges: (u, v) pairs to ignore.
        excluded_nodes: Vertex handles to ignore. The source is still expanded
            even if listed.

    Returns:
        A tuple of (costs, pred):
          - costs: Maps each reached vertex to its minimal cost from src_node.
            Vertices absent from the map are unreachable.
          - pred: Maps each reached vertex other than src_node to the vertex
            it was reached from.

    Raises:
        KeyError: If src_node does not exist in graph.
    """
    outgoing_adjacencies = graph._adj
    if src_node not in outgoing_adjacencies:
        raise KeyError(f"Source vertex '{src_node}' is not in the graph.")

    if excluded_edges is None:
        excluded_edges = set()
    if excluded_nodes is None:
        excluded_nodes = set()

    costs: Dict[VertexID, Cost] = {src_node: 0.0}
    pred: Dict[VertexID, VertexID] = {}
    settled: Set[VertexID] = set()
    min_pq: List[Tuple[Cost, VertexID]] = [(0.0, src_node)]

    while min_pq:
        current_cost, node_id = heappop(min_pq)
        if node_id in settled or current_cost > costs[node_id]:
            continue
        settled.add(node_id)
        if node_id == dst_node:
            break

        for neighbor_id, edge_attr in outgoing_adjacencies[node_id].items():
            if neighbor_id in excluded_nodes or neighbor_id in settled:
                continue
            if (node_id, neighbor_id) in excluded_edges:
                continue

            new_cost = current_cost + edge_attr["weight"]
            if new_cost < costs.get(neighbor_id, UNREACHABLE):
                costs[neighbor_id] = new_cost
                pred[neighbor_id] = node_id
                heappush(min_pq, (new_cost, neighbor_id))

    return costs, pred


def resolve_path(
    src_node: VertexID,
    dst_node: VertexID,
    pred: Dict[VertexID, VertexID],
) -> Tuple[VertexID, ...]:
    """
    Walk a predecessor map back from ``dst_node`` to ``src_node``.

    Returns:
        The vertex sequence from src_node to dst_node, or an empty tuple if
        dst_node was not reached.
    """
    if dst_node != src_node and dst_node not in pred:
        return ()

    seq = [dst_node]
    while seq[-1] != src_node:
        seq.append(pred[seq[-1]])
    seq.reverse()
    return tuple(seq)


def shortest_path(
    graph: ReactionGraph,
    src_node: VertexID,
    dst_node: VertexID,
    excluded_edges: Optional[Set[EdgeKey]] = None,
    excluded_nodes: Optional[Set[VertexID]] = None,
) -> Path:
    """
    Return the shortest path between two vertices.

    Args:
        graph: The graph to search.
        src_node: First vertex of the path.
        dst_node: Last vertex of the path.
        excluded_edges: (u, v) pairs to ignore.
        excluded_nodes: Vertex handles to ignore.

    Returns:
        The shortest path. If dst_node is unreachable the path is empty and
        its cost is ``UNREACHABLE``.

    Raises:
        KeyError: If src_node or dst_node does not exist in graph.
    """
    if dst_node not in graph:
        raise KeyError(f"Destination vertex '{dst_node}' is not in the graph.")

    costs, pred = spf(graph, src_node, dst_node, excluded_edges, excluded_nodes)
    if dst_node not in costs:
        return Path((), UNREACHABLE)
    return Path(resolve_path(src_node, dst_node, pred), costs[dst_node])
