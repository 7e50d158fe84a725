"""pathminer: path ranking and path significance over reaction networks.

Primary API:
    ReactionGraph - Weighted directed graph with named vertices
    rank_paths() - K shortest loopless paths from "s" to "t"
    sample_paths() - Null distribution of path scores by length
    path_scope() - Significant paths from "s" to every vertex feeding "t"
    paths_to_binary() - Gene-membership matrix of ranked paths
    from_networkx() / to_networkx() - NetworkX interop

Example:
    from pathminer import ReactionGraph, RankerConfig, rank_paths

    graph = ReactionGraph.from_edge_lists(
        ["s", "A", "B", "t"],
        from_idx=[1, 2, 3],
        to_idx=[2, 3, 4],
        weights=[0.5, 1.0, 0.5],
        labels=["", "atp", ""],
    )
    result = rank_paths(graph, RankerConfig(k=5))
"""

from __future__ import annotations

from pathminer import logging
from pathminer.algorithms.sampling import (
    LazyRandomEdgeTable,
    NullScoreTable,
    SamplingError,
)
from pathminer.binary import BinaryPaths, paths_to_binary
from pathminer.config import RankerConfig, SamplerConfig, ScopeConfig
from pathminer.graph import ReactionGraph, prob_to_cost
from pathminer.nx import from_networkx, to_networkx
from pathminer.path import Path
from pathminer.seed_manager import SeedManager
from pathminer.solver.paths import path_scope, rank_paths, sample_paths
from pathminer.types import PathRecord, RankedPaths, ScopeResult

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Graph
    "ReactionGraph",
    "Path",
    "prob_to_cost",
    # Solvers
    "rank_paths",
    "sample_paths",
    "path_scope",
    # Configuration
    "RankerConfig",
    "SamplerConfig",
    "ScopeConfig",
    "SeedManager",
    # Results
    "PathRecord",
    "RankedPaths",
    "ScopeResult",
    "NullScoreTable",
    "LazyRandomEdgeTable",
    "SamplingError",
    "BinaryPaths",
    "paths_to_binary",
    # Library integrations (NetworkX)
    "from_networkx",
    "to_networkx",
    # Utilities
    "logging",
]
