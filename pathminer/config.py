"""Configuration classes for the pathminer engines."""

from dataclasses import dataclass
from typing import Literal

SamplingMethod = Literal["metropolis", "random_edge"]


@dataclass
class RankerConfig:
    """Configuration for k-shortest-path ranking."""

    # Number of accepted paths to return
    k: int = 10

    # A path is emitted only if it has more than this many inner vertices
    min_path_size: int = 0

    # Drop paths whose score does not exceed twice their first edge weight.
    # Domain heuristic for near-symmetric source/sink connector weights.
    degenerate_guard: bool = True

    def __post_init__(self) -> None:
        if self.k < 1:
            raise ValueError(f"k must be >= 1, got {self.k}")
        if self.min_path_size < 0:
            raise ValueError(f"min_path_size must be >= 0, got {self.min_path_size}")


@dataclass
class SamplerConfig:
    """Configuration for null score sampling."""

    # Longest path (in edges) sampled
    max_path_length: int = 10

    # Number of recorded scores per path length
    sample_count: int = 1000

    # Metropolis iterations per recorded sample
    warmup_steps: int = 10

    # Rejected walks tolerated for a single proposal before giving up
    max_retries: int = 10_000

    method: SamplingMethod = "metropolis"

    def __post_init__(self) -> None:
        if self.max_path_length < 1:
            raise ValueError(
                f"max_path_length must be >= 1, got {self.max_path_length}"
            )
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {self.sample_count}")
        if self.warmup_steps < 1:
            raise ValueError(f"warmup_steps must be >= 1, got {self.warmup_steps}")
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.method not in ("metropolis", "random_edge"):
            raise ValueError(f"Unknown sampling method '{self.method}'")


@dataclass
class ScopeConfig:
    """Configuration for significance-scored scope queries."""

    # Significance threshold; a path is accepted when its p-value is below it
    alpha: float = 0.05

    # Stop lengthening the search for a target once its p-value exceeds this
    abandon_pvalue: float = 0.1

    # Samples per length when no null table is supplied
    fallback_sample_count: int = 10_000

    def __post_init__(self) -> None:
        if not 0.0 < self.alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {self.alpha}")
        if self.abandon_pvalue < self.alpha:
            raise ValueError(
                f"abandon_pvalue ({self.abandon_pvalue}) must not be below "
                f"alpha ({self.alpha})"
            )
        if self.fallback_sample_count < 1:
            raise ValueError(
                f"fallback_sample_count must be >= 1, got {self.fallback_sample_count}"
            )


# Global default instances
RANKER_CONFIG = RankerConfig()
SAMPLER_CONFIG = SamplerConfig()
SCOPE_CONFIG = ScopeConfig()
