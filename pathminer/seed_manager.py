"""Deterministic random streams for the null-score samplers.

Sampling never touches the global ``random`` or ``numpy.random`` state. Each
sampling unit (one path length of one sampler) draws from its own
``random.Random`` or ``numpy`` Generator whose seed is derived from a master
seed, so tables are reproducible regardless of the order in which lengths are
sampled.
"""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional

import numpy as np


class SeedManager:
    """Derives per-component seeds from a master seed using SHA-256.

    Usage:
        seeds = SeedManager(42)
        rng = seeds.create_random_state("metropolis", 3)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed. If None, derived seeds are None and the
                created streams are seeded from system entropy.
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a deterministic seed from the master seed and component ids.

        Args:
            *components: Identifiers (strings, integers, ...) naming the unit
                of work that needs a stream.

        Returns:
            Positive 31-bit integer seed, or None if no master seed is set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        digest = hashlib.sha256(seed_input.encode()).digest()
        return int.from_bytes(digest[:4], byteorder="big") & 0x7FFFFFFF

    def create_random_state(self, *components: Any) -> random.Random:
        """Create a ``random.Random`` seeded for the given components.

        Args:
            *components: Component identifiers for seed derivation.

        Returns:
            New Random instance, unseeded when there is no master seed.
        """
        derived_seed = self.derive_seed(*components)
        rng = random.Random()
        if derived_seed is not None:
            rng.seed(derived_seed)
        return rng

    def create_generator(self, *components: Any) -> np.random.Generator:
        """Create a ``numpy`` Generator seeded for the given components.

        Args:
            *components: Component identifiers for seed derivation.

        Returns:
            New Generator, seeded from system entropy when there is no master
            seed.
        """
        return np.random.default_rng(self.derive_seed(*components))
