from __future__ import annotations

import numpy as np

from pathminer.algorithms.base import Cost


def empirical_pvalue(score: Cost, samples: np.ndarray) -> float:
    """
    Empirical p-value of ``score`` against sorted null samples.

    The p-value is ``rank / N`` where ``rank`` is the 0-based index of the
    largest sample strictly below ``score``. If no sample is below ``score``
    the p-value is 0. Small scores are therefore the significant ones, and
    the result is non-decreasing in ``score``.

    Args:
        score: Observed path score.
        samples: Null scores sorted ascending.

    Returns:
        A value in ``[0, 1)``.

    Raises:
        ValueError: If ``samples`` is empty.
    """
    n = len(samples)
    if n == 0:
        raise ValueError("Cannot compute a p-value against an empty sample.")

    rank = int(np.searchsorted(samples, score, side="left")) - 1
    if rank < 0:
        return 0.0
    return rank / n
