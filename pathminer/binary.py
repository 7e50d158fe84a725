"""Gene-membership matrices for ranked paths.

Each path becomes one row of 0/1 indicators, one column per gene seen in any
path. Paths can be given as a single collection or grouped by a response
label (for example one ranked collection per sample class), in which case
the label of each row is kept in ``y``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from pathminer.types import PathRecord, RankedPaths

PathCollection = Union[RankedPaths, Sequence[PathRecord]]


@dataclass(frozen=True)
class BinaryPaths:
    """Binary path matrix with row bookkeeping.

    Attributes:
        paths: One row per path, one 0/1 column per gene (first-seen order).
        pidx: Location of each row's path: ``group`` (the response label, or
            None for ungrouped input) and ``rank`` (0-based position within
            its collection).
        y: Response label of each row as a categorical series, or None for
            ungrouped input.
    """

    paths: pd.DataFrame
    pidx: pd.DataFrame
    y: Optional[pd.Series] = None

    def __len__(self) -> int:
        return len(self.paths)


def _records(collection: PathCollection) -> List[PathRecord]:
    if isinstance(collection, RankedPaths):
        return list(collection.paths)
    return list(collection)


def _gene_columns(records: Iterable[PathRecord]) -> List[str]:
    seen: Dict[str, None] = {}
    for record in records:
        for gene in record.genes:
            seen.setdefault(gene, None)
    return list(seen)


def paths_to_binary(
    paths: Union[PathCollection, Mapping[str, PathCollection]],
) -> BinaryPaths:
    """Convert ranked paths to a gene-membership matrix.

    Args:
        paths: A ``RankedPaths`` result or a sequence of ``PathRecord``, or a
            mapping from response label to either of those. Empty groups are
            skipped.

    Returns:
        The binary matrix with its row index and, for grouped input, the
        response labels.

    Raises:
        ValueError: If there are no paths at all.
    """
    grouped = isinstance(paths, Mapping)
    groups: Dict[Optional[str], List[PathRecord]]
    if grouped:
        groups = {label: _records(coll) for label, coll in paths.items()}
    else:
        groups = {None: _records(paths)}

    rows: List[PathRecord] = []
    index_rows = []
    for label, records in groups.items():
        for rank, record in enumerate(records):
            rows.append(record)
            index_rows.append((label, rank))

    if not rows:
        raise ValueError(
            "No paths to convert; rerun the ranker with different parameters."
        )

    genes = _gene_columns(rows)
    matrix = pd.DataFrame(
        [[int(gene in set(record.genes)) for gene in genes] for record in rows],
        columns=genes,
    )
    pidx = pd.DataFrame(index_rows, columns=["group", "rank"])

    y = None
    if grouped:
        y = pd.Series(pidx["group"], name="y", dtype="category")
    return BinaryPaths(paths=matrix, pidx=pidx, y=y)
