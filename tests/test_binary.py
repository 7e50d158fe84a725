import pandas as pd
import pytest

from pathminer.binary import paths_to_binary
from pathminer.types import PathRecord, RankedPaths


def _record(*genes):
    return PathRecord(
        genes=tuple(genes),
        compounds=tuple("c" for _ in genes[1:]),
        weights=tuple(1.0 for _ in range(len(genes) + 1)),
        distance=float(len(genes) + 1),
    )


def test_single_collection():
    ranked = RankedPaths(paths=(_record("A", "B"), _record("A", "C", "D")))
    binary = paths_to_binary(ranked)

    assert list(binary.paths.columns) == ["A", "B", "C", "D"]
    assert binary.paths.values.tolist() == [[1, 1, 0, 0], [1, 0, 1, 1]]
    assert binary.y is None
    assert binary.pidx.to_dict("list") == {"group": [None, None], "rank": [0, 1]}
    assert len(binary) == 2


def test_sequence_of_records():
    binary = paths_to_binary([_record("X")])
    assert binary.paths.values.tolist() == [[1]]


def test_grouped_by_label():
    groups = {
        "BCR/ABL": RankedPaths(paths=(_record("A", "B"), _record("B", "C"))),
        "NEG": [],
        "ALL1/AF4": [_record("C", "D")],
    }
    binary = paths_to_binary(groups)

    assert list(binary.paths.columns) == ["A", "B", "C", "D"]
    assert binary.paths.shape == (3, 4)
    assert binary.y.tolist() == ["BCR/ABL", "BCR/ABL", "ALL1/AF4"]
    assert isinstance(binary.y.dtype, pd.CategoricalDtype)
    assert binary.pidx["group"].tolist() == ["BCR/ABL", "BCR/ABL", "ALL1/AF4"]
    assert binary.pidx["rank"].tolist() == [0, 1, 0]


def test_empty_input():
    with pytest.raises(ValueError, match="No paths"):
        paths_to_binary(RankedPaths.empty())
    with pytest.raises(ValueError):
        paths_to_binary({"a": [], "b": RankedPaths()})
