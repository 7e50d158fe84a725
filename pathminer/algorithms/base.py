from __future__ import annotations

import math
from typing import Tuple, Union

#: Additive path score (sum of traversed edge weights).
Cost = Union[int, float]

#: Dense integer vertex handle, assigned in insertion order.
VertexID = int

#: Ordered vertex handles of a path, source first.
VertexSeq = Tuple[VertexID, ...]

#: Score carried by vertices that cannot be reached.
UNREACHABLE: float = math.inf

#: Reserved vertex name marking the path source.
SOURCE_NAME = "s"

#: Reserved vertex name marking the path sink.
SINK_NAME = "t"

#: Scope search for a target is abandoned once a p-value exceeds this.
ABANDON_PVALUE = 0.1

#: Smallest probability accepted by the probability-to-cost transform.
MIN_PROB = 1e-12
