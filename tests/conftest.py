"""Shared pytest setup for pathminer.

The small reaction graphs used across the suite (``single_path``,
``two_routes``, ``ladder``, the scope and sampling graphs, ...) are fixtures
in ``tests.algorithms.sample_graphs``. That module is registered as a plugin
by name so pytest imports it with assertion rewriting; when only a subset of
the suite is collected and the module cannot be found, nothing is registered.
"""

from __future__ import annotations

from importlib.util import find_spec
from typing import List

pytest_plugins: List[str] = []
if find_spec("tests.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.algorithms.sample_graphs"]
