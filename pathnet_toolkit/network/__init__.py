"""PathNet Toolkit - grouped sparse network module.

Design notes
------------
- `build_groups` turns an edge list into {source: [(target, weight), ...]}.
- `SparseNetwork` flattens the groups into CSR-style arrays against a fixed
  feature vocabulary and serves O(1) per-group slices.
"""

from __future__ import annotations

from .grouping import build_groups
from .sparse_matrix import CSRBuilder
from .sparse_network import SparseNetwork
from .types import Direction, DistanceMetric, check_weight_dtype

__all__ = [
    # grouping
    "build_groups",
    # storage
    "SparseNetwork",
    "CSRBuilder",
    # enumerations / numeric checks
    "Direction",
    "DistanceMetric",
    "check_weight_dtype",
]
