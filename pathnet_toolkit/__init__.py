"""PathNet Toolkit (importable package).

Builds and queries grouped sparse networks: pathway / gene-set style membership
structures where each group (source) owns a weighted set of features (targets).

The CLI scripts under tools/ remain runnable directly (e.g. `python tools/build_network.py`).
"""

from __future__ import annotations

from .errors import IndexOutOfRange, LengthMismatch, NetworkError, UnresolvedTarget
from .network import Direction, DistanceMetric, SparseNetwork, build_groups

__all__ = [
    "build_groups",
    "SparseNetwork",
    "Direction",
    "DistanceMetric",
    "NetworkError",
    "LengthMismatch",
    "UnresolvedTarget",
    "IndexOutOfRange",
]
