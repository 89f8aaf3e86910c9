"""Exceptions raised while building or reading a sparse network."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class NetworkError(Exception):
    """Base class for network construction and query failures."""


class LengthMismatch(NetworkError, ValueError):
    """Raised when source/target/weight inputs are not aligned."""

    def __init__(self, n_sources: int, n_targets: int, n_weights: Optional[int] = None) -> None:
        self.n_sources = int(n_sources)
        self.n_targets = int(n_targets)
        self.n_weights = None if n_weights is None else int(n_weights)
        msg = (
            f"Source and target must have the same length to build a network "
            f"(sources={self.n_sources}, targets={self.n_targets}"
        )
        if self.n_weights is not None:
            msg += f", weights={self.n_weights}"
        super().__init__(msg + ")")


class UnresolvedTarget(NetworkError, KeyError):
    """Raised when group members are missing from the feature vocabulary.

    All distinct missing names are collected before raising, so a caller can
    report (or fix) them in one go.
    """

    def __init__(self, names: Sequence[str], groups: Sequence[str] = ()) -> None:
        self.names: Tuple[str, ...] = tuple(names)
        self.groups: Tuple[str, ...] = tuple(groups)
        super().__init__(self.names)

    def __str__(self) -> str:
        shown = ", ".join(repr(n) for n in self.names[:10])
        more = f" (+{len(self.names) - 10} more)" if len(self.names) > 10 else ""
        return f"{len(self.names)} target(s) not found in vocabulary: {shown}{more}"


class IndexOutOfRange(NetworkError, IndexError):
    """Raised when a group accessor is called with an index outside [0, G)."""

    def __init__(self, index: int, n_groups: int) -> None:
        self.index = index
        self.n_groups = int(n_groups)
        super().__init__(f"Group index {index} out of range for network with {self.n_groups} group(s)")
