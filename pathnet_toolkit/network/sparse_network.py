"""Flattened, offset-indexed storage for grouped sparse networks.

A network of G groups is stored as five parallel arrays:

- names[i]   : group name
- starts[i]  : offset of group i in the flat member arrays
- lengths[i] : number of members of group i
- targets    : flat feature indices (positions in the vocabulary)
- weights    : flat member weights, aligned with targets

Members of group i are `targets[starts[i]:starts[i] + lengths[i]]`. All arrays
are read-only numpy arrays, and accessors return views into them, so a built
network can be shared between readers without copying or locking.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..core.columns import detect_source_column, detect_target_column, detect_weight_column
from ..errors import IndexOutOfRange, UnresolvedTarget
from .grouping import build_groups
from .sparse_matrix import CSRBuilder
from .types import DEFAULT_WEIGHT_DTYPE, Direction, DistanceMetric, check_weight_dtype

logger = logging.getLogger(__name__)


def _check_min_group_size(value) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("min_group_size must be an integer, not bool")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    raise ValueError(f"min_group_size must be a whole number, got {value!r}")


def _frozen(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


def _numeric_weights(df: pd.DataFrame, col: str) -> List[float]:
    # Blank or non-numeric cells are rejected rather than silently becoming NaN.
    values = pd.to_numeric(df[col], errors="coerce")
    bad = values.isna().to_numpy()
    if bad.any():
        pos = int(np.flatnonzero(bad)[0])
        raise ValueError(
            f"Weight column {col!r} has a non-numeric value {df[col].iloc[pos]!r} at row {pos}"
        )
    return values.astype(float).tolist()


class SparseNetwork:
    """Immutable grouped sparse network (CSR-style)."""

    __slots__ = ("_names", "_starts", "_lengths", "_targets", "_weights", "_index")

    def __init__(
        self,
        names: Sequence[str],
        starts: Sequence[int],
        lengths: Sequence[int],
        targets: Sequence[int],
        weights: Sequence[float],
        dtype=DEFAULT_WEIGHT_DTYPE,
    ) -> None:
        self._names: Tuple[str, ...] = tuple(str(n) for n in names)
        self._starts = _frozen(starts, np.int64)
        self._lengths = _frozen(lengths, np.int64)
        self._targets = _frozen(targets, np.int64)
        self._weights = _frozen(weights, check_weight_dtype(dtype))
        self._index: Dict[str, int] = {n: i for i, n in enumerate(self._names)}

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_arrays(
        cls,
        names: Sequence[str],
        starts: Sequence[int],
        lengths: Sequence[int],
        targets: Sequence[int],
        weights: Sequence[float],
        dtype=DEFAULT_WEIGHT_DTYPE,
    ) -> "SparseNetwork":
        """Wrap pre-flattened arrays. No consistency checks are made; see `validate()`."""
        return cls(names, starts, lengths, targets, weights, dtype=dtype)

    @classmethod
    def from_arrays_unweighted(
        cls,
        names: Sequence[str],
        starts: Sequence[int],
        lengths: Sequence[int],
        targets: Sequence[int],
        dtype=DEFAULT_WEIGHT_DTYPE,
    ) -> "SparseNetwork":
        """Like `from_arrays`, with every member weight set to 1.0."""
        return cls(names, starts, lengths, targets, np.ones(len(targets)), dtype=dtype)

    @classmethod
    def from_grouped(
        cls,
        sources: Sequence[str],
        targets: Sequence[str],
        weights: Optional[Sequence[float]],
        vocabulary: Sequence[str],
        min_group_size: int = 1,
        *,
        strict_length_check: bool = True,
        merge_runs: bool = True,
        dtype=DEFAULT_WEIGHT_DTYPE,
    ) -> "SparseNetwork":
        """Build a network from an edge list and a feature vocabulary.

        Groups with fewer than `min_group_size` distinct members are dropped.
        Target names resolve to their position in `vocabulary`; when a name
        occurs more than once there, the last position wins.

        With an integer `dtype`, every weight must be a whole number; weights
        are never truncated.

        Raises:
            LengthMismatch: misaligned inputs (raised before any grouping).
            ValueError: `min_group_size` is not a whole number, or weights are
                fractional while `dtype` is an integer dtype.
            UnresolvedTarget: at least one retained member is not in the
                vocabulary. Lists every missing name; nothing is built.
        """
        dt = check_weight_dtype(dtype)
        grouped = build_groups(
            sources, targets, weights, strict_length_check, merge_runs=merge_runs
        )

        min_size = _check_min_group_size(min_group_size)
        kept = {k: v for k, v in grouped.items() if len(v) >= min_size}

        name_to_id: Dict[str, int] = {}
        for idx, name in enumerate(vocabulary):
            name_to_id[str(name)] = idx

        missing: Dict[str, str] = {}
        for group, members in kept.items():
            for tgt, _ in members:
                if tgt not in name_to_id and tgt not in missing:
                    missing[tgt] = group
        if missing:
            raise UnresolvedTarget(list(missing.keys()), list(missing.values()))

        total = sum(len(v) for v in kept.values())
        names: List[str] = []
        starts = np.empty(len(kept), dtype=np.int64)
        lengths = np.empty(len(kept), dtype=np.int64)
        flat_targets = np.empty(total, dtype=np.int64)
        flat_weights = np.empty(total, dtype=dt)

        if np.issubdtype(dt, np.integer):
            for group, members in kept.items():
                for tgt, w in members:
                    if not float(w).is_integer():
                        raise ValueError(
                            f"Weight {w!r} of {tgt!r} in group {group!r} is not a whole number (dtype {dt})"
                        )

        pos = 0
        for i, (group, members) in enumerate(kept.items()):
            n = len(members)
            for j, (tgt, w) in enumerate(members):
                flat_targets[pos + j] = name_to_id[tgt]
                flat_weights[pos + j] = w
            names.append(group)
            starts[i] = pos
            lengths[i] = n
            pos += n

        logger.debug(
            "Built network: %d group(s) kept of %d, %d member(s), min_group_size=%d",
            len(kept),
            len(grouped),
            total,
            min_size,
        )
        return cls(names, starts, lengths, flat_targets, flat_weights, dtype=dt)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        vocabulary: Sequence[str],
        min_group_size: int = 1,
        *,
        source_col: Optional[str] = None,
        target_col: Optional[str] = None,
        weight_col: Optional[str] = None,
        strict_length_check: bool = True,
        merge_runs: bool = True,
        dtype=DEFAULT_WEIGHT_DTYPE,
    ) -> "SparseNetwork":
        """Build from an edge table.

        Columns are auto-detected when not given. Pass `weight_col=""` to ignore
        any weight column and treat every member as weight 1.0.
        """
        src = source_col or detect_source_column(df.columns)
        tgt = target_col or detect_target_column(df.columns)
        if not src or src not in df.columns:
            raise ValueError(f"Could not determine a source column (columns: {list(df.columns)})")
        if not tgt or tgt not in df.columns:
            raise ValueError(f"Could not determine a target column (columns: {list(df.columns)})")
        if src == tgt:
            raise ValueError(f"Source and target columns must differ (both resolved to {src!r})")

        if weight_col is None:
            wcol = detect_weight_column(df.columns)
        elif weight_col == "":
            wcol = None
        elif weight_col in df.columns:
            wcol = weight_col
        else:
            raise ValueError(f"Weight column not found: {weight_col}")

        weights = _numeric_weights(df, wcol) if wcol else None
        return cls.from_grouped(
            df[src].astype(str).tolist(),
            df[tgt].astype(str).tolist(),
            weights,
            vocabulary,
            min_group_size,
            strict_length_check=strict_length_check,
            merge_runs=merge_runs,
            dtype=dtype,
        )

    # ------------------------------------------------------------------
    # Raw arrays (read-only)
    # ------------------------------------------------------------------

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def starts(self) -> np.ndarray:
        return self._starts

    @property
    def lengths(self) -> np.ndarray:
        return self._lengths

    @property
    def targets(self) -> np.ndarray:
        return self._targets

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def group_count(self) -> int:
        return len(self._names)

    def __len__(self) -> int:
        return self.group_count()

    def __repr__(self) -> str:
        return f"SparseNetwork(groups={self.group_count()}, members={int(self._targets.shape[0])})"

    def _bounds(self, i: int) -> Tuple[int, int]:
        n = self.group_count()
        if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)):
            raise TypeError(f"Group index must be an integer, got {type(i).__name__}")
        if i < 0 or i >= n:
            raise IndexOutOfRange(int(i), n)
        start = int(self._starts[i])
        return start, start + int(self._lengths[i])

    def group_name(self, i: int) -> str:
        self._bounds(i)
        return self._names[i]

    def group_members(self, i: int) -> np.ndarray:
        lo, hi = self._bounds(i)
        return self._targets[lo:hi]

    def group_members_weighted(self, i: int) -> Tuple[np.ndarray, np.ndarray]:
        lo, hi = self._bounds(i)
        return self._targets[lo:hi], self._weights[lo:hi]

    def group_index(self, name: str) -> int:
        """Position of the group called `name` (KeyError if absent)."""
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"No group named {name!r}") from None

    def iter_groups(self) -> Iterator[Tuple[str, np.ndarray, np.ndarray]]:
        for i in range(self.group_count()):
            members, weights = self.group_members_weighted(i)
            yield self._names[i], members, weights

    # ------------------------------------------------------------------
    # Checks and derived views
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Check the structural invariants. Raises ValueError on the first violation."""
        g = len(self._names)
        if self._starts.shape[0] != g or self._lengths.shape[0] != g:
            raise ValueError(
                f"names/starts/lengths differ in length ({g}, {self._starts.shape[0]}, {self._lengths.shape[0]})"
            )
        n = int(self._targets.shape[0])
        if self._weights.shape[0] != n:
            raise ValueError(f"targets/weights differ in length ({n}, {self._weights.shape[0]})")
        if int(self._lengths.sum()) != n:
            raise ValueError(f"sum(lengths)={int(self._lengths.sum())} but {n} member(s) stored")
        if g and (self._starts.min() < 0 or self._lengths.min() < 0):
            raise ValueError("starts and lengths must be non-negative")
        if g and int((self._starts + self._lengths).max()) > n:
            raise ValueError("a group slice extends past the end of the member arrays")

        order = np.argsort(self._starts, kind="stable")
        ends = self._starts[order] + self._lengths[order]
        if g > 1 and np.any(self._starts[order][1:] < ends[:-1]):
            raise ValueError("group slices overlap")
        if n and self._targets.min() < 0:
            raise ValueError("feature indices must be non-negative")

    def _n_features(self, n_features: Optional[int]) -> int:
        if n_features is not None:
            return int(n_features)
        return int(self._targets.max()) + 1 if self._targets.shape[0] else 0

    def to_csr(
        self, n_features: Optional[int] = None, direction: Direction = Direction.ROW
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Return (data, indices, indptr, shape) CSR arrays.

        Direction.ROW gives one row per group (columns are features);
        Direction.COLUMN gives one row per feature listing the groups it belongs to.
        """
        n_feat = self._n_features(n_features)
        g = self.group_count()
        direction = Direction.parse(direction)

        if direction.is_row():
            b = CSRBuilder(n_rows=g, n_cols=n_feat)
            for _, members, weights in self.iter_groups():
                b.add_row(dict(zip(members.tolist(), weights.tolist())))
        else:
            rows: List[Dict[int, float]] = [{} for _ in range(n_feat)]
            for i, (_, members, weights) in enumerate(self.iter_groups()):
                for f, w in zip(members.tolist(), weights.tolist()):
                    if f >= n_feat:
                        raise IndexError(f"Feature index {f} out of range for {n_feat} feature(s)")
                    rows[f][i] = w
            b = CSRBuilder(n_rows=n_feat, n_cols=g)
            for row in rows:
                b.add_row(row)
        return b.to_arrays(dtype=self._weights.dtype)

    def group_vector(self, i: int, n_features: int) -> np.ndarray:
        """Dense weight vector of group i over `n_features` features."""
        members, weights = self.group_members_weighted(i)
        out = np.zeros(int(n_features), dtype=self._weights.dtype)
        out[members] = weights
        return out

    def group_distance(
        self, i: int, j: int, n_features: Optional[int] = None, metric: DistanceMetric = DistanceMetric.EUCLIDEAN
    ) -> float:
        n_feat = self._n_features(n_features)
        metric = DistanceMetric.parse(metric)
        return metric.distance(self.group_vector(i, n_feat), self.group_vector(j, n_feat))

    def summary(self) -> pd.DataFrame:
        """One row per group: name, start offset, length and weight sum."""
        sums = [float(w.sum()) for _, _, w in self.iter_groups()]
        return pd.DataFrame(
            {
                "Group": list(self._names),
                "Start": self._starts.tolist(),
                "Length": self._lengths.tolist(),
                "Weight_Sum": sums,
            }
        )
