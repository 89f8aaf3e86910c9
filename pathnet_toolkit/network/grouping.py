"""Group (source, target, weight) triples by source.

Input is usually an edge list exported from a pathway / regulon resource, one
row per membership. Duplicate (source, target) pairs are collapsed with the
later weight winning.

Two accumulation modes are supported:

- merge_runs=True (default): every occurrence of a source key accumulates into
  the same group, wherever it appears in the input.
- merge_runs=False: the input is assumed to be sorted by source. Each
  contiguous run is flushed as a group when the source changes, so a key that
  shows up again in a later run replaces the group built from its earlier run.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import LengthMismatch

Group = List[Tuple[str, float]]
GroupedMap = Dict[str, Group]


def _check_lengths(
    sources: Sequence[str],
    targets: Sequence[str],
    weights: Optional[Sequence[float]],
    strict_length_check: bool,
) -> int:
    n = len(sources)
    n_weights = None if weights is None else len(weights)
    if len(targets) != n:
        raise LengthMismatch(n, len(targets), n_weights)
    if n_weights is not None:
        # Non-strict mode tolerates surplus weights; too few is always an error.
        if n_weights < n or (strict_length_check and n_weights != n):
            raise LengthMismatch(n, len(targets), n_weights)
    return n


def build_groups(
    sources: Sequence[str],
    targets: Sequence[str],
    weights: Optional[Sequence[float]] = None,
    strict_length_check: bool = True,
    *,
    merge_runs: bool = True,
) -> GroupedMap:
    """Group aligned source/target/weight sequences into {source: [(target, weight), ...]}.

    Missing weights default to 1.0. Every group in the result is non-empty.
    Inputs are not modified.

    Raises:
        LengthMismatch: sources and targets differ in length, or weights do
            not cover every row (see module docstring for the non-strict rule).
    """
    n = _check_lengths(sources, targets, weights, strict_length_check)

    result: Dict[str, Dict[str, float]] = {}
    current_src: Optional[str] = None
    current: Dict[str, float] = {}

    # Positional iteration: pandas Series index by label, not position.
    weight_values = None if weights is None else list(weights)[:n]
    for i, (src, tgt) in enumerate(zip(sources, targets)):
        src = str(src)
        tgt = str(tgt)
        w = 1.0 if weight_values is None else float(weight_values[i])

        if merge_runs:
            result.setdefault(src, {})[tgt] = w
            continue

        if current_src is not None and src != current_src:
            result[current_src] = current
            current = {}
        current_src = src
        current[tgt] = w

    if not merge_runs and current_src is not None:
        result[current_src] = current

    return {src: list(members.items()) for src, members in result.items() if members}
