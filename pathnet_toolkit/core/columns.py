"""Column detection helpers.

Edge tables come from many resources (MSigDB-style gene sets, DoRothEA/CollecTRI
regulons, PROGENy weights, custom exports), so we try multiple common column names
for the group (source), member (target) and weight columns.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union


SOURCE_CANDIDATES: Sequence[str] = (
    "source",
    "Source",
    "pathway",
    "Pathway",
    "geneset",
    "gene_set",
    "set",
    "term",
    "Term",
    "tf",
)

TARGET_CANDIDATES: Sequence[str] = (
    "target",
    "Target",
    "gene",
    "Gene",
    "gene_symbol",
    "feature",
    "Feature",
    "member",
)

WEIGHT_CANDIDATES: Sequence[str] = (
    "weight",
    "Weight",
    "mor",
    "score",
    "Score",
)


def _as_columns(df_or_columns: Union[Sequence[str], object]) -> list[str]:
    # Accept a DataFrame or anything with a .columns attribute, as well as plain lists.
    cols = getattr(df_or_columns, "columns", df_or_columns)
    return [str(c) for c in cols]  # type: ignore[union-attr]


def _detect(df_or_columns: Union[Sequence[str], object], candidates: Sequence[str]) -> Optional[str]:
    cols = _as_columns(df_or_columns)
    for c in candidates:
        if c in cols:
            return c
    lowered = {c.lower(): c for c in cols}
    for c in candidates:
        if c.lower() in lowered:
            return lowered[c.lower()]
    return None


def detect_source_column(df_or_columns: Union[Sequence[str], object]) -> Optional[str]:
    """Detect the group (source) column.

    Falls back to the first column when nothing matches.
    """

    cols = _as_columns(df_or_columns)
    return _detect(cols, SOURCE_CANDIDATES) or (cols[0] if cols else None)


def detect_target_column(df_or_columns: Union[Sequence[str], object]) -> Optional[str]:
    """Detect the member (target) column; falls back to the second column."""

    cols = _as_columns(df_or_columns)
    return _detect(cols, TARGET_CANDIDATES) or (cols[1] if len(cols) > 1 else None)


def detect_weight_column(df_or_columns: Union[Sequence[str], object]) -> Optional[str]:
    """Detect an optional weight column. Returns None for unweighted tables."""

    return _detect(df_or_columns, WEIGHT_CANDIDATES)
