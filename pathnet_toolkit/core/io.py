"""Table IO helpers (CSV/TSV/Parquet).

Edge lists and vocabularies are exchanged as tabular artifacts. These helpers provide:
- consistent defaults for large edge tables,
- transparent support for CSV/TSV and Parquet,
- centralized format detection so all CLIs behave the same.

Parquet support requires `pyarrow` (recommended) or another pandas parquet engine.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Literal, Optional

import pandas as pd

logger = logging.getLogger(__name__)

TableFormat = Literal["csv", "tsv", "parquet"]

TABLE_EXTS = {".csv", ".tsv", ".tab", ".parquet", ".pq"}


def detect_table_format(path: str, fmt: Optional[str] = None) -> TableFormat:
    """Detect table format.

    If fmt is provided and not 'auto', it takes precedence.
    Otherwise, detect from file extension.
    """

    if fmt and fmt.lower() != "auto":
        f = fmt.lower()
        if f in ("csv", "tsv", "parquet"):
            return f  # type: ignore[return-value]
        raise ValueError(f"Unknown table format: {fmt}")

    ext = Path(path).suffix.lower()
    if ext in (".parquet", ".pq"):
        return "parquet"
    if ext in (".tsv", ".tab"):
        return "tsv"
    return "csv"


def read_table(path: str, *, fmt: Optional[str] = None, **kwargs: Any) -> pd.DataFrame:
    """Read a table (CSV/TSV/Parquet) with consistent defaults."""

    f = detect_table_format(path, fmt)
    logger.debug("Reading %s table from %s", f, path)

    if f == "parquet":
        try:
            return pd.read_parquet(path, **kwargs)
        except ImportError as e:  # pragma: no cover
            raise RuntimeError(
                "Reading Parquet requires pyarrow (recommended). Install with: pip install pyarrow\n"
                "or install pathnet-toolkit with the parquet extra: pip install 'pathnet-toolkit[parquet]'"
            ) from e

    # Identifiers such as gene symbols must stay strings (e.g. "1-Mar", "NA").
    kwargs.setdefault("dtype", str)
    kwargs.setdefault("keep_default_na", False)

    if f == "tsv":
        kwargs.setdefault("sep", "\t")

    return pd.read_csv(path, **kwargs)


def write_table(
    df: pd.DataFrame, path: str, *, fmt: Optional[str] = None, **kwargs: Any
) -> None:
    """Write a table (CSV/TSV/Parquet), creating parent directories."""

    Path(path).parent.mkdir(parents=True, exist_ok=True)

    f = detect_table_format(path, fmt)

    if f == "parquet":
        try:
            # Never store the index.
            return df.to_parquet(path, index=False, **kwargs)
        except ImportError as e:  # pragma: no cover
            raise RuntimeError(
                "Writing Parquet requires pyarrow (recommended). Install with: pip install pyarrow\n"
                "or install pathnet-toolkit with the parquet extra: pip install 'pathnet-toolkit[parquet]'"
            ) from e

    if f == "tsv":
        kwargs.setdefault("sep", "\t")

    return df.to_csv(path, index=False, **kwargs)


def read_vocabulary(path: str, *, column: Optional[str] = None) -> List[str]:
    """Read an ordered feature vocabulary.

    Table files (by extension) are read with `read_table` and one column is used
    (`column`, or the first one). Anything else is read as plain text with one
    name per line; blank lines and '#' comments are skipped.
    """

    if Path(path).suffix.lower() in TABLE_EXTS:
        df = read_table(path)
        col = column or (str(df.columns[0]) if len(df.columns) else None)
        if col is None or col not in df.columns:
            raise ValueError(f"Vocabulary column not found in {path}: {column}")
        return [str(v).strip() for v in df[col].tolist()]

    names: List[str] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            names.append(line)
    return names
