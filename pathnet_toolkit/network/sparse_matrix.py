"""Sparse matrix helpers.

We avoid adding SciPy as a hard dependency. Instead we produce CSR arrays directly;
`scipy.sparse.csr_matrix((data, indices, indptr), shape=shape)` accepts them as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np


@dataclass
class CSRBuilder:
    n_rows: int
    n_cols: int
    data: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    indptr: List[int] = field(default_factory=lambda: [0])

    def add_row(self, entries: Dict[int, float]) -> None:
        # Sort columns for deterministic output. Zero weights are kept: membership is structural.
        items = sorted(((int(k), float(v)) for k, v in entries.items()), key=lambda x: x[0])
        for k, v in items:
            if k < 0 or k >= int(self.n_cols):
                raise IndexError(f"Column {k} out of range for {self.n_cols} column(s)")
            self.indices.append(k)
            self.data.append(v)
        self.indptr.append(len(self.data))

    def to_arrays(self, dtype=np.float32) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        if len(self.indptr) - 1 != int(self.n_rows):
            raise ValueError(f"Expected {self.n_rows} row(s), got {len(self.indptr) - 1}")
        data = np.asarray(self.data, dtype=dtype)
        indices = np.asarray(self.indices, dtype=np.int64)
        indptr = np.asarray(self.indptr, dtype=np.int64)
        shape = np.asarray([int(self.n_rows), int(self.n_cols)], dtype=np.int64)
        return data, indices, indptr, shape
