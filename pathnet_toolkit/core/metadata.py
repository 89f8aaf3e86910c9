"""Run metadata helpers.

Every command that writes an output table also emits a small, machine-readable
metadata JSON artifact capturing provenance (input hashes, parameters, versions).

Convention:
- for an output table path like `groups.csv` or `groups.parquet`, write a sidecar
  file next to it named `groups.metadata.json`.
"""

from __future__ import annotations

import hashlib
import json
import os
import sys
from datetime import datetime
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd


def get_toolkit_version() -> str:
    """Return installed package version if available, else 'unknown'."""

    try:
        return importlib_metadata.version("pathnet-toolkit")
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def sha256_file(path: Path, *, max_bytes: int = 200 * 1024 * 1024) -> Optional[str]:
    """Compute SHA256 for a file, returning None if too large or unreadable."""

    try:
        if path.stat().st_size > max_bytes:
            return None
        h = hashlib.sha256()
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(1024 * 1024), b""):
                h.update(chunk)
        return h.hexdigest()
    except OSError:
        return None


def _describe_input(path: Path) -> Dict[str, Any]:
    return {
        "path": str(path.resolve()),
        "name": path.name,
        "sha256": sha256_file(path),
        "size_bytes": int(path.stat().st_size) if path.exists() else None,
    }


def metadata_sidecar_path(output_table_path: str | Path) -> Path:
    p = Path(output_table_path)
    return p.with_name(f"{p.stem}.metadata.json")


def write_run_metadata(
    *,
    tool: str,
    output_table_path: str | Path,
    inputs: Optional[Dict[str, str | Path]] = None,
    parameters: Optional[Dict[str, Any]] = None,
    stats: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write a standardized run metadata JSON sidecar.

    Called by CLIs after they have written the output artifact. `inputs` maps a
    role (e.g. "edges", "vocabulary") to a file path.
    """

    out_p = Path(output_table_path)

    payload: Dict[str, Any] = {
        "tool": str(tool),
        "created_at": datetime.now().isoformat(timespec="seconds"),
        "cwd": os.getcwd(),
        "argv": list(sys.argv),
        "versions": {
            "pathnet_toolkit": get_toolkit_version(),
            "python": sys.version.split()[0],
            "numpy": np.__version__,
            "pandas": pd.__version__,
        },
        "inputs": {role: _describe_input(Path(p)) for role, p in (inputs or {}).items()},
        "output": {
            "path": str(out_p.resolve()),
            "name": out_p.name,
            "format": out_p.suffix.lower().lstrip(".") or "unknown",
            "size_bytes": int(out_p.stat().st_size) if out_p.exists() else None,
        },
        "parameters": parameters or {},
        "stats": stats or {},
    }

    sidecar = metadata_sidecar_path(out_p)
    sidecar.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return sidecar
