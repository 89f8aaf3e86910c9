"""Network build configuration.

A config is a flat JSON object whose keys match `NetworkConfig` fields, e.g.

    {"min_group_size": 5, "weight_col": "mor", "merge_runs": true}

CLI flags override values loaded from a file.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ..network.types import check_weight_dtype


@dataclass(frozen=True)
class NetworkConfig:
    min_group_size: int = 1
    merge_runs: bool = True
    strict_length_check: bool = True
    weight_dtype: str = "float32"
    source_col: Optional[str] = None
    target_col: Optional[str] = None
    weight_col: Optional[str] = None
    vocab_col: Optional[str] = None

    def __post_init__(self) -> None:
        if int(self.min_group_size) < 0:
            raise ValueError(f"min_group_size must be >= 0, got {self.min_group_size}")
        check_weight_dtype(self.weight_dtype)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **overrides: Any) -> "NetworkConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def config_from_dict(data: Dict[str, Any]) -> NetworkConfig:
    known = {f.name for f in fields(NetworkConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
    return NetworkConfig(**data)


def load_config(path: Optional[str | Path] = None) -> NetworkConfig:
    """Load a NetworkConfig from JSON, or the defaults when path is None."""

    if path is None:
        return NetworkConfig()
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file (expected a JSON object): {path}")
    return config_from_dict(data)
