# ruff: noqa: F401

"""Shared utilities for PathNet Toolkit (IO, column detection, config, printing, run metadata)."""

from __future__ import annotations

from .columns import detect_source_column, detect_target_column, detect_weight_column
from .config import NetworkConfig, load_config
from .io import detect_table_format, read_table, read_vocabulary, write_table
from .metadata import metadata_sidecar_path, sha256_file, write_run_metadata
from .printing import print_banner, print_kv, print_section
