from __future__ import annotations

import json

import pandas as pd
import pytest

from pathnet_toolkit.core.config import NetworkConfig, load_config
from pathnet_toolkit.core.io import detect_table_format, read_table, read_vocabulary, write_table
from pathnet_toolkit.core.metadata import metadata_sidecar_path, write_run_metadata


def test_load_config_defaults() -> None:
    cfg = load_config(None)
    assert cfg == NetworkConfig()
    assert cfg.min_group_size == 1
    assert cfg.merge_runs is True


def test_load_config_file_and_overrides(tmp_path) -> None:
    p = tmp_path / "net.json"
    p.write_text(json.dumps({"min_group_size": 5, "weight_col": "mor"}), encoding="utf-8")
    cfg = load_config(p)
    assert cfg.min_group_size == 5
    assert cfg.weight_col == "mor"

    cfg2 = cfg.with_overrides(min_group_size=2, weight_col=None, merge_runs=False)
    assert cfg2.min_group_size == 2
    assert cfg2.weight_col == "mor"
    assert cfg2.merge_runs is False


def test_load_config_rejects_unknown_keys(tmp_path) -> None:
    p = tmp_path / "net.json"
    p.write_text(json.dumps({"min_size": 5}), encoding="utf-8")
    with pytest.raises(ValueError, match="min_size"):
        load_config(p)


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        NetworkConfig(min_group_size=-1)
    with pytest.raises(TypeError):
        NetworkConfig(weight_dtype="complex128")


def test_detect_table_format() -> None:
    assert detect_table_format("edges.tsv") == "tsv"
    assert detect_table_format("edges.parquet") == "parquet"
    assert detect_table_format("edges.txt") == "csv"
    assert detect_table_format("edges.txt", "TSV") == "tsv"
    with pytest.raises(ValueError):
        detect_table_format("edges.csv", "xlsx")


def test_read_table_keeps_identifiers_as_strings(tmp_path) -> None:
    p = tmp_path / "edges.tsv"
    p.write_text("source\ttarget\nP1\tNA\nP1\t0001\n", encoding="utf-8")
    df = read_table(str(p))
    assert df["target"].tolist() == ["NA", "0001"]


def test_write_table_roundtrip_creates_dirs(tmp_path) -> None:
    out = tmp_path / "nested" / "groups.csv"
    write_table(pd.DataFrame({"Group": ["a"], "Length": [3]}), str(out))
    assert out.exists()
    assert read_table(str(out))["Group"].tolist() == ["a"]


def test_read_vocabulary_text_and_table(tmp_path) -> None:
    txt = tmp_path / "vocab.txt"
    txt.write_text("# header\nHK2\n\nVEGFA\n", encoding="utf-8")
    assert read_vocabulary(str(txt)) == ["HK2", "VEGFA"]

    tbl = tmp_path / "vocab.csv"
    tbl.write_text("idx,symbol\n0,HK2\n1,VEGFA\n", encoding="utf-8")
    assert read_vocabulary(str(tbl), column="symbol") == ["HK2", "VEGFA"]
    with pytest.raises(ValueError):
        read_vocabulary(str(tbl), column="missing")


def test_write_run_metadata(tmp_path) -> None:
    edges = tmp_path / "edges.csv"
    edges.write_text("source,target\na,x\n", encoding="utf-8")
    out = tmp_path / "groups.csv"
    out.write_text("Group\na\n", encoding="utf-8")

    sidecar = write_run_metadata(
        tool="pathnet-build",
        output_table_path=out,
        inputs={"edges": edges},
        parameters={"min_group_size": 1},
        stats={"n_groups": 1},
    )
    assert sidecar == metadata_sidecar_path(out)
    payload = json.loads(sidecar.read_text(encoding="utf-8"))
    assert payload["tool"] == "pathnet-build"
    assert len(payload["inputs"]["edges"]["sha256"]) == 64
    assert payload["stats"]["n_groups"] == 1
