from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
DATA = Path(__file__).resolve().parent / "data"


def _run(*args: str) -> subprocess.CompletedProcess:
    # Run as module so it works in both source and installed layouts.
    cmd = [sys.executable, "-m", "tools.build_network", *args]
    return subprocess.run(cmd, capture_output=True, text=True, cwd=str(ROOT))


def test_build_network_cli_smoke(tmp_path) -> None:
    out = tmp_path / "groups.csv"
    res = _run(str(DATA / "fixture_edges.csv"), str(DATA / "fixture_vocab.txt"), "-o", str(out))
    assert res.returncode == 0, res.stdout + "\n" + res.stderr
    assert "Groups" in res.stdout

    df = pd.read_csv(out)
    sizes = dict(zip(df["Group"], df["Length"]))
    assert sizes == {"HALLMARK_HYPOXIA": 3, "HALLMARK_APOPTOSIS": 2, "HALLMARK_MYC_TARGETS": 1}
    weight_sums = dict(zip(df["Group"], df["Weight_Sum"]))
    # VEGFA appears twice in the hypoxia set; the later weight (3.0) wins.
    assert abs(weight_sums["HALLMARK_HYPOXIA"] - 5.0) < 1e-6
    assert (tmp_path / "groups.metadata.json").exists()


def test_build_network_cli_min_group_size(tmp_path) -> None:
    out = tmp_path / "groups.csv"
    res = _run(
        str(DATA / "fixture_edges.csv"),
        str(DATA / "fixture_vocab.txt"),
        "--min-group-size",
        "2",
        "-o",
        str(out),
    )
    assert res.returncode == 0, res.stdout + "\n" + res.stderr
    assert set(pd.read_csv(out)["Group"]) == {"HALLMARK_HYPOXIA", "HALLMARK_APOPTOSIS"}


def test_build_network_cli_unresolved_targets() -> None:
    res = _run(str(DATA / "fixture_edges.csv"), str(DATA / "fixture_vocab_missing.txt"))
    assert res.returncode == 2
    assert "not found in vocabulary" in res.stderr
    assert "PGK1" in res.stderr


def test_build_network_cli_blank_weight() -> None:
    res = _run(str(DATA / "fixture_edges_blank_weight.csv"), str(DATA / "fixture_vocab.txt"))
    assert res.returncode == 2
    assert "ERROR:" in res.stderr
    assert "weight" in res.stderr
    assert "Traceback" not in res.stderr


def test_build_network_cli_no_merge_runs(tmp_path) -> None:
    merged = tmp_path / "merged.csv"
    runs = tmp_path / "runs.csv"
    edges = str(DATA / "fixture_edges_unsorted.csv")
    vocab = str(DATA / "fixture_vocab.txt")

    res = _run(edges, vocab, "-o", str(merged))
    assert res.returncode == 0, res.stdout + "\n" + res.stderr
    res = _run(edges, vocab, "--no-merge-runs", "-o", str(runs))
    assert res.returncode == 0, res.stdout + "\n" + res.stderr

    merged_df = pd.read_csv(merged)
    assert dict(zip(merged_df["Group"], merged_df["Length"])) == {"P1": 3, "P2": 1}
    # The second run of P1 replaces the first one.
    runs_df = pd.read_csv(runs)
    assert dict(zip(runs_df["Group"], runs_df["Length"])) == {"P1": 2, "P2": 1}
