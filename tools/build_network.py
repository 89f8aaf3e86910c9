#!/usr/bin/env python3
"""pathnet-build: build a grouped sparse network from an edge table.

This tool consumes:
- an edge table (CSV/TSV/Parquet) with one row per (source, target[, weight]) membership,
- a feature vocabulary (plain text, one name per line, or a table column) whose order
  defines each feature's integer index.

It groups the edges by source, drops groups smaller than --min-group-size, resolves
members against the vocabulary and prints a summary. With -o it also writes a per-group
summary table plus a metadata JSON sidecar.

Exit codes: 0 on success, 2 when the network cannot be built (misaligned input, members
missing from the vocabulary, or unusable columns such as a blank weight cell).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# Allow running directly without installing the package.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pathnet_toolkit.core.config import load_config
from pathnet_toolkit.core.io import read_table, read_vocabulary, write_table
from pathnet_toolkit.core.metadata import write_run_metadata
from pathnet_toolkit.core.printing import print_banner, print_kv, print_section
from pathnet_toolkit.errors import NetworkError, UnresolvedTarget
from pathnet_toolkit.network import SparseNetwork

logger = logging.getLogger("pathnet_toolkit.tools.build_network")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pathnet-build", description="Build a grouped sparse network from an edge table")
    ap.add_argument("edges", help="Edge table (CSV/TSV/Parquet) with source/target[/weight] columns")
    ap.add_argument("vocabulary", help="Feature vocabulary: text file (one name per line) or table")
    ap.add_argument("-o", "--output", default=None, help="Write a per-group summary table (CSV/TSV/Parquet)")

    ap.add_argument("--config", default=None, help="JSON config with NetworkConfig keys; flags override it")
    ap.add_argument("--min-group-size", type=int, default=None, help="Drop groups with fewer members (default: 1)")
    ap.add_argument("--source-col", default=None, help="Source (group) column (default: auto-detect)")
    ap.add_argument("--target-col", default=None, help="Target (member) column (default: auto-detect)")
    ap.add_argument("--weight-col", default=None, help="Weight column (default: auto-detect; unweighted if none)")
    ap.add_argument("--vocab-col", default=None, help="Vocabulary column when the vocabulary is a table")
    ap.add_argument(
        "--no-merge-runs",
        dest="merge_runs",
        action="store_false",
        default=None,
        help="Treat input as sorted by source; a later run of the same source replaces the earlier one",
    )
    ap.add_argument("--top", type=int, default=10, help="Number of largest groups to print")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config).with_overrides(
        min_group_size=args.min_group_size,
        source_col=args.source_col,
        target_col=args.target_col,
        weight_col=args.weight_col,
        vocab_col=args.vocab_col,
        merge_runs=args.merge_runs,
    )
    logger.info("Config: %s", cfg.to_dict())

    edges = read_table(args.edges)
    vocab = read_vocabulary(args.vocabulary, column=cfg.vocab_col)
    logger.info("Loaded %d edge(s) and %d vocabulary name(s)", len(edges), len(vocab))

    try:
        net = SparseNetwork.from_frame(
            edges,
            vocab,
            cfg.min_group_size,
            source_col=cfg.source_col,
            target_col=cfg.target_col,
            weight_col=cfg.weight_col,
            strict_length_check=cfg.strict_length_check,
            merge_runs=cfg.merge_runs,
            dtype=cfg.weight_dtype,
        )
    except UnresolvedTarget as e:
        print(f"ERROR: {e}", file=sys.stderr)
        for name, group in list(zip(e.names, e.groups))[:10]:
            print(f"  {name!r} (first seen in group {group!r})", file=sys.stderr)
        return 2
    except NetworkError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        # Unusable columns or weight cells in the edge table.
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    summary = net.summary()

    print_banner("PathNet network build")
    print_kv("Edges", args.edges)
    print_kv("Vocabulary", f"{args.vocabulary} ({len(vocab)} features)")
    print_kv("Min group size", cfg.min_group_size)
    print_kv("Groups", net.group_count())
    print_kv("Members", int(net.targets.shape[0]))

    if len(summary):
        print_section(f"Largest groups (top {int(args.top)})")
        top = summary.sort_values(["Length", "Group"], ascending=[False, True]).head(int(args.top))
        for _, r in top.iterrows():
            print_kv(str(r["Group"]), f"{int(r['Length'])} members, weight sum {float(r['Weight_Sum']):.3f}")

    if args.output:
        write_table(summary, args.output)
        sidecar = write_run_metadata(
            tool="pathnet-build",
            output_table_path=args.output,
            inputs={"edges": args.edges, "vocabulary": args.vocabulary},
            parameters=cfg.to_dict(),
            stats={
                "n_edges": int(len(edges)),
                "n_features": int(len(vocab)),
                "n_groups": int(net.group_count()),
                "n_members": int(net.targets.shape[0]),
            },
        )
        print_kv("Summary table", args.output)
        print_kv("Metadata", sidecar)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
