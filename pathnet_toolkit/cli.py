"""Console-script entrypoints.

The tool scripts remain runnable as `python tools/...`; these wrappers expose the same `main()`
functions as installable console scripts.
"""

from __future__ import annotations


def build() -> None:
    from tools.build_network import main

    raise SystemExit(main())
