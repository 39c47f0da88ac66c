#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/bench_attacks.py`
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from bitchess.engine.position import STARTPOS_FEN, Position


def bench(position: Position, iterations: int) -> float:
    """Return seconds spent on ``iterations`` full attack recomputations."""
    start = time.perf_counter()
    for _ in range(iterations):
        position.recompute_attacks()
    return time.perf_counter() - start


def main() -> None:
    parser = argparse.ArgumentParser(description="Time attack map recomputation for a FEN")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument(
        "--iterations", type=int, default=1000, help="Recomputations to run (default: 1000)"
    )
    args = parser.parse_args()

    position = Position.from_fen(args.fen)
    dt = bench(position, args.iterations)
    per_call_us = dt * 1e6 / max(args.iterations, 1)
    print(
        f"iterations={args.iterations} time_ms={int(dt*1000)} "
        f"per_call_us={per_call_us:.1f} calls_per_s={int(args.iterations/max(dt,1e-9))}"
    )


if __name__ == "__main__":
    main()
