#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `src/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.engine.board import Board
from src.engine.perft import perft, perft_divide


def main() -> None:
    parser = argparse.ArgumentParser(description="Count Lines of Action move-tree leaves")
    parser.add_argument(
        "--layout", type=str, default=None, help="Board layout (default: standard start)"
    )
    parser.add_argument("--depth", type=int, default=2, help="Perft depth (default: 2)")
    parser.add_argument(
        "--divide", action="store_true", help="Print the count below each root move"
    )
    args = parser.parse_args()

    try:
        board = Board.from_layout(args.layout) if args.layout else Board.startpos()
    except ValueError as e:
        parser.error(str(e))
    print(board)

    start = time.perf_counter()
    if args.divide:
        counts = perft_divide(board, args.depth)
        for move, n in counts.items():
            print(f"{move}: {n}")
        nodes = sum(counts.values())
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
