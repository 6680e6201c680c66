#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import platform
import sys
import time
from typing import Any, Dict, List, Optional

# Ensure repo root (which contains `src/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.engine.board import Board
from src.search.service import DEFAULT_DEPTH, SearchResult, SearchService


# Start position plus two middlegame positions
DEFAULT_LAYOUTS = [
    "-bbbbbb-/w------w/w------w/w------w/w------w/w------w/w------w/-bbbbbb- b",
    "--bbbb--/w--b---w/w-----w-/---ww---/w--b---w/w---b--w/--w-----/-b-b-bb- w",
    "b------w/--------/--b--w--/--------/--w--b--/--------/--------/w------b b",
]


def bench_layout(
    svc: SearchService,
    layout: str,
    *,
    depth: int,
    movetime_ms: Optional[int],
    iterations: int,
    enable_pruning: bool,
) -> Dict[str, Any]:
    try:
        board = Board.from_layout(layout)
    except ValueError as e:
        raise ValueError(f"Invalid layout {layout!r}: {e}")

    total_time = 0
    total_nodes = 0
    last: Optional[SearchResult] = None
    for _ in range(max(1, iterations)):
        res = svc.search(
            board, depth=depth, movetime_ms=movetime_ms, enable_pruning=enable_pruning
        )
        total_time += max(0, res.time_ms)
        total_nodes += max(0, res.nodes)
        last = res

    assert last is not None

    avg_time = int(total_time / max(1, iterations))
    avg_nodes = int(total_nodes / max(1, iterations))
    nps = int(avg_nodes * 1000 / max(1, avg_time)) if avg_time > 0 else 0
    return {
        "layout": layout,
        "depth": last.depth,
        "best_move": str(last.best_move) if last.best_move else None,
        "score": last.score,
        "time_ms": avg_time,
        "nodes": avg_nodes,
        "cutoffs": last.cutoffs,
        "nps": nps,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the search over board layouts")
    parser.add_argument(
        "--layout", action="append", default=None, help="Layout to search (repeatable)"
    )
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Search depth")
    parser.add_argument("--movetime-ms", type=int, default=None, help="Soft deadline per search")
    parser.add_argument(
        "--iterations", type=int, default=1, help="Repeat runs per layout and average"
    )
    parser.add_argument(
        "--no-pruning", action="store_true", help="Search the full minimax tree"
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    layouts = args.layout or DEFAULT_LAYOUTS
    svc = SearchService()

    results: List[Dict[str, Any]] = []
    t0 = time.perf_counter()
    for idx, layout in enumerate(layouts, start=1):
        sys.stderr.write(f"[{idx}/{len(layouts)}] running...\n")
        results.append(
            bench_layout(
                svc,
                layout,
                depth=args.depth,
                movetime_ms=args.movetime_ms,
                iterations=max(1, args.iterations),
                enable_pruning=not args.no_pruning,
            )
        )
    dt_ms = int((time.perf_counter() - t0) * 1000)
    total_nodes = sum(r["nodes"] for r in results)

    payload = {
        "meta": {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "config": {
                "depth": args.depth,
                "movetime_ms": args.movetime_ms,
                "iterations": max(1, args.iterations),
                "pruning": not args.no_pruning,
            },
        },
        "results": results,
        "summary": {
            "layouts": len(results),
            "total_time_ms": dt_ms,
            "total_nodes": total_nodes,
            "overall_nps": int(total_nodes * 1000 / max(1, dt_ms)) if dt_ms > 0 else 0,
        },
    }
    print(json.dumps(payload, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
