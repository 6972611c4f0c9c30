#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from morris.config import SearchConfig
from morris.game_basics import BLACK, WHITE
from morris.solver import new_root, search
from morris.treestats import format_stats, tree_stats


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 5
    max_depth: int = 8
    prune: bool = True


def main() -> int:
    p = argparse.ArgumentParser(description="Time repeated searches from the empty board")
    p.add_argument("--repeats", type=int, default=Config.repeats)
    p.add_argument("--depth", type=int, default=Config.max_depth)
    p.add_argument("--no-prune", dest="prune", action="store_false")
    ns = p.parse_args()
    cfg = Config(repeats=ns.repeats, max_depth=ns.depth, prune=ns.prune)
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")

    search_cfg = SearchConfig(max_depth=cfg.max_depth, prune=cfg.prune)
    for side, label in ((WHITE, "white first"), (BLACK, "black first")):
        times: List[float] = []
        root = None
        for _ in range(cfg.repeats):
            t0 = time.perf_counter()
            root = search(new_root(side), side, search_cfg)
            times.append(time.perf_counter() - t0)
        m, h = ci95(times)
        print(f"{label}: depth={cfg.max_depth} prune={cfg.prune} mean={m:.4f}s ± {h:.4f}s (95% CI, N={cfg.repeats})")
        if root is not None:
            print(f"  {format_stats(tree_stats(root))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
