from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from .config import load_search_config
from .datasets import ExportArgs, run_export
from .game_basics import (
    deserialize_board,
    evaluate,
    is_valid_state,
    legal_successors,
    pretty_board,
    serialize_board,
)
from .paths import data_dir
from .replay import InvalidInputError, parse_first_mover, play_session
from .solver import new_root, principal_variation, search
from .treestats import format_stats, tree_stats


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="morris", description="Three Men's Morris solver CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    def add_search_flags(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--depth", type=int, default=None,
            help="Ply limit for the search (default: 16, or MORRIS_MAX_DEPTH)",
        )
        sp.add_argument(
            "--no-prune", dest="prune", action="store_const", const=False, default=None,
            help="Disable alpha-beta cutoffs (plain minimax; very slow at full depth)",
        )

    # play against the searched tree
    p_play = sub.add_parser("play", help="Search, then play against the computed strategy")
    p_play.add_argument(
        "--first", default=None,
        help="Who moves first (and is the computer): x = White/Max, n = Black/Min. Prompts if omitted.",
    )
    add_search_flags(p_play)

    # solve: search and report
    p_sol = sub.add_parser("solve", help="Search from the empty board and print tree diagnostics")
    p_sol.add_argument("--first", default="x", help="x = White first, n = Black first (default: x)")
    add_search_flags(p_sol)

    # evaluate a single board
    p_ev = sub.add_parser("evaluate", help="Show win/heuristic score and successors for a board")
    p_ev.add_argument("--board", required=True, help="Board string, e.g., 100020000 (0=empty,1=w,2=b)")
    p_ev.add_argument("--side", default="x", help="Side to move for successors: x = White, n = Black")

    # datasets export
    p_export = sub.add_parser(
        "export",
        help="Export the retained search tree (CSV by default; parquet requires pandas+pyarrow)",
    )
    p_export.add_argument(
        "--out", type=Path, default=None,
        help="Output directory (default: MORRIS_DATA_DIR or <repo>/data_raw)",
    )
    p_export.add_argument("--first", default="x", help="x = White first, n = Black first (default: x)")
    p_export.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    add_search_flags(p_export)

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas", "pyarrow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _timed_search(side: int, ns: argparse.Namespace):
    cfg = load_search_config(max_depth=ns.depth, prune=ns.prune)
    t0 = time.perf_counter()
    root = search(new_root(side), side, cfg)
    elapsed = time.perf_counter() - t0
    print(f"search time: {elapsed:.3f}s")
    return root


def _cmd_play(ns: argparse.Namespace) -> int:
    token = ns.first
    if token is None:
        print("Ma(x) or Mi(n) first? ")
        token = sys.stdin.readline()
    try:
        side = parse_first_mover(token)
    except InvalidInputError as e:
        logging.error("%s", e)
        return 2
    root = _timed_search(side, ns)
    try:
        play_session(root, side, sys.stdin.readline, print)
    except InvalidInputError as e:
        logging.error("%s", e)
        return 2
    return 0


def _cmd_solve(ns: argparse.Namespace) -> int:
    try:
        side = parse_first_mover(ns.first)
    except InvalidInputError as e:
        logging.error("%s", e)
        return 2
    root = _timed_search(side, ns)
    stats = tree_stats(root)
    logging.info("%s", format_stats(stats))
    pv = principal_variation(root)
    logging.info("principal variation: %s", " ".join(n.key() for n in pv[1:]))
    print(f"value={root.value} plies={len(pv) - 1} nodes={stats['nodes']}")
    return 0


def _cmd_evaluate(ns: argparse.Namespace) -> int:
    try:
        board = deserialize_board(ns.board)
        side = parse_first_mover(ns.side)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    if not is_valid_state(board):
        logging.error("Board is not a valid Three Men's Morris position.")
        return 2
    win, value = evaluate(board)
    print(pretty_board(board))
    successors = [] if win else legal_successors(board, side)
    logging.info(
        "win=%s value=%d successors=%s",
        win,
        value,
        [serialize_board(b) for b in successors],
    )
    return 0


def _cmd_export(ns: argparse.Namespace, argv: Optional[list[str]]) -> int:
    try:
        side = parse_first_mover(ns.first)
    except InvalidInputError as e:
        logging.error("%s", e)
        return 2
    cfg = load_search_config(max_depth=ns.depth, prune=ns.prune)
    out = run_export(ExportArgs(
        out=ns.out if ns.out is not None else data_dir(),
        first_to_move=side,
        max_depth=cfg.max_depth,
        prune=cfg.prune,
        format=ns.format,
        verbose=ns.verbose,
        cli_argv=list(argv) if argv is not None else None,
    ))
    logging.info("Exported search tree to: %s", out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("morris"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "play":
        return _cmd_play(ns)
    if ns.cmd == "solve":
        return _cmd_solve(ns)
    if ns.cmd == "evaluate":
        return _cmd_evaluate(ns)
    if ns.cmd == "export":
        try:
            return _cmd_export(ns, argv)
        except RuntimeError as e:
            logging.error("%s", e)
            return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
