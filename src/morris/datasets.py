"""
Dataset export of a retained search tree.

One row per explored node in pre-order, linked by parent_id, plus a manifest
recording the search configuration, checksums and environment for reproducibility.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .config import MAX_DEPTH, SearchConfig
from .game_basics import WHITE, check_win
from .paths import get_git_commit, get_git_is_dirty
from .solver import SearchNode, iter_nodes, new_root, search
from .treestats import tree_stats

DATASET_VERSION = "1.0.0"

TREE_COLUMNS = ["node_id", "parent_id", "depth", "board", "turn", "value", "n_children", "is_win"]


@dataclass
class ExportArgs:
    out: Path
    first_to_move: int = WHITE
    max_depth: int = MAX_DEPTH
    prune: bool = True
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: List[str] | None = None


def tree_rows(root: SearchNode) -> List[Dict[str, Any]]:
    ids: Dict[int, int] = {}
    rows: List[Dict[str, Any]] = []
    for node_id, node in enumerate(iter_nodes(root)):
        ids[id(node)] = node_id
        rows.append({
            'node_id': node_id,
            'parent_id': ids[id(node.parent)] if node.parent is not None else -1,
            'depth': node.depth,
            'board': node.key(),
            'turn': node.turn,
            'value': node.value,
            'n_children': len(node.children),
            'is_win': check_win(node.board),
        })
    return rows


def _schema_hash(columns: List[str]) -> str:
    return hashlib.sha256("\n".join(sorted(columns)).encode("utf-8")).hexdigest()


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "pandas", "pyarrow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open('w', newline='') as f:
        w = csv.DictWriter(f, fieldnames=TREE_COLUMNS)
        w.writeheader()
        w.writerows(rows)


def run_export(args: ExportArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (
        importlib.util.find_spec('pandas') is not None
        and importlib.util.find_spec('pyarrow') is not None
    )
    parquet_msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # user asked only for parquet; fail before searching or writing anything
        raise RuntimeError(parquet_msg)

    args.out.mkdir(parents=True, exist_ok=True)
    cfg = SearchConfig(max_depth=args.max_depth, prune=args.prune)
    root = search(new_root(args.first_to_move), args.first_to_move, cfg)
    rows = tree_rows(root)
    stats = tree_stats(root)
    logging.info("Flattened search tree into %d rows", len(rows))

    tree_csv = args.out / 'morris_tree.csv'
    tree_parquet = args.out / 'morris_tree.parquet'
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        write_csv(tree_csv, rows)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", tree_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd

            pd.DataFrame(rows, columns=TREE_COLUMNS).to_parquet(tree_parquet)
            wrote_parquet = True
            logging.info("Wrote Parquet: %s", tree_parquet)
        else:
            logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.",
                            parquet_msg)

    files: Dict[str, Any] = {
        "tree_csv": str(tree_csv) if wrote_csv else None,
        "tree_parquet": str(tree_parquet) if wrote_parquet else None,
    }
    checksums = {label: _sha256_file(Path(p)) for label, p in files.items() if p is not None}

    manifest = {
        "dataset_version": DATASET_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "first_to_move": args.first_to_move,
            "max_depth": args.max_depth,
            "prune": args.prune,
            "format": fmt,
        },
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "python": {
            "python_version": sys.version.split(" ")[0],
            "packages": _package_versions(),
        },
        "cli_argv": args.cli_argv,
        "root_value": root.value,
        "row_counts": {"tree": len(rows)},
        "tree_stats": stats,
        "schema_hash": {"tree": _schema_hash(TREE_COLUMNS)},
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json with metadata and schema hash")
    return args.out
