import csv
import importlib.util
import json
from pathlib import Path

import pytest

from morris.config import SearchConfig
from morris.datasets import TREE_COLUMNS, ExportArgs, run_export, tree_rows
from morris.game_basics import BLACK, WHITE
from morris.solver import new_root, search


def test_tree_rows_link_parents_in_preorder():
    root = search(new_root(WHITE), WHITE, SearchConfig(max_depth=3))
    rows = tree_rows(root)
    assert rows[0]['node_id'] == 0 and rows[0]['parent_id'] == -1
    assert rows[0]['board'] == "000000000"
    by_id = {r['node_id']: r for r in rows}
    for r in rows[1:]:
        parent = by_id[r['parent_id']]
        assert parent['node_id'] < r['node_id']
        assert parent['depth'] + 1 == r['depth']
    assert sum(r['n_children'] for r in rows) == len(rows) - 1
    assert set(rows[0]) == set(TREE_COLUMNS)


def test_run_export_csv_and_manifest(tmp_path: Path):
    out = run_export(ExportArgs(out=tmp_path / "exp", first_to_move=BLACK, max_depth=3))
    with (out / "morris_tree.csv").open(newline='') as f:
        rows = list(csv.DictReader(f))
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["row_counts"]["tree"] == len(rows)
    assert manifest["args"] == {"first_to_move": BLACK, "max_depth": 3, "prune": True, "format": "csv"}
    assert manifest["root_value"] == int(rows[0]["value"])
    assert manifest["tree_stats"]["nodes"] == len(rows)
    assert manifest["parquet_written"] is False
    assert set(manifest["checksums"]) == {"tree_csv"}


def test_run_export_reproducible(tmp_path: Path):
    run_export(ExportArgs(out=tmp_path / "a", max_depth=3))
    run_export(ExportArgs(out=tmp_path / "b", max_depth=3))
    assert (tmp_path / "a" / "morris_tree.csv").read_bytes() == (tmp_path / "b" / "morris_tree.csv").read_bytes()
    m1 = json.loads((tmp_path / "a" / "manifest.json").read_text())
    m2 = json.loads((tmp_path / "b" / "manifest.json").read_text())
    assert m1["schema_hash"] == m2["schema_hash"]
    assert m1["checksums"] == m2["checksums"]


def test_unknown_format_rejected(tmp_path: Path):
    with pytest.raises(ValueError):
        run_export(ExportArgs(out=tmp_path, max_depth=1, format="xlsx"))


def test_parquet_only_without_dependencies_fails_early(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(importlib.util, "find_spec", lambda name, *a, **k: None)
    with pytest.raises(RuntimeError):
        run_export(ExportArgs(out=tmp_path / "pq", max_depth=1, format="parquet"))
    assert not (tmp_path / "pq").exists()


def test_parquet_export(tmp_path: Path):
    pd = pytest.importorskip("pandas")
    pytest.importorskip("pyarrow")
    out = run_export(ExportArgs(out=tmp_path / "both", max_depth=2, format="both"))
    df = pd.read_parquet(out / "morris_tree.parquet")
    assert list(df.columns) == TREE_COLUMNS
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["parquet_written"] is True
    assert len(df) == manifest["row_counts"]["tree"]
