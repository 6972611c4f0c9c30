import io
import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from morris.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str = "") -> subprocess.CompletedProcess:
    env = dict(os.environ, PYTHONPATH=str(SRC))
    exe = [sys.executable, "-m", "morris.cli"]
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_play_rejects_unknown_first_mover(monkeypatch, caplog):
    monkeypatch.setattr("sys.stdin", io.StringIO("z\n"))
    with caplog.at_level(logging.ERROR):
        assert main(["play", "--depth", "2"]) == 2
    assert "invalid input" in caplog.text
    assert "Searching" not in caplog.text


def test_play_prompted_session(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("x\n1\n1\n"))
    assert main(["play", "--depth", "4"]) == 0
    out = capsys.readouterr().out
    assert "Ma(x) or Mi(n) first?" in out
    assert "search time:" in out
    assert "CPU's Move:" in out
    assert "Which Move do you pick?" in out


def test_play_bad_move_number_is_fatal(monkeypatch, caplog):
    monkeypatch.setattr("sys.stdin", io.StringIO("99\n"))
    with caplog.at_level(logging.ERROR):
        assert main(["play", "--first", "n", "--depth", "3"]) == 2
    assert "out of range" in caplog.text


def test_solve_reports_value(capsys, caplog):
    with caplog.at_level(logging.INFO):
        assert main(["solve", "--first", "x", "--depth", "1"]) == 0
    out = capsys.readouterr().out
    assert "value=4 plies=1 nodes=10" in out
    assert "principal variation: 000010000" in caplog.text


def test_evaluate_board(capsys, caplog):
    with caplog.at_level(logging.INFO):
        assert main(["evaluate", "--board", "110220000", "--side", "n"]) == 0
    assert "|ww |" in capsys.readouterr().out
    assert "win=False value=-1" in caplog.text
    assert "'110222000'" in caplog.text


@pytest.mark.parametrize("bad", ["abc", "012345678", "111100000"])
def test_evaluate_rejects_invalid_boards(bad):
    assert main(["evaluate", "--board", bad]) == 2


def test_export_command(tmp_path: Path):
    out = tmp_path / "cli_out"
    assert main(["export", "--out", str(out), "--first", "n", "--depth", "2"]) == 0
    assert (out / "morris_tree.csv").exists()
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["args"]["first_to_move"] == 2
    assert manifest["cli_argv"] == ["export", "--out", str(out), "--first", "n", "--depth", "2"]


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: morris" in capsys.readouterr().out


def test_cli_subprocess_play_and_invalid(tmp_path: Path):
    r = _run_cli(["play", "--depth", "3"], cwd=tmp_path, stdin="q\n")
    assert r.returncode == 2
    assert "invalid input" in r.stderr
    r = _run_cli(["play", "--first", "x", "--depth", "3"], cwd=tmp_path, stdin="1\n")
    assert r.returncode == 0
    assert "CPU's Move:" in r.stdout
