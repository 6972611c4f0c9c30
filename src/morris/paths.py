"""Path helpers for export locations and git metadata recorded in manifests.

Environment-first, falling back to the nearest git checkout and finally the CWD,
so an installed package never writes under site-packages.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    for cur in [start, *start.parents][:6]:
        if (cur / ".git").exists():
            return cur
    return None


def repo_root() -> Path:
    """MORRIS_REPO_ROOT -> nearest parent containing .git -> CWD."""
    env = os.getenv("MORRIS_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def data_dir() -> Path:
    p = os.getenv("MORRIS_DATA_DIR")
    return Path(p) if p else repo_root() / "data_raw"


def _git(*args: str) -> str | None:
    try:
        out = subprocess.check_output(
            ["git", "-C", str(repo_root()), *args],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return out


def get_git_commit() -> str | None:
    out = _git("rev-parse", "HEAD")
    return out.strip() if out else None


def get_git_is_dirty() -> bool | None:
    """True with uncommitted changes, False if clean, None outside a repo."""
    out = _git("status", "--porcelain")
    if out is None:
        return None
    return len(out.strip()) > 0
