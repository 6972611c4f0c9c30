"""Search configuration.

Environment-first, mirroring the path helpers: MORRIS_MAX_DEPTH and
MORRIS_PRUNE override the defaults; explicit CLI flags override both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

MAX_DEPTH = 16

_FALSE_TOKENS = {"0", "false", "no", "off"}
_TRUE_TOKENS = {"1", "true", "yes", "on"}


@dataclass
class SearchConfig:
    max_depth: int = MAX_DEPTH
    prune: bool = True


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def load_search_config(max_depth: int | None = None, prune: bool | None = None) -> SearchConfig:
    """Build a SearchConfig from explicit values, then env vars, then defaults."""
    cfg = SearchConfig()
    env_depth = _env_int("MORRIS_MAX_DEPTH")
    env_prune = _env_bool("MORRIS_PRUNE")
    if env_depth is not None:
        cfg.max_depth = env_depth
    if env_prune is not None:
        cfg.prune = env_prune
    if max_depth is not None:
        cfg.max_depth = max_depth
    if prune is not None:
        cfg.prune = prune
    if cfg.max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {cfg.max_depth}")
    return cfg
