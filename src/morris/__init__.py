"""morris package.

Three Men's Morris: board rules, a retained alpha-beta search tree, replay
against a human, tree diagnostics and dataset export.

Convenience imports are exposed for common workflows.
"""

from .config import SearchConfig, load_search_config
from .game_basics import BLACK, EMPTY, WHITE, check_win, evaluate, legal_successors
from .solver import SearchNode, new_root, search

__all__ = [
    "EMPTY",
    "WHITE",
    "BLACK",
    "check_win",
    "evaluate",
    "legal_successors",
    "SearchConfig",
    "load_search_config",
    "SearchNode",
    "new_root",
    "search",
]
