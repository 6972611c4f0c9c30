"""
Diagnostics over a retained search tree: shape, outcomes and how much pruning cut.
"""
from __future__ import annotations

from typing import Any, Dict

import numpy as np

from .game_basics import WIN_VALUE, check_win, legal_successors
from .solver import SearchNode, iter_nodes


def tree_stats(root: SearchNode) -> Dict[str, Any]:
    depths = []
    branching = []
    leaves = 0
    white_wins = 0
    black_wins = 0
    cutoff_nodes = 0
    for node in iter_nodes(root):
        depths.append(node.depth)
        if not node.children:
            leaves += 1
            if check_win(node.board):
                if node.value == WIN_VALUE:
                    white_wins += 1
                else:
                    black_wins += 1
            continue
        n = len(node.children)
        branching.append(n)
        if n < len(legal_successors(node.board, node.turn)):
            cutoff_nodes += 1

    depth_arr = np.asarray(depths, dtype=np.int64)
    branch_arr = np.asarray(branching, dtype=np.float64)
    per_depth = np.bincount(depth_arr - root.depth)
    return {
        'nodes': int(depth_arr.size),
        'leaves': leaves,
        'expanded': int(branch_arr.size),
        'white_wins': white_wins,
        'black_wins': black_wins,
        'cutoff_nodes': cutoff_nodes,
        'max_depth': int(depth_arr.max()),
        'nodes_per_depth': per_depth.tolist(),
        'mean_branching': float(branch_arr.mean()) if branch_arr.size else 0.0,
        'root_value': root.value,
    }


def format_stats(stats: Dict[str, Any]) -> str:
    return (
        f"nodes={stats['nodes']} leaves={stats['leaves']} expanded={stats['expanded']} "
        f"cutoffs={stats['cutoff_nodes']} white_wins={stats['white_wins']} "
        f"black_wins={stats['black_wins']} max_depth={stats['max_depth']} "
        f"mean_branching={stats['mean_branching']:.3f} root_value={stats['root_value']}"
    )
