"""
Fixed-depth minimax with alpha-beta pruning over an explicit, retained search tree.
Search policy:
- White maximizes, Black minimizes; wins score +8 / -8, other leaves keep the open-line heuristic.
- A winning board is never expanded; otherwise nodes at the depth limit are leaves.
- Successors are visited in generation order; once alpha >= beta the remaining
  successor boards are skipped and never become nodes.
- Every visited child is kept, so pruned branches show up as short child lists.
- No memoization: identical boards reached by different move orders are distinct nodes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .config import SearchConfig
from .game_basics import (
    BLACK,
    WHITE,
    Board,
    empty_board,
    evaluate,
    legal_successors,
    opponent,
    serialize_board,
)

# Signed 32-bit bounds stand in for +-infinity; real values stay within [-8, 8].
NEG_INF = -(2 ** 31)
POS_INF = 2 ** 31 - 1

UNSET = None


@dataclass(eq=False, slots=True)
class SearchNode:
    board: Board
    turn: int
    depth: int = 0
    value: Optional[int] = UNSET
    children: List["SearchNode"] = field(default_factory=list, repr=False)
    # navigation only; the parent's children list owns this node
    parent: Optional["SearchNode"] = field(default=None, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def key(self) -> str:
        return serialize_board(self.board)


def new_root(first_to_move: int) -> SearchNode:
    if first_to_move not in (WHITE, BLACK):
        raise ValueError(f"first_to_move must be WHITE or BLACK, got {first_to_move!r}")
    return SearchNode(board=empty_board(), turn=first_to_move)


def _alphabeta(node: SearchNode, alpha: int, beta: int, cfg: SearchConfig) -> SearchNode:
    win, node.value = evaluate(node.board)
    if win or node.depth >= cfg.max_depth:
        return node

    maximizing = node.turn == WHITE
    child_turn = opponent(node.turn)
    node.value = NEG_INF if maximizing else POS_INF
    for board in legal_successors(node.board, node.turn):
        child = _alphabeta(
            SearchNode(board=board, turn=child_turn, depth=node.depth + 1),
            alpha,
            beta,
            cfg,
        )
        node.children.append(child)
        child.parent = node
        if maximizing:
            node.value = max(node.value, child.value)
            alpha = max(alpha, node.value)
        else:
            node.value = min(node.value, child.value)
            beta = min(beta, node.value)
        if cfg.prune and alpha >= beta:
            break
    return node


def search(
    root: SearchNode,
    first_to_move: Optional[int] = None,
    config: Optional[SearchConfig] = None,
) -> SearchNode:
    """Search from `root` with the full window and return it with its retained subtree."""
    cfg = config or SearchConfig()
    if first_to_move is not None and first_to_move != root.turn:
        raise ValueError(
            f"root is tagged with turn={root.turn}, search asked for first_to_move={first_to_move}"
        )
    if root.children or root.value is not UNSET:
        raise ValueError("root has already been searched; start from a fresh node")
    logging.info(
        "Searching from %s (%s to move, depth limit %d, prune=%s)",
        root.key(),
        "white" if root.turn == WHITE else "black",
        cfg.max_depth,
        cfg.prune,
    )
    _alphabeta(root, NEG_INF, POS_INF, cfg)
    logging.info("Search finished: root value=%s, root children=%d", root.value, len(root.children))
    return root


def best_child(node: SearchNode) -> Optional[SearchNode]:
    """First retained child carrying the node's backed-up value."""
    for child in node.children:
        if child.value == node.value:
            return child
    return None


def principal_variation(root: SearchNode) -> List[SearchNode]:
    line = [root]
    cur = best_child(root)
    while cur is not None:
        line.append(cur)
        cur = best_child(cur)
    return line


def iter_nodes(root: SearchNode) -> Iterator[SearchNode]:
    """Pre-order walk of the retained tree (explicit stack, children in order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def path_to_root(node: SearchNode) -> List[SearchNode]:
    path = [node]
    while path[-1].parent is not None:
        path.append(path[-1].parent)
    path.reverse()
    return path
