"""
Replaying a searched tree against a human.
Teaching notes:
- The computer only ever picks among retained children; a winning reply that was
  pruned away cannot be found, so it falls back to the backed-up best child.
- The human chooses by 1-based index among the retained children of the current node.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from .game_basics import BLACK, WHITE, WIN_VALUE, check_win, pretty_board
from .solver import SearchNode, best_child, path_to_root

FIRST_MOVER_TOKENS = {"x": WHITE, "n": BLACK}


class InvalidInputError(ValueError):
    """Console input that does not map to a first mover or a retained move."""


def parse_first_mover(token: str) -> int:
    side = FIRST_MOVER_TOKENS.get(token.strip())
    if side is None:
        raise InvalidInputError(f"invalid input: {token.strip()!r} (expected 'x' or 'n')")
    return side


def winning_value(side: int) -> int:
    return WIN_VALUE if side == WHITE else -WIN_VALUE


def cpu_choice(node: SearchNode, cpu_side: int) -> Optional[SearchNode]:
    target = winning_value(cpu_side)
    for child in node.children:
        if child.value == target:
            return child
    return best_child(node)


def human_options(node: SearchNode) -> List[SearchNode]:
    return list(node.children)


def select_option(node: SearchNode, raw: str) -> SearchNode:
    try:
        choice = int(raw.strip())
    except ValueError:
        raise InvalidInputError(f"not a move number: {raw.strip()!r}") from None
    if not 1 <= choice <= len(node.children):
        raise InvalidInputError(
            f"move number {choice} out of range 1..{len(node.children)}"
        )
    return node.children[choice - 1]


def format_options(node: SearchNode) -> str:
    parts = []
    for i, child in enumerate(human_options(node), start=1):
        parts.append(f"{i}\n{pretty_board(child.board)}")
    return "\n".join(parts)


def play_session(
    root: SearchNode,
    cpu_side: int,
    read_line: Callable[[], str],
    write: Callable[[str], None],
) -> SearchNode:
    """Drive one game over the retained tree and return the node it ended on.

    InvalidInputError from the human's choice propagates to the caller.
    """
    write(f"final value is {root.value}")
    node = root
    while not check_win(node.board):
        if node.turn == cpu_side:
            nxt = cpu_choice(node, cpu_side)
            if nxt is None:
                break
            node = nxt
            write("CPU's Move:")
            write(pretty_board(node.board))
            continue
        if not human_options(node):
            break
        write("Which Move do you pick?")
        write(format_options(node))
        node = select_option(node, read_line())
    if not check_win(node.board):
        write(f"No explored continuation after {len(path_to_root(node)) - 1} plies.")
    return node
