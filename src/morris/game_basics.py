"""
Game basics: board representation, serialization, win/heuristic scoring, move generation.
Teaching notes:
- State is a tuple of 9 cells: 0=empty, 1=White (maximizer), 2=Black (minimizer).
- Each side places 3 pieces, then slides one of them to an adjacent empty cell per ply.
- A line "open" for a colour (its pieces only) is worth one point to that colour.
"""
from typing import Dict, List, Tuple

EMPTY = 0
WHITE = 1
BLACK = 2

PIECES_PER_SIDE = 3
WIN_VALUE = 8

Board = Tuple[int, ...]

# Scan order matters: evaluation stops at the first winning line.
WIN_PATTERNS = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (6, 4, 2),
]

# Sliding targets in generation order: centre first, then row/column neighbours.
ADJACENCY: Dict[int, Tuple[int, ...]] = {
    0: (4, 1, 3),
    1: (4, 0, 2),
    2: (4, 1, 5),
    3: (4, 0, 6),
    4: (0, 1, 2, 3, 5, 6, 7, 8),
    5: (4, 2, 8),
    6: (4, 3, 7),
    7: (4, 6, 8),
    8: (4, 7, 5),
}

_SYMBOLS = {EMPTY: ' ', WHITE: 'w', BLACK: 'b'}


def opponent(side: int) -> int:
    return BLACK if side == WHITE else WHITE


def empty_board() -> Board:
    return tuple([EMPTY] * 9)


def serialize_board(board) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError(f"Invalid board string {board_str!r}. Must be 9 chars of 0/1/2.")
    return tuple(int(c) for c in raw)


def get_piece_counts(board) -> Tuple[int, int]:
    return board.count(WHITE), board.count(BLACK)


def score_line(board, line) -> Tuple[bool, int]:
    """Score one line: (True, +-WIN_VALUE) for three in a row, else (False, -1/0/+1)."""
    a, b, c = (board[i] for i in line)
    if a != EMPTY and a == b == c:
        return True, WIN_VALUE if a == WHITE else -WIN_VALUE
    cells = (a, b, c)
    has_white = WHITE in cells
    has_black = BLACK in cells
    if has_black and not has_white:
        return False, -1
    if has_white and not has_black:
        return False, 1
    return False, 0


def evaluate(board) -> Tuple[bool, int]:
    """Fold the line scores in scan order.

    Returns (True, +-8) as soon as a winning line is found; otherwise
    (False, sum of open-line scores).
    """
    total = 0
    for line in WIN_PATTERNS:
        win, score = score_line(board, line)
        if win:
            return True, score
        total += score
    return False, total


def check_win(board) -> bool:
    return evaluate(board)[0]


def winner(board) -> int:
    for line in WIN_PATTERNS:
        win, score = score_line(board, line)
        if win:
            return WHITE if score > 0 else BLACK
    return EMPTY


def heuristic(board) -> int:
    """Open lines for White minus open lines for Black, ignoring wins.

    A completed line still counts as one open line for its colour.
    """
    total = 0
    for line in WIN_PATTERNS:
        win, score = score_line(board, line)
        total += score // WIN_VALUE if win else score
    return total


def in_placement_phase(board, side: int) -> bool:
    return board.count(side) < PIECES_PER_SIDE


def empty_neighbours(board, cell: int) -> List[int]:
    return [n for n in ADJACENCY[cell] if board[n] == EMPTY]


def legal_successors(board, side: int) -> List[Board]:
    """All boards reachable by one move of `side`, in generation order."""
    successors: List[Board] = []
    if in_placement_phase(board, side):
        for i, v in enumerate(board):
            if v != EMPTY:
                continue
            lst = list(board)
            lst[i] = side
            successors.append(tuple(lst))
        return successors
    for i, v in enumerate(board):
        if v != side:
            continue
        for n in empty_neighbours(board, i):
            lst = list(board)
            lst[i], lst[n] = lst[n], lst[i]
            successors.append(tuple(lst))
    return successors


def is_valid_state(board) -> bool:
    if len(board) != 9 or any(v not in (EMPTY, WHITE, BLACK) for v in board):
        return False
    w, b = get_piece_counts(board)
    if w > PIECES_PER_SIDE or b > PIECES_PER_SIDE:
        return False
    if abs(w - b) > 1:
        return False
    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))
    if count_wins(WHITE) > 0 and count_wins(BLACK) > 0:
        return False
    return True


def pretty_board(board) -> str:
    s = [_SYMBOLS[v] for v in board]
    rows = [''.join(s[i:i + 3]) for i in range(0, 9, 3)]
    return "---\n|" + "|\n|".join(rows) + "|\n---"
