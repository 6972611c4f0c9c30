"""Full 16-ply searches (tens of seconds each). Deselect with -m "not slow"."""
import pytest

from morris.game_basics import BLACK, WHITE, check_win
from morris.replay import cpu_choice
from morris.solver import new_root, search

pytestmark = pytest.mark.slow


@pytest.fixture(scope="module")
def white_tree():
    return search(new_root(WHITE), WHITE)


def test_first_player_wins_with_white(white_tree):
    assert white_tree.value == 8


def test_play_through_reaches_a_win_within_sixteen_plies(white_tree):
    node = white_tree
    plies = 0
    while not check_win(node.board):
        if node.turn == WHITE:
            node = cpu_choice(node, WHITE)
        else:
            node = node.children[0]
        plies += 1
        assert node is not None and node.value == 8
    assert plies <= 16
    assert node.value == 8


def test_first_player_wins_with_black():
    root = search(new_root(BLACK), BLACK)
    assert root.value == -8
